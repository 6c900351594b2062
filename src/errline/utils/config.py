import json
import logging
from pathlib import Path
from typing import Any, Dict

log = logging.getLogger(__name__)

DEFAULT_CONFIG: Dict[str, Any] = {
    "context_lines": 3,
    "color": True,
    "log_file": "/tmp/errline.log",
    "tab_width": 4,
}


class ConfigManager:
    """
    User preferences stored as JSON in ~/.errline/config.json.
    Values in the file override DEFAULT_CONFIG; missing keys keep their defaults.
    """
    def __init__(self):
        self.config_dir = Path.home() / ".errline"
        self.config_file = self.config_dir / "config.json"
        self.config = self.load_config()

    def load_config(self) -> Dict[str, Any]:
        config = DEFAULT_CONFIG.copy()
        try:
            self.config_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            log.warning("cannot create config dir %s, using defaults: %s", self.config_dir, e)
            return config

        if not self.config_file.exists():
            return config

        try:
            with open(self.config_file, "r") as f:
                user_config = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            # A broken config file should not stop diagnostics from rendering
            log.warning("ignoring unreadable config %s: %s", self.config_file, e)
            return config

        if isinstance(user_config, dict):
            config.update(user_config)
        else:
            log.warning("ignoring config %s: expected a JSON object", self.config_file)
        return config

    def save_config(self):
        self.config_dir.mkdir(parents=True, exist_ok=True)
        with open(self.config_file, "w") as f:
            json.dump(self.config, f, indent=4)

    def get(self, key: str, default: Any = None) -> Any:
        return self.config.get(key, default)

    def set(self, key: str, value: Any):
        self.config[key] = value
        self.save_config()
