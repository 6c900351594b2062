import json

import pytest


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    """Keep ConfigManager and the log file out of the real home directory."""
    home = tmp_path / "home"
    config_dir = home / ".errline"
    config_dir.mkdir(parents=True)
    (config_dir / "config.json").write_text(json.dumps({"log_file": str(home / "errline.log")}))
    monkeypatch.setenv("HOME", str(home))
    return home
