"""errline: render file:line:column:message diagnostics as annotated source snippets."""
from .parsing import ErrorLine, ErrorLineError, filter_lines, parse, parse_line

__version__ = "0.1.0"
