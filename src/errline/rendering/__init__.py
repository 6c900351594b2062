from .snippet import SnippetRenderer, render_to_str
