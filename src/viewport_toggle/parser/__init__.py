from viewport_toggle.parser.builder import parse_css
from viewport_toggle.parser.errors import ParseError

__all__ = ["parse_css", "ParseError"]
