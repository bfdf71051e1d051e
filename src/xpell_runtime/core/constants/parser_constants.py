"""Constants used by the command text parser."""

DEFAULT_OBJECT_SELECTOR = "#"
DEFAULT_SPACE_SENTINEL = "_%20_"
QUOTE_CHARS = ('"', "'")
NAMED_PARAM_SEPARATOR = ":"
