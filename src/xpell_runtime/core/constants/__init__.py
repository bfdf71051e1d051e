"""Constants module for the Xpell runtime."""

from .node_constants import *  # noqa: F403
from .parser_constants import *  # noqa: F403
