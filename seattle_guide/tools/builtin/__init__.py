"""Auto-import builtin tool modules to trigger @register_tool decorators."""
from . import maps
from . import seattle_info
