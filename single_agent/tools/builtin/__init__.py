"""Auto-import builtin tool modules to trigger @register_tool decorators."""
from . import calc
from . import clock
from . import joke
