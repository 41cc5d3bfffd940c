"""Tool system — registry and executor."""
from .registry import (
    ToolCall,
    ToolDef,
    ToolParam,
    ToolRegistry,
    ToolResult,
    build_registry,
    register_tool,
)
from .executor import ToolExecutor, format_value
