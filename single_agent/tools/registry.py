"""Tool registry — decorator-based tool registration and lookup."""
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Awaitable, Dict, List, Optional, Tuple

from ..errors import DuplicateToolError, UnknownToolError

logger = logging.getLogger(__name__)

PARAM_TYPES = ("number", "string")


@dataclass(frozen=True)
class ToolParam:
    name: str
    type: str = "string"  # "number" | "string"
    description: str = ""
    required: bool = True
    default: Any = None

    def __post_init__(self):
        if self.type not in PARAM_TYPES:
            raise ValueError(f"Unsupported param type for {self.name}: {self.type}")


@dataclass
class ToolResult:
    type: str  # "ok" | "error"
    value: Any = None
    text: str = ""

    @property
    def ok(self) -> bool:
        return self.type == "ok"


@dataclass
class ToolCall:
    name: str
    args: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolDef:
    name: str
    description: str
    params: Tuple[ToolParam, ...] = ()
    returns: str = "string"
    category: str = ""


ToolHandler = Callable[..., Awaitable[Any]]


class ToolRegistry:
    """Named tool descriptors and their implementations.

    Filled once at startup and only read afterwards.
    """

    def __init__(self):
        self._tools: Dict[str, Tuple[ToolDef, ToolHandler]] = {}

    def register(self, tool: ToolDef, handler: ToolHandler) -> None:
        if tool.name in self._tools:
            raise DuplicateToolError(f"Tool already registered: {tool.name}")
        self._tools[tool.name] = (tool, handler)
        logger.debug(f"Registered tool: {tool.name}")

    def lookup(self, name: str) -> Tuple[ToolDef, ToolHandler]:
        try:
            return self._tools[name]
        except KeyError:
            raise UnknownToolError(f"Unknown tool: {name}") from None

    def all_tools(self) -> List[ToolDef]:
        return [tool for tool, _ in self._tools.values()]

    def categories(self) -> Dict[str, List[str]]:
        grouped: Dict[str, List[str]] = {}
        for tool in self.all_tools():
            grouped.setdefault(tool.category or "other", []).append(tool.name)
        return grouped

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    def tool_descriptions_for_llm(self) -> str:
        """Generate tool list for LLM system prompt."""
        lines = []
        for tool in self.all_tools():
            params = []
            for p in tool.params:
                req = "required" if p.required else "optional"
                desc = f": {p.description}" if p.description else ""
                params.append(f"{p.name}({p.type}, {req}){desc}")
            params_text = ", ".join(params) if params else "none"
            lines.append(f"- {tool.name}: {tool.description} | params: {params_text} | returns: {tool.returns}")
        return "\n".join(lines)


# Builtin tool modules register here at import time
_builtin: List[Tuple[ToolDef, ToolHandler]] = []


def register_tool(
    name: str,
    description: str = "",
    params: Optional[List[ToolParam]] = None,
    returns: str = "string",
    category: str = "",
):
    """Decorator to declare a builtin tool function."""
    def decorator(func):
        tool = ToolDef(
            name=name,
            description=description or func.__doc__ or "",
            params=tuple(params or ()),
            returns=returns,
            category=category,
        )
        _builtin.append((tool, func))
        return func
    return decorator


def build_registry() -> ToolRegistry:
    """Fresh registry holding every builtin tool."""
    from . import builtin  # noqa: F401  (triggers @register_tool)

    registry = ToolRegistry()
    for tool, handler in _builtin:
        registry.register(tool, handler)
    logger.info(f"Registered {len(registry)} tools: {', '.join(t.name for t in registry.all_tools())}")
    return registry
