"""Tool executor — validates arguments and dispatches tool calls."""
import logging
import time
from typing import Any, Dict

from ..errors import ArgumentMismatchError
from .registry import ToolCall, ToolDef, ToolParam, ToolRegistry, ToolResult

logger = logging.getLogger(__name__)


def _coerce(param: ToolParam, value: Any) -> Any:
    if param.type == "number":
        if isinstance(value, bool):
            raise ArgumentMismatchError(f"{param.name}: expected number, got boolean")
        if isinstance(value, (int, float, str)):
            try:
                return float(value.strip() if isinstance(value, str) else value)
            except (ValueError, OverflowError):
                pass
        raise ArgumentMismatchError(f"{param.name}: expected number, got {value!r:.60}")

    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ArgumentMismatchError(f"{param.name}: expected string, got {value!r:.60}")


def bind_arguments(tool: ToolDef, args: Dict[str, Any]) -> Dict[str, Any]:
    """Check args against the tool's params and return the coerced keyword set."""
    if not isinstance(args, dict):
        raise ArgumentMismatchError(f"{tool.name}: arguments must be an object, got {type(args).__name__}")

    known = {p.name for p in tool.params}
    unexpected = sorted(set(args) - known)
    if unexpected:
        raise ArgumentMismatchError(f"{tool.name}: unexpected arguments {', '.join(unexpected)}")

    bound = {}
    for param in tool.params:
        if param.name not in args or args[param.name] is None:
            if param.required:
                raise ArgumentMismatchError(f"{tool.name}: missing argument {param.name}")
            bound[param.name] = param.default
            continue
        bound[param.name] = _coerce(param, args[param.name])
    return bound


class ToolExecutor:
    def __init__(self, registry: ToolRegistry, session=None):
        self.registry = registry
        self.session = session

    async def execute(self, call: ToolCall) -> ToolResult:
        """Execute a registered tool by name.

        Raises UnknownToolError / ArgumentMismatchError before anything runs;
        failures inside the tool itself come back as an error ToolResult.
        """
        tool, handler = self.registry.lookup(call.name)
        kwargs = bind_arguments(tool, call.args)

        arg_str = ", ".join(f"{k}={v!r}" for k, v in kwargs.items())
        logger.info(f"Executing tool: {tool.name}({arg_str})")
        t0 = time.monotonic()

        try:
            value = await handler(session=self.session, **kwargs)
            result = ToolResult(type="ok", value=value, text=format_value(value))
        except Exception as e:
            logger.error(f"Tool {tool.name} failed: {e}", exc_info=True)
            result = ToolResult(type="error", text=f"{tool.name} failed: {e}")

        elapsed = time.monotonic() - t0
        logger.info(f"Tool {tool.name}: {elapsed:.2f}s -> {result.type}")
        return result


def format_value(value: Any) -> str:
    """Render a tool value the way a person would write it (40.0 -> '40')."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
