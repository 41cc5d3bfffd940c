"""Math tools — add, multiply, divide, percentage."""
import logging

from ..registry import register_tool, ToolParam

logger = logging.getLogger(__name__)


def _num(v: float) -> str:
    return str(int(v)) if float(v).is_integer() else str(v)


@register_tool(
    "math.add",
    description="Add two numbers together (example: 5 + 3, what is 10 plus 15)",
    params=[ToolParam("a", "number"), ToolParam("b", "number")],
    returns="number",
    category="math",
)
async def add(a: float, b: float, session=None, **kwargs) -> float:
    logger.info(f"[MATH TOOL] Adding {_num(a)} + {_num(b)}")
    return a + b


@register_tool(
    "math.multiply",
    description="Multiply two numbers together (example: 5 * 3, 20 times 200, what is 10 multiplied by 15)",
    params=[ToolParam("a", "number"), ToolParam("b", "number")],
    returns="number",
    category="math",
)
async def multiply(a: float, b: float, session=None, **kwargs) -> float:
    logger.info(f"[MATH TOOL] Multiplying {_num(a)} × {_num(b)}")
    return a * b


@register_tool(
    "math.divide",
    description="Divide two specific numbers provided by the user",
    params=[ToolParam("a", "number", "dividend"), ToolParam("b", "number", "divisor")],
    returns="number",
    category="math",
)
async def divide(a: float, b: float, session=None, **kwargs) -> float:
    logger.info(f"[MATH TOOL] Dividing {_num(a)} ÷ {_num(b)}")
    # Division by zero yields 0 rather than an error
    return a / b if b != 0 else 0


@register_tool(
    "math.percentage",
    description="Calculate what percentage one number is of another, based on user's specific numbers "
                "(example: 50% of 200 -> number=200, percent=50)",
    params=[
        ToolParam("number", "number", "the whole amount"),
        ToolParam("percent", "number", "the percentage to take"),
    ],
    returns="number",
    category="math",
)
async def percentage(number: float, percent: float, session=None, **kwargs) -> float:
    logger.info(f"[MATH TOOL] Calculating {_num(percent)}% of {_num(number)}")
    return number * (percent / 100)
