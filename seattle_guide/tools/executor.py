"""Tool executor — validates arguments and dispatches one tool call."""
import logging
import time
from typing import Any, Dict

from pydantic import ValidationError

from ..errors import ConfigurationError
from .registry import ToolRegistry, ToolResult

logger = logging.getLogger(__name__)

# Keys never echoed into logs
_SECRET_ARGS = {"key", "api_key"}


def _failure_text(tool_name: str, reason: str) -> str:
    return (
        f"ERROR: the {tool_name} request failed ({reason}). "
        "Tell the user there was an error making the request."
    )


async def execute_tool(registry: ToolRegistry, tool_name: str, args: Dict[str, Any]) -> ToolResult:
    """Execute a registered tool by name.

    Every failure other than a configuration error comes back as a ToolResult
    of type "error" so the model can report it to the user.
    """
    tool = registry.get(tool_name)
    if not tool:
        logger.warning(f"Unknown tool: {tool_name}")
        return ToolResult(type="error", text=f"Unknown tool: {tool_name}")

    args = dict(args or {})

    # Validate required params
    missing = [p.name for p in tool.params if p.required and args.get(p.name) in (None, "")]
    if missing:
        return ToolResult(
            type="error",
            text=f"Missing required argument(s) for {tool_name}: {', '.join(missing)}",
            data={"missing_params": missing, "tool": tool_name},
        )

    try:
        parsed = tool.args_model.model_validate(args)
    except ValidationError as e:
        logger.warning(f"Tool {tool_name} got invalid arguments: {e.errors()}")
        return ToolResult(type="error", text=f"Invalid arguments for {tool_name}: {e}")

    arg_str = ", ".join(f"{k}={v!r}" for k, v in parsed.model_dump().items() if k not in _SECRET_ARGS)
    logger.info(f"Executing tool: {tool_name}({arg_str})")
    t0 = time.monotonic()

    try:
        text = await tool.handler(parsed, registry.context)
        result = ToolResult(type="ok", text=text)
    except ConfigurationError:
        raise
    except Exception as e:
        logger.error(f"Tool {tool_name} failed: {e}", exc_info=True)
        result = ToolResult(type="error", text=_failure_text(tool_name, str(e)))

    elapsed = time.monotonic() - t0
    logger.info(f"Tool {tool_name}: {elapsed:.1f}s -> {result.type}")
    return result
