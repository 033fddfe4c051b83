"""Tool system — registry, router, executor."""
from .registry import (
    register_tool, all_tools, build_tool_context,
    ToolContext, ToolDef, ToolName, ToolParam, ToolRegistry, ToolResult,
)
from .router import RouteMatch, route as route_intent
from .executor import execute_tool

# Auto-import builtin tools to trigger @register_tool decorators
from .builtin import *  # noqa
