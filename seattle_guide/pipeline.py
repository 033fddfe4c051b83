"""Chat pipeline — per-request tool registry → dispatch → streamed reply.

Two dispatch modes share the registry and executor:
  tools   the model picks tools through function calling (default)
  router  regex rules pick at most one tool for the latest user message,
          its result is added to the context, then the model answers
"""
import logging
import time
from typing import AsyncIterator, List, Optional, Tuple

import httpx
from openai import AsyncOpenAI

from .config import Settings, ToolConfig
from .llm import stream_reply
from .prompts import ERROR_REPLY, ROUTED_DATA_PROMPT, SYSTEM_PROMPT, routed_step_notice
from .tools import RouteMatch, ToolRegistry, build_tool_context, execute_tool, route_intent

logger = logging.getLogger(__name__)


def _last_user_message(messages: List[dict]) -> str:
    for m in reversed(messages):
        if m.get("role") == "user":
            return m.get("content") or ""
    return ""


def prepare_registry(settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> ToolRegistry:
    """Build this request's registry. Raises ConfigurationError before anything is streamed."""
    config = ToolConfig.from_settings(settings)
    return ToolRegistry(build_tool_context(config, transport=transport))


async def _routed_augmentation(registry: ToolRegistry, text: str) -> Optional[Tuple[RouteMatch, str]]:
    """Run the routed tool, if any. Returns (match, context message) or None."""
    match = route_intent(text)
    if match is None:
        logger.info("Router: no match, answering without augmentation")
        return None
    result = await execute_tool(registry, match.tool.value, match.args)
    return match, ROUTED_DATA_PROMPT.format(tool=match.tool.value, result=result.text)


async def run_chat(
    messages: List[dict],
    settings: Settings,
    client: AsyncOpenAI,
    registry: ToolRegistry,
) -> AsyncIterator[str]:
    """Stream the assistant reply for one request, closing the registry's HTTP client at the end."""
    t0 = time.monotonic()
    conversation = [{"role": "system", "content": SYSTEM_PROMPT}] + [dict(m) for m in messages]
    use_tools = settings.routing_mode != "router"

    try:
        if not use_tools:
            routed = await _routed_augmentation(registry, _last_user_message(messages))
            if routed:
                match, augmentation = routed
                if settings.show_tool_steps:
                    yield routed_step_notice(match.reply_hint or match.tool.value)
                conversation.append({"role": "system", "content": augmentation})

        async for delta in stream_reply(conversation, registry, settings, client, use_tools=use_tools):
            yield delta
    except Exception as e:
        logger.error(f"Chat pipeline failed: {e}", exc_info=True)
        yield ERROR_REPLY
    finally:
        await registry.context.aclose()
        logger.info(f"Chat request done in {time.monotonic() - t0:.1f}s (mode={settings.routing_mode})")
