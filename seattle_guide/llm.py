"""LLM dispatcher — streams a reply while letting the model call registered tools."""
import asyncio
import json
import logging
from typing import AsyncIterator, Dict, List, Optional

from openai import AsyncOpenAI

from .config import Settings
from .prompts import tool_step_notice
from .tools.executor import execute_tool
from .tools.registry import ToolRegistry, ToolResult

logger = logging.getLogger(__name__)

MAX_TOOL_ROUNDS = 5


def get_client(settings: Settings) -> AsyncOpenAI:
    """Build the chat client. Raises ConfigurationError when no API key is configured."""
    return AsyncOpenAI(
        api_key=settings.require_openai_key(),
        base_url=settings.openai_base_url,
    )


def _accumulate_tool_calls(calls: Dict[int, dict], delta_tool_calls) -> None:
    """Merge streamed tool-call fragments, keyed by their index."""
    for tc in delta_tool_calls or []:
        slot = calls.setdefault(tc.index, {"id": "", "name": "", "arguments": ""})
        if tc.id:
            slot["id"] = tc.id
        fn = tc.function
        if fn is not None:
            if fn.name:
                slot["name"] += fn.name
            if fn.arguments:
                slot["arguments"] += fn.arguments


async def _run_tool_call(registry: ToolRegistry, call: dict) -> ToolResult:
    try:
        args = json.loads(call["arguments"] or "{}")
    except json.JSONDecodeError:
        logger.warning(f"Unparsable arguments for {call['name']}: {call['arguments'][:200]}")
        return ToolResult(type="error", text=f"Invalid JSON arguments for {call['name']}")
    if not isinstance(args, dict):
        return ToolResult(type="error", text=f"Arguments for {call['name']} must be an object")
    return await execute_tool(registry, call["name"], args)


async def stream_reply(
    conversation: List[dict],
    registry: Optional[ToolRegistry],
    settings: Settings,
    client: AsyncOpenAI,
    use_tools: bool = True,
) -> AsyncIterator[str]:
    """Yield reply text deltas.

    When the model asks for tools, they run (concurrently within one round)
    and their results are appended to `conversation` before the next round.
    After MAX_TOOL_ROUNDS the tools are withheld so the model has to answer.
    """
    tools = registry.openai_tools() if (use_tools and registry is not None and len(registry)) else None

    for round_idx in range(MAX_TOOL_ROUNDS + 1):
        kwargs = dict(
            model=settings.openai_chat_model,
            messages=conversation,
            stream=True,
        )
        if tools and round_idx < MAX_TOOL_ROUNDS:
            kwargs["tools"] = tools

        stream = await client.chat.completions.create(**kwargs)

        calls: Dict[int, dict] = {}
        async for chunk in stream:
            if not chunk.choices:
                continue
            delta = chunk.choices[0].delta
            if delta.content:
                yield delta.content
            if delta.tool_calls:
                _accumulate_tool_calls(calls, delta.tool_calls)

        if not calls:
            return

        ordered = [calls[i] for i in sorted(calls)]
        logger.info(f"Round {round_idx}: model requested {[c['name'] for c in ordered]}")
        conversation.append({
            "role": "assistant",
            "content": None,
            "tool_calls": [
                {
                    "id": c["id"],
                    "type": "function",
                    "function": {"name": c["name"], "arguments": c["arguments"]},
                }
                for c in ordered
            ],
        })

        if settings.show_tool_steps:
            for c in ordered:
                yield tool_step_notice(c["name"])

        results = await asyncio.gather(*(_run_tool_call(registry, c) for c in ordered))
        for c, result in zip(ordered, results):
            conversation.append({
                "role": "tool",
                "tool_call_id": c["id"],
                "content": result.text,
            })
