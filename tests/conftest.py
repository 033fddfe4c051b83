"""Shared fixtures: settings, recorded outbound HTTP, fake OpenAI streams."""
from types import SimpleNamespace
from typing import Callable, List, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from seattle_guide.config import Settings, ToolConfig
from seattle_guide.tools import ToolRegistry, build_tool_context


@pytest.fixture
def settings():
    return Settings(
        openai_api_key="sk-test",
        google_maps_api_key="maps-secret",
        fixie_api_key="fixie-secret",
        fixie_api_url="https://fixie.test/api",
        routing_mode="tools",
        show_tool_steps=False,
    )


@pytest.fixture
def tool_config(settings):
    return ToolConfig.from_settings(settings)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: List[httpx.Request] = []

        def _record(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


def ok_json(payload: Optional[dict] = None) -> Callable[[httpx.Request], httpx.Response]:
    return lambda request: httpx.Response(200, json=payload if payload is not None else {"status": "OK"})


@pytest.fixture
def make_registry(tool_config):
    """Build a registry whose outbound HTTP goes to a RecordingTransport."""
    def _make(handler=None, config: Optional[ToolConfig] = None):
        transport = RecordingTransport(handler or ok_json())
        registry = ToolRegistry(build_tool_context(config or tool_config, transport=transport))
        return registry, transport
    return _make


# ──────────────────────────────────────────────────────────
# Fake OpenAI streaming
# ──────────────────────────────────────────────────────────

def text_chunk(text: str):
    delta = SimpleNamespace(content=text, tool_calls=None)
    return SimpleNamespace(choices=[SimpleNamespace(delta=delta)])


def tool_call_chunk(index: int, call_id: Optional[str] = None, name: Optional[str] = None,
                    arguments: Optional[str] = None):
    fn = SimpleNamespace(name=name, arguments=arguments)
    tc = SimpleNamespace(index=index, id=call_id, function=fn)
    delta = SimpleNamespace(content=None, tool_calls=[tc])
    return SimpleNamespace(choices=[SimpleNamespace(delta=delta)])


class FakeStream:
    def __init__(self, chunks):
        self._chunks = list(chunks)

    def __aiter__(self):
        return self._iter()

    async def _iter(self):
        for c in self._chunks:
            yield c


def fake_openai_client(*rounds) -> MagicMock:
    """Client whose chat.completions.create returns one FakeStream per round, in order."""
    client = MagicMock()
    client.chat.completions.create = AsyncMock(side_effect=[FakeStream(r) for r in rounds])
    return client
