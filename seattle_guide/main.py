"""HTTP surface: POST /api/chat streams the assistant reply as plain text."""
import logging
from typing import List, Literal, Optional

import httpx
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, StreamingResponse
from openai import AsyncOpenAI
from pydantic import BaseModel, Field

from .config import Settings, settings as _settings
from .errors import ConfigurationError
from .llm import get_client
from .pipeline import prepare_registry, run_chat

logger = logging.getLogger(__name__)

app = FastAPI(title="Seattle Guide")


class ChatMessage(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    messages: List[ChatMessage] = Field(min_length=1)


def get_settings() -> Settings:
    return _settings


def get_http_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport for outbound tool calls; None means httpx's default network transport."""
    return None


def get_llm_client(settings: Settings = Depends(get_settings)) -> AsyncOpenAI:
    return get_client(settings)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Configuration error on {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/health")
async def health():
    return {"ok": True}


@app.post("/api/chat")
async def chat(
    req: ChatRequest,
    settings: Settings = Depends(get_settings),
    client: AsyncOpenAI = Depends(get_llm_client),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_http_transport),
):
    registry = prepare_registry(settings, transport=transport)
    messages = [m.model_dump() for m in req.messages]
    logger.info(f"Chat request: {len(messages)} messages, last={messages[-1]['content'][:80]!r}")
    return StreamingResponse(
        run_chat(messages, settings, client, registry),
        media_type="text/plain; charset=utf-8",
    )
