"""Tool registry — decorator-based tool catalog, bound per request to a ToolContext."""
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Iterator, List, Optional, Type, get_args

import httpx
from pydantic import BaseModel

from ..config import ToolConfig
from ..corpus import FixieCorpus

logger = logging.getLogger(__name__)


class ToolName(str, Enum):
    LOOK_UP_SEATTLE_INFO = "lookUpSeattleInfo"
    SEARCH_FOR_PLACES = "searchForPlaces"
    GET_LAT_LONG_OF_LOCATION = "getLatLongOfLocation"
    GET_DIRECTIONS = "getDirections"


_JSON_TYPES = {str: "string", int: "number", float: "number", bool: "boolean"}


def _json_type(annotation) -> str:
    for candidate in get_args(annotation) or (annotation,):
        if candidate in _JSON_TYPES:
            return _JSON_TYPES[candidate]
    return "string"


@dataclass
class ToolParam:
    name: str
    type: str = "string"
    description: str = ""
    required: bool = True
    default: Any = None


@dataclass
class ToolResult:
    type: str  # "ok" | "error"
    text: str = ""
    data: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return self.type == "ok"


@dataclass
class ToolContext:
    """Request-scoped collaborators handed to every tool function."""
    config: ToolConfig
    http: httpx.AsyncClient
    corpus: FixieCorpus

    async def aclose(self):
        await self.http.aclose()


Handler = Callable[[BaseModel, ToolContext], Awaitable[str]]


@dataclass
class ToolDef:
    name: ToolName
    description: str
    args_model: Type[BaseModel]
    handler: Handler

    @property
    def params(self) -> List[ToolParam]:
        params = []
        for pname, info in self.args_model.model_fields.items():
            required = info.is_required()
            params.append(ToolParam(
                name=pname,
                type=_json_type(info.annotation),
                description=info.description or "",
                required=required,
                default=None if required else info.default,
            ))
        return params

    def openai_schema(self) -> Dict[str, Any]:
        properties = {
            p.name: {"type": p.type, "description": p.description} for p in self.params
        }
        return {
            "type": "function",
            "function": {
                "name": self.name.value,
                "description": self.description,
                "parameters": {
                    "type": "object",
                    "properties": properties,
                    "required": [p.name for p in self.params if p.required],
                },
            },
        }


_tools: Dict[ToolName, ToolDef] = {}


def register_tool(name: ToolName, description: str = "", args_model: Type[BaseModel] = None):
    """Decorator to add a tool function to the catalog."""
    def decorator(func):
        tool = ToolDef(
            name=name,
            description=description or func.__doc__ or "",
            args_model=args_model,
            handler=func,
        )
        _tools[name] = tool
        logger.debug(f"Registered tool: {name.value}")
        return func
    return decorator


def all_tools() -> Dict[ToolName, ToolDef]:
    return dict(_tools)


def build_tool_context(config: ToolConfig, transport: Optional[httpx.AsyncBaseTransport] = None) -> ToolContext:
    """Create the per-request HTTP client and corpus handle.

    Raises ConfigurationError (from FixieCorpus) when the corpus key is missing.
    """
    corpus = FixieCorpus(
        config.corpus_id,
        api_key=config.fixie_api_key,
        api_url=config.fixie_api_url,
    )
    http = httpx.AsyncClient(timeout=config.http_timeout_s, transport=transport)
    corpus.client = http
    return ToolContext(config=config, http=http, corpus=corpus)


class ToolRegistry:
    """Mapping of tool name to ToolDef, bound to one request's ToolContext."""

    def __init__(self, context: ToolContext, names: Optional[List[ToolName]] = None):
        self.context = context
        catalog = all_tools()
        selected = names if names is not None else list(catalog)
        self._tools: Dict[ToolName, ToolDef] = {n: catalog[n] for n in selected}

    def get(self, name) -> Optional[ToolDef]:
        try:
            key = ToolName(name)
        except ValueError:
            return None
        return self._tools.get(key)

    def names(self) -> List[str]:
        return [n.value for n in self._tools]

    def __contains__(self, name) -> bool:
        return self.get(name) is not None

    def __iter__(self) -> Iterator[ToolDef]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)

    def openai_tools(self) -> List[Dict[str, Any]]:
        return [tool.openai_schema() for tool in self]
