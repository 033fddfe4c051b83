"""Rule-based intent router — regex matching of the latest user message to one tool call.
Anything it can't match gets no augmentation.
"""
import re
import logging
from dataclasses import dataclass
from typing import Optional, Dict, Any, List, Tuple

from .registry import ToolName

logger = logging.getLogger(__name__)


@dataclass
class RouteMatch:
    tool: ToolName
    args: Dict[str, Any]
    reply_hint: str = ""


_RULES: List[Tuple[re.Pattern, ToolName, callable, str]] = []


def _strip_punctuation(text: str) -> str:
    """Strip trailing punctuation from text."""
    return text.rstrip(".!?,;:…").strip()


def _build_rules():
    global _RULES

    rules = [
        # ── Directions ───────────────────────────────────
        (r"^(?:how\s+(?:do|can|should|would)\s+(?:i|we)\s+(?:get|go|travel|walk|bike)"
         r"|(?:get\s+me\s+)?directions|how\s+to\s+get|route)\s+from\s+(.+?)\s+to\s+(.+)$",
         ToolName.GET_DIRECTIONS,
         lambda m: {"origin": _strip_punctuation(m.group(1)),
                    "destination": _strip_punctuation(m.group(2))},
         "Getting directions from {origin} to {destination}"),

        (r"^(?:how\s+(?:do|can)\s+(?:i|we)\s+get|directions)\s+to\s+(.+?)\s+from\s+(.+)$",
         ToolName.GET_DIRECTIONS,
         lambda m: {"origin": _strip_punctuation(m.group(2)),
                    "destination": _strip_punctuation(m.group(1))},
         "Getting directions from {origin} to {destination}"),

        # ── Geocoding ────────────────────────────────────
        (r"^(?:what\s+are\s+the\s+)?(?:coordinates|lat(?:itude)?\s*/?\s*long(?:itude)?)\s+(?:of|for)\s+(.+)$",
         ToolName.GET_LAT_LONG_OF_LOCATION,
         lambda m: {"location": _strip_punctuation(m.group(1))},
         "Looking up {location}"),

        (r"^(?:where\s+is|where's)\s+(.+)$",
         ToolName.GET_LAT_LONG_OF_LOCATION,
         lambda m: {"location": _strip_punctuation(m.group(1))},
         "Looking up {location}"),

        # ── Place search ─────────────────────────────────
        (r"^(?:find|search\s+for|i'?m\s+looking\s+for|where\s+can\s+i\s+(?:find|get|eat|buy))\s+(?:me\s+)?(?:some\s+|a\s+|an\s+)?(.+?)"
         r"(?:\s+(?:near\s+me|nearby|downtown|in\s+seattle|around\s+here))?$",
         ToolName.SEARCH_FOR_PLACES,
         lambda m: {"query": _strip_punctuation(m.group(1))},
         "Searching for {query}"),

        # ── Corpus lookups ───────────────────────────────
        (r"^(?:what'?s|what\s+is)\s+(?:happening|going\s+on|on)\b.*$",
         ToolName.LOOK_UP_SEATTLE_INFO,
         lambda m: {"query": _strip_punctuation(m.group(0))},
         "Checking Seattle news and events"),

        (r"^(?:tell\s+me\s+about|any\s+(?:events|news)|what\s+(?:events|festivals|concerts)|"
         r"what\s+(?:is\s+there|should\s+i|can\s+i)\s+(?:to\s+)?(?:do|see|visit))\b.*$",
         ToolName.LOOK_UP_SEATTLE_INFO,
         lambda m: {"query": _strip_punctuation(m.group(0))},
         "Checking Seattle guides"),
    ]

    _RULES.clear()
    for pattern, tool, extractor, hint in rules:
        _RULES.append((re.compile(pattern, re.IGNORECASE), tool, extractor, hint))


def route(text: str) -> Optional[RouteMatch]:
    """Match text against rule patterns. Returns RouteMatch or None."""
    text = (text or "").strip()
    for regex, tool_name, extractor, hint_template in _RULES:
        match = regex.match(text)
        if match:
            args = extractor(match)
            # Skip rules that captured nothing usable
            if any(isinstance(v, str) and not v for v in args.values()):
                continue
            try:
                hint = hint_template.format(**args) if args else hint_template
            except KeyError:
                hint = hint_template
            logger.info(f"Router matched: '{text}' -> {tool_name.value}({args})")
            return RouteMatch(tool=tool_name, args=args, reply_hint=hint)
    return None


_build_rules()
