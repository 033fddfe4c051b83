from pydantic import BaseModel
import os
import logging
from dataclasses import dataclass
from pathlib import Path

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Load .env file if it exists (before reading os.getenv)
_env_path = Path(__file__).resolve().parent.parent / ".env"
if _env_path.exists():
    with open(_env_path) as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#") and "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip()
                # Only set if not already in environment (env vars take precedence)
                if key not in os.environ:
                    os.environ[key] = value


DEFAULT_SEATTLE_COORDINATES = "47.6062,-122.3321"  # downtown Seattle
DEFAULT_SEARCH_RADIUS_M = 1000
DEFAULT_FIXIE_API_URL = "https://app.fixie.ai/api"
SEATTLE_CORPUS_ID = "1138"

ROUTING_MODES = ("tools", "router")

# Accepts pino-style names ("trace", "fatal") as well as stdlib ones
_LOG_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "fatal": logging.CRITICAL,
    "critical": logging.CRITICAL,
}


def _sanitize_ascii(val: str) -> str:
    """Strip non-ASCII characters from config values (prevents encoding errors)"""
    return val.encode('ascii', errors='ignore').decode('ascii').strip()


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def resolve_log_level(name: str) -> int:
    """Map a textual log level to a logging constant. Unknown names fall back to INFO."""
    return _LOG_LEVELS.get((name or "").strip().lower(), logging.INFO)


class Settings(BaseModel):
    # Network
    http_host: str = os.getenv("HTTP_HOST", "0.0.0.0")
    http_port: int = int(os.getenv("HTTP_PORT", "8000"))

    # Logging verbosity; lowercase "loglevel" is accepted as a fallback name
    log_level: str = os.getenv("LOG_LEVEL", os.getenv("loglevel", "trace"))

    # Chat model
    openai_api_key: str = _sanitize_ascii(os.getenv("OPENAI_API_KEY", ""))
    openai_base_url: str = _sanitize_ascii(os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1"))
    openai_chat_model: str = _sanitize_ascii(os.getenv("OPENAI_CHAT_MODEL", "gpt-4"))

    # Tool dispatch
    routing_mode: str = os.getenv("ROUTING_MODE", "tools").strip().lower()
    show_tool_steps: bool = _env_flag("SHOW_TOOL_STEPS", "true")

    # Google Maps web services
    google_maps_api_key: str = _sanitize_ascii(os.getenv("GOOGLE_MAPS_API_KEY", ""))
    default_location: str = os.getenv("SEATTLE_DEFAULT_LOCATION", DEFAULT_SEATTLE_COORDINATES)

    # Fixie corpus
    fixie_api_key: str = _sanitize_ascii(os.getenv("FIXIE_API_KEY", ""))
    fixie_api_url: str = _sanitize_ascii(os.getenv("FIXIE_API_URL", DEFAULT_FIXIE_API_URL))
    corpus_id: str = os.getenv("SEATTLE_CORPUS_ID", SEATTLE_CORPUS_ID)
    corpus_chunk_limit: int = int(os.getenv("CORPUS_CHUNK_LIMIT", "3"))

    # Outbound HTTP
    http_timeout_s: float = float(os.getenv("HTTP_TIMEOUT", "15"))

    @property
    def log_level_value(self) -> int:
        return resolve_log_level(self.log_level)

    def require_openai_key(self) -> str:
        if not self.openai_api_key:
            raise ConfigurationError(
                "OPENAI_API_KEY is not set. Add it to the environment or .env to enable chat replies."
            )
        return self.openai_api_key


@dataclass(frozen=True)
class ToolConfig:
    """Everything the tools need, resolved once per request from Settings.

    Tool functions read configuration only from here, never from os.environ.
    """
    google_maps_api_key: str
    fixie_api_key: str
    default_location: str = DEFAULT_SEATTLE_COORDINATES
    default_search_radius: int = DEFAULT_SEARCH_RADIUS_M
    corpus_id: str = SEATTLE_CORPUS_ID
    corpus_chunk_limit: int = 3
    fixie_api_url: str = DEFAULT_FIXIE_API_URL
    http_timeout_s: float = 15.0

    @classmethod
    def from_settings(cls, s: "Settings") -> "ToolConfig":
        if not s.google_maps_api_key:
            raise ConfigurationError(
                "GOOGLE_MAPS_API_KEY is not set. Create a key with the Places, Geocoding and "
                "Directions APIs enabled at https://console.cloud.google.com/google/maps-apis "
                "and export it before starting the server."
            )
        return cls(
            google_maps_api_key=s.google_maps_api_key,
            fixie_api_key=s.fixie_api_key,
            default_location=s.default_location or DEFAULT_SEATTLE_COORDINATES,
            corpus_id=s.corpus_id,
            corpus_chunk_limit=s.corpus_chunk_limit,
            fixie_api_url=s.fixie_api_url or DEFAULT_FIXIE_API_URL,
            http_timeout_s=s.http_timeout_s,
        )


settings = Settings()

if settings.routing_mode not in ROUTING_MODES:
    logger.warning(f"Unknown ROUTING_MODE={settings.routing_mode!r}, using 'tools'")
    settings.routing_mode = "tools"

# Log config for debugging
_maps_key = '***' + settings.google_maps_api_key[-4:] if len(settings.google_maps_api_key) > 4 else 'EMPTY'
logger.info(f"Config: chat → {settings.openai_base_url}, model={settings.openai_chat_model}, "
            f"routing={settings.routing_mode}")
logger.info(f"Config: maps key={_maps_key}, corpus={settings.corpus_id} @ {settings.fixie_api_url}")
