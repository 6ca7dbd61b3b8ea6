"""Runtime settings read from SURFACE_* environment variables."""
import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

DEFAULT_CORS_ORIGINS = ("http://localhost:3001", "http://localhost:3002")


@dataclass(frozen=True)
class Settings:
    host: str = "localhost"
    port: int = 8000
    log_level: str = "INFO"
    cors_origins: Tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)


def _parse_port(raw: str) -> int:
    try:
        port = int(raw)
    except ValueError:
        raise ValueError(f"SURFACE_PORT must be an integer, got {raw!r}") from None
    if not 0 < port < 65536:
        raise ValueError(f"SURFACE_PORT out of range: {port}")
    return port


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if environ is None else environ

    origins = env.get("SURFACE_CORS_ORIGINS")
    if origins is None:
        cors_origins = DEFAULT_CORS_ORIGINS
    else:
        cors_origins = tuple(v.strip() for v in origins.split(",") if v.strip())

    return Settings(
        host=env.get("SURFACE_HOST", "localhost").strip() or "localhost",
        port=_parse_port(env.get("SURFACE_PORT", "8000")),
        log_level=env.get("SURFACE_LOG_LEVEL", "INFO").strip().upper() or "INFO",
        cors_origins=cors_origins,
    )
