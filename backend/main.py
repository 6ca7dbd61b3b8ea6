import logging
import re
from typing import List, Optional

from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse

from backend.logging_config import configure_logging
from backend.settings import Settings, load_settings
from backend.surface import DEFAULT_HEIGHT, DEFAULT_WIDTH, Canvas, render_svg

logger = logging.getLogger(__name__)

SVG_MEDIA_TYPE = "image/svg+xml"
MAX_DIMENSION = 2**64 - 1

_DIGITS = re.compile(r"[0-9]+")


def parse_dimension(values: Optional[List[str]], default: int) -> int:
    """
    Resolve a width/height query value, falling back to ``default``.

    Only the first occurrence counts. Anything other than a plain positive
    base-10 integer (empty, signed, non-numeric, zero, too large) yields the
    default.
    """
    if not values:
        return default
    raw = values[0]
    if not _DIGITS.fullmatch(raw):
        logger.debug("Ignoring non-numeric dimension %r, using %d", raw, default)
        return default
    value = int(raw)
    if not 0 < value <= MAX_DIMENSION:
        logger.debug("Ignoring out-of-range dimension %r, using %d", raw, default)
        return default
    return value


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or load_settings()
    app = FastAPI(title="Surface Renderer", docs_url=None, redoc_url=None, openapi_url=None)

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/surface", response_class=StreamingResponse)
    def get_surface(
        width: Optional[List[str]] = Query(None, description="Canvas width in pixels (default 600)."),
        height: Optional[List[str]] = Query(None, description="Canvas height in pixels (default 320)."),
    ):
        """
        Renders z = sin(r)/r on a 100x100 grid as an isometric SVG image.
        Invalid or missing dimensions fall back to the defaults.
        """
        canvas = Canvas(
            width=parse_dimension(width, DEFAULT_WIDTH),
            height=parse_dimension(height, DEFAULT_HEIGHT),
        )
        logger.info("Rendering surface %dx%d", canvas.width, canvas.height)
        return StreamingResponse(render_svg(canvas), media_type=SVG_MEDIA_TYPE)

    return app


_settings = load_settings()
configure_logging(_settings.log_level)
app = create_app(_settings)
