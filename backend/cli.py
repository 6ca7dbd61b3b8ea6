import logging
import socket
import sys

import click
import uvicorn

from backend.logging_config import configure_logging
from backend.settings import load_settings
from backend.surface import DEFAULT_HEIGHT, DEFAULT_WIDTH, Canvas, write_svg

logger = logging.getLogger(__name__)


def bind_socket(host: str, port: int) -> socket.socket:
    """Open the listening socket up front so bind errors surface before uvicorn starts."""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    sock.set_inheritable(True)
    return sock


@click.group()
def main():
    """Isometric sin(r)/r surface renderer."""


@main.command()
@click.option("--host", default=None, help="Interface to listen on [env SURFACE_HOST].")
@click.option("--port", type=click.IntRange(1, 65535), default=None, help="Port [env SURFACE_PORT].")
@click.option("--log-level", default=None, help="Logging level [env SURFACE_LOG_LEVEL].")
def serve(host, port, log_level):
    """Serve GET /surface over HTTP."""
    try:
        settings = load_settings()
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    host = host or settings.host
    port = port or settings.port
    log_level = (log_level or settings.log_level).upper()

    # Importing backend.main configures logging from the environment, so the
    # command line level is applied after it.
    from backend.main import create_app

    configure_logging(log_level)

    try:
        sock = bind_socket(host, port)
    except OSError as exc:
        logger.critical("Cannot listen on %s:%d: %s", host, port, exc)
        sys.exit(1)

    app = create_app(settings)
    logger.info("Listening on http://%s:%d/surface", host, port)
    config = uvicorn.Config(app, log_level=log_level.lower())
    uvicorn.Server(config).run(sockets=[sock])


@main.command()
@click.option("--width", type=click.IntRange(min=1), default=DEFAULT_WIDTH, show_default=True)
@click.option("--height", type=click.IntRange(min=1), default=DEFAULT_HEIGHT, show_default=True)
@click.option("-o", "--output", type=click.File("w", encoding="utf-8"), default="-", help="Output file, '-' for stdout.")
def render(width, height, output):
    """Write the surface SVG to a file."""
    write_svg(output, Canvas(width=width, height=height))


if __name__ == "__main__":
    main()
