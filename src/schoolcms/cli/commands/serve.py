"""
SchoolCMS API server command.

Start the FastAPI server with uvicorn.

Usage:
    schoolcms serve                   # Start API server with default settings
    schoolcms serve --host 0.0.0.0    # Bind to all interfaces
    schoolcms serve --port 8080       # Use custom port
    schoolcms serve --reload          # Enable auto-reload (development)
    schoolcms serve --workers 4       # Production mode with workers
"""

import click
from loguru import logger


@click.command("serve")
@click.option("--host", default=None, help="Host to bind to (overrides config/env)")
@click.option("--port", default=None, type=int, help="Port to listen on (overrides config/env)")
@click.option("--reload", is_flag=True, default=None, help="Enable auto-reload for development")
@click.option("--workers", default=None, type=int, help="Number of worker processes (production mode)")
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["critical", "error", "warning", "info", "debug", "trace"]),
    help="Logging level",
)
def serve_command(
    host: str | None,
    port: int | None,
    reload: bool | None,
    workers: int | None,
    log_level: str | None,
):
    """
    Start the SchoolCMS API server.

    Command line options override API__* environment variables.
    """
    import uvicorn

    from ...settings import settings

    uvicorn_config = {
        "app": "schoolcms.api.main:app",
        "host": host or settings.api.host,
        "port": port or settings.api.port,
        "log_level": log_level or settings.api.log_level,
    }

    # Reload or workers (mutually exclusive)
    if reload is not None:
        uvicorn_config["reload"] = reload
    elif workers is not None:
        uvicorn_config["workers"] = workers
    elif settings.api.reload:
        uvicorn_config["reload"] = True
    else:
        uvicorn_config["workers"] = settings.api.workers

    logger.info(f"Starting SchoolCMS API server at http://{uvicorn_config['host']}:{uvicorn_config['port']}")
    uvicorn.run(**uvicorn_config)


def register_command(cli_group):
    """Register the serve command."""
    cli_group.add_command(serve_command)
