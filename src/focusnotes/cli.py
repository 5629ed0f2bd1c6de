"""CLI entry point using Typer."""

from collections.abc import Callable
from functools import wraps
from typing import Annotated, Any

import typer
import uvicorn

from focusnotes.core.config import ConfigError, get_settings
from focusnotes.logging_utils import setup_logging
from focusnotes.main import create_app

app = typer.Typer(help="Focusnotes - notes and productivity API")

APP_FACTORY_PATH = "focusnotes.main:create_app"


def handle_cli_errors[R](func: Callable[..., R]) -> Callable[..., R]:
    """Handle common CLI errors."""

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> R:  # noqa: ANN401
        try:
            return func(*args, **kwargs)
        except ConfigError as e:
            typer.echo(f"Configuration error: {e}", err=True)
            raise typer.Exit(code=1) from e
        except Exception as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1) from e

    return wrapper


@app.command("serve")
@handle_cli_errors
def cmd_serve(
    host: Annotated[
        str | None,
        typer.Option(help="Interface to bind. Defaults to $HOST or 127.0.0.1."),
    ] = None,
    port: Annotated[
        int | None,
        typer.Option(help="Port to listen on. Defaults to $PORT or 5000."),
    ] = None,
    reload: Annotated[
        bool,
        typer.Option(help="Restart on code changes (development only)."),
    ] = False,
) -> None:
    """Run the API server."""
    settings = get_settings()
    setup_logging(json_format=settings.log_json)
    bind_host = host or settings.host
    bind_port = port or settings.port
    typer.echo(f"Serving focusnotes on http://{bind_host}:{bind_port}")
    # The reloader re-imports the app, so it needs the factory import string.
    target = APP_FACTORY_PATH if reload else create_app(settings=settings)
    uvicorn.run(
        target,
        host=bind_host,
        port=bind_port,
        reload=reload,
        factory=reload,
    )


@app.command("routes")
@handle_cli_errors
def cmd_routes() -> None:
    """Print the API routing table."""
    paths = create_app().openapi()["paths"]
    for path, operations in paths.items():
        if not path.startswith("/api"):
            continue
        methods = ",".join(sorted(method.upper() for method in operations))
        typer.echo(f"{methods:<7} {path}")


def main() -> None:
    """Entry point for the focusnotes CLI."""
    app()


if __name__ == "__main__":
    main()
