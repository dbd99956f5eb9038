import typer
import logging
import sys
from typing import Optional

from gatewayctl.commands import cluster, gateway
from gatewayctl.config import Config

app = typer.Typer()

debug_mode = False


def setup_logging(debug_mode: bool = False):
    """Configure logging based on debug mode."""
    log_level = logging.DEBUG if debug_mode else Config.LOG_LEVEL
    logging.basicConfig(
        level=log_level,
        format=Config.LOG_FORMAT,
        handlers=[
            logging.StreamHandler(sys.stderr)
        ]
    )
    if not debug_mode:
        logging.getLogger('uvicorn.access').setLevel(logging.WARNING)


app.add_typer(cluster.app, name="cluster")
app.add_typer(gateway.app, name="gateway")


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug logging"),
):
    """gatewayctl - Envoy Gateway control surface."""
    global debug_mode
    debug_mode = debug
    setup_logging(debug)
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)
        logging.debug("Debug mode enabled")


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: HOST)"),
    port: Optional[int] = typer.Option(None, help="Port (default: PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
):
    """Run the HTTP API."""
    import uvicorn

    try:
        Config.validate()
    except ValueError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(code=1)

    bind_host = host or Config.HOST
    bind_port = port or Config.PORT
    logging.info(f"Backend server running on {bind_host}:{bind_port}")
    uvicorn.run(
        "gatewayctl.api.main:app",
        host=bind_host,
        port=bind_port,
        reload=reload,
        log_level="debug" if debug_mode else "info",
    )


if __name__ == "__main__":
    try:
        app()
    except Exception as e:
        if debug_mode:
            import traceback
            logging.error(f"Unhandled exception: {e}\n{traceback.format_exc()}")
        else:
            logging.error(f"Error: {e}")
        sys.exit(1)
