import json

import typer

from gatewayctl.modules.errors import GatewayCtlError


def echo_json(payload) -> None:
    typer.echo(json.dumps(payload, indent=2))


def fail(exc: GatewayCtlError) -> None:
    """Print a controller error as JSON on stderr and exit 1."""
    typer.echo(json.dumps(exc.to_dict(), indent=2), err=True)
    raise typer.Exit(code=1)
