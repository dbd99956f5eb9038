from pathlib import Path

import typer

from gatewayctl.commands import echo_json, fail
from gatewayctl.modules.errors import GatewayCtlError
from gatewayctl.modules.gateway import get_controller

app = typer.Typer(help="Manage the Envoy Gateway add-on.")


@app.command("status")
def gateway_status():
    """Show whether Envoy Gateway is installed and how many replicas are up."""
    try:
        echo_json(get_controller().gateway_status().to_dict())
    except GatewayCtlError as e:
        fail(e)


@app.command("install")
def install_gateway():
    """Install the pinned Envoy Gateway release."""
    try:
        echo_json(get_controller().install().to_dict())
    except GatewayCtlError as e:
        fail(e)


@app.command("uninstall")
def uninstall_gateway(
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip the confirmation prompt")
):
    """Remove the pinned Envoy Gateway release."""
    if not yes and not typer.confirm("Uninstall Envoy Gateway?", default=False):
        typer.echo("❌ Uninstall cancelled.")
        raise typer.Exit()
    try:
        echo_json(get_controller().uninstall().to_dict())
    except GatewayCtlError as e:
        fail(e)


@app.command("routes")
def list_routes():
    """List HTTPRoutes in every namespace."""
    try:
        routes = get_controller().list_routes()
        echo_json({"routes": [route.to_dict() for route in routes]})
    except GatewayCtlError as e:
        fail(e)


@app.command("apply")
def apply_config(
    file: Path = typer.Option(..., "--file", "-f", help="Manifest to apply, '-' for stdin")
):
    """Apply a configuration manifest."""
    if str(file) == "-":
        content = typer.get_text_stream("stdin").read()
    else:
        if not file.exists():
            typer.echo(f"❌ Manifest not found: {file}", err=True)
            raise typer.Exit(code=1)
        content = file.read_text()
    try:
        echo_json(get_controller().apply_manifest(content).to_dict())
    except GatewayCtlError as e:
        fail(e)
