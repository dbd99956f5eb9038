import typer

from gatewayctl.commands import echo_json
from gatewayctl.modules.gateway import get_controller

app = typer.Typer(help="Inspect the cluster kubectl is pointed at.")


@app.command("status")
def cluster_status():
    """Show the active kubeconfig context."""
    status = get_controller().cluster_status()
    echo_json(status.to_dict())
    if not status.enabled:
        raise typer.Exit(code=1)
