import json
import subprocess
import sys

import pytest
from typer.testing import CliRunner

from conftest import MANIFEST, deployment_json
from gatewayctl.cli import app
from gatewayctl.commands import cluster, gateway

STATUS_ARGS = ("get", "deployment", "-n", "envoy-gateway-system", "envoy-gateway", "-o", "json")


def run_cli_command(cmd):
    return subprocess.run(
        [sys.executable, "-m", "gatewayctl.cli"] + cmd.split(), capture_output=True, text=True
    )


@pytest.fixture
def runner(controller, monkeypatch):
    monkeypatch.setattr(cluster, "get_controller", lambda: controller)
    monkeypatch.setattr(gateway, "get_controller", lambda: controller)
    return CliRunner()


def test_help():
    result = run_cli_command("--help")
    assert "Usage" in result.stdout
    assert "gateway" in result.stdout
    assert "serve" in result.stdout


def test_gateway_commands_exist():
    result = run_cli_command("gateway --help")
    for command in ("status", "install", "uninstall", "routes", "apply"):
        assert command in result.stdout


def test_cluster_status(runner, fake_executor):
    fake_executor.responses[("config", "current-context")] = (0, "kind-dev\n", "")
    result = runner.invoke(app, ["cluster", "status"])
    assert result.exit_code == 0
    assert json.loads(result.stdout) == {"enabled": True, "context": "kind-dev"}


def test_cluster_status_disabled_exits_non_zero(runner, fake_executor):
    fake_executor.responses[("config", "current-context")] = (1, "", "no context")
    result = runner.invoke(app, ["cluster", "status"])
    assert result.exit_code == 1


def test_gateway_status(runner, fake_executor):
    fake_executor.responses[STATUS_ARGS] = (0, deployment_json(), "")
    result = runner.invoke(app, ["gateway", "status"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["name"] == "envoy-gateway"


def test_gateway_status_malformed_fails(runner, fake_executor):
    fake_executor.responses[STATUS_ARGS] = (0, "garbage", "")
    result = runner.invoke(app, ["gateway", "status"])
    assert result.exit_code == 1
    assert "malformed_response" in result.output


def test_uninstall_requires_confirmation(runner, fake_executor):
    result = runner.invoke(app, ["gateway", "uninstall"], input="n\n")
    assert result.exit_code == 0
    assert "cancelled" in result.output
    assert fake_executor.calls == []


def test_uninstall_with_yes(runner, fake_executor):
    fake_executor.responses[
        ("delete", "--ignore-not-found", "-f", "https://example.test/install.yaml")
    ] = (0, "", "")
    result = runner.invoke(app, ["gateway", "uninstall", "--yes"])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["success"] is True


def test_apply_from_file(runner, fake_executor, tmp_path, temp_files):
    manifest = tmp_path / "gateway.yaml"
    manifest.write_text(MANIFEST)
    fake_executor.responses[("apply", "-f", "*")] = (0, "namespace/demo created\n", "")
    result = runner.invoke(app, ["gateway", "apply", "--file", str(manifest)])
    assert result.exit_code == 0
    assert json.loads(result.stdout)["details"] == "namespace/demo created\n"
    assert temp_files() == ["gateway.yaml"]


def test_apply_missing_file(runner, fake_executor, tmp_path):
    result = runner.invoke(app, ["gateway", "apply", "--file", str(tmp_path / "nope.yaml")])
    assert result.exit_code == 1
    assert fake_executor.calls == []
