import json
import os
import threading

import pytest

from gatewayctl.modules.errors import ErrorKind, ExecutionError
from gatewayctl.modules.gateway import GatewayController
from gatewayctl.modules.models import CommandResult


class FakeExecutor:
    """Stands in for CommandExecutor; answers kubectl calls from a script.

    ``responses`` maps the argument tuple (without the binary) to either a
    CommandResult-like tuple ``(returncode, stdout, stderr)``, an
    ExecutionError to raise, or a callable receiving the args.
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []
        self._lock = threading.Lock()

    def kubectl(self, *args, check=True, **kwargs):
        with self._lock:
            self.calls.append(args)
        response = self._lookup(args)
        if callable(response):
            response = response(args)
        if isinstance(response, ExecutionError):
            raise response
        returncode, stdout, stderr = response
        result = CommandResult(["kubectl", *args], returncode, stdout, stderr)
        if check and not result.succeeded:
            raise ExecutionError(
                ErrorKind.NON_ZERO_EXIT, stderr or "failed", stderr=stderr, returncode=returncode
            )
        return result

    def _lookup(self, args):
        if args in self.responses:
            return self.responses[args]
        # apply -f <temp path> cannot be known ahead of time
        for key, value in self.responses.items():
            if key and key[-1] == "*" and args[:len(key) - 1] == key[:-1]:
                return value
        raise AssertionError(f"unexpected kubectl call: {args}")


def deployment_json(name="envoy-gateway", namespace="envoy-gateway-system",
                    replicas=1, available=1, version="v0.3.0"):
    labels = {"control-plane": "envoy-gateway"}
    if version is not None:
        labels["version"] = version
    status = {}
    if available is not None:
        status["availableReplicas"] = available
    return json.dumps({
        "apiVersion": "apps/v1",
        "kind": "Deployment",
        "metadata": {"name": name, "namespace": namespace, "labels": labels},
        "spec": {"replicas": replicas},
        "status": status,
    })


def httproute(name, namespace, hostnames=None, rules=None):
    spec = {}
    if hostnames is not None:
        spec["hostnames"] = hostnames
    if rules is not None:
        spec["rules"] = rules
    return {
        "apiVersion": "gateway.networking.k8s.io/v1beta1",
        "kind": "HTTPRoute",
        "metadata": {"name": name, "namespace": namespace},
        "spec": spec,
    }


MANIFEST = """\
apiVersion: v1
kind: Namespace
metadata:
  name: demo
"""


@pytest.fixture
def fake_executor():
    return FakeExecutor()


@pytest.fixture
def controller(fake_executor, tmp_path):
    return GatewayController(
        executor=fake_executor,
        namespace="envoy-gateway-system",
        deployment="envoy-gateway",
        manifest_url="https://example.test/install.yaml",
        temp_dir=str(tmp_path),
    )


@pytest.fixture
def temp_files(tmp_path):
    """List whatever is left in the controller's temp dir."""
    return lambda: sorted(os.listdir(tmp_path))
