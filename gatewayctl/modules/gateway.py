"""Envoy Gateway lifecycle, routes and manifest apply on top of kubectl."""
import json
import logging
import os
import tempfile
import time
from typing import Any, Dict, List, Optional

import yaml

from gatewayctl.config import Config
from gatewayctl.modules.errors import (
    ErrorKind,
    ExecutionError,
    MalformedResponseError,
    ValidationError,
)
from gatewayctl.modules.executor import CommandExecutor
from gatewayctl.modules.models import (
    Ack,
    AppliedAck,
    ClusterStatus,
    GatewayStatus,
    RouteSummary,
)

logger = logging.getLogger(__name__)


class GatewayController:
    """Typed operations against the cluster, one kubectl call each.

    The controller keeps no state between calls, so one instance can serve
    any number of concurrent callers.
    """

    def __init__(
        self,
        executor: Optional[CommandExecutor] = None,
        namespace: Optional[str] = None,
        deployment: Optional[str] = None,
        manifest_url: Optional[str] = None,
        temp_dir: Optional[str] = None,
    ):
        self.executor = executor or CommandExecutor()
        self.namespace = namespace or Config.NAMESPACE
        self.deployment = deployment or Config.DEPLOYMENT
        self.manifest_url = manifest_url or Config.MANIFEST_URL
        self.temp_dir = temp_dir or Config.TEMP_DIR

    def cluster_status(self) -> ClusterStatus:
        """Report the active kubeconfig context.

        A missing tool or an unset context is the disabled state, not an error.
        """
        try:
            result = self.executor.kubectl("config", "current-context", check=False)
        except ExecutionError as e:
            logger.info(f"Cluster tool unavailable: {e.message}")
            return ClusterStatus.disabled(e.message)

        context = result.stdout.strip()
        if not result.succeeded:
            reason = result.stderr.strip() or f"exit code {result.returncode}"
            logger.info(f"No usable cluster context: {reason}")
            return ClusterStatus.disabled(reason)
        if not context:
            return ClusterStatus.disabled("current context is empty")
        return ClusterStatus(enabled=True, context=context)

    def gateway_status(self) -> GatewayStatus:
        """Inspect the gateway deployment.

        Any non-zero exit means the add-on is not installed. Output that is
        not a deployment object raises MalformedResponseError.
        """
        result = self.executor.kubectl(
            "get", "deployment", "-n", self.namespace, self.deployment, "-o", "json",
            check=False,
        )
        if not result.succeeded:
            logger.debug(f"Gateway deployment not found: {result.stderr.strip()}")
            return GatewayStatus.not_installed()

        data = _parse_json(result.stdout, "Failed to parse Envoy Gateway status")
        metadata = data.get("metadata") if isinstance(data, dict) else None
        if not isinstance(metadata, dict) or "name" not in metadata or "namespace" not in metadata:
            raise MalformedResponseError("Failed to parse Envoy Gateway status")

        spec = data.get("spec") or {}
        status = data.get("status") or {}
        labels = metadata.get("labels") or {}
        try:
            return GatewayStatus(
                installed=True,
                name=metadata["name"],
                namespace=metadata["namespace"],
                replicas=int(spec.get("replicas") or 0),
                available_replicas=int(status.get("availableReplicas") or 0),
                version=labels.get("version") or "unknown",
            )
        except (AttributeError, TypeError, ValueError) as e:
            raise MalformedResponseError(f"Failed to parse Envoy Gateway status: {e}") from e

    def install(self) -> Ack:
        """Apply the pinned gateway release.

        ``kubectl apply`` converges, so installing twice is not a failure.
        """
        logger.info(f"🚀 Installing Envoy Gateway from {self.manifest_url}")
        result = self.executor.kubectl("apply", "-f", self.manifest_url)
        logger.info("✅ Envoy Gateway installation initiated")
        return Ack(message="Envoy Gateway installation initiated", details=result.stdout)

    def uninstall(self) -> Ack:
        """Delete the pinned gateway release; already absent counts as success."""
        logger.info(f"🗑️  Uninstalling Envoy Gateway from {self.manifest_url}")
        result = self.executor.kubectl(
            "delete", "--ignore-not-found", "-f", self.manifest_url
        )
        logger.info("✅ Envoy Gateway uninstallation initiated")
        return Ack(message="Envoy Gateway uninstallation initiated", details=result.stdout)

    def list_routes(self) -> List[RouteSummary]:
        """Summarize HTTPRoutes across all namespaces, in listing order.

        If the listing cannot be run at all the result is empty.
        """
        try:
            result = self.executor.kubectl("get", "httproutes", "-A", "-o", "json")
        except ExecutionError as e:
            logger.info(f"Could not list HTTPRoutes ({e.kind.value}): {e.message}")
            return []

        data = _parse_json(result.stdout, "Failed to parse routes")
        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            raise MalformedResponseError("Failed to parse routes")
        return [_summarize_route(item) for item in items]

    def apply_manifest(self, content: Optional[str]) -> AppliedAck:
        """Apply a raw manifest through a temporary file.

        The file is removed before returning whatever the apply outcome was.
        A failed removal is reported as ``cleanup_warning`` and never replaces
        the apply result or error.
        """
        if content is None or not str(content).strip():
            raise ValidationError("No configuration provided")
        try:
            documents = [doc for doc in yaml.safe_load_all(content) if doc is not None]
        except yaml.YAMLError as e:
            raise ValidationError(f"Configuration is not valid YAML: {e}") from e
        if not documents:
            raise ValidationError("Configuration contains no documents")

        path = self._write_temp_manifest(content)
        removed = False
        warning = None
        try:
            result = self.executor.kubectl("apply", "-f", path)
        except ExecutionError as e:
            e.cleanup_warning = self._remove_temp_manifest(path)
            removed = True
            raise
        finally:
            if not removed:
                warning = self._remove_temp_manifest(path)

        logger.info(f"✅ Applied {len(documents)} document(s)")
        return AppliedAck(
            message="Configuration applied successfully",
            details=result.stdout,
            cleanup_warning=warning,
        )

    def _write_temp_manifest(self, content: str) -> str:
        # mkstemp opens with O_EXCL, so concurrent callers never share a name
        prefix = f"envoy-config-{time.time_ns()}-"
        try:
            fd, path = tempfile.mkstemp(prefix=prefix, suffix=".yaml", dir=self.temp_dir)
        except OSError as e:
            raise ExecutionError(
                ErrorKind.IO_ERROR, f"Could not create temporary manifest: {e}"
            ) from e

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            error = ExecutionError(
                ErrorKind.IO_ERROR, f"Could not write temporary manifest {path}: {e}"
            )
            error.cleanup_warning = self._remove_temp_manifest(path)
            raise error from e
        logger.debug(f"📄 Wrote manifest to {path}")
        return path

    @staticmethod
    def _remove_temp_manifest(path: str) -> Optional[str]:
        try:
            os.unlink(path)
        except OSError as e:
            warning = f"Failed to remove temporary manifest {path}: {e}"
            logger.warning(f"⚠️  {warning}")
            return warning
        return None


def _parse_json(output: str, message: str) -> Any:
    try:
        return json.loads(output)
    except ValueError as e:
        raise MalformedResponseError(message) from e


def _summarize_route(item: Dict[str, Any]) -> RouteSummary:
    """Reduce one HTTPRoute object; anything not shaped like one is malformed."""
    if not isinstance(item, dict):
        raise MalformedResponseError("Failed to parse routes")
    metadata = item.get("metadata")
    spec = item.get("spec")
    if spec is None:
        spec = {}
    if not isinstance(metadata, dict) or not isinstance(spec, dict):
        raise MalformedResponseError("Failed to parse routes")
    name = metadata.get("name")
    namespace = metadata.get("namespace")
    if not isinstance(name, str) or not isinstance(namespace, str):
        raise MalformedResponseError("Failed to parse routes")

    hostnames = spec.get("hostnames")
    rules = spec.get("rules")
    if hostnames is None:
        hostnames = []
    if rules is None:
        rules = []
    if not isinstance(hostnames, list) or not isinstance(rules, list):
        raise MalformedResponseError("Failed to parse routes")
    return RouteSummary(name=name, namespace=namespace, hostnames=list(hostnames), rules=list(rules))


_controller: Optional[GatewayController] = None


def get_controller() -> GatewayController:
    """Get the process-wide controller built from Config."""
    global _controller
    if _controller is None:
        _controller = GatewayController()
    return _controller
