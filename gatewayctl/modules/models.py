"""
Data models for Envoy Gateway management.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class CommandResult:
    """Captured outcome of one cluster tool invocation."""
    args: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


@dataclass
class ClusterStatus:
    """Currently active kubeconfig context, or why there is none."""
    enabled: bool
    context: Optional[str] = None
    reason: Optional[str] = None

    @classmethod
    def disabled(cls, reason: str) -> "ClusterStatus":
        return cls(enabled=False, reason=reason)

    def to_dict(self) -> Dict[str, Any]:
        if not self.enabled:
            return {"enabled": False, "error": self.reason}
        return {"enabled": True, "context": self.context}


@dataclass
class GatewayStatus:
    """Deployment state of the gateway add-on."""
    installed: bool
    name: Optional[str] = None
    namespace: Optional[str] = None
    replicas: int = 0
    available_replicas: int = 0
    version: str = "unknown"

    @classmethod
    def not_installed(cls) -> "GatewayStatus":
        return cls(installed=False)

    def to_dict(self) -> Dict[str, Any]:
        if not self.installed:
            return {"installed": False}
        return {
            "installed": True,
            "name": self.name,
            "namespace": self.namespace,
            "replicas": self.replicas,
            "availableReplicas": self.available_replicas,
            "version": self.version,
        }


@dataclass
class RouteSummary:
    name: str
    namespace: str
    hostnames: List[str] = field(default_factory=list)
    rules: List[Any] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "namespace": self.namespace,
            "hostnames": list(self.hostnames),
            "rules": list(self.rules),
        }


@dataclass
class Ack:
    """Acknowledgement of a mutation that the cluster tool accepted."""
    message: str
    details: str = ""
    success: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "message": self.message, "details": self.details}


@dataclass
class AppliedAck(Ack):
    cleanup_warning: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        if self.cleanup_warning:
            payload["cleanupWarning"] = self.cleanup_warning
        return payload
