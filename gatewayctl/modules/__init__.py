"""
Cluster tool execution and Envoy Gateway operations.
"""
from .errors import (
    ErrorKind,
    ExecutionError,
    GatewayCtlError,
    MalformedResponseError,
    ValidationError,
)
from .executor import CommandExecutor
from .gateway import GatewayController, get_controller

__all__ = [
    'ErrorKind',
    'ExecutionError',
    'GatewayCtlError',
    'MalformedResponseError',
    'ValidationError',
    'CommandExecutor',
    'GatewayController',
    'get_controller',
]
