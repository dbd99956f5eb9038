"""gatewayctl - manage the Envoy Gateway add-on through kubectl."""

__version__ = "0.1.0"
