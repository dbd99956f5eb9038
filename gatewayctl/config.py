"""Configuration management for the gatewayctl application."""
import os
import tempfile
from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()

DEFAULT_MANIFEST_URL = (
    "https://github.com/envoyproxy/gateway/releases/download/v0.3.0/install.yaml"
)


class Config:
    """Application configuration with sensible defaults."""

    # Cluster tool
    KUBECTL: str = os.getenv("GATEWAYCTL_KUBECTL", "kubectl")
    COMMAND_TIMEOUT: float = float(os.getenv("GATEWAYCTL_COMMAND_TIMEOUT", "60"))

    # Envoy Gateway add-on
    NAMESPACE: str = os.getenv("GATEWAYCTL_NAMESPACE", "envoy-gateway-system")
    DEPLOYMENT: str = os.getenv("GATEWAYCTL_DEPLOYMENT", "envoy-gateway")
    MANIFEST_URL: str = os.getenv("GATEWAYCTL_MANIFEST_URL", DEFAULT_MANIFEST_URL)

    # Where apply writes its transient manifest files
    TEMP_DIR: str = os.getenv("GATEWAYCTL_TEMP_DIR", tempfile.gettempdir())

    # HTTP server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8080"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    @classmethod
    def validate(cls) -> None:
        """Validate configuration values."""
        problems = []
        if not cls.KUBECTL:
            problems.append("GATEWAYCTL_KUBECTL must not be empty")
        if cls.COMMAND_TIMEOUT <= 0:
            problems.append("GATEWAYCTL_COMMAND_TIMEOUT must be positive")
        if problems:
            raise ValueError(f"Invalid configuration: {', '.join(problems)}")

# Don't validate on import to allow for dynamic configuration
# Call Config.validate() explicitly when needed
