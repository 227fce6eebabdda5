"""Configuration management with Pydantic v2"""

from functools import cache

from pydantic import ConfigDict, Field, ValidationError
from pydantic_settings import BaseSettings

from ..consts import (
    ENV_SERVICE_HOST,
    ENV_SERVICE_PORT,
    SERVICEACCOUNT_CA_PATH,
    SERVICEACCOUNT_TOKEN_PATH,
)
from ..exceptions import ConfigError


class Config(BaseSettings):
    """Type-safe configuration for building a Kubernetes API client.

    The API server location comes from the service discovery variables the
    kubelet injects into every pod (no prefix). Everything else can be
    overridden with ``KUBE_BOOTSTRAP_*`` variables.
    """

    model_config = ConfigDict(
        env_prefix="KUBE_BOOTSTRAP_",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )

    service_host: str | None = Field(
        default=None,
        validation_alias=ENV_SERVICE_HOST,
        description="Kubernetes API server host",
    )
    # Kept as a string so an empty or non-numeric value can be reported as a
    # ConfigError instead of a validation failure at load time.
    service_port: str | None = Field(
        default=None,
        validation_alias=ENV_SERVICE_PORT,
        description="Kubernetes API server port",
    )
    ca_cert_path: str = Field(
        default=SERVICEACCOUNT_CA_PATH,
        description="Path to the cluster CA certificate (PEM or DER)",
    )
    token_path: str = Field(
        default=SERVICEACCOUNT_TOKEN_PATH,
        description="Path to the bearer token file",
    )
    log_level: str = Field(
        default="INFO",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR)$",
        description="Logging level",
    )
    connect_timeout_seconds: float = Field(
        default=30,
        gt=0,
        le=300,
        description="Connect/write/pool timeout in seconds (reads are unbounded)",
    )

    def __repr__(self) -> str:
        """String representation of the configuration"""
        return (
            f"Config(service_host='{self.service_host}', "
            f"service_port='{self.service_port}', log_level='{self.log_level}')"
        )


def load_config() -> Config:
    """Load Config from the environment.

    Raises:
        ConfigError: If an environment variable holds an invalid value.
    """
    try:
        return Config()
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in e.errors()
        ]
        raise ConfigError(
            "Invalid configuration in environment",
            errors=errors,
            suggestions=["Check the KUBE_BOOTSTRAP_* environment variables"],
        ) from e


@cache
def get_config() -> Config:
    """Get a cached Config instance."""
    return load_config()
