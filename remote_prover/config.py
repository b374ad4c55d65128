"""
Prover configuration using Pydantic Settings.

Values are read from the environment (or a .env file) once and passed
explicitly into RemoteProver. Never use os.getenv() directly in business logic.
"""

from typing import Optional

from pydantic import Field, ValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError

DEFAULT_PROOF_TIMEOUT_SECS = 60 * 60
DEFAULT_PROOF_BATCH_TIMEOUT_SECS = 60 * 60


class ProverConfig(BaseSettings):
    """Remote prover settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Proof service location
    PROOF_SERVICE_URL: Optional[str] = Field(
        default=None,
        description="Proof service base URL (required unless the mock service is used)",
    )
    PROOF_SERVICE_API_KEY: Optional[str] = Field(
        default=None,
        description="Bearer token sent to the proof service",
    )

    # Timeouts
    PROOF_TIMEOUT_SECS: int = Field(
        default=DEFAULT_PROOF_TIMEOUT_SECS,
        gt=0,
        description="Maximum time to wait for a single proof, in seconds",
    )
    PROOF_BATCH_TIMEOUT_SECS: int = Field(
        default=DEFAULT_PROOF_BATCH_TIMEOUT_SECS,
        gt=0,
        description="Maximum time to wait for a batch of proofs, in seconds",
    )
    HTTP_TIMEOUT_SECS: float = Field(
        default=30.0,
        gt=0,
        description="Timeout applied to each HTTP request to the proof service",
    )

    # Development
    USE_MOCK_PROOF_SERVICE: bool = Field(
        default=False,
        description="Use the in-process mock proof service instead of HTTP",
    )

    @model_validator(mode="after")
    def _require_service_url(self) -> "ProverConfig":
        if not self.USE_MOCK_PROOF_SERVICE and not self.PROOF_SERVICE_URL:
            raise ValueError("PROOF_SERVICE_URL must be set")
        return self


def load_config(**overrides) -> ProverConfig:
    """
    Load prover configuration from the environment.

    Keyword overrides take precedence over environment values.

    Raises:
        ConfigurationError: If a setting is missing or invalid
    """
    try:
        return ProverConfig(**overrides)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid prover configuration: {e.error_count()} error(s)",
            details=[
                {"field": ".".join(str(p) for p in err["loc"]), "error": err["msg"]}
                for err in e.errors()
            ],
        ) from e
