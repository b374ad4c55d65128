"""
Mock proof server configuration using Pydantic Settings.

All environment variables are accessed through this config object.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MockServerSettings(BaseSettings):
    """Mock server settings loaded from environment variables"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    MOCK_QUEUE_DELAY_SECS: float = Field(
        default=3.0,
        ge=0,
        description="Upper bound of the simulated queue delay per request",
    )
    MOCK_RUN_DELAY_SECS: float = Field(
        default=15.0,
        ge=0,
        description="Upper bound of the simulated proving time per request",
    )
    MOCK_FAILURE_RATE: float = Field(
        default=0.0,
        ge=0,
        le=1,
        description="Probability that a simulated proof ends in failure",
    )


# Global settings instance
settings = MockServerSettings()
