"""Typed configuration loaded from environment variables at startup."""

from __future__ import annotations

import logging
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

logger: logging.Logger = logging.getLogger(__name__)


class StackConfig(BaseSettings):
    """Fully validated private link stack configuration.

    All values are sourced from environment variables at startup.
    Raises ``ValidationError`` on missing or invalid values.
    """

    model_config = SettingsConfigDict(
        env_prefix="PRIVATELINK_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    subscription_id: str
    import_protection: bool = False
    operation_timeout_seconds: float | None = Field(default=None, gt=0)
    environment: Literal["prod", "staging", "dev"] = "prod"

    # Inputs for the endpoint the stack program provisions.
    endpoint_name: str = ""
    resource_group_name: str = ""
    location: str = ""
    subnet_id: str = ""
    target_resource_id: str = ""
    subresource_names: list[str] = Field(default_factory=list)
    is_manual_connection: bool = False
    request_message: str = ""

    @classmethod
    def load(cls) -> StackConfig:
        """Load and validate configuration from the environment.

        Logs each resolved setting at DEBUG level.
        Raises ``pydantic.ValidationError`` on missing or invalid values.
        """
        config = cls()  # type: ignore[call-arg]  # env vars supply required fields
        logger.debug(
            "stack_config_loaded",
            extra={
                "subscription_id": config.subscription_id,
                "import_protection": config.import_protection,
                "operation_timeout_seconds": config.operation_timeout_seconds,
                "environment": config.environment,
            },
        )
        return config
