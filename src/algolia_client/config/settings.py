"""Client settings — Pydantic-based configuration with YAML and env var support.

Configuration is loaded from (in order of precedence):
  1. Explicit keyword arguments (including values loaded from YAML)
  2. Environment variables (ALGOLIA_ prefix)
  3. Default values

Settings are resolved once, when the client is constructed, and passed
down to the dispatch pipeline. Nothing below reads the environment at
request time.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings

from algolia_client.models.request import Role


class Credentials(BaseModel):
    """API key and application ID sent with every request."""

    model_config = {"frozen": True}

    api_key: str | None = Field(default=None, description="Algolia API key")
    application_id: str | None = Field(default=None, description="Algolia application ID")


class HostSettings(BaseModel):
    """Host naming configuration."""

    domain: str = Field(default="algolia.net", description="Domain of the primary read/write hosts")
    fallback_domain: str = Field(default="algolianet.com", description="Domain of the numbered fallback hosts")
    insights_host: str = Field(default="insights.algolia.io", description="Analytics events host")
    # str is the comma-separated form, e.g. ALGOLIA_HOSTS__FALLBACK_HOST_ORDER=3,1,2
    fallback_host_order: list[int] | str = Field(
        default_factory=lambda: [1, 2, 3],
        description="Ordered fallback host suffixes, cycled through on retries",
    )

    @field_validator("fallback_host_order", mode="before")
    @classmethod
    def _parse_order(cls, v: Any) -> list[int]:
        """Parse the host order from a JSON or comma-separated string, or a list."""
        if isinstance(v, str):
            try:
                parsed = json.loads(v)
            except json.JSONDecodeError:
                parsed = [part.strip() for part in v.split(",") if part.strip()]
            if not isinstance(parsed, list):
                parsed = [parsed]
            v = parsed
        if isinstance(v, int):
            v = [v]
        order = [int(n) for n in v]
        if not order:
            raise ValueError("fallback_host_order must contain at least one host number")
        return order


class RetrySettings(BaseModel):
    """Extra attempts allowed per role, on top of the first attempt."""

    read: int = Field(default=3, ge=0, description="Retries for search/read traffic")
    write: int = Field(default=10, ge=0, description="Retries for indexing/write traffic")
    insights: int = Field(default=5, ge=0, description="Retries for analytics events")

    def budget_for(self, role: Role) -> int:
        """Return the retry budget for *role*."""
        return int(getattr(self, Role(role).value))


class TaskSettings(BaseModel):
    """Asynchronous task polling configuration."""

    poll_interval: float = Field(default=1.0, ge=0, description="Seconds between task status checks")


class ObservabilitySettings(BaseModel):
    """Observability configuration."""

    log_level: str = Field(default="info", description="Log level: debug, info, warning, error")
    log_format: str = Field(default="json", description="Log format: json, console")


class Settings(BaseSettings):
    """Root client settings.

    Configuration is loaded from environment variables with the ALGOLIA_ prefix.
    Nested settings use double underscores: ALGOLIA_RETRY__WRITE=20

    Example:
        ALGOLIA_APPLICATION_ID=ABCDEF1234
        ALGOLIA_API_KEY=0123456789abcdef
        ALGOLIA_HOSTS__FALLBACK_HOST_ORDER=3,1,2   (or [3,1,2])
    """

    model_config = {
        "env_prefix": "ALGOLIA_",
        "env_nested_delimiter": "__",
        "case_sensitive": False,
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }

    application_id: str | None = Field(default=None, description="Algolia application ID")
    api_key: str | None = Field(default=None, description="Algolia API key")
    timeout: float = Field(default=30.0, gt=0, description="Per-attempt HTTP timeout in seconds")

    hosts: HostSettings = Field(default_factory=HostSettings)
    retry: RetrySettings = Field(default_factory=RetrySettings)
    tasks: TaskSettings = Field(default_factory=TaskSettings)
    observability: ObservabilitySettings = Field(default_factory=ObservabilitySettings)

    def credentials(self) -> Credentials:
        """Return the configured credentials, without validating them."""
        return Credentials(api_key=self.api_key, application_id=self.application_id)

    @classmethod
    def from_yaml(cls, path: str | Path) -> Settings:
        """Load settings from a YAML configuration file.

        Values from the YAML file are passed as keyword arguments, so they
        override environment variables for the keys they set.

        Args:
            path: Path to the YAML config file.

        Returns:
            Populated Settings instance.
        """
        import yaml

        config_path = Path(path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)
