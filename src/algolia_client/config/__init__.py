"""Client configuration."""

from algolia_client.config.settings import Credentials, Settings

__all__ = ["Credentials", "Settings"]
