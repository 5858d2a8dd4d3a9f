"""
Configuration management for minicurl.

Settings are fixed defaults, overridable per invocation from the command
line only. No config files or environment variables are read.
"""

from dataclasses import dataclass

from minicurl import __version__


@dataclass
class ClientConfig:
    """Transport defaults."""

    timeout: float = 30.0
    max_redirects: int = 10
    user_agent: str = f"minicurl/{__version__}"
    verify_ssl: bool = True


# Global config instance
_config: ClientConfig | None = None


def get_config() -> ClientConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ClientConfig()
    return _config
