"""Service configuration loaded from CODEDECK_* environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class CodedeckSettings(BaseSettings):
    """Codedeck workspace runtime settings.

    All fields are read from environment variables with the ``CODEDECK_``
    prefix.  For example, ``CODEDECK_LOG_LEVEL=DEBUG`` maps to ``log_level``.
    """

    model_config = SettingsConfigDict(
        env_prefix="CODEDECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # -- Logging ---------------------------------------------------------------
    log_level: str = "INFO"
    log_json: bool = False
    """Emit one JSON object per record instead of the coloured text format."""

    # -- Remote host -----------------------------------------------------------
    remote_host: Literal["github", "memory"] = "github"
    """``memory`` keeps repositories in-process (offline use, demos)."""

    github_api_url: str = "https://api.github.com"
    github_token: SecretStr | None = None
    """Personal access token.  Remote load/push fail as unavailable without it."""

    default_branch: str = "main"
    """Fallback when a repository's default branch cannot be resolved."""

    push_delay: float = 0.3
    """Seconds between sequential file writes during a bulk push."""

    request_timeout: float = 30.0

    # -- Workspaces ------------------------------------------------------------
    seed_workspace: bool = True
    """Create one workspace holding the starter project at startup."""

    # -- Server ----------------------------------------------------------------
    host: str = "0.0.0.0"  # noqa: S104
    port: int = 8000


@lru_cache(maxsize=1)
def get_settings() -> CodedeckSettings:
    """Return a cached settings instance.

    Call ``get_settings.cache_clear()`` in tests to force a re-read after
    overriding env vars.
    """
    return CodedeckSettings()
