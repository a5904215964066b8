"""
Hub delivery configuration.

Configuration is read per call (never cached) so that a change to the
environment is picked up by the next send. Callers may also build a
HubConfig explicitly and inject it into each send.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

# Defaults
DEFAULT_TIMEOUT_SECONDS = 5.0
MAX_ATTEMPTS = 2  # initial try + 1 retry
INITIAL_BACKOFF_SECONDS = 0.3

EVENTS_PATH = "/api/events"
CONFIG_MISSING_ERROR = "MCOP_HUB_URL missing"
DEFAULT_CONFIG_PATH = Path(".mcop") / "config.yaml"

# Environment variables
ENV_URL = "MCOP_HUB_URL"
ENV_TOKEN = "MCOP_HUB_TOKEN"
ENV_TIMEOUT_MS = "MCOP_HUB_TIMEOUT_MS"
ENV_MAX_ATTEMPTS = "MCOP_HUB_MAX_ATTEMPTS"
ENV_INITIAL_BACKOFF_MS = "MCOP_HUB_INITIAL_BACKOFF_MS"
ENV_SOURCE_VERSION = "CODEX_VERSION"


class HubConfigError(ValueError):
    """Raised when hub configuration values are invalid."""


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Bounded exponential backoff, no jitter.

    Attributes:
        max_attempts: Total network attempts, including the first one
        initial_backoff_seconds: Delay after the first failed attempt
    """

    max_attempts: int = MAX_ATTEMPTS
    initial_backoff_seconds: float = INITIAL_BACKOFF_SECONDS

    def backoff(self, attempt: int) -> float:
        """Delay to wait after the given (1-based) failed attempt."""
        return self.initial_backoff_seconds * (2 ** (attempt - 1))


@dataclass(frozen=True)
class HubConfig:
    """Hub connection and delivery settings."""

    base_url: str = ""
    token: str | None = None
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    max_attempts: int = MAX_ATTEMPTS
    initial_backoff_seconds: float = INITIAL_BACKOFF_SECONDS
    source_version: str | None = None

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise HubConfigError(
                f"max_attempts must be at least 1, got {self.max_attempts}"
            )
        if self.timeout_seconds <= 0:
            raise HubConfigError(
                f"timeout_seconds must be positive, got {self.timeout_seconds}"
            )
        if self.initial_backoff_seconds < 0:
            raise HubConfigError(
                "initial_backoff_seconds cannot be negative, "
                f"got {self.initial_backoff_seconds}"
            )

    @property
    def is_configured(self) -> bool:
        """True when a Hub base URL is set."""
        return bool(self.base_url and self.base_url.strip())

    @property
    def events_url(self) -> str:
        """Event ingestion endpoint."""
        return self.base_url.strip().rstrip("/") + EVENTS_PATH

    @property
    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.max_attempts,
            initial_backoff_seconds=self.initial_backoff_seconds,
        )

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        defaults: "HubConfig | None" = None,
    ) -> "HubConfig":
        """
        Create config from environment variables.

        Args:
            environ: Mapping to read from (defaults to os.environ)
            defaults: Values used for variables that are not set

        Raises:
            HubConfigError: If a numeric variable cannot be parsed
        """
        env = os.environ if environ is None else environ
        base = defaults or cls()
        overrides: dict[str, Any] = {}

        if ENV_URL in env:
            overrides["base_url"] = env[ENV_URL]
        if env.get(ENV_TOKEN):
            overrides["token"] = env[ENV_TOKEN]
        if env.get(ENV_SOURCE_VERSION):
            overrides["source_version"] = env[ENV_SOURCE_VERSION]

        try:
            if env.get(ENV_TIMEOUT_MS):
                overrides["timeout_seconds"] = int(env[ENV_TIMEOUT_MS]) / 1000
            if env.get(ENV_MAX_ATTEMPTS):
                overrides["max_attempts"] = int(env[ENV_MAX_ATTEMPTS])
            if env.get(ENV_INITIAL_BACKOFF_MS):
                overrides["initial_backoff_seconds"] = (
                    int(env[ENV_INITIAL_BACKOFF_MS]) / 1000
                )
            return replace(base, **overrides)
        except ValueError as e:
            raise HubConfigError(f"invalid hub configuration: {e}") from e

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HubConfig":
        """Create config from dictionary."""
        try:
            return cls(
                base_url=data.get("url", data.get("base_url", "")) or "",
                token=data.get("token"),
                timeout_seconds=float(
                    data.get("timeout_seconds", DEFAULT_TIMEOUT_SECONDS)
                ),
                max_attempts=int(data.get("max_attempts", MAX_ATTEMPTS)),
                initial_backoff_seconds=float(
                    data.get("initial_backoff_seconds", INITIAL_BACKOFF_SECONDS)
                ),
                source_version=data.get("source_version"),
            )
        except HubConfigError:
            raise
        except (TypeError, ValueError) as e:
            raise HubConfigError(f"invalid hub configuration: {e}") from e

    @classmethod
    def from_file(cls, path: Path) -> "HubConfig":
        """Load configuration from YAML file."""
        if not path.exists():
            return cls()

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data.get("hub", data))

    @classmethod
    def load(
        cls,
        project_path: Path | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "HubConfig":
        """
        Load configuration from .mcop/config.yaml, then apply environment.

        Environment variables take precedence over file values.
        """
        if project_path is None:
            project_path = Path.cwd()
        file_config = cls.from_file(project_path / DEFAULT_CONFIG_PATH)
        return cls.from_env(environ, defaults=file_config)

    def to_dict(self, mask_token: bool = True) -> dict[str, Any]:
        """Convert to dictionary for serialization."""
        token = self.token
        if token and mask_token:
            token = token[:4] + "****" if len(token) > 8 else "****"
        return {
            "hub": {
                "url": self.base_url,
                "token": token,
                "timeout_seconds": self.timeout_seconds,
                "max_attempts": self.max_attempts,
                "initial_backoff_seconds": self.initial_backoff_seconds,
                "source_version": self.source_version,
            }
        }

    def save(self, path: Path) -> None:
        """Save configuration to YAML file (token included)."""
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.dump(self.to_dict(mask_token=False), f, default_flow_style=False)
