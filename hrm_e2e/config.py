"""
Run configuration for the OrangeHRM suite.

Configuration values are read from environment variables with sensible
defaults.  ``EnvConfig`` provides the typed lookups; ``Settings`` is the
resolved, immutable view that fixtures build once per session and pass
into page objects and the API client.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from hrm_e2e.errors import ConfigMissingError, ConfigValueError

DEFAULT_BASE_URL = "https://opensource-demo.orangehrmlive.com/"
DEFAULT_USERNAME = "Admin"
DEFAULT_PASSWORD = "admin123"

# The demo site is slow; CI runners get a larger budget.
LOCAL_TIMEOUT_MS = 30_000
CI_TIMEOUT_MS = 60_000
DEFAULT_TEST_TIMEOUT_MS = 120_000


class EnvConfig:
    """Typed read access to a key/value environment."""

    def __init__(self, environ: Mapping[str, str] | None = None):
        self._environ = os.environ if environ is None else environ

    def _raw(self, key: str) -> str | None:
        value = self._environ.get(key)
        return value or None

    def get(self, key: str, default: str | None = None) -> str:
        """
        Return the string value of ``key``.

        Raises:
            ConfigMissingError: When the key is unset or empty and no
                default was supplied.
        """
        value = self._raw(key)
        if value is not None:
            return value
        if default:
            return default
        raise ConfigMissingError(key)

    def get_bool(self, key: str, default: bool = False) -> bool:
        """Return True for "true" (any case) or "1"; the default when unset."""
        value = self._raw(key)
        if value is None:
            return default
        return value.lower() == "true" or value == "1"

    def get_int(self, key: str, default: int | None = None) -> int:
        """
        Return the integer value of ``key``.

        Raises:
            ConfigMissingError: When the key is unset and no default was given.
            ConfigValueError: When the value is not a base-10 integer.
        """
        value = self._raw(key)
        if value is None:
            if default is not None:
                return default
            raise ConfigMissingError(key)
        try:
            return int(value.strip(), 10)
        except ValueError as exc:
            raise ConfigValueError(key, value) from exc


@dataclass(frozen=True)
class Settings:
    """Resolved settings for one test session."""

    base_url: str = DEFAULT_BASE_URL
    username: str = DEFAULT_USERNAME
    password: str = DEFAULT_PASSWORD
    ci: bool = False
    headless: bool = True
    action_timeout_ms: int = LOCAL_TIMEOUT_MS
    navigation_timeout_ms: int = LOCAL_TIMEOUT_MS
    test_timeout_ms: int = DEFAULT_TEST_TIMEOUT_MS
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: EnvConfig | None = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            env: Config reader to use. Defaults to one over ``os.environ``.

        Returns:
            Settings with CI-aware timeout defaults applied.
        """
        env = env or EnvConfig()
        ci = env.get_bool("CI", False)
        timeout_default = CI_TIMEOUT_MS if ci else LOCAL_TIMEOUT_MS
        return cls(
            base_url=env.get("BASE_URL", DEFAULT_BASE_URL),
            username=env.get("DEFAULT_USERNAME", DEFAULT_USERNAME),
            password=env.get("DEFAULT_PASSWORD", DEFAULT_PASSWORD),
            ci=ci,
            headless=env.get_bool("HEADLESS", True),
            action_timeout_ms=env.get_int("ACTION_TIMEOUT", timeout_default),
            navigation_timeout_ms=env.get_int("NAVIGATION_TIMEOUT", timeout_default),
            test_timeout_ms=env.get_int("PLAYWRIGHT_TEST_TIMEOUT", DEFAULT_TEST_TIMEOUT_MS),
            log_level=env.get("LOG_LEVEL", "INFO"),
        )

    def url(self, path: str) -> str:
        """Join ``path`` onto the base URL."""
        return f"{self.base_url.rstrip('/')}/{path.lstrip('/')}"
