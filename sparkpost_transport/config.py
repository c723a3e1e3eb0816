"""Provider settings for the SparkPost transport.

Settings are an explicit value object passed to the translator and the
sender.  :meth:`ProviderSettings.from_env` builds one from environment
variables:

* ``SPARKPOST_API_KEY`` – API key sent as the ``Authorization`` header
* ``SPARKPOST_TEMPLATE`` – optional stored template id; switches the
  request to template substitution
* ``SPARKPOST_ENABLE_TRACKING`` – open and click tracking, defaults to true
* ``SPARKPOST_TRANSACTIONAL`` – transactional flag, defaults to false
* ``SPARKPOST_BASE_URL`` – optional base URL; defaults to the official API
* ``SPARKPOST_FROM_EMAIL`` / ``SPARKPOST_FROM_NAME`` – sender used by
  :meth:`SparkPostSender.send_email`
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from sparkpost_transport.mailer.exceptions import ConfigurationError

DEFAULT_BASE_URL = "https://api.sparkpost.com/api/v1"

_TRUTHY = {"1", "true", "yes"}


def _env_flag(env: Mapping[str, str], name: str, default: str) -> bool:
    return env.get(name, default).strip().lower() in _TRUTHY


@dataclass(frozen=True)
class ProviderSettings:
    """Everything the transport needs to know about the provider account."""

    api_key: str = ""
    enable_tracking: bool = False
    transactional: bool = False
    template: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    from_email: str = ""
    from_name: str = ""

    @property
    def uses_template(self) -> bool:
        return bool(self.template)

    @property
    def transmissions_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/transmissions"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "ProviderSettings":
        """Load settings from ``env`` (``os.environ`` by default).

        Raises:
            ConfigurationError: If ``SPARKPOST_API_KEY`` is not set.
        """
        env = os.environ if env is None else env
        api_key = env.get("SPARKPOST_API_KEY", "").strip()
        if not api_key:
            raise ConfigurationError("SPARKPOST_API_KEY must be set")
        return cls(
            api_key=api_key,
            enable_tracking=_env_flag(env, "SPARKPOST_ENABLE_TRACKING", "true"),
            transactional=_env_flag(env, "SPARKPOST_TRANSACTIONAL", "false"),
            template=env.get("SPARKPOST_TEMPLATE", "").strip() or None,
            base_url=env.get("SPARKPOST_BASE_URL", DEFAULT_BASE_URL),
            from_email=env.get("SPARKPOST_FROM_EMAIL", "").strip(),
            from_name=env.get("SPARKPOST_FROM_NAME", "").strip(),
        )


__all__ = ["DEFAULT_BASE_URL", "ProviderSettings"]
