"""Error kinds raised while translating, sending or classifying a message."""

from __future__ import annotations


class MailError(Exception):
    """Base class for every error raised by the transport."""


class ConfigurationError(MailError):
    """Provider settings are missing or invalid."""


class AttachmentReadError(MailError):
    """An attachment file could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Could not read attachment {path}: {reason}")
        self.path = path


class TransportError(MailError):
    """The HTTP call to the provider failed before a response was received."""


class ProviderRejectionError(MailError):
    """The provider answered but rejected the message or some recipients."""


class MalformedResponseError(MailError):
    """The provider response was not JSON or lacked the expected fields."""


__all__ = [
    "MailError",
    "ConfigurationError",
    "AttachmentReadError",
    "TransportError",
    "ProviderRejectionError",
    "MalformedResponseError",
]
