"""SparkPost-based email sender implementation.

This module defines ``SparkPostSender``, which sends email via the
SparkPost transmissions HTTP API.  The request body is built by
:class:`MessageTranslator`, posted through a transport callable and the
response is classified by :class:`ResponseInterpreter`.  See the SparkPost
API documentation for details on the transmission payload.

The transport is any callable ``(url, headers, json_body) -> HttpResponse``
performing one blocking POST.  :func:`requests_transport` is the default.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

import requests

from sparkpost_transport.config import ProviderSettings
from sparkpost_transport.mailer import EmailSender
from sparkpost_transport.mailer.exceptions import ConfigurationError, TransportError
from sparkpost_transport.mailer.headers import HeaderCodec
from sparkpost_transport.mailer.message import MailMessage
from sparkpost_transport.mailer.response import (
    HttpResponse,
    ResponseInterpreter,
    SendOutcome,
)
from sparkpost_transport.mailer.translator import MessageTranslator

LOGGER = logging.getLogger(__name__)

REQUEST_TIMEOUT = 10

Transport = Callable[[str, Mapping[str, str], Dict[str, Any]], HttpResponse]


def requests_transport(
    url: str, headers: Mapping[str, str], json_body: Dict[str, Any]
) -> HttpResponse:
    """POST ``json_body`` to ``url`` with ``requests``.

    Raises:
        TransportError: If no HTTP response was received.
    """
    try:
        response = requests.post(
            url, headers=dict(headers), json=json_body, timeout=REQUEST_TIMEOUT
        )
    except requests.RequestException as exc:
        raise TransportError(f"Request to {url} failed: {exc}") from exc
    return HttpResponse(
        status=response.status_code,
        headers=dict(response.headers),
        body=response.text,
    )


class SparkPostSender(EmailSender):
    """SparkPost implementation of the ``EmailSender`` interface."""

    def __init__(
        self,
        settings: Optional[ProviderSettings] = None,
        transport: Optional[Transport] = None,
    ) -> None:
        self._settings = settings or ProviderSettings.from_env()
        self._transport = transport or requests_transport
        self._codec = HeaderCodec(self._settings)
        self._interpreter = ResponseInterpreter()

    @property
    def settings(self) -> ProviderSettings:
        return self._settings

    def build_request_body(self, message: MailMessage) -> Dict[str, Any]:
        return MessageTranslator(message, self._settings, self._codec).build_request_body()

    def transmit(self, message: MailMessage) -> SendOutcome:
        """Send ``message`` and return the classified outcome.

        Raises:
            AttachmentReadError: If an attachment cannot be read; nothing is
                sent in that case.
        """
        body = self.build_request_body(message)
        url = self._settings.transmissions_url
        LOGGER.debug(
            "Posting transmission to %s with headers %s",
            url,
            self._codec.get_request_headers(obfuscate=True),
        )

        try:
            response = self._transport(url, self._codec.get_request_headers(), body)
        except TransportError as exc:
            outcome = self._interpreter.interpret_failure(exc)
        else:
            outcome = self._interpreter.interpret(response)

        if outcome.success:
            LOGGER.info(
                "Transmission %s accepted for %d recipient(s)",
                outcome.transmission_id,
                outcome.accepted,
            )
        else:
            LOGGER.error(
                "Transmission failed (%d accepted, %d rejected): %s",
                outcome.accepted,
                outcome.rejected,
                outcome.error,
            )
        return outcome

    def send(self, message: MailMessage) -> bool:
        """Send ``message`` via the SparkPost API.

        Raises:
            AttachmentReadError: If an attachment cannot be read.
        """
        return self.transmit(message).success

    def send_email(
        self,
        recipient: str,
        msg_id: str,
        html: str,
        subject: str = "",
        text: Optional[str] = None,
    ) -> bool:
        """Send a single HTML email from the configured sender.

        Args:
            recipient: The target email address.
            msg_id: Message identifier, used as the ``Message-ID`` header.
            html: The HTML content of the message.
            subject: The email subject line.
            text: Optional plain-text alternative.

        Raises:
            ConfigurationError: If no sender address is configured.
        """
        if not self._settings.from_email:
            raise ConfigurationError("SPARKPOST_FROM_EMAIL must be set to use send_email")
        message = MailMessage(
            subject=subject,
            body=html,
            alt_body=text or "",
            content_type="text/html",
            message_id=msg_id,
        )
        message.set_from(self._settings.from_email, self._settings.from_name)
        message.add_address(recipient)
        return self.send(message)


__all__ = ["SparkPostSender", "Transport", "requests_transport"]
