"""Abstract interface and SparkPost implementation for sending messages.

This subpackage defines a common ``send`` interface that takes a populated
:class:`~sparkpost_transport.mailer.message.MailMessage` and reports
whether the provider accepted it.  The concrete implementation lives in
:mod:`sparkpost_transport.mailer.sparkpost_sender` and delivers through the
SparkPost HTTP API instead of SMTP.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from sparkpost_transport.mailer.message import MailMessage


class EmailSender(ABC):
    """Abstract base class for email senders.

    Implementations must provide a ``send`` method.  Failures of the
    provider or the network are reported through the return value;
    errors in the message itself are raised before anything is sent.
    """

    @abstractmethod
    def send(self, message: "MailMessage") -> bool:
        """Send a single email message.

        Args:
            message: The populated message to deliver.

        Returns:
            ``True`` if the provider accepted every recipient.

        Raises:
            AttachmentReadError: If an attachment cannot be read.
        """
        raise NotImplementedError


__all__ = ["EmailSender"]
