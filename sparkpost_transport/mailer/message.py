"""Typed mail message handed over by the host application.

A :class:`MailMessage` is built once per send through its append-only
accessors, consumed by the translator and then discarded.  It mirrors the
fields a generic mailer object exposes: sender, To/CC/BCC recipients,
subject, body, custom headers, attachments and reply-to addresses.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from email.utils import formatdate, make_msgid
from typing import List, Optional, Tuple


def _single_line(value: str) -> str:
    # CR/LF in a value would start a new header line
    return value.replace("\r\n", " ").replace("\r", " ").replace("\n", " ")


@dataclass(frozen=True)
class Address:
    """An email address with an optional display name."""

    email: str
    name: str = ""

    def __str__(self) -> str:
        if self.name:
            return f"{self.name} <{self.email}>"
        return self.email

    @property
    def localpart(self) -> str:
        return self.email.split("@", 1)[0]


@dataclass(frozen=True)
class Attachment:
    """A file attachment, either on disk (``path``) or in memory (``content``)."""

    path: Optional[str] = None
    content: Optional[bytes] = None
    name: str = ""
    content_type: Optional[str] = None


@dataclass
class MailMessage:
    """Outgoing message as populated by the host."""

    sender: Address = field(default_factory=lambda: Address(""))
    to: List[Address] = field(default_factory=list)
    cc: List[Address] = field(default_factory=list)
    bcc: List[Address] = field(default_factory=list)
    reply_to: List[Address] = field(default_factory=list)
    subject: str = ""
    body: str = ""
    alt_body: str = ""
    content_type: str = "text/plain"
    charset: str = "utf-8"
    custom_headers: List[Tuple[str, str]] = field(default_factory=list)
    attachments: List[Attachment] = field(default_factory=list)
    message_id: str = field(default_factory=make_msgid)
    date: str = field(default_factory=lambda: formatdate(localtime=False))

    def set_from(self, email: str, name: str = "") -> None:
        self.sender = Address(email, name)

    def add_address(self, email: str, name: str = "") -> None:
        self.to.append(Address(email, name))

    def add_cc(self, email: str, name: str = "") -> None:
        self.cc.append(Address(email, name))

    def add_bcc(self, email: str, name: str = "") -> None:
        self.bcc.append(Address(email, name))

    def add_reply_to(self, email: str, name: str = "") -> None:
        self.reply_to.append(Address(email, name))

    def add_custom_header(self, name: str, value: str) -> None:
        self.custom_headers.append((name, value))

    def add_attachment(
        self,
        path: Optional[str] = None,
        name: str = "",
        content: Optional[bytes] = None,
        content_type: Optional[str] = None,
    ) -> None:
        """Queue an attachment read from ``path`` or given as raw ``content``.

        Raw content needs a ``name``; the provider refuses unnamed attachments.
        """
        if path is None and content is None:
            raise ValueError("An attachment needs either a path or content")
        if path is None and not name:
            raise ValueError("An in-memory attachment needs a name")
        self.attachments.append(
            Attachment(path=path, content=content, name=name, content_type=content_type)
        )

    @property
    def is_html(self) -> bool:
        return self.content_type.lower() == "text/html"

    def create_header(self) -> str:
        """Render the MIME-style header block of the message.

        CC and BCC recipients are not part of the block; the To line falls
        back to ``undisclosed-recipients:;`` when there are none.
        """
        headers = [("Date", self.date)]
        if self.to:
            headers.append(("To", ", ".join(str(a) for a in self.to)))
        else:
            headers.append(("To", "undisclosed-recipients:;"))
        headers.append(("From", str(self.sender)))
        headers.append(("Subject", self.subject))
        if self.reply_to:
            headers.append(("Reply-To", ", ".join(str(a) for a in self.reply_to)))
        headers.append(("Message-ID", self.message_id))
        headers.append(("MIME-Version", "1.0"))
        headers.append(("Content-Type", f"{self.content_type}; charset={self.charset}"))
        headers.extend(self.custom_headers)
        return "\n".join(
            f"{_single_line(name)}: {_single_line(value)}" for name, value in headers
        )


__all__ = ["Address", "Attachment", "MailMessage"]
