"""Translation of a :class:`MailMessage` into a SparkPost transmission body.

The request body takes one of two shapes:

* direct content, where ``content`` carries the sender, subject, headers
  and body of the message, or
* template substitution, where ``content`` only names a stored template
  and ``substitution_data`` carries the per-send variables.

The template shape is used whenever the settings name a template.
"""

from __future__ import annotations

import base64
import mimetypes
import os
from typing import Any, Dict, List, Optional

from sparkpost_transport.config import ProviderSettings
from sparkpost_transport.mailer.exceptions import AttachmentReadError
from sparkpost_transport.mailer.headers import HeaderCodec, format_address_list
from sparkpost_transport.mailer.message import Attachment, MailMessage

DEFAULT_ATTACHMENT_TYPE = "application/octet-stream"


def guess_content_type(filename: str) -> str:
    mime_type, _ = mimetypes.guess_type(filename)
    return mime_type or DEFAULT_ATTACHMENT_TYPE


def encode_attachment(attachment: Attachment) -> Dict[str, str]:
    """Return the ``{type, name, data}`` entry for one attachment.

    Raises:
        AttachmentReadError: If the attachment file cannot be read.
    """
    if attachment.path is not None:
        try:
            with open(attachment.path, "rb") as fh:
                data = fh.read()
        except OSError as exc:
            raise AttachmentReadError(attachment.path, exc.strerror or str(exc)) from exc
        name = attachment.name or os.path.basename(attachment.path)
    else:
        data = attachment.content or b""
        name = attachment.name
    return {
        "type": attachment.content_type or guess_content_type(name),
        "name": name,
        "data": base64.b64encode(data).decode("ascii"),
    }


class MessageTranslator:
    """Builds the provider request body for a single message."""

    def __init__(
        self,
        message: MailMessage,
        settings: ProviderSettings,
        codec: Optional[HeaderCodec] = None,
    ) -> None:
        self.message = message
        self.settings = settings
        self.codec = codec or HeaderCodec(settings)

    def build_recipients(self) -> List[Dict[str, Any]]:
        """Recipient entries, To first, then BCC, then CC.

        Every entry carries the same ``header_to``: the rendered To list.
        """
        header_to = format_address_list(self.message.to)
        recipients = []
        for address in [*self.message.to, *self.message.bcc, *self.message.cc]:
            recipients.append(
                {"address": {"email": address.email, "header_to": header_to}}
            )
        return recipients

    def build_attachments(self) -> List[Dict[str, str]]:
        return [encode_attachment(a) for a in self.message.attachments]

    def build_sender(self) -> Dict[str, str]:
        sender = self.message.sender
        if sender.name:
            return {"name": sender.name, "email": sender.email}
        return {"email": sender.email}

    def build_reply_to(self) -> Optional[str]:
        """Rendered reply-to address, if the message has one.

        Hosts that only set a ``Reply-To`` custom header are honoured too.
        """
        if self.message.reply_to:
            return str(self.message.reply_to[0])
        for name, value in self.message.custom_headers:
            if name.lower() == "reply-to":
                return value
        return None

    def build_headers(self) -> Dict[str, str]:
        return self.codec.parse(self.message.create_header(), cc=self.message.cc)

    def build_options(self) -> Dict[str, bool]:
        tracking = bool(self.settings.enable_tracking)
        return {
            "open_tracking": tracking,
            "click_tracking": tracking,
            "transactional": bool(self.settings.transactional),
        }

    def build_request_body(self) -> Dict[str, Any]:
        """Assemble the full transmission body.

        Attachments are encoded first so that an unreadable file aborts the
        send before anything else happens.

        Raises:
            AttachmentReadError: If an attachment file cannot be read.
        """
        attachments = self.build_attachments()
        body: Dict[str, Any] = {
            "recipients": self.build_recipients(),
            "options": self.build_options(),
        }
        if self.settings.uses_template:
            body["content"] = {"template_id": self.settings.template}
            body["substitution_data"] = self._template_substitution_data()
        else:
            body["content"] = self._direct_content(attachments)
        return body

    def _direct_content(self, attachments: List[Dict[str, str]]) -> Dict[str, Any]:
        content: Dict[str, Any] = {
            "from": self.build_sender(),
            "subject": self.message.subject,
            "headers": self.build_headers(),
        }
        if self.message.is_html:
            content["html"] = self.message.body
            if self.message.alt_body:
                content["text"] = self.message.alt_body
        else:
            content["text"] = self.message.body
        reply_to = self.build_reply_to()
        if reply_to:
            content["reply_to"] = reply_to
        if attachments:
            content["attachments"] = attachments
        return content

    def _template_substitution_data(self) -> Dict[str, Any]:
        # from_localpart does not depend on whether a sender name is set
        sender = self.message.sender
        data: Dict[str, Any] = {
            "content": self.message.body,
            "subject": self.message.subject,
            "from_name": sender.name,
            "from": str(sender),
            "from_localpart": sender.localpart,
        }
        reply_to = self.build_reply_to()
        if reply_to:
            data["reply_to"] = reply_to
        return data


__all__ = [
    "DEFAULT_ATTACHMENT_TYPE",
    "MessageTranslator",
    "encode_attachment",
    "guess_content_type",
]
