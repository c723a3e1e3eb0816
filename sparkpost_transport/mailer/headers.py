"""Header handling for SparkPost transmissions.

Two kinds of headers are produced here: the filtered message headers that
go into the request body (``content.headers``) and the HTTP headers of the
transport call itself.
"""

from __future__ import annotations

import re
from typing import Dict, Iterable, List, Tuple

from sparkpost_transport import __version__
from sparkpost_transport.config import ProviderSettings
from sparkpost_transport.mailer.message import Address

USER_AGENT = f"sparkpost-transport/{__version__}"

# Only these headers of the raw block are forwarded to the provider.
ALLOWED_HEADERS = frozenset({"Message-ID", "Date"})

_HEADER_LINE = re.compile(r"^\s*([!-9;-~]+):[ \t]*(.*)$")

VISIBLE_KEY_CHARS = 4


def format_address_list(addresses: Iterable[Address], sep: str = ", ") -> str:
    return sep.join(str(a) for a in addresses)


def split_header_block(raw_header_block: str) -> List[Tuple[str, str]]:
    """Split a raw header block into ``(name, value)`` pairs.

    Leading indentation is ignored.  A line that does not start with a
    header name continues the value of the previous header.
    """
    pairs: List[Tuple[str, str]] = []
    for line in raw_header_block.splitlines():
        if not line.strip():
            continue
        match = _HEADER_LINE.match(line)
        if match:
            pairs.append((match.group(1), match.group(2).strip()))
        elif pairs:
            name, value = pairs[-1]
            pairs[-1] = (name, f"{value} {line.strip()}")
    return pairs


def obfuscate_key(api_key: str) -> str:
    """Mask all but the first four characters of ``api_key``."""
    if len(api_key) <= VISIBLE_KEY_CHARS:
        return api_key
    return api_key[:VISIBLE_KEY_CHARS] + "*" * (len(api_key) - VISIBLE_KEY_CHARS)


class HeaderCodec:
    """Builds message headers and transport headers for one provider account."""

    def __init__(self, settings: ProviderSettings) -> None:
        self._settings = settings

    def parse(
        self, raw_header_block: str, cc: Iterable[Address] = ()
    ) -> Dict[str, str]:
        """Return the allow-listed headers of ``raw_header_block``.

        Header names are matched exactly and the first occurrence wins.
        When ``cc`` is not empty a ``CC`` entry is synthesized from it,
        comma separated in the order the addresses were added.
        """
        headers: Dict[str, str] = {}
        for name, value in split_header_block(raw_header_block):
            if name in ALLOWED_HEADERS:
                headers.setdefault(name, value)
        cc = list(cc)
        if cc:
            headers["CC"] = format_address_list(cc, sep=",")
        return headers

    def get_request_headers(self, obfuscate: bool = False) -> Dict[str, str]:
        """HTTP headers of the transmission call.

        With ``obfuscate`` the API key is masked; such headers are meant for
        logging and must not be sent.
        """
        api_key = self._settings.api_key or ""
        return {
            "User-Agent": USER_AGENT,
            "Content-Type": "application/json",
            "Authorization": obfuscate_key(api_key) if obfuscate else api_key,
        }


__all__ = [
    "ALLOWED_HEADERS",
    "HeaderCodec",
    "USER_AGENT",
    "format_address_list",
    "obfuscate_key",
    "split_header_block",
]
