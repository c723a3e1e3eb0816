import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from sparkpost_transport import __version__
from sparkpost_transport.config import ProviderSettings
from sparkpost_transport.mailer.headers import (
    HeaderCodec,
    obfuscate_key,
    split_header_block,
)
from sparkpost_transport.mailer.message import Address, MailMessage

RAW_HEADERS = """Date: Wed, 26 Oct 2016 23:45:32 +0000
    To: undisclosed-recipients:;
    From: Root User <root@localhost>
    Subject: Hello
    Reply-To: replyto@mydomain.com
    Message-ID: <abcd@example.org>
    MIME-Version: 1.0
    Content-Type: text/plain; charset=iso-8859-1
    Content-Transfer-Encoding: 8bit"""


def test_parse_keeps_only_message_id_and_date() -> None:
    codec = HeaderCodec(ProviderSettings())
    assert codec.parse(RAW_HEADERS) == {
        "Message-ID": "<abcd@example.org>",
        "Date": "Wed, 26 Oct 2016 23:45:32 +0000",
    }


def test_parse_adds_cc_in_insertion_order() -> None:
    raw = """Date: Wed, 26 Oct 2016 23:45:32 +0000
    Reply-To: replyto@mydomain.com"""
    cc = [Address("hello@abc.com"), Address("name@domain.com", "Name")]

    headers = HeaderCodec(ProviderSettings()).parse(raw, cc=cc)

    assert headers == {
        "Date": "Wed, 26 Oct 2016 23:45:32 +0000",
        "CC": "hello@abc.com,Name <name@domain.com>",
    }


def test_parse_missing_headers_are_omitted() -> None:
    assert HeaderCodec(ProviderSettings()).parse("Subject: Hi") == {}


def test_parse_header_names_are_case_sensitive() -> None:
    raw = "message-id: <x@y>\nDATE: today"
    assert HeaderCodec(ProviderSettings()).parse(raw) == {}


def test_split_header_block_joins_continuation_lines() -> None:
    raw = "Subject: a very\n long subject\nDate: now"
    assert split_header_block(raw) == [
        ("Subject", "a very long subject"),
        ("Date", "now"),
    ]


def test_parse_header_block_of_a_message() -> None:
    message = MailMessage()
    message.set_from("me@hello.com", "me")
    message.add_address("abc@xyz.com")
    message.add_cc("cc@xyz.com", "cc")

    headers = HeaderCodec(ProviderSettings()).parse(message.create_header(), cc=message.cc)

    assert headers == {
        "Date": message.date,
        "Message-ID": message.message_id,
        "CC": "cc <cc@xyz.com>",
    }


def test_get_request_headers_without_key() -> None:
    codec = HeaderCodec(ProviderSettings())
    assert codec.get_request_headers() == {
        "User-Agent": f"sparkpost-transport/{__version__}",
        "Content-Type": "application/json",
        "Authorization": "",
    }


def test_get_request_headers_with_key() -> None:
    codec = HeaderCodec(ProviderSettings(api_key="abcd1234"))
    assert codec.get_request_headers()["Authorization"] == "abcd1234"


def test_get_request_headers_obfuscates_key() -> None:
    codec = HeaderCodec(ProviderSettings(api_key="abcd1234"))

    assert codec.get_request_headers(obfuscate=True)["Authorization"] == "abcd****"
    # the real headers are untouched
    assert codec.get_request_headers()["Authorization"] == "abcd1234"


def test_obfuscate_short_keys_unchanged() -> None:
    assert obfuscate_key("abcd") == "abcd"
    assert obfuscate_key("ab") == "ab"
    assert obfuscate_key("") == ""
    assert obfuscate_key("abcde") == "abcd*"


def test_line_breaks_in_values_cannot_inject_headers() -> None:
    message = MailMessage()
    message.set_from("me@hello.com", "me\r\nDate: Fri, 02 Jan 1970 00:00:00 +0000")
    message.subject = (
        "Hello\nDate: Thu, 01 Jan 1970 00:00:00 +0000\nMessage-ID: <forged@x>"
    )
    message.add_custom_header("X-Note", "a\r\nMessage-ID: <other@x>")

    raw = message.create_header()
    headers = HeaderCodec(ProviderSettings()).parse(raw)

    assert headers == {"Date": message.date, "Message-ID": message.message_id}
    assert len(raw.splitlines()) == 8


def test_parse_keeps_first_occurrence() -> None:
    raw = "Date: first\nMessage-ID: <a@x>\nDate: second\nMessage-ID: <b@x>"
    assert HeaderCodec(ProviderSettings()).parse(raw) == {
        "Date": "first",
        "Message-ID": "<a@x>",
    }
