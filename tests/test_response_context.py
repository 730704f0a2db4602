from __future__ import annotations

import codecs
import locale

import pytest

from fluenthttp.client import ResponseContext
from fluenthttp.exceptions import ContentTooLargeException, ResponseException
from fluenthttp.models import ByteArrayEntity, StringEntity


def test_content_decoded_with_declared_charset(make_entity):
    entity = make_entity("Привет".encode("iso-8859-5"), "text/plain; charset=ISO-8859-5")

    assert ResponseContext(entity).get_content_as_string() == "Привет"


@pytest.mark.parametrize(
    "charset, text",
    [("utf-8", "dañé жук"), ("utf-16", "dañé жук"), ("cp1251", "жук и пчела"), ("latin-1", "façade")],
)
def test_declared_charset_round_trip(make_entity, charset, text):
    entity = make_entity(text.encode(charset), f"text/plain; charset={charset}")

    assert ResponseContext(entity).get_content_as_string() == text


def test_platform_default_charset_without_declaration(make_entity, monkeypatch):
    monkeypatch.setattr(locale, "getpreferredencoding", lambda do_setlocale=True: "cp1251")
    entity = make_entity("жук".encode("cp1251"), "text/plain")

    assert ResponseContext(entity).get_content_as_string() == "жук"


def test_missing_stream_returns_none(make_entity):
    context = ResponseContext(make_entity(None))

    assert context.get_content_as_string() is None
    assert context.get_content() is None


def test_empty_stream_returns_empty_string(make_entity):
    # zero declared length with a stream present is an empty body, not a missing one
    context = ResponseContext(make_entity(b"", "text/plain; charset=utf-8", length=0))

    assert context.get_content_as_string() == ""


def test_unknown_length_uses_default_buffer(make_entity):
    body = b"x" * 10_000
    context = ResponseContext(make_entity(body, "text/plain; charset=utf-8", length=-1), buffer_size=128)

    assert context.get_content_length() == -1
    assert context.get_content_as_string() == body.decode()


def test_length_hint_smaller_than_body_still_reads_everything(make_entity):
    body = "0123456789" * 50
    context = ResponseContext(make_entity(body.encode(), "text/plain; charset=utf-8", length=7))

    assert context.get_content_as_string() == body


def test_length_at_32_bit_limit_is_accepted(make_entity):
    entity = make_entity(b"ok", "text/plain; charset=utf-8", length=2**31 - 1)

    assert ResponseContext(entity).get_content_as_string() == "ok"


def test_oversized_length_fails_before_reading(make_entity):
    entity = make_entity(b"ignored", "text/plain", length=2**31)
    context = ResponseContext(entity)

    with pytest.raises(ContentTooLargeException) as excinfo:
        context.get_content_as_string()

    assert excinfo.value.content_length == 2**31
    assert entity.reads == 0
    assert isinstance(excinfo.value, ResponseException)


def test_content_type_and_length_accessors():
    context = ResponseContext(StringEntity("{}", mime_type="application/json"))

    content_type = context.get_content_type()
    assert content_type.mime_type == "application/json"
    assert content_type.charset == codecs.lookup("utf-8").name
    assert context.get_content_length() == 2


def test_absent_content_type(make_entity):
    assert ResponseContext(make_entity(b"data")).get_content_type() is None


def test_unsupported_charset_is_a_response_error(make_entity):
    context = ResponseContext(make_entity(b"data", "text/plain; charset=no-such-charset"))

    with pytest.raises(ResponseException):
        context.get_content_type()


def test_undecodable_body_is_a_response_error():
    context = ResponseContext(ByteArrayEntity(b"\xff\xfe\xfa", "text/plain; charset=utf-8"))

    with pytest.raises(ResponseException):
        context.get_content_as_string()


def test_get_content_returns_stream_unmodified():
    context = ResponseContext(ByteArrayEntity(b"\x00\x01binary"))

    assert context.get_content().read() == b"\x00\x01binary"


def test_content_as_bytes_is_not_decoded(make_entity):
    body = "жук".encode("cp1251") + b"\x00\xff"
    context = ResponseContext(make_entity(body, "text/plain; charset=utf-8", length=-1), buffer_size=2)

    assert context.get_content_as_bytes() == body


def test_content_as_bytes_without_stream(make_entity):
    assert ResponseContext(make_entity(None)).get_content_as_bytes() is None


def test_content_as_bytes_checks_length_before_reading(make_entity):
    entity = make_entity(b"ignored", "application/octet-stream", length=2**31)

    with pytest.raises(ContentTooLargeException):
        ResponseContext(entity).get_content_as_bytes()

    assert entity.reads == 0
