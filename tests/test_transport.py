from __future__ import annotations

import io

import requests

from fluenthttp.adapters import RequestsTransport, fold_headers
from fluenthttp.models import Header, InputStreamEntity

from .conftest import BASE_URL


def test_fold_headers_joins_duplicates_in_order():
    folded = fold_headers([Header("X-A", "1"), Header("Accept", "a"), Header("x-a", "2"), Header("X-Empty")])

    assert folded == {"X-A": "1, 2", "Accept": "a", "X-Empty": ""}


def test_stream_entity_is_sent(requests_mock):
    requests_mock.post(BASE_URL, text="")
    entity = InputStreamEntity(io.BytesIO(b"payload"), length=7, content_type="application/octet-stream")

    with RequestsTransport() as transport:
        response = transport.send("POST", BASE_URL, [Header("X-Id", "1")], entity)
        response.close()

    sent = requests_mock.last_request
    assert sent.headers["Content-Type"] == "application/octet-stream"
    assert sent.headers["X-Id"] == "1"


def test_uses_supplied_session(requests_mock):
    requests_mock.get(BASE_URL, text="")
    session = requests.Session()
    session.headers["X-Session"] = "yes"

    response = RequestsTransport(session).send("GET", BASE_URL)
    response.close()

    assert requests_mock.last_request.headers["X-Session"] == "yes"
