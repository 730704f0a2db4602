from __future__ import annotations

import io
from typing import BinaryIO, Optional

import pytest
from requests_mock import Mocker

from fluenthttp import HttpRequest
from fluenthttp.models import HttpEntity

BASE_URL = "https://api.example.test"


class FakeEntity(HttpEntity):
    """In-memory entity with a controllable length hint."""

    def __init__(self, data: Optional[bytes], content_type: Optional[str] = None, length: Optional[int] = None) -> None:
        self.data = data
        self._content_type = content_type
        self._length = len(data) if length is None and data is not None else (length if length is not None else -1)
        self.reads = 0

    def get_content(self) -> Optional[BinaryIO]:
        self.reads += 1
        return io.BytesIO(self.data) if self.data is not None else None

    @property
    def content_type(self) -> Optional[str]:
        return self._content_type

    @property
    def content_length(self) -> int:
        return self._length


@pytest.fixture
def requests_mock():
    with Mocker() as mock:
        yield mock


@pytest.fixture
def http():
    with HttpRequest() as request:
        yield request


@pytest.fixture
def target(http):
    return http.target(BASE_URL)


@pytest.fixture
def make_entity():
    return FakeEntity
