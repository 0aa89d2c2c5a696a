from __future__ import annotations

import json

import pytest
import requests

from src.attendance_dashboard.attendance_dashboard.core.exceptions import RecordStoreError
from src.attendance_dashboard.attendance_dashboard.store.connection import (
    StoreConfig,
    StoreConnection,
    bind_session_token,
    reset_session_token,
)
from src.attendance_dashboard.attendance_dashboard.store.http_base import api_call, decode_envelope


class FakeResponse:
    def __init__(self, status_code: int, text: str):
        self.status_code = status_code
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class FakeSession:
    def __init__(self, response=None, error=None):
        self._response = response
        self._error = error
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if self._error:
            raise self._error
        return self._response


def _conn(session) -> StoreConnection:
    return StoreConnection(StoreConfig(base_url="http://store.test/api/"), session=session)


def test_decode_plain_and_wrapped_envelopes():
    assert decode_envelope(json.dumps({"success": True, "data": [1, 2]})) == [1, 2]
    wrapped = {"statusCode": 200, "body": json.dumps({"success": True, "data": {"x": 1}})}
    assert decode_envelope(json.dumps(wrapped)) == {"x": 1}


def test_decode_surfaces_store_message():
    with pytest.raises(RecordStoreError) as exc:
        decode_envelope(json.dumps({"success": False, "message": "Student already exists"}))
    assert exc.value.message == "Student already exists"

    with pytest.raises(RecordStoreError) as exc:
        decode_envelope(json.dumps({"success": False}))
    assert exc.value.message == "API call failed"


@pytest.mark.parametrize("text", ["<html>oops</html>", json.dumps({"body": "{not json"})])
def test_decode_rejects_invalid_json(text):
    with pytest.raises(RecordStoreError):
        decode_envelope(text)


def test_api_call_builds_request_and_attaches_bound_token():
    session = FakeSession(FakeResponse(200, json.dumps({"data": []})))
    handle = bind_session_token("tok-123")
    try:
        api_call(_conn(session), "/get_attendance", params={"classId": "10-A"})
    finally:
        reset_session_token(handle)

    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == "http://store.test/api/get_attendance"
    assert call["params"] == {"classId": "10-A"}
    assert call["headers"]["Authorization"] == "Bearer tok-123"


def test_api_call_http_error_carries_status_and_text():
    session = FakeSession(FakeResponse(500, "internal"))

    with pytest.raises(RecordStoreError) as exc:
        api_call(_conn(session), "/get_students")

    assert exc.value.status_code == 500
    assert "internal" in exc.value.message


def test_api_call_network_error():
    session = FakeSession(error=requests.ConnectionError("refused"))

    with pytest.raises(RecordStoreError):
        api_call(_conn(session), "/get_students")
