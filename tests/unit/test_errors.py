from __future__ import annotations

import json

import pytest

from odata_simple_client.core.errors import (
    OdataClientClosedError,
    OdataError,
    OdataHttpStatusError,
    OdataIoError,
    OdataParseError,
    OdataTextDecodeError,
    OdataTransportError,
    OdataUriError,
    OdataValidationError,
)


@pytest.mark.parametrize(
    "error_type",
    [
        OdataUriError,
        OdataTransportError,
        OdataIoError,
        OdataTextDecodeError,
        OdataValidationError,
        OdataClientClosedError,
    ],
)
def test_error_kinds_share_base_class(error_type):
    err = error_type("boom", uri="https://oda.ft.dk/api/Dokument?", cause="network")
    assert isinstance(err, OdataError)
    assert str(err) == "boom"
    assert err.uri == "https://oda.ft.dk/api/Dokument?"
    assert err.cause == "network"
    assert err.http_status is None


def test_parse_error_keeps_raw_text_and_underlying_error():
    try:
        json.loads("{not json")
    except json.JSONDecodeError as exc:
        underlying = exc
    err = OdataParseError("bad", text="{not json", error=underlying, http_status=200)
    assert err.text == "{not json"
    assert err.error is underlying
    assert err.cause == "parse"
    assert err.http_status == 200


def test_http_status_error_keeps_status_and_body():
    err = OdataHttpStatusError("HTTP 404", http_status=404, text='{"odata.error": {}}')
    assert err.http_status == 404
    assert err.text == '{"odata.error": {}}'
    assert err.cause == "http_status"
