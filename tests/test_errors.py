"""Tests for error normalization."""
from bufferapp_client.errors import (
    ERROR_MESSAGES,
    INVALID_ENDPOINT,
    decode_json,
    normalize_error,
)


def test_structured_body_is_returned_unchanged():
    assert normalize_error("404", '{"error":"custom"}') == {"error": "custom"}
    assert normalize_error(9999, '{"error":"custom"}') == {"error": "custom"}


def test_structured_body_keeps_all_fields():
    body = '{"success": false, "code": 1010, "error": "Profile could not be found."}'
    assert normalize_error(400, body) == {
        "success": False,
        "code": 1010,
        "error": "Profile could not be found.",
    }


def test_unparsable_body_uses_catalog():
    assert normalize_error("404", "<html>Not Found</html>") == {"error": "Endpoint not found."}


def test_integer_code_uses_catalog():
    assert normalize_error(403, "") == {"error": "Permission denied."}


def test_unknown_code():
    assert normalize_error("9999", "garbage") == {"error": "Unknown error [9999]"}


def test_json_list_body_falls_back_to_catalog():
    assert normalize_error("400", "[1, 2]") == {"error": "Bad request."}


def test_invalid_endpoint_message():
    assert normalize_error(INVALID_ENDPOINT) == {
        "error": "The endpoint you supplied does not appear to be valid."
    }


def test_catalog_covers_application_codes():
    assert ERROR_MESSAGES["1001"] == "Access token required."
    assert ERROR_MESSAGES["1031"] == "Media filesize out of acceptable range."


def test_decode_json_is_tolerant():
    assert decode_json('{"a": 1}') == {"a": 1}
    assert decode_json(b'{"a": 1}') == {"a": 1}
    assert decode_json("{not json") is None
    assert decode_json("") is None
    assert decode_json(None) is None
