import logging

from unique_validation.core.logging.filters import (
    RedactFilter,
    RequestIdFilter,
    get_request_id,
    reset_request_id,
    set_request_id,
)


def make_record():
    # name, level, pathname, lineno, msg, args, exc_info
    return logging.LogRecord("test", logging.INFO, __file__, 1, "hello %s", ("world",), None)


def test_request_id_filter_defaults_to_dash():
    rec = make_record()
    token = set_request_id(None)
    f = RequestIdFilter()
    assert f.filter(rec) is True
    assert rec.request_id == "-"  # fallback sentinel
    reset_request_id(token)


def test_request_id_filter_uses_contextvar():
    rec = make_record()
    token = set_request_id("abc-123")
    RequestIdFilter().filter(rec)
    assert rec.request_id == "abc-123"
    reset_request_id(token)
    assert get_request_id() is None


def test_request_id_filter_respects_record_extra():
    rec = make_record()
    rec.request_id = "explicit"
    token = set_request_id("context-id")
    RequestIdFilter().filter(rec)
    # record.request_id keeps the explicit value
    assert rec.request_id == "explicit"
    reset_request_id(token)


def test_redact_filter_masks_sensitive_extras():
    rec = make_record()
    rec.password = "hunter2"
    rec.key_value = {"email": "a@b.c"}
    rec.index_name = "email_1"

    assert RedactFilter().filter(rec) is True
    assert rec.password == "***REDACTED***"
    assert rec.key_value == "***REDACTED***"
    assert rec.index_name == "email_1"
