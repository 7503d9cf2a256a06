"""Log redaction of credentials and identity numbers."""

import logging

from hostel.security.logging_filters import REDACTED, SensitiveFilter


def _record(msg: str, *args: object) -> logging.LogRecord:
    return logging.LogRecord("hostel", logging.INFO, __file__, 1, msg, args, None)


def test_bearer_tokens_and_passwords_are_scrubbed() -> None:
    record = _record('Authorization: Bearer abc.def-ghi {"password": "hunter2"}')
    assert SensitiveFilter().filter(record) is True
    assert "abc.def-ghi" not in record.getMessage()
    assert "hunter2" not in record.getMessage()
    assert REDACTED in record.getMessage()


def test_identity_numbers_in_arguments_are_scrubbed() -> None:
    record = _record("payload %s", '{"idNumber": "X123", "name": "Ana"}')
    SensitiveFilter().filter(record)
    message = record.getMessage()
    assert "X123" not in message
    assert '"name": "Ana"' in message
