import logging

import httpx
import pytest

from faystar.core.exceptions import ProviderCallError, ProviderDisabledError
from faystar.infrastructure.error.handler import USER_MESSAGES, ErrorClassifier, ErrorHandler, ErrorKind


@pytest.mark.parametrize(
    "status_code, kind, returned",
    [
        (400, ErrorKind.BAD_REQUEST, 400),
        (401, ErrorKind.INVALID_API_KEY, 500),
        (402, ErrorKind.PAYMENT_REQUIRED, 402),
        (403, ErrorKind.ACCESS_DENIED, 403),
        (429, ErrorKind.RATE_LIMITED, 429),
        (500, ErrorKind.SERVER_ERROR, 503),
        (504, ErrorKind.SERVER_ERROR, 503),
        (404, ErrorKind.API_ERROR, 500),
    ],
)
def test_status_codes(status_code, kind, returned):
    classification = ErrorClassifier().classify(
        ProviderCallError("failed", status_code=status_code, body={"error": "boom"})
    )
    assert classification.kind == kind
    assert classification.http_status == returned
    assert classification.user_message == USER_MESSAGES[kind]
    assert classification.details == "boom"


def test_transport_errors():
    classifier = ErrorClassifier()

    timeout = classifier.classify(ProviderCallError("t", cause=httpx.ReadTimeout("slow")))
    refused = classifier.classify(ProviderCallError("c", cause=httpx.ConnectError("refused")))
    unknown = classifier.classify(RuntimeError("surprise"))

    assert (timeout.kind, timeout.http_status) == (ErrorKind.TIMEOUT, 503)
    assert (refused.kind, refused.http_status) == (ErrorKind.NETWORK_ERROR, 503)
    assert (unknown.kind, unknown.http_status) == (ErrorKind.UNKNOWN_ERROR, 500)


def test_disabled_client():
    classification = ErrorClassifier().classify(ProviderDisabledError("fal", "MISSING_API_KEY"))
    assert classification.kind == ErrorKind.SERVICE_DISABLED
    assert classification.http_status == 503
    assert classification.details == {"provider": "fal", "reason": "MISSING_API_KEY"}


def test_credentials():
    classifier = ErrorClassifier()
    assert classifier.classify_credential(None, 10).kind == ErrorKind.MISSING_API_KEY
    assert classifier.classify_credential("", 10).kind == ErrorKind.MISSING_API_KEY
    assert classifier.classify_credential("short", 10).kind == ErrorKind.INVALID_API_KEY
    assert classifier.classify_credential("long-enough-key", 10) is None


def test_messages_do_not_name_providers():
    for message in USER_MESSAGES.values():
        for provider in ("OpenAI", "ElevenLabs", "Fal"):
            assert provider not in message


def test_custom_status_table():
    classifier = ErrorClassifier({422: ErrorKind.BAD_REQUEST})
    assert classifier.classify_status(422).kind == ErrorKind.BAD_REQUEST
    assert classifier.classify_status(401).kind == ErrorKind.API_ERROR


def test_handler_logs_by_severity(caplog):
    handler = ErrorHandler(logging.getLogger("tests.providers"))

    with caplog.at_level(logging.INFO, logger="tests.providers"):
        server = handler.handle_error(ProviderCallError("x", status_code=503, attempts=2), "fal")
        bad = handler.handle_error(ProviderCallError("x", status_code=400), "fal")
        limited = handler.handle_error(ProviderCallError("x", status_code=429), "fal")

    levels = [record.levelno for record in caplog.records]
    assert (server.kind, bad.kind, limited.kind) == (
        ErrorKind.SERVER_ERROR, ErrorKind.BAD_REQUEST, ErrorKind.RATE_LIMITED
    )
    assert levels == [logging.ERROR, logging.INFO, logging.WARNING]
    assert caplog.records[0].attempts == 2
