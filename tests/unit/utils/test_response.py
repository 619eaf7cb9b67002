from __future__ import annotations

import pytest
from coola.equality import objects_are_equal
from pydantic import ValidationError

from crossclient.connection import HttpOutcome
from crossclient.response import Response
from crossclient.utils import (
    NOT_FOUND_MESSAGE,
    classify_failure,
    classify_outcome,
    parse_model_state,
    strip_quotes,
)
from tests.helpers import Order

##################################
#     Tests for strip_quotes     #
##################################


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ('"pong"', "pong"),
        ('"\\"https://svc.internal/\\""', "https://svc.internal/"),
        ("plain", "plain"),
        ('""', ""),
        ("", ""),
    ],
)
def test_strip_quotes(text: str, expected: str) -> None:
    assert strip_quotes(text) == expected


#######################################
#     Tests for parse_model_state     #
#######################################


@pytest.mark.parametrize(
    "content",
    [
        b'{"ModelState": {"name": ["Required", "Too short"]}}',
        b'{"modelState": {"name": ["Required", "Too short"]}}',
    ],
)
def test_parse_model_state(content: bytes) -> None:
    assert objects_are_equal(parse_model_state(content), {"name": ["Required", "Too short"]})


def test_parse_model_state_missing_field() -> None:
    assert parse_model_state(b'{"Message": "The request is invalid."}') is None


@pytest.mark.parametrize("content", [b"", b"<html></html>", b"[1, 2]"])
def test_parse_model_state_invalid_body(content: bytes) -> None:
    assert parse_model_state(content) is None


######################################
#     Tests for classify_failure     #
######################################


def test_classify_failure_bad_request() -> None:
    """Test that a 400 only carries the validation messages."""
    response = classify_failure(
        HttpOutcome(
            status_code=400,
            reason_phrase="Bad Request",
            content=b'{"ModelState": {"email": ["Invalid format"]}}',
        )
    )
    assert objects_are_equal(
        response, Response(status_code=400, model_state={"email": ["Invalid format"]})
    )


def test_classify_failure_bad_request_without_envelope() -> None:
    response = classify_failure(
        HttpOutcome(status_code=400, reason_phrase="Bad Request", content=b"oops")
    )
    assert response == Response(status_code=400)


@pytest.mark.parametrize("content", [b"", b"<html>Not Found</html>", b'{"detail": "gone"}'])
def test_classify_failure_not_found(content: bytes) -> None:
    """Test that a 404 message does not depend on the body."""
    response = classify_failure(
        HttpOutcome(status_code=404, reason_phrase="Not Found", content=content)
    )
    assert response == Response(status_code=404, error_message=NOT_FOUND_MESSAGE)


@pytest.mark.parametrize(
    ("status_code", "reason_phrase"),
    [(401, "Unauthorized"), (403, "Forbidden"), (500, "Internal Server Error")],
)
def test_classify_failure_other(status_code: int, reason_phrase: str) -> None:
    response = classify_failure(
        HttpOutcome(status_code=status_code, reason_phrase=reason_phrase, content=b"boom")
    )
    assert response == Response(status_code=status_code, error_message=f"{reason_phrase}. boom")


######################################
#     Tests for classify_outcome     #
######################################


def test_classify_outcome_no_result() -> None:
    response = classify_outcome(HttpOutcome(status_code=204, reason_phrase="No Content"))
    assert response == Response(data=True, is_ok=True, status_code=204)


def test_classify_outcome_as_text() -> None:
    response = classify_outcome(HttpOutcome(status_code=200, content=b'"pong"'), as_text=True)
    assert response == Response(data="pong", is_ok=True, status_code=200)


def test_classify_outcome_result_type() -> None:
    response = classify_outcome(
        HttpOutcome(status_code=200, content=b'{"id": 5, "name": "Widget"}'), result_type=Order
    )
    assert response.is_ok
    assert response.data == Order(id=5, name="Widget")
    assert response.error_message is None
    assert response.model_state is None


def test_classify_outcome_result_type_list() -> None:
    response = classify_outcome(
        HttpOutcome(status_code=200, content=b'[{"id": 1}, {"id": 2}]'), result_type=list[Order]
    )
    assert response.data == [Order(id=1), Order(id=2)]


def test_classify_outcome_result_type_empty_body() -> None:
    response = classify_outcome(HttpOutcome(status_code=201), result_type=Order)
    assert response == Response(data=None, is_ok=True, status_code=201)


def test_classify_outcome_result_type_mismatch() -> None:
    with pytest.raises(ValidationError):
        classify_outcome(HttpOutcome(status_code=200, content=b'"pong"'), result_type=Order)


def test_classify_outcome_failure() -> None:
    response = classify_outcome(
        HttpOutcome(status_code=404, reason_phrase="Not Found"), result_type=Order
    )
    assert response == Response(status_code=404, error_message=NOT_FOUND_MESSAGE)
