from __future__ import annotations

from unittest.mock import Mock

from crossclient.callbacks import (
    RequestInfo,
    ResponseInfo,
    invoke_on_request,
    invoke_on_response,
)

TEST_URL = "https://svc.internal/orders"


#######################################
#     Tests for invoke_on_request     #
#######################################


def test_invoke_on_request() -> None:
    callback = Mock()
    invoke_on_request(callback, url=TEST_URL, method="POST", has_body=True)
    callback.assert_called_once_with(RequestInfo(url=TEST_URL, method="POST", has_body=True))


def test_invoke_on_request_none() -> None:
    invoke_on_request(None, url=TEST_URL, method="GET", has_body=False)


########################################
#     Tests for invoke_on_response     #
########################################


def test_invoke_on_response() -> None:
    callback = Mock()
    invoke_on_response(
        callback, url=TEST_URL, method="GET", status_code=200, is_ok=True, total_time=0.5
    )
    callback.assert_called_once_with(
        ResponseInfo(url=TEST_URL, method="GET", status_code=200, is_ok=True, total_time=0.5)
    )


def test_invoke_on_response_none() -> None:
    invoke_on_response(
        None, url=TEST_URL, method="GET", status_code=0, is_ok=False, total_time=0.1
    )
