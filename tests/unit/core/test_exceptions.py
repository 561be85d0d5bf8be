"""
Tests for the exception hierarchy.
"""

import json

import pytest

from twitter_api_core.core.exceptions import (
    ApiException,
    ApiRequestError,
    ApiResponseError,
    ConfigurationError,
    InvalidStateTransition,
    ParseError,
)
from twitter_api_core.core.models import RequestDescriptor, RequestState


class TestHierarchy:

    def test_subclasses(self):
        assert issubclass(ApiRequestError, ApiException)
        assert issubclass(ApiResponseError, ApiException)
        assert issubclass(ConfigurationError, ApiException)
        assert issubclass(InvalidStateTransition, ApiException)

    def test_parse_error_is_json_decode_error(self):
        assert ParseError is json.JSONDecodeError
        with pytest.raises(ParseError):
            json.loads("{")

    def test_message(self):
        error = ApiException("boom")
        assert error.message == "boom"
        assert str(error) == "boom"


class TestApiRequestError:

    def test_fields(self):
        request = RequestDescriptor("https://api.twitter.com/2/tweets")
        cause = OSError("connection reset")
        error = ApiRequestError("Request failed.", request=request, error=cause)

        assert error.request is request
        assert error.error is cause
        assert error.request_error is cause


class TestApiResponseError:

    def test_fields(self):
        error = ApiResponseError("Request failed with code 404", code=404, data={"title": "Not Found"})
        assert error.code == 404
        assert error.data == {"title": "Not Found"}
        assert error.headers == {}
        assert error.rate_limit is None

    def test_errors_list(self):
        errors = [{"code": 34, "message": "Sorry, that page does not exist"}]
        error = ApiResponseError("x", code=404, data={"errors": errors})
        assert error.errors == errors

    def test_errors_absent(self):
        assert ApiResponseError("x", code=500, data="Internal error").errors == []
        assert ApiResponseError("x", code=500, data={"title": "x"}).errors == []

    def test_rate_limit_by_status(self):
        assert ApiResponseError("x", code=429).is_rate_limit_error

    def test_rate_limit_by_twitter_code(self):
        error = ApiResponseError("x", code=400, data={"errors": [{"code": 88, "message": "Rate limit exceeded"}]})
        assert error.is_rate_limit_error
        assert not error.is_auth_error

    @pytest.mark.parametrize("twitter_code", [32, 89, 99, 135, 215])
    def test_auth_by_twitter_code(self, twitter_code):
        error = ApiResponseError("x", code=400, data={"errors": [{"code": twitter_code, "message": "m"}]})
        assert error.is_auth_error

    def test_auth_by_status(self):
        assert ApiResponseError("x", code=401).is_auth_error
        assert not ApiResponseError("x", code=403).is_auth_error


class TestInvalidStateTransition:

    def test_fields(self):
        error = InvalidStateTransition(RequestState.COMPLETED, RequestState.SENT)
        assert error.current is RequestState.COMPLETED
        assert error.target is RequestState.SENT
        assert "Cannot transition" in str(error)
