"""
Tests for request descriptors, rate limit snapshots and the state table.
"""

import dataclasses

import pytest

from twitter_api_core.core.models import (
    REQUEST_TRANSITIONS,
    RateLimitSnapshot,
    RequestDescriptor,
    RequestState,
    ResolvedResponse,
)


class TestRequestDescriptor:
    """RequestDescriptor value semantics."""

    def test_defaults(self):
        req = RequestDescriptor("https://api.twitter.com/2/users/me")
        assert req.method == "GET"
        assert dict(req.headers) == {}
        assert req.body is None
        assert dict(req.options) == {}

    def test_method_upper_cased(self):
        assert RequestDescriptor("https://x.test/", method="post").method == "POST"

    def test_is_frozen(self):
        req = RequestDescriptor("https://x.test/")
        with pytest.raises(dataclasses.FrozenInstanceError):
            req.url = "https://y.test/"

    def test_headers_are_read_only(self):
        headers = {"Authorization": "Bearer abc"}
        req = RequestDescriptor("https://x.test/", headers=headers)
        headers["X-Late"] = "1"

        assert "X-Late" not in req.headers
        with pytest.raises(TypeError):
            req.headers["X-New"] = "1"

    def test_href_pathname(self):
        req = RequestDescriptor("https://api.twitter.com/2/users/12/followers?max_results=10")
        assert req.href_pathname == "api.twitter.com/2/users/12/followers"

    def test_query_items(self):
        req = RequestDescriptor("https://api.twitter.com/2/users/12/followers?max_results=10&pagination_token=abc")
        assert req.query_items == [("max_results", "10"), ("pagination_token", "abc")]

    def test_query_items_empty(self):
        assert RequestDescriptor("https://api.twitter.com/2/tweets").query_items == []


class TestRateLimitSnapshot:
    """RateLimitSnapshot.from_headers."""

    def test_all_headers(self):
        snapshot = RateLimitSnapshot.from_headers({
            "x-rate-limit-limit": "15",
            "x-rate-limit-remaining": "14",
            "x-rate-limit-reset": "1700000000",
        })
        assert snapshot == RateLimitSnapshot(limit=15, remaining=14, reset=1700000000)

    def test_absent_without_limit_header(self):
        assert RateLimitSnapshot.from_headers({"x-rate-limit-remaining": "14"}) is None
        assert RateLimitSnapshot.from_headers({}) is None

    def test_case_insensitive(self):
        snapshot = RateLimitSnapshot.from_headers({"X-Rate-Limit-Limit": "900", "X-Rate-Limit-Remaining": "899"})
        assert snapshot.limit == 900
        assert snapshot.remaining == 899
        assert snapshot.reset is None

    def test_non_numeric_values(self):
        snapshot = RateLimitSnapshot.from_headers({"x-rate-limit-limit": "15", "x-rate-limit-reset": "soon"})
        assert snapshot.limit == 15
        assert snapshot.reset is None


class TestRequestState:
    """Transition table."""

    @pytest.mark.parametrize("state", [
        RequestState.ERRORED, RequestState.HEADERS_RECEIVED, RequestState.COMPLETED,
    ])
    def test_terminal_states_have_no_exits(self, state):
        assert state.is_terminal
        assert REQUEST_TRANSITIONS[state] == frozenset()

    def test_non_terminal_states(self):
        for state in (RequestState.BUILT, RequestState.SENT, RequestState.RESPONSE_RECEIVING):
            assert not state.is_terminal

    def test_built_only_goes_to_sent(self):
        assert REQUEST_TRANSITIONS[RequestState.BUILT] == frozenset({RequestState.SENT})

    def test_every_state_listed(self):
        assert set(REQUEST_TRANSITIONS) == set(RequestState)


class TestResolvedResponse:

    def test_rate_limit_optional(self):
        result = ResolvedResponse(data={"data": []}, headers={})
        assert result.rate_limit is None
