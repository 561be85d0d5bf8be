"""
Basic Twitter API Client Usage Examples

Demonstrates blocking requests, streaming handles and error handling.
Set TWITTER_BEARER_TOKEN before running.
"""

import os

from twitter_api_core import ApiClient, ApiRequestError, ApiResponseError


def make_client(debug: bool = False) -> ApiClient:
    token = os.environ.get("TWITTER_BEARER_TOKEN", "")
    return ApiClient(headers={"Authorization": f"Bearer {token}"}, debug=debug)


def lookup_user():
    """Simple GET request."""
    print("\n=== User lookup ===")

    with make_client() as client:
        result = client.get("users/by/username/TwitterDev", query={"user.fields": ["created_at", "description"]})

    print(f"Data: {result.data}")
    print(f"Rate limit: {result.rate_limit}")


def handle_errors():
    """ApiResponseError carries the decoded body and rate limit."""
    print("\n=== Error handling ===")

    with make_client() as client:
        try:
            client.get("users/0")
        except ApiResponseError as e:
            print(f"{e} (auth error: {e.is_auth_error}, rate limited: {e.is_rate_limit_error})")
        except ApiRequestError as e:
            print(f"Network failure: {e.request_error!r}")


def sample_stream(max_lines: int = 5):
    """Streaming handle: the caller reads and closes the body."""
    print("\n=== Sampled stream ===")

    with make_client(debug=True) as client:
        handle = client.stream("GET", "tweets/sample/stream")
        try:
            for i, line in enumerate(handle.response.iter_lines()):
                if line:
                    print(line.decode())
                if i >= max_lines:
                    break
        finally:
            handle.response.close()


if __name__ == "__main__":
    lookup_user()
    handle_errors()
    sample_stream()
