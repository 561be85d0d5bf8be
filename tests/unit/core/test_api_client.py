"""
Tests for ApiClient and AsyncApiClient request construction and lifecycle.
"""

import threading

import httpx
import pytest
import respx
import responses

from twitter_api_core import ApiClient, AsyncApiClient
from twitter_api_core.core.exceptions import ApiResponseError
from twitter_api_core.core.logging import ApiLogger
from twitter_api_core.core.models import StreamHandle

BASE = "https://api.twitter.com/2"


class TestApiClient:

    def test_init_from_kwargs(self):
        client = ApiClient(base_url="https://api.twitter.com/1.1", timeout=10, headers={"Authorization": "Bearer a"})
        assert client.base_url == "https://api.twitter.com/1.1"
        assert client.config.headers["Authorization"] == "Bearer a"
        client.close()

    def test_no_logger_by_default(self, client):
        assert client._logger is None

    def test_debug_builds_logger(self):
        with ApiClient(debug=True) as client:
            assert isinstance(client._logger, ApiLogger)

    def test_build_request(self, client):
        request = client.build_request("GET", "users/12/followers", query={"max_results": 5, "pagination_token": None})
        assert request.url == f"{BASE}/users/12/followers?max_results=5"

    @responses.activate
    def test_get(self, client):
        responses.add(responses.GET, f"{BASE}/users/12/blocking", json={"data": [], "meta": {"result_count": 0}})

        result = client.get("users/12/blocking", query={"max_results": 10})

        assert result.data["meta"]["result_count"] == 0
        assert responses.calls[0].request.url == f"{BASE}/users/12/blocking?max_results=10"

    @responses.activate
    def test_post_json(self, client):
        responses.add(responses.POST, f"{BASE}/tweets", json={"data": {"id": "1"}}, status=201)

        result = client.post("tweets", body={"text": "hello"})

        assert result.data == {"data": {"id": "1"}}
        assert responses.calls[0].request.headers["Content-Type"] == "application/json"

    @responses.activate
    def test_put_and_delete(self, client):
        responses.add(responses.PUT, f"{BASE}/lists/1", json={"data": {"updated": True}})
        responses.add(responses.DELETE, f"{BASE}/lists/1", json={"data": {"deleted": True}})

        assert client.put("lists/1", body={"name": "x"}).data["data"]["updated"] is True
        assert client.delete("lists/1").data["data"]["deleted"] is True

    @responses.activate
    def test_error_propagates(self, client):
        responses.add(responses.GET, f"{BASE}/users/0", json={"title": "Not Found Error", "detail": "Could not find user", "type": "about:blank"}, status=404)

        with pytest.raises(ApiResponseError) as exc_info:
            client.get("users/0")
        assert exc_info.value.code == 404

    @responses.activate
    def test_stream(self, client):
        responses.add(responses.GET, f"{BASE}/tweets/search/stream", body="{}\r\n", content_type="application/json")

        handle = client.stream("GET", "tweets/search/stream")
        assert isinstance(handle, StreamHandle)
        handle.response.close()

    def test_session_per_thread(self, client):
        sessions = []

        def worker():
            sessions.append(client.session)

        thread = threading.Thread(target=worker)
        thread.start()
        thread.join()

        assert client.session is client.session
        assert sessions[0] is not client.session

    def test_close_idempotent(self):
        client = ApiClient()
        _ = client.session
        client.close()
        client.close()
        assert client._session_manager.get_active_sessions_count() == 0


class TestAsyncApiClient:

    def test_timeout_mapping(self):
        client = AsyncApiClient(timeout=(2, 9))
        assert client._timeout.connect == 2
        assert client._timeout.read == 9

    @respx.mock
    @pytest.mark.asyncio
    async def test_get(self):
        route = respx.get(f"{BASE}/users/12/following").mock(
            return_value=httpx.Response(200, json={"data": [{"id": "2"}], "meta": {"result_count": 1}})
        )

        async with AsyncApiClient() as client:
            result = await client.get("users/12/following", query={"max_results": 1})

        assert result.data["data"] == [{"id": "2"}]
        assert route.calls.last.request.url.params["max_results"] == "1"

    @respx.mock
    @pytest.mark.asyncio
    async def test_post_and_delete(self):
        respx.post(f"{BASE}/users/1/blocking").mock(return_value=httpx.Response(200, json={"data": {"blocking": True}}))
        respx.delete(f"{BASE}/users/1/blocking/2").mock(return_value=httpx.Response(200, json={"data": {"blocking": False}}))

        async with AsyncApiClient() as client:
            created = await client.post("users/1/blocking", body={"target_user_id": "2"})
            removed = await client.delete("users/1/blocking/2")

        assert created.data["data"]["blocking"] is True
        assert removed.data["data"]["blocking"] is False

    @respx.mock
    @pytest.mark.asyncio
    async def test_stream(self):
        respx.get(f"{BASE}/tweets/sample/stream").mock(return_value=httpx.Response(200, content=b"{}\n"))

        async with AsyncApiClient() as client:
            handle = await client.stream("GET", "tweets/sample/stream")
            await handle.response.aclose()

        assert handle.response.status_code == 200

    @pytest.mark.asyncio
    async def test_close_without_client(self):
        client = AsyncApiClient()
        await client.close()
        assert client._client is None
