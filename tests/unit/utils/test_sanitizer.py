"""
Tests for masking of credentials in diagnostic output.
"""

from requests.structures import CaseInsensitiveDict

from twitter_api_core.utils.sanitizer import (
    MASK,
    SENSITIVE_KEYS,
    add_sensitive_keys,
    mask_headers,
    mask_sensitive_data,
    mask_url,
)


class TestMaskSensitiveData:

    def test_sensitive_keys_masked(self):
        data = {"oauth_token": "abc", "consumer_secret": "xyz", "screen_name": "jack"}
        assert mask_sensitive_data(data) == {"oauth_token": MASK, "consumer_secret": MASK, "screen_name": "jack"}

    def test_pagination_tokens_visible(self):
        data = {"next_token": "7140dibdnow9c7btw", "previous_token": "77qp8", "pagination_token": "x"}
        assert mask_sensitive_data(data) == data

    def test_nested(self):
        data = {"request": {"headers": {"Authorization": "Bearer abc"}}, "items": [{"password": "p"}]}
        masked = mask_sensitive_data(data)
        assert masked["request"]["headers"]["Authorization"] == MASK
        assert masked["items"][0]["password"] == MASK

    def test_bearer_in_string(self):
        assert mask_sensitive_data("Authorization: Bearer AAAA%2Fbcd=") == f"Authorization: Bearer {MASK}"

    def test_oauth_header_values(self):
        header = 'OAuth oauth_consumer_key="key", oauth_signature="sig%3D", oauth_version="1.0"'
        masked = mask_sensitive_data(header)
        assert "key" not in masked.replace("oauth_consumer_key", "")
        assert "sig%3D" not in masked
        assert 'oauth_version="1.0"' in masked

    def test_scalars_untouched(self):
        assert mask_sensitive_data(5) == 5
        assert mask_sensitive_data(None) is None

    def test_tuple_type_kept(self):
        assert mask_sensitive_data(("a", "b")) == ("a", "b")


class TestMaskHeaders:

    def test_case_insensitive_dict(self):
        headers = CaseInsensitiveDict({"Authorization": "Bearer a", "Content-Type": "application/json"})
        assert mask_headers(headers) == {"Authorization": MASK, "Content-Type": "application/json"}

    def test_cookie(self):
        assert mask_headers({"cookie": "auth_token=1"}) == {"cookie": MASK}


class TestMaskUrl:

    def test_query_masked(self):
        assert mask_url("https://api.twitter.com/oauth/authenticate?oauth_token=abc&force_login=true") == (
            f"https://api.twitter.com/oauth/authenticate?oauth_token={MASK}&force_login=true"
        )

    def test_no_query(self):
        url = "https://api.twitter.com/2/users/12"
        assert mask_url(url) == url


class TestAddSensitiveKeys:

    def test_add(self):
        add_sensitive_keys("X-Internal-Token")
        try:
            assert mask_headers({"x-internal-token": "t"}) == {"x-internal-token": MASK}
        finally:
            SENSITIVE_KEYS.discard("x-internal-token")
