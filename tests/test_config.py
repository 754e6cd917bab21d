"""Tests for client configuration and construction."""

from __future__ import annotations

import httpx
import pytest
from pydantic import ValidationError

from nylasclient import (
    AsyncClient,
    Client,
    ClientConfig,
    ErrorKind,
    MissingCredentialError,
    Region,
    is_kind,
)
from nylasclient.config import DEFAULT_BASE_URL, REGION_BASE_URLS


# ---------------------------------------------------------------------------
# ClientConfig
# ---------------------------------------------------------------------------


class TestClientConfig:
    def test_defaults(self):
        cfg = ClientConfig(api_key="k")
        assert cfg.base_url == DEFAULT_BASE_URL
        assert cfg.region is Region.US
        assert cfg.timeout == 90.0
        assert cfg.max_retries == 2
        assert cfg.retry_wait == 0.5

    def test_trailing_slash_stripped(self):
        cfg = ClientConfig(api_key="k", base_url="https://example.com/")
        assert cfg.base_url == "https://example.com"

    def test_region_selects_base_url(self):
        cfg = ClientConfig(api_key="k", region="eu")
        assert cfg.region is Region.EU
        assert cfg.base_url == REGION_BASE_URLS[Region.EU]

    def test_explicit_base_url_beats_region(self):
        cfg = ClientConfig(api_key="k", region="eu", base_url="https://proxy.local")
        assert cfg.base_url == "https://proxy.local"

    def test_unknown_region_rejected(self):
        with pytest.raises(ValidationError):
            ClientConfig(api_key="k", region="mars")

    @pytest.mark.parametrize(
        "field,value",
        [("timeout", 0), ("max_retries", -1), ("retry_wait", 0)],
    )
    def test_out_of_range_rejected(self, field, value):
        with pytest.raises(ValidationError):
            ClientConfig(api_key="k", **{field: value})

    def test_zero_retries_allowed(self):
        assert ClientConfig(api_key="k", max_retries=0).max_retries == 0

    def test_missing_api_key(self):
        with pytest.raises(MissingCredentialError) as exc_info:
            ClientConfig()
        assert is_kind(exc_info.value, ErrorKind.MISSING_CREDENTIAL)

    def test_empty_api_key(self):
        with pytest.raises(MissingCredentialError):
            ClientConfig(api_key="")

    def test_frozen(self):
        cfg = ClientConfig(api_key="k")
        with pytest.raises(ValidationError):
            cfg.api_key = "other"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Client construction
# ---------------------------------------------------------------------------


class TestClientConstruction:
    def test_missing_credential_sends_nothing(self):
        calls = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200)

        http = httpx.Client(transport=httpx.MockTransport(handler))
        with pytest.raises(MissingCredentialError):
            Client(http_client=http)
        assert calls == []

    def test_keyword_options(self):
        with Client("k", region=Region.EU, max_retries=5, timeout=3.0) as client:
            assert client.base_url == REGION_BASE_URLS[Region.EU]
            assert client.config.max_retries == 5
            assert client.config.timeout == 3.0

    def test_prepared_config(self):
        cfg = ClientConfig(api_key="k", base_url="https://example.com/")
        with Client(config=cfg) as client:
            assert client.config is cfg
            assert client.base_url == "https://example.com"

    def test_services_attached(self):
        with Client("k") as client:
            for name in (
                "messages", "threads", "drafts", "calendars", "events",
                "contacts", "folders", "attachments", "grants", "webhooks",
                "notetakers", "auth",
            ):
                assert getattr(client, name)._client is client

    def test_supplied_http_client_not_closed(self):
        http = httpx.Client()
        client = Client("k", http_client=http)
        client.close()
        assert not http.is_closed
        http.close()

    def test_owned_http_client_closed(self):
        client = Client("k")
        client.close()
        assert client._http.is_closed

    async def test_async_missing_credential(self):
        with pytest.raises(MissingCredentialError):
            AsyncClient()

    async def test_async_context_manager_closes(self):
        async with AsyncClient("k") as client:
            pass
        assert client._http.is_closed
