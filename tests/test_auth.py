"""Tests for OAuth URL builders and token flows."""

from __future__ import annotations

from urllib.parse import parse_qs, urlsplit

import pytest
from conftest import BASE_URL, Recorder, error_response, json_response, make_client, request_json

from nylasclient import UnauthorizedError
from nylasclient.resources.auth import (
    AdminConsentURLConfig,
    CodeExchangeRequest,
    CustomAuthRequest,
    OAuthURLConfig,
    PKCEURLConfig,
    ProviderDetectRequest,
    RefreshTokenRequest,
)

_TOKEN_BODY = {
    "access_token": "at-1",
    "refresh_token": "rt-1",
    "grant_id": "g1",
    "token_type": "Bearer",
    "expires_in": 3600,
}


def _query(url: str) -> dict[str, list[str]]:
    return parse_qs(urlsplit(url).query)


# ---------------------------------------------------------------------------
# Authorization URLs
# ---------------------------------------------------------------------------


class TestOAuthURL:
    def test_standard_url(self):
        client = make_client(Recorder(json_response({})))
        url = client.auth.url_for_oauth2(
            OAuthURLConfig(
                client_id="client123",
                redirect_uri="https://example.com/callback",
                scopes=["email", "calendar"],
                access_type="offline",
                include_grant_scopes=True,
                state="",
            )
        )
        assert url.startswith(f"{BASE_URL}/v3/connect/auth?")
        assert "scope=email+calendar" in url
        assert _query(url) == {
            "client_id": ["client123"],
            "redirect_uri": ["https://example.com/callback"],
            "scope": ["email calendar"],
            "access_type": ["offline"],
            "include_grant_scopes": ["true"],
            "response_type": ["code"],
        }

    def test_false_bool_omitted(self):
        client = make_client(Recorder(json_response({})))
        url = client.auth.url_for_oauth2(OAuthURLConfig(client_id="c"))
        assert "include_grant_scopes" not in _query(url)

    def test_custom_response_type(self):
        client = make_client(Recorder(json_response({})))
        url = client.auth.url_for_oauth2(OAuthURLConfig(client_id="c", response_type="token"))
        assert _query(url)["response_type"] == ["token"]

    def test_no_config(self):
        client = make_client(Recorder(json_response({})))
        assert client.auth.url_for_oauth2() == f"{BASE_URL}/v3/connect/auth?response_type=code"

    def test_pkce(self):
        client = make_client(Recorder(json_response({})))
        url = client.auth.url_for_oauth2_pkce(
            PKCEURLConfig(
                client_id="c",
                redirect_uri="https://example.com/cb",
                code_challenge="abc",
                code_challenge_method="S256",
                provider="google",
            )
        )
        query = _query(url)
        assert query["code_challenge"] == ["abc"]
        assert query["code_challenge_method"] == ["S256"]
        assert query["provider"] == ["google"]
        assert query["response_type"] == ["code"]

    def test_admin_consent(self):
        client = make_client(Recorder(json_response({})))
        url = client.auth.url_for_admin_consent(
            AdminConsentURLConfig(client_id="c", redirect_uri="https://example.com/cb", credential_id="cred")
        )
        assert _query(url) == {
            "client_id": ["c"],
            "redirect_uri": ["https://example.com/cb"],
            "credential_id": ["cred"],
            "response_type": ["adminconsent"],
        }

    def test_builders_send_nothing(self):
        rec = Recorder(json_response({}))
        client = make_client(rec)
        client.auth.url_for_oauth2(OAuthURLConfig(client_id="c"))
        client.auth.url_for_admin_consent(AdminConsentURLConfig(client_id="c"))
        assert rec.requests == []


# ---------------------------------------------------------------------------
# Token flows
# ---------------------------------------------------------------------------


class TestTokenFlows:
    def test_exchange_code_injects_grant_type_and_secret(self):
        rec = Recorder(json_response(_TOKEN_BODY))
        client = make_client(rec)
        tokens = client.auth.exchange_code_for_token(
            CodeExchangeRequest(client_id="c", code="code-1", redirect_uri="https://example.com/cb")
        )
        assert tokens.access_token == "at-1"
        assert tokens.expires_in == 3600
        req = rec.requests[0]
        assert req.method == "POST"
        assert req.url.path == "/v3/connect/token"
        assert request_json(req) == {
            "client_id": "c",
            "code": "code-1",
            "redirect_uri": "https://example.com/cb",
            "client_secret": "test-key",
            "grant_type": "authorization_code",
        }

    def test_explicit_secret_kept(self):
        rec = Recorder(json_response(_TOKEN_BODY))
        request = CodeExchangeRequest(
            client_id="c", code="x", redirect_uri="r", client_secret="s3cret", code_verifier="v"
        )
        make_client(rec).auth.exchange_code_for_token(request)
        body = request_json(rec.requests[0])
        assert body["client_secret"] == "s3cret"
        assert body["code_verifier"] == "v"
        assert request.client_secret == "s3cret"

    def test_caller_request_not_mutated(self):
        request = RefreshTokenRequest(client_id="c", refresh_token="rt", grant_type="bogus")
        make_client(Recorder(json_response(_TOKEN_BODY))).auth.refresh_access_token(request)
        assert request.client_secret is None
        assert request.grant_type == "bogus"

    def test_refresh(self):
        rec = Recorder(json_response(_TOKEN_BODY))
        make_client(rec).auth.refresh_access_token(
            RefreshTokenRequest(client_id="c", refresh_token="rt-1")
        )
        body = request_json(rec.requests[0])
        assert body["grant_type"] == "refresh_token"
        assert body["refresh_token"] == "rt-1"
        assert body["client_secret"] == "test-key"

    def test_token_error(self):
        rec = Recorder(error_response(401, "invalid_grant"))
        with pytest.raises(UnauthorizedError) as exc_info:
            make_client(rec).auth.refresh_access_token(
                RefreshTokenRequest(client_id="c", refresh_token="rt")
            )
        assert exc_info.value.operation == "auth.refresh_access_token"

    def test_revoke(self):
        rec = Recorder(json_response({}))
        assert make_client(rec).auth.revoke("tok-1") is None
        req = rec.requests[0]
        assert req.method == "POST"
        assert req.url.path == "/v3/connect/revoke"
        assert req.url.params["token"] == "tok-1"


# ---------------------------------------------------------------------------
# Introspection and provider detection
# ---------------------------------------------------------------------------


class TestIntrospection:
    def test_id_token_info(self):
        rec = Recorder(json_response({"data": {"iss": "nylas", "email": "a@x.com", "exp": 10}}))
        info = make_client(rec).auth.id_token_info("idt")
        assert info.email == "a@x.com"
        assert rec.requests[0].url.path == "/v3/connect/tokeninfo"
        assert rec.requests[0].url.params["id_token"] == "idt"

    def test_access_token_info(self):
        rec = Recorder(json_response({"data": {"sub": "u1"}}))
        info = make_client(rec).auth.access_token_info("at")
        assert info.sub == "u1"
        assert rec.requests[0].url.params["access_token"] == "at"

    def test_custom_authentication(self):
        rec = Recorder(json_response({"data": {"id": "g1", "provider": "imap"}}))
        grant = make_client(rec).auth.custom_authentication(
            CustomAuthRequest(provider="imap", settings={"imap_host": "mail"}, scopes=["email"])
        )
        assert grant.id == "g1"
        assert rec.requests[0].url.path == "/v3/connect/custom"
        assert request_json(rec.requests[0]) == {
            "provider": "imap",
            "settings": {"imap_host": "mail"},
            "scope": ["email"],
        }

    def test_detect_provider(self):
        rec = Recorder(
            json_response({"data": {"email_address": "a@gmail.com", "detected": True, "provider": "google"}})
        )
        result = make_client(rec).auth.detect_provider(ProviderDetectRequest(email="a@gmail.com"))
        assert result.detected is True
        assert result.provider == "google"
        assert rec.requests[0].url.path == "/v3/providers/detect"
