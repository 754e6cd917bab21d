"""Hosted OAuth: authorization URLs, token exchange and token introspection.

The URL builders are pure functions of their config and the client's base
URL; they never touch the network and return a plain string even on
:class:`~nylasclient.AsyncClient`.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlencode

from pydantic import BaseModel, Field

from nylasclient.context import Context
from nylasclient.models import Record, RequestBody
from nylasclient.resources.base import Service
from nylasclient.resources.grants import Grant

DEFAULT_RESPONSE_TYPE = "code"
ADMIN_CONSENT_RESPONSE_TYPE = "adminconsent"


class OAuthURLConfig(BaseModel):
    """Parameters for the standard authorization URL.

    Empty strings are left out of the URL and ``include_grant_scopes`` is
    only sent when true. ``scopes`` is joined with spaces into ``scope``.
    """

    client_id: str = ""
    redirect_uri: str = ""
    provider: str = ""
    login_hint: str = ""
    state: str = ""
    scopes: list[str] = Field(default_factory=list)
    access_type: str = ""
    response_type: str = ""
    prompt: str = ""
    include_grant_scopes: bool = False
    credential_id: str = ""


class PKCEURLConfig(OAuthURLConfig):
    code_challenge: str = ""
    code_challenge_method: str = ""


class AdminConsentURLConfig(BaseModel):
    client_id: str = ""
    redirect_uri: str = ""
    state: str = ""
    credential_id: str = ""


class _URLBuilder:
    def __init__(self, base: str) -> None:
        self._base = base
        self._params: dict[str, str] = {}

    def add(self, key: str, value: str) -> _URLBuilder:
        if value:
            self._params[key] = value
        return self

    def add_bool(self, key: str, value: bool) -> _URLBuilder:
        if value:
            self._params[key] = "true"
        return self

    def build(self) -> str:
        if not self._params:
            return self._base
        return f"{self._base}?{urlencode(self._params)}"


class CodeExchangeRequest(RequestBody):
    client_id: str
    code: str
    redirect_uri: str
    client_secret: str | None = None
    code_verifier: str | None = None
    grant_type: str = "authorization_code"


class RefreshTokenRequest(RequestBody):
    client_id: str
    refresh_token: str
    client_secret: str | None = None
    grant_type: str = "refresh_token"


class TokenExchangeResponse(Record):
    access_token: str = ""
    refresh_token: str | None = None
    grant_id: str = ""
    email: str | None = None
    token_type: str | None = None
    expires_in: int = 0
    id_token: str | None = None
    scope: str | None = None
    provider: str | None = None


class CustomAuthRequest(RequestBody):
    provider: str
    settings: dict[str, Any]
    scopes: list[str] | None = Field(None, alias="scope")
    state: str | None = None


class TokenInfoResponse(Record):
    iss: str | None = None
    aud: str | None = None
    sub: str | None = None
    email: str | None = None
    email_verified: bool = False
    at_hash: str | None = None
    iat: int | None = None
    exp: int | None = None


class ProviderDetectRequest(RequestBody):
    email: str
    all_provider_types: bool | None = None


class ProviderDetectResponse(Record):
    email_address: str = ""
    detected: bool = False
    provider: str | None = None
    type: str | None = None


class AuthService(Service):
    # -- authorization URLs --------------------------------------------------

    def _auth_endpoint(self) -> str:
        return self._client.base_url + "/v3/connect/auth"

    def _oauth_builder(self, config: OAuthURLConfig | None) -> tuple[_URLBuilder, str]:
        builder = _URLBuilder(self._auth_endpoint())
        response_type = DEFAULT_RESPONSE_TYPE
        if config is not None:
            builder.add("client_id", config.client_id)
            builder.add("redirect_uri", config.redirect_uri)
            response_type = config.response_type or response_type
            builder.add("provider", config.provider)
            builder.add("login_hint", config.login_hint)
            builder.add("state", config.state)
            builder.add("access_type", config.access_type)
            builder.add("prompt", config.prompt)
            builder.add("credential_id", config.credential_id)
            builder.add_bool("include_grant_scopes", config.include_grant_scopes)
        return builder, response_type

    def url_for_oauth2(self, config: OAuthURLConfig | None = None) -> str:
        """URL that starts the hosted OAuth flow.

        Example::

            url = client.auth.url_for_oauth2(OAuthURLConfig(
                client_id="client123",
                redirect_uri="https://example.com/callback",
                scopes=["email", "calendar"],
                access_type="offline",
            ))
        """
        builder, response_type = self._oauth_builder(config)
        if config is not None:
            builder.add("scope", " ".join(config.scopes))
        return builder.add("response_type", response_type).build()

    def url_for_oauth2_pkce(self, config: PKCEURLConfig | None = None) -> str:
        builder, response_type = self._oauth_builder(config)
        if config is not None:
            builder.add("code_challenge", config.code_challenge)
            builder.add("code_challenge_method", config.code_challenge_method)
            builder.add("scope", " ".join(config.scopes))
        return builder.add("response_type", response_type).build()

    def url_for_admin_consent(self, config: AdminConsentURLConfig | None = None) -> str:
        """URL for a Microsoft administrator to consent on behalf of a tenant."""
        builder = _URLBuilder(self._auth_endpoint())
        if config is not None:
            builder.add("client_id", config.client_id)
            builder.add("redirect_uri", config.redirect_uri)
            builder.add("state", config.state)
            builder.add("credential_id", config.credential_id)
            builder.add("response_type", ADMIN_CONSENT_RESPONSE_TYPE)
        return builder.build()

    # -- token flows ---------------------------------------------------------

    def _with_secret(self, request: Any, grant_type: str) -> Any:
        update: dict[str, Any] = {"grant_type": grant_type}
        if not request.client_secret:
            update["client_secret"] = self._client.config.api_key
        return request.model_copy(update=update)

    def exchange_code_for_token(
        self, request: CodeExchangeRequest, *, ctx: Context | None = None
    ) -> TokenExchangeResponse:
        """Trade an authorization code for tokens.

        ``client_secret`` defaults to the client's API key.
        """
        body = self._with_secret(request, "authorization_code")
        return self._raw(
            "POST", "/v3/connect/token", TokenExchangeResponse,
            body=body, op="auth.exchange_code_for_token", ctx=ctx,
        )

    def refresh_access_token(
        self, request: RefreshTokenRequest, *, ctx: Context | None = None
    ) -> TokenExchangeResponse:
        body = self._with_secret(request, "refresh_token")
        return self._raw(
            "POST", "/v3/connect/token", TokenExchangeResponse,
            body=body, op="auth.refresh_access_token", ctx=ctx,
        )

    def custom_authentication(
        self, request: CustomAuthRequest, *, ctx: Context | None = None
    ) -> Grant:
        """Create a grant directly from provider credentials (bring your own auth)."""
        return self._one(
            "POST", "/v3/connect/custom", Grant,
            body=request, op="auth.custom_authentication", ctx=ctx,
        )

    def id_token_info(self, id_token: str, *, ctx: Context | None = None) -> TokenInfoResponse:
        return self._one(
            "GET", "/v3/connect/tokeninfo", TokenInfoResponse,
            params={"id_token": id_token}, op="auth.id_token_info", ctx=ctx,
        )

    def access_token_info(
        self, access_token: str, *, ctx: Context | None = None
    ) -> TokenInfoResponse:
        return self._one(
            "GET", "/v3/connect/tokeninfo", TokenInfoResponse,
            params={"access_token": access_token}, op="auth.access_token_info", ctx=ctx,
        )

    def revoke(self, token: str, *, ctx: Context | None = None) -> None:
        return self._raw(
            "POST", "/v3/connect/revoke", None,
            params={"token": token}, op="auth.revoke", ctx=ctx,
        )

    def detect_provider(
        self, request: ProviderDetectRequest, *, ctx: Context | None = None
    ) -> ProviderDetectResponse:
        return self._one(
            "POST", "/v3/providers/detect", ProviderDetectResponse,
            body=request, op="auth.detect_provider", ctx=ctx,
        )
