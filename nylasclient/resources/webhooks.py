"""Webhook subscriptions and helpers for the receiving endpoint."""

from __future__ import annotations

import hashlib
import hmac
from urllib.parse import parse_qs, urlsplit

from pydantic import Field

from nylasclient.context import Context
from nylasclient.models import ListOptions, ListResponse, Record, RequestBody
from nylasclient.pagination import Iterator
from nylasclient.resources.base import Service


class Webhook(Record):
    id: str
    description: str | None = None
    trigger_types: list[str] = Field(default_factory=list)
    webhook_url: str = ""
    webhook_secret: str | None = None
    status: str | None = None
    notification_email_addresses: list[str] = Field(default_factory=list)
    status_updated_at: int | None = None
    created_at: int | None = None
    updated_at: int | None = None


class CreateWebhookRequest(RequestBody):
    trigger_types: list[str]
    webhook_url: str
    description: str | None = None
    notification_email_addresses: list[str] | None = None


class UpdateWebhookRequest(RequestBody):
    trigger_types: list[str] | None = None
    webhook_url: str | None = None
    description: str | None = None
    notification_email_addresses: list[str] | None = None


class RotateSecretResponse(Record):
    webhook_secret: str


class IPAddresses(Record):
    ip_addresses: list[str] = Field(default_factory=list)
    updated_at: int | None = None


def extract_challenge_parameter(webhook_url: str) -> str:
    """Return the ``challenge`` query value Nylas sends to verify an endpoint.

    The endpoint must echo the value back in its response body.

    Raises:
        ValueError: The URL carries no ``challenge`` parameter.
    """
    values = parse_qs(urlsplit(webhook_url).query).get("challenge")
    if not values or not values[0]:
        raise ValueError("no challenge parameter found in URL")
    return values[0]


def sign_payload(payload: bytes, secret: str) -> str:
    """Compute the HMAC-SHA256 hex digest Nylas sends in ``X-Nylas-Signature``."""
    return hmac.new(secret.encode(), payload, hashlib.sha256).hexdigest()


def verify_signature(payload: bytes, signature: str, secret: str) -> bool:
    """Check a notification body against its ``X-Nylas-Signature`` header."""
    if not signature or not secret:
        return False
    return hmac.compare_digest(sign_payload(payload, secret), signature.strip().lower())


class WebhooksService(Service):
    def list(
        self, options: ListOptions | None = None, *, ctx: Context | None = None
    ) -> ListResponse[Webhook]:
        return self._page("/v3/webhooks", Webhook, options, op="webhooks.list", ctx=ctx)

    def list_all(
        self, options: ListOptions | None = None, *, ctx: Context | None = None
    ) -> Iterator[Webhook]:
        return self._all("/v3/webhooks", Webhook, options, op="webhooks.list_all", ctx=ctx)

    def get(self, webhook_id: str, *, ctx: Context | None = None) -> Webhook:
        return self._one(
            "GET", f"/v3/webhooks/{webhook_id}", Webhook,
            op=f"webhooks.get({webhook_id})", ctx=ctx,
        )

    def create(self, request: CreateWebhookRequest, *, ctx: Context | None = None) -> Webhook:
        """Create a subscription; the returned record holds the signing secret."""
        return self._one(
            "POST", "/v3/webhooks", Webhook,
            body=request, op="webhooks.create", ctx=ctx,
        )

    def update(
        self, webhook_id: str, request: UpdateWebhookRequest, *, ctx: Context | None = None
    ) -> Webhook:
        return self._one(
            "PUT", f"/v3/webhooks/{webhook_id}", Webhook,
            body=request, op=f"webhooks.update({webhook_id})", ctx=ctx,
        )

    def delete(self, webhook_id: str, *, ctx: Context | None = None) -> None:
        return self._no_content(
            "DELETE", f"/v3/webhooks/{webhook_id}",
            op=f"webhooks.delete({webhook_id})", ctx=ctx,
        )

    def rotate_secret(
        self, webhook_id: str, *, ctx: Context | None = None
    ) -> RotateSecretResponse:
        return self._one(
            "POST", f"/v3/webhooks/rotate-secret/{webhook_id}", RotateSecretResponse,
            op=f"webhooks.rotate_secret({webhook_id})", ctx=ctx,
        )

    def ip_addresses(self, *, ctx: Context | None = None) -> IPAddresses:
        """Source addresses Nylas delivers notifications from."""
        return self._one(
            "GET", "/v3/webhooks/ip-addresses", IPAddresses,
            op="webhooks.ip_addresses", ctx=ctx,
        )
