"""Resource services exposed as attributes of the client."""

from __future__ import annotations

from nylasclient.resources.attachments import AttachmentsService
from nylasclient.resources.auth import (
    AdminConsentURLConfig,
    AuthService,
    CodeExchangeRequest,
    CustomAuthRequest,
    OAuthURLConfig,
    PKCEURLConfig,
    ProviderDetectRequest,
    ProviderDetectResponse,
    RefreshTokenRequest,
    TokenExchangeResponse,
    TokenInfoResponse,
)
from nylasclient.resources.calendars import (
    AvailabilityParticipant,
    AvailabilityRequest,
    AvailabilityResponse,
    Calendar,
    CalendarListOptions,
    CalendarRequest,
    CalendarsService,
    FreeBusy,
    FreeBusyRequest,
)
from nylasclient.resources.common import AttachmentInfo, Participant
from nylasclient.resources.contacts import (
    Contact,
    ContactGroup,
    ContactListOptions,
    ContactRequest,
    ContactsService,
)
from nylasclient.resources.drafts import Draft, DraftListOptions, DraftRequest, DraftsService
from nylasclient.resources.events import (
    Event,
    EventListOptions,
    EventRequest,
    EventsService,
    ImportEventsOptions,
    RSVPRequest,
)
from nylasclient.resources.folders import Folder, FolderListOptions, FolderRequest, FoldersService
from nylasclient.resources.grants import Grant, GrantListOptions, GrantsService, UpdateGrantRequest
from nylasclient.resources.messages import (
    CleanMessagesRequest,
    Message,
    MessageListOptions,
    MessagesService,
    ScheduledMessage,
    SendMessageRequest,
    UpdateMessageRequest,
)
from nylasclient.resources.notetakers import (
    CreateNotetakerRequest,
    MeetingSettings,
    Notetaker,
    NotetakerListOptions,
    NotetakersService,
)
from nylasclient.resources.threads import Thread, ThreadListOptions, ThreadsService, UpdateThreadRequest
from nylasclient.resources.webhooks import (
    CreateWebhookRequest,
    UpdateWebhookRequest,
    Webhook,
    WebhooksService,
    extract_challenge_parameter,
    verify_signature,
)

__all__ = [
    "AttachmentsService",
    "AuthService",
    "CalendarsService",
    "ContactsService",
    "DraftsService",
    "EventsService",
    "FoldersService",
    "GrantsService",
    "MessagesService",
    "NotetakersService",
    "ThreadsService",
    "WebhooksService",
    "AttachmentInfo",
    "Participant",
    "AdminConsentURLConfig",
    "CodeExchangeRequest",
    "CustomAuthRequest",
    "OAuthURLConfig",
    "PKCEURLConfig",
    "ProviderDetectRequest",
    "ProviderDetectResponse",
    "RefreshTokenRequest",
    "TokenExchangeResponse",
    "TokenInfoResponse",
    "AvailabilityParticipant",
    "AvailabilityRequest",
    "AvailabilityResponse",
    "Calendar",
    "CalendarListOptions",
    "CalendarRequest",
    "FreeBusy",
    "FreeBusyRequest",
    "Contact",
    "ContactGroup",
    "ContactListOptions",
    "ContactRequest",
    "Draft",
    "DraftListOptions",
    "DraftRequest",
    "Event",
    "EventListOptions",
    "EventRequest",
    "ImportEventsOptions",
    "RSVPRequest",
    "Folder",
    "FolderListOptions",
    "FolderRequest",
    "Grant",
    "GrantListOptions",
    "UpdateGrantRequest",
    "CleanMessagesRequest",
    "Message",
    "MessageListOptions",
    "ScheduledMessage",
    "SendMessageRequest",
    "UpdateMessageRequest",
    "CreateNotetakerRequest",
    "MeetingSettings",
    "Notetaker",
    "NotetakerListOptions",
    "Thread",
    "ThreadListOptions",
    "UpdateThreadRequest",
    "CreateWebhookRequest",
    "UpdateWebhookRequest",
    "Webhook",
    "extract_challenge_parameter",
    "verify_signature",
]
