"""Address-book contacts and contact groups."""

from __future__ import annotations

from pydantic import Field

from nylasclient.context import Context
from nylasclient.models import ListOptions, ListResponse, Record, RequestBody
from nylasclient.pagination import Iterator
from nylasclient.resources.base import Service


class ContactEmail(RequestBody):
    email: str
    type: str | None = None


class PhoneNumber(RequestBody):
    number: str
    type: str | None = None


class PhysicalAddress(RequestBody):
    format: str | None = None
    street_address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    state: str | None = None
    country: str | None = None
    type: str | None = None


class WebPage(RequestBody):
    url: str
    type: str | None = None


class IMAddress(RequestBody):
    im_address: str
    type: str | None = None


class ContactGroupRef(RequestBody):
    id: str
    name: str | None = None


class Contact(Record):
    id: str
    grant_id: str = ""
    birthday: str | None = None
    company_name: str | None = None
    display_name: str | None = None
    emails: list[ContactEmail] = Field(default_factory=list)
    given_name: str | None = None
    groups: list[ContactGroupRef] = Field(default_factory=list)
    im_addresses: list[IMAddress] = Field(default_factory=list)
    job_title: str | None = None
    manager_name: str | None = None
    middle_name: str | None = None
    nickname: str | None = None
    notes: str | None = None
    office_location: str | None = None
    phone_numbers: list[PhoneNumber] = Field(default_factory=list)
    physical_addresses: list[PhysicalAddress] = Field(default_factory=list)
    picture_url: str | None = None
    suffix: str | None = None
    surname: str | None = None
    source: str | None = None
    web_pages: list[WebPage] = Field(default_factory=list)


class ContactListOptions(ListOptions):
    email: str | None = None
    phone_number: str | None = None
    source: str | None = None
    group: str | None = None
    recurse: bool | None = None


class ContactRequest(RequestBody):
    birthday: str | None = None
    company_name: str | None = None
    display_name: str | None = None
    emails: list[ContactEmail] | None = None
    given_name: str | None = None
    groups: list[ContactGroupRef] | None = None
    im_addresses: list[IMAddress] | None = None
    job_title: str | None = None
    manager_name: str | None = None
    middle_name: str | None = None
    nickname: str | None = None
    notes: str | None = None
    office_location: str | None = None
    phone_numbers: list[PhoneNumber] | None = None
    physical_addresses: list[PhysicalAddress] | None = None
    suffix: str | None = None
    surname: str | None = None
    web_pages: list[WebPage] | None = None


class ContactGroup(Record):
    id: str
    grant_id: str = ""
    name: str | None = None
    group_type: str | None = None
    path: str | None = None


class ContactsService(Service):
    def list(
        self,
        grant_id: str,
        options: ContactListOptions | None = None,
        *,
        ctx: Context | None = None,
    ) -> ListResponse[Contact]:
        return self._page(
            f"/v3/grants/{grant_id}/contacts", Contact, options,
            op="contacts.list", ctx=ctx,
        )

    def list_all(
        self,
        grant_id: str,
        options: ContactListOptions | None = None,
        *,
        ctx: Context | None = None,
    ) -> Iterator[Contact]:
        return self._all(
            f"/v3/grants/{grant_id}/contacts", Contact, options,
            op="contacts.list_all", ctx=ctx,
        )

    def get(self, grant_id: str, contact_id: str, *, ctx: Context | None = None) -> Contact:
        return self._one(
            "GET", f"/v3/grants/{grant_id}/contacts/{contact_id}", Contact,
            op=f"contacts.get({contact_id})", ctx=ctx,
        )

    def create(
        self, grant_id: str, request: ContactRequest, *, ctx: Context | None = None
    ) -> Contact:
        return self._one(
            "POST", f"/v3/grants/{grant_id}/contacts", Contact,
            body=request, op="contacts.create", ctx=ctx,
        )

    def update(
        self,
        grant_id: str,
        contact_id: str,
        request: ContactRequest,
        *,
        ctx: Context | None = None,
    ) -> Contact:
        return self._one(
            "PUT", f"/v3/grants/{grant_id}/contacts/{contact_id}", Contact,
            body=request, op=f"contacts.update({contact_id})", ctx=ctx,
        )

    def delete(self, grant_id: str, contact_id: str, *, ctx: Context | None = None) -> None:
        return self._no_content(
            "DELETE", f"/v3/grants/{grant_id}/contacts/{contact_id}",
            op=f"contacts.delete({contact_id})", ctx=ctx,
        )

    def list_groups(self, grant_id: str, *, ctx: Context | None = None) -> list[ContactGroup]:
        return self._one(
            "GET", f"/v3/grants/{grant_id}/contacts/groups", list[ContactGroup],
            op="contacts.list_groups", ctx=ctx,
        )
