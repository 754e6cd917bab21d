"""Request descriptors and option-bag to query-string conversion."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping

from pydantic import BaseModel

from nylasclient.models import ListOptions


def encode_query(params: Mapping[str, Any] | None) -> list[tuple[str, str]]:
    """Convert an option bag into query parameters.

    ``str`` is sent as-is, ``bool`` as ``"true"``/``"false"``, ``int`` in
    decimal, and a list of strings as a repeated key. Values of any other
    type are skipped.
    """
    pairs: list[tuple[str, str]] = []
    if not params:
        return pairs
    for key, value in params.items():
        # bool is a subclass of int, so it must be matched first.
        if isinstance(value, bool):
            pairs.append((key, "true" if value else "false"))
        elif isinstance(value, int):
            pairs.append((key, str(value)))
        elif isinstance(value, str):
            pairs.append((key, value))
        elif isinstance(value, (list, tuple)):
            pairs.extend((key, item) for item in value if isinstance(item, str))
    return pairs


@dataclass(frozen=True)
class Request:
    """One logical API call: method, path under the base URL, query and body."""

    method: str
    path: str
    params: Mapping[str, Any] | None = None
    body: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)

    def query(self) -> list[tuple[str, str]]:
        return encode_query(self.params)

    def json_body(self) -> Any:
        if isinstance(self.body, BaseModel):
            return self.body.model_dump(mode="json", exclude_none=True, by_alias=True)
        return self.body


def build_params(
    options: ListOptions | Mapping[str, Any] | None,
    **extra: Any,
) -> dict[str, Any]:
    """Merge list options with fixed parameters; ``None`` extras are dropped."""
    params: dict[str, Any] = {}
    if isinstance(options, ListOptions):
        params.update(options.values())
    elif options:
        params.update(options)
    params.update({k: v for k, v in extra.items() if v is not None})
    return params
