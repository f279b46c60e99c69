"""Consumption of user lifecycle events from the message broker."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, fields
from typing import Protocol, TypeVar, runtime_checkable

log = logging.getLogger(__name__)

_M = TypeVar("_M", str, bytes, bytearray)


@dataclass
class UserCreatedPayload:
    """Body of a ``user_created`` event."""

    id: str = ""
    user_type: str = ""
    email: str = ""
    phone: str = ""

    @classmethod
    def from_json(cls, data: str | bytes | bytearray) -> UserCreatedPayload:
        """Decode an event body; keys match exactly first, then ignoring case."""
        try:
            obj = json.loads(data)
        except ValueError as exc:
            raise ValueError(f"invalid event payload: {exc}") from exc
        if obj is None:
            return cls()
        if not isinstance(obj, dict):
            raise ValueError(f"event payload must be an object, got {type(obj).__name__}")
        values: dict[str, str] = {}
        for spec in fields(cls):
            if spec.name in obj:
                key = spec.name
            else:
                key = next((k for k in obj if k.lower() == spec.name.lower()), None)
                if key is None:
                    continue
            value = obj[key]
            if value is None:
                continue
            if not isinstance(value, str):
                raise ValueError(f"field {key!r} must be a string, got {type(value).__name__}")
            values[spec.name] = value
        return cls(**values)


@runtime_checkable
class UserEventHandler(Protocol):
    """Receiver of decoded user events."""

    def handle_user_created_event(self, user_id: str, email: str, phone: str) -> None:
        """React to a newly created user."""


def consume_messages(messages: Iterable[_M], handler: UserEventHandler) -> Iterator[_M]:
    """Decode and dispatch each message, yielding those handled successfully.

    Messages that cannot be decoded, or whose handling fails, are logged and
    skipped; the yielded ones are the ones to acknowledge.
    """
    for message in messages:
        try:
            payload = UserCreatedPayload.from_json(message)
        except ValueError as exc:
            log.error("Failed to unmarshal user_created payload: %s", exc)
            continue
        try:
            handler.handle_user_created_event(payload.id, payload.email, payload.phone)
        except Exception as exc:  # noqa: BLE001 - a failed event must not stop the stream
            log.error("Failed to handle user_created event: %s", exc)
            continue
        yield message