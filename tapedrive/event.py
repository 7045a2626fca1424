"""Events logged by the tape program."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar, TypeVar

DISCRIMINATOR_SIZE = 8

T = TypeVar("T", bound="EventRecord")


class EventType(IntEnum):
    """Discriminator of a logged event."""

    UNKNOWN = 0
    WRITE_EVENT = 1
    UPDATE_EVENT = 2
    FINALIZE_EVENT = 3


class EventDecodeError(ValueError):
    """Raised when event bytes are malformed."""


class EventRecord:
    """Fixed-size event with an 8-byte discriminator."""

    _EVENT_TYPE: ClassVar[EventType]
    _LAYOUT: ClassVar[tuple[tuple[str, str], ...]] = ()

    @classmethod
    def _struct(cls) -> struct.Struct:
        return struct.Struct("<" + "".join(code for _, code in cls._LAYOUT))

    @classmethod
    def size_of(cls) -> int:
        """Encoded size, discriminator included."""
        return cls._struct().size + DISCRIMINATOR_SIZE

    def to_bytes(self) -> bytes:
        """Serialize the event, discriminator first."""
        values = []
        for name, code in self._LAYOUT:
            value = getattr(self, name)
            if code.endswith("s"):
                value = bytes(value)
                expected = int(code[:-1])
                if len(value) != expected:
                    raise EventDecodeError(
                        f"field {name} must be {expected} bytes, got {len(value)}"
                    )
            values.append(value)
        try:
            body = self._struct().pack(*values)
        except struct.error as exc:
            raise EventDecodeError(str(exc)) from exc
        return bytes([self._EVENT_TYPE]) + bytes(DISCRIMINATOR_SIZE - 1) + body

    @classmethod
    def try_from_bytes(cls: type[T], data: bytes) -> T:
        """Decode an event, checking the discriminator and the length."""
        data = bytes(data)
        if len(data) < DISCRIMINATOR_SIZE:
            raise EventDecodeError("Data too short for discriminator")
        expected = int(cls._EVENT_TYPE)
        if data[0] != expected:
            raise EventDecodeError(
                f"Invalid discriminator: expected {expected}, got {data[0]}"
            )
        layout = cls._struct()
        if len(data) < DISCRIMINATOR_SIZE + layout.size:
            raise EventDecodeError(
                f"Data too short: expected at least {DISCRIMINATOR_SIZE + layout.size} "
                f"bytes, got {len(data)}"
            )
        values = layout.unpack_from(data, DISCRIMINATOR_SIZE)
        return cls(**{name: value for (name, _), value in zip(cls._LAYOUT, values)})


@dataclass
class WriteEvent(EventRecord):
    """Segments appended to a tape."""

    _EVENT_TYPE = EventType.WRITE_EVENT
    _LAYOUT = (
        ("num_added", "Q"),
        ("num_total", "Q"),
        ("prev_slot", "Q"),
        ("address", "32s"),
    )

    num_added: int = 0
    num_total: int = 0
    prev_slot: int = 0
    address: bytes = bytes(32)


@dataclass
class UpdateEvent(EventRecord):
    """A tape segment replaced."""

    _EVENT_TYPE = EventType.UPDATE_EVENT
    _LAYOUT = (("segment_number", "Q"), ("prev_slot", "Q"), ("address", "32s"))

    segment_number: int = 0
    prev_slot: int = 0
    address: bytes = bytes(32)


@dataclass
class FinalizeEvent(EventRecord):
    """A tape finalized."""

    _EVENT_TYPE = EventType.FINALIZE_EVENT
    _LAYOUT = (("tape", "Q"), ("address", "32s"))

    tape: int = 0
    address: bytes = bytes(32)