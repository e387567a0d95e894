"""
Closed-set enumerations decoded from single advertisement bytes.

Every enum carries an ``UNKNOWN`` member without a raw value. Bytes that are
not in the known table resolve to ``UNKNOWN`` so newer hardware revisions
never break decoding.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Type, TypeVar

E = TypeVar("E", bound="RawValueEnum")


class MicrophonePod(Enum):
    """Which physical pod currently hosts the microphone."""
    LEFT = "left"
    RIGHT = "right"


class RawValueEnum(Enum):
    """Enum whose members map to a single raw byte."""

    @property
    def raw(self) -> Optional[int]:
        return self.value

    @classmethod
    def from_raw(cls: Type[E], raw: int) -> E:
        for member in cls:
            if member.value is not None and member.value == raw:
                return member
        return cls["UNKNOWN"]


class LidState(RawValueEnum):
    OPEN = 0x31
    CLOSED = 0x38
    NOT_IN_CASE = 0x01
    UNKNOWN = None


class DeviceColor(RawValueEnum):
    WHITE = 0x00
    BLACK = 0x01
    RED = 0x02
    BLUE = 0x03
    PINK = 0x04
    GRAY = 0x05
    SILVER = 0x06
    GOLD = 0x07
    ROSE_GOLD = 0x08
    SPACE_GRAY = 0x09
    DARK_BLUE = 0x0A
    LIGHT_BLUE = 0x0B
    YELLOW = 0x0C
    UNKNOWN = None


class ConnectionState(RawValueEnum):
    """Audio link activity reported in the suffix byte."""
    DISCONNECTED = 0x00
    IDLE = 0x04
    MUSIC = 0x05
    CALL = 0x06
    RINGING = 0x07
    HANGING_UP = 0x09
    UNKNOWN = None


def resolve(enum_cls: Type[E], raw: int) -> E:
    """Map ``raw`` to a member of ``enum_cls``, falling back to ``UNKNOWN``."""
    return enum_cls.from_raw(raw)
