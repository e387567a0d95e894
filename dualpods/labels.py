"""
Display labels for decoded enum variants.

The decoder only emits enum members. Consumers that show them to a user
turn them into text through a ``LabelResolver``; ``EnglishLabels`` is the
built-in catalog.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Optional, Protocol

from dualpods.enums import ConnectionState, DeviceColor, LidState, MicrophonePod

UNKNOWN_LABEL = "Unknown"

_ENGLISH: dict[Enum, str] = {
    MicrophonePod.LEFT: "Left pod",
    MicrophonePod.RIGHT: "Right pod",
    LidState.OPEN: "Lid open",
    LidState.CLOSED: "Lid closed",
    LidState.NOT_IN_CASE: "Not in case",
    DeviceColor.WHITE: "White",
    DeviceColor.BLACK: "Black",
    DeviceColor.RED: "Red",
    DeviceColor.BLUE: "Blue",
    DeviceColor.PINK: "Pink",
    DeviceColor.GRAY: "Gray",
    DeviceColor.SILVER: "Silver",
    DeviceColor.GOLD: "Gold",
    DeviceColor.ROSE_GOLD: "Rose gold",
    DeviceColor.SPACE_GRAY: "Space gray",
    DeviceColor.DARK_BLUE: "Dark blue",
    DeviceColor.LIGHT_BLUE: "Light blue",
    DeviceColor.YELLOW: "Yellow",
    ConnectionState.DISCONNECTED: "Disconnected",
    ConnectionState.IDLE: "Idle",
    ConnectionState.MUSIC: "Playing music",
    ConnectionState.CALL: "On a call",
    ConnectionState.RINGING: "Ringing",
    ConnectionState.HANGING_UP: "Hanging up",
}


class LabelResolver(Protocol):
    """Anything that can turn an enum variant into display text."""

    def label(self, variant: Enum) -> str:
        ...


class EnglishLabels:
    """Default English catalog, with optional per-variant overrides.

    Usage:
        labels = EnglishLabels({DeviceColor.GRAY: "Graphite"})
        labels.label(state.device_color)
    """

    def __init__(self, overrides: Optional[Mapping[Enum, str]] = None) -> None:
        self._labels = dict(_ENGLISH)
        if overrides:
            self._labels.update(overrides)

    def label(self, variant: Enum) -> str:
        return self._labels.get(variant, UNKNOWN_LABEL)


def format_battery(level: Optional[float], unknown: str = UNKNOWN_LABEL) -> str:
    """Render a battery fraction as a whole percentage, e.g. ``"50%"``."""
    if level is None:
        return unknown
    return f"{round(level * 100)}%"
