"""
Left/right resolution for per-pod fields.

The advertisement does not store pod values by left/right position. Each
per-pod field has a "primary" slot, which belongs to the pod currently
hosting the microphone, and a "secondary" slot for the other pod:

    field      primary            secondary
    battery    lower nibble       upper nibble      (pods battery byte)
    in-ear     status bit 1       status bit 3
    charging   bit 0              bit 1             (case byte, upper nibble)

All per-pod derivations go through ``assign_pods`` so the swap is applied
in one place.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from dualpods.battery import decode_battery
from dualpods.bits import is_bit_set, lower_nibble, upper_nibble
from dualpods.enums import MicrophonePod

T = TypeVar("T")

# Status byte bit that is set when the left pod hosts the microphone
MICROPHONE_LEFT_BIT = 5

# Case battery upper-nibble bit for the case itself (not swapped)
CASE_CHARGING_BIT = 2


@dataclass(frozen=True)
class PodPair(Generic[T]):
    """Values for the logical left and right pods."""

    left: T
    right: T


def microphone_pod(status: int) -> MicrophonePod:
    """Return which pod hosts the microphone according to the status byte."""
    if is_bit_set(status, MICROPHONE_LEFT_BIT):
        return MicrophonePod.LEFT
    return MicrophonePod.RIGHT


def assign_pods(mic_pod: MicrophonePod, primary: T, secondary: T) -> PodPair[T]:
    """Map primary/secondary slot values to logical left/right pods."""
    if mic_pod is MicrophonePod.LEFT:
        return PodPair(left=primary, right=secondary)
    return PodPair(left=secondary, right=primary)


def pod_batteries(mic_pod: MicrophonePod, pods_battery: int) -> PodPair[Optional[float]]:
    nibbles = assign_pods(mic_pod, lower_nibble(pods_battery), upper_nibble(pods_battery))
    return PodPair(
        left=decode_battery(nibbles.left, "Left pod"),
        right=decode_battery(nibbles.right, "Right pod"),
    )


def pod_in_ear(mic_pod: MicrophonePod, status: int) -> PodPair[bool]:
    return assign_pods(mic_pod, is_bit_set(status, 1), is_bit_set(status, 3))


def pod_charging(mic_pod: MicrophonePod, case_battery: int) -> PodPair[bool]:
    flags = upper_nibble(case_battery)
    return assign_pods(mic_pod, is_bit_set(flags, 0), is_bit_set(flags, 1))


def case_charging(case_battery: int) -> bool:
    return is_bit_set(upper_nibble(case_battery), CASE_CHARGING_BIT)
