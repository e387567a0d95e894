"""
Proximity pairing payload decoder for dual-pod earbuds.

Decodes the vendor-specific payload of a proximity pairing advertisement
(starting at the prefix byte, after the message type and length) into
battery, charging, in-ear, lid, color and connection state.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Union

from dualpods.battery import decode_battery
from dualpods.bits import lower_nibble
from dualpods.enums import ConnectionState, DeviceColor, LidState, MicrophonePod, resolve
from dualpods.pod_roles import (
    case_charging,
    microphone_pod,
    pod_batteries,
    pod_charging,
    pod_in_ear,
)

# Prefix through suffix byte
MIN_MESSAGE_LENGTH = 9

# Any known battery level at or below this fraction counts as low
LOW_BATTERY_THRESHOLD = 0.2

UNKNOWN_MODEL = "Unknown AirPods"

# Recognized dual-pod model IDs (big-endian 16-bit value at bytes 1–2)
KNOWN_MODELS: dict[int, str] = {
    0x0220: "AirPods",
    0x0F20: "AirPods 2",
    0x1320: "AirPods 3",
    0x0E20: "AirPods Pro",
    0x1420: "AirPods Pro 2",
    0x2420: "AirPods Pro 2 (USB-C)",
    0x0320: "Powerbeats 3",
    0x0B20: "Powerbeats Pro",
    0x0520: "BeatsX",
    0x1020: "Beats Flex",
    0x0620: "Beats Solo 3",
    0x0920: "Beats Studio 3",
    0x1120: "Beats Studio Buds",
    0x1720: "Beats Studio Buds+",
    0x1220: "Beats Fit Pro",
}

RawInput = Union[bytes, bytearray, memoryview, Iterable[int]]


class MalformedMessageError(ValueError):
    """Raised when a payload cannot be decoded at all."""


@dataclass(frozen=True)
class RawFields:
    """Named bytes of a proximity pairing payload, by fixed offset."""

    prefix: int
    device_model: int
    status: int
    pods_battery: int
    case_battery: int
    lid_state: int
    device_color: int
    suffix: int

    @classmethod
    def from_bytes(cls, data: bytes) -> RawFields:
        if len(data) < MIN_MESSAGE_LENGTH:
            raise MalformedMessageError(
                f"payload too short: {len(data)} bytes, need {MIN_MESSAGE_LENGTH}"
            )
        return cls(
            prefix=data[0],
            device_model=(data[1] << 8) | data[2],
            status=data[3],
            pods_battery=data[4],
            case_battery=data[5],
            lid_state=data[6],
            device_color=data[7],
            suffix=data[8],
        )


@dataclass(frozen=True)
class DecodedDualPodState:
    """Decoded state of a dual-pod device from a single advertisement."""

    microphone_pod: MicrophonePod
    left_battery: Optional[float]       # 0.0–1.0 or None if unavailable
    right_battery: Optional[float]
    case_battery: Optional[float]
    left_charging: bool
    right_charging: bool
    case_charging: bool
    left_in_ear: bool
    right_in_ear: bool
    lid_state: LidState
    device_color: DeviceColor
    connection_state: ConnectionState
    device_model: int
    model: str
    raw: bytes                          # Payload as received, for diagnostics

    @property
    def raw_hex(self) -> str:
        return self.raw.hex().upper()

    @property
    def is_low_battery(self) -> bool:
        """True if any available battery level is ≤ 20%."""
        for level in (self.left_battery, self.right_battery, self.case_battery):
            if level is not None and level <= LOW_BATTERY_THRESHOLD:
                return True
        return False


def _to_bytes(raw: RawInput) -> bytes:
    if isinstance(raw, bytes):
        return raw
    if isinstance(raw, (int, str)):
        raise MalformedMessageError(f"payload is not a byte sequence: {type(raw).__name__}")
    try:
        return bytes(raw)
    except (TypeError, ValueError) as exc:
        raise MalformedMessageError(f"payload is not a byte sequence: {exc}") from exc


def decode(raw: RawInput) -> DecodedDualPodState:
    """Decode a proximity pairing payload.

    Args:
        raw: Payload bytes starting at the prefix byte. Bytes past the
            suffix are kept in ``raw`` but not interpreted.

    Returns:
        A fully populated, immutable DecodedDualPodState.

    Raises:
        MalformedMessageError: If the payload is shorter than
            MIN_MESSAGE_LENGTH or is not a sequence of byte values.
    """
    data = _to_bytes(raw)
    fields = RawFields.from_bytes(data)

    mic_pod = microphone_pod(fields.status)
    batteries = pod_batteries(mic_pod, fields.pods_battery)
    in_ear = pod_in_ear(mic_pod, fields.status)
    charging = pod_charging(mic_pod, fields.case_battery)

    return DecodedDualPodState(
        microphone_pod=mic_pod,
        left_battery=batteries.left,
        right_battery=batteries.right,
        case_battery=decode_battery(lower_nibble(fields.case_battery), "Case"),
        left_charging=charging.left,
        right_charging=charging.right,
        case_charging=case_charging(fields.case_battery),
        left_in_ear=in_ear.left,
        right_in_ear=in_ear.right,
        lid_state=resolve(LidState, fields.lid_state),
        device_color=resolve(DeviceColor, fields.device_color),
        connection_state=resolve(ConnectionState, fields.suffix),
        device_model=fields.device_model,
        model=KNOWN_MODELS.get(fields.device_model, UNKNOWN_MODEL),
        raw=data,
    )
