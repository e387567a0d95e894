"""
DualPods: console entry point.

Scans for proximity pairing advertisements and prints one line per decoded
device state until interrupted.
"""

from __future__ import annotations

import logging
import os
import signal
import threading
from typing import Optional

from dualpods.ble_scanner import BLEScanner
from dualpods.enums import DeviceColor, LidState, MicrophonePod
from dualpods.labels import EnglishLabels, LabelResolver, format_battery
from dualpods.packet_parser import DecodedDualPodState

# ── Logging Setup ────────────────────────────────────────────────────────
# Minimal logging by default; set DUALPODS_LOG_LEVEL=DEBUG for raw payloads
LOG_LEVEL = os.environ.get("DUALPODS_LOG_LEVEL", "WARNING").upper()


def _resolve_log_level(name: str) -> int:
    """Map a level name to its number, falling back to WARNING."""
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        return logging.WARNING
    return level

logger = logging.getLogger("dualpods")


def describe(state: DecodedDualPodState, labels: LabelResolver) -> str:
    """Summarize a decoded state in a single line of text."""

    def pod(name: str, level: Optional[float], charging: bool, in_ear: bool, has_mic: bool) -> str:
        parts = [f"{name} {format_battery(level)}"]
        if charging:
            parts.append("charging")
        elif in_ear:
            parts.append("in ear")
        if has_mic:
            parts.append("mic")
        return " ".join(parts)

    title = state.model
    if state.device_color is not DeviceColor.UNKNOWN:
        title += f" ({labels.label(state.device_color)})"

    case = f"Case {format_battery(state.case_battery)}"
    if state.case_charging:
        case += " charging"
    if state.lid_state in (LidState.OPEN, LidState.CLOSED):
        case += f" {labels.label(state.lid_state).lower()}"

    left_mic = state.microphone_pod is MicrophonePod.LEFT
    return " | ".join([
        title,
        pod("L", state.left_battery, state.left_charging, state.left_in_ear, left_mic),
        pod("R", state.right_battery, state.right_charging, state.right_in_ear, not left_mic),
        case,
        labels.label(state.connection_state),
    ])


def main() -> None:
    """Run the scanner and print decoded states."""
    logging.basicConfig(
        level=_resolve_log_level(LOG_LEVEL),
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    labels = EnglishLabels()
    stopped = threading.Event()

    def _on_state(state: DecodedDualPodState, seen_at: float) -> None:
        print(describe(state, labels), flush=True)
        logger.debug("raw=%s seen_at=%.3f", state.raw_hex, seen_at)

    scanner = BLEScanner(_on_state)

    # Handle Ctrl+C gracefully
    signal.signal(signal.SIGINT, lambda *_: stopped.set())

    logger.info("DualPods starting…")
    scanner.start()
    adapter_up = True
    try:
        while not stopped.wait(1.0):
            if not scanner.is_running:
                logger.error("BLE scanner exited unexpectedly")
                break
            if scanner.bluetooth_available != adapter_up:
                adapter_up = scanner.bluetooth_available
                if adapter_up:
                    logger.warning("Bluetooth adapter available again")
                else:
                    logger.warning("Bluetooth adapter unavailable, waiting for it to return")
    finally:
        scanner.stop()
        logger.info("DualPods stopped.")


if __name__ == "__main__":
    main()
