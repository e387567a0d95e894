"""
BLE scanner module that feeds proximity pairing payloads to the decoder.

Runs an asyncio event loop in a dedicated daemon thread. Filters for
Apple manufacturer data, extracts the proximity pairing message and hands
each decoded state to a callback together with its capture time.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from typing import Callable, Optional

from bleak import BleakScanner
from bleak.backends.device import BLEDevice
from bleak.backends.scanner import AdvertisementData

from dualpods.packet_parser import DecodedDualPodState, MalformedMessageError, decode

logger = logging.getLogger(__name__)

# Apple's Bluetooth SIG company identifier
APPLE_COMPANY_ID = 0x004C

# Proximity Pairing message type in Apple Continuity Protocol
PROXIMITY_PAIRING_TYPE = 0x07

# Seconds to wait before restarting the scanner after an adapter error
ADAPTER_RETRY_DELAY = 10.0

# Seconds to wait after any other scanner failure
ERROR_RETRY_DELAY = 5.0

StateCallback = Callable[[DecodedDualPodState, float], None]


def extract_proximity_payload(data: bytes) -> Optional[bytes]:
    """Return the content of the first Proximity Pairing message in ``data``.

    Apple Continuity Protocol messages are TLV-encoded (type, length,
    value). The returned bytes start at the prefix byte. Returns None if
    there is no complete proximity pairing message.
    """
    i = 0
    while i < len(data) - 1:
        msg_type = data[i]
        msg_len = data[i + 1]
        start = i + 2
        end = start + msg_len
        if msg_type == PROXIMITY_PAIRING_TYPE:
            if end <= len(data):
                return bytes(data[start:end])
            return None
        i = end
    return None


class BLEScanner:
    """Asynchronous BLE scanner that decodes dual-pod advertisements.

    Runs its own asyncio event loop in a background daemon thread so
    the caller's thread is never blocked. ``on_state`` is invoked from
    the scanner thread.
    """

    def __init__(self, on_state: StateCallback) -> None:
        self._on_state = on_state
        self._thread: Optional[threading.Thread] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._scanner: Optional[BleakScanner] = None
        self._running = False
        self.bluetooth_available = True

    # ── Public API ───────────────────────────────────────────────────────

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        """Start scanning in a background thread."""
        if self._running:
            return
        self._running = True
        self._thread = threading.Thread(
            target=self._run_loop,
            name="BLEScanner",
            daemon=True,
        )
        self._thread.start()
        logger.info("BLE scanner thread started")

    def stop(self) -> None:
        """Signal the scanner to stop and wait for the thread to exit."""
        self._running = False
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
        logger.info("BLE scanner thread stopped")

    # ── Background Thread ────────────────────────────────────────────────

    def _run_loop(self) -> None:
        """Entry point for the scanner thread; runs the asyncio loop."""
        self._loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self._loop)
        try:
            self._loop.run_until_complete(self._scan())
        except Exception:
            logger.exception("BLE scanner loop crashed")
            self.bluetooth_available = False
        finally:
            self._loop.close()
            self._running = False

    async def _scan(self) -> None:
        """Continuous BLE scanning with automatic restart on failure."""
        while self._running:
            try:
                self._scanner = BleakScanner(
                    detection_callback=self._on_advertisement,
                )
                logger.info("Starting BLE scan…")
                await self._scanner.start()
                self.bluetooth_available = True

                # Keep scanning until stopped
                while self._running:
                    await asyncio.sleep(0.5)

                await self._scanner.stop()

            except OSError as exc:
                logger.warning(
                    "BLE adapter error: %s, retrying in %.0fs", exc, ADAPTER_RETRY_DELAY
                )
                self.bluetooth_available = False
                await self._sleep_while_running(ADAPTER_RETRY_DELAY)

            except Exception as exc:
                logger.exception("Unexpected BLE error: %s", exc)
                self.bluetooth_available = False
                await self._sleep_while_running(ERROR_RETRY_DELAY)

    async def _sleep_while_running(self, seconds: float) -> None:
        # Sleep in small increments so we can stop quickly
        for _ in range(int(seconds * 10)):
            if not self._running:
                return
            await asyncio.sleep(0.1)

    def _on_advertisement(
        self,
        device: BLEDevice,
        adv_data: AdvertisementData,
    ) -> None:
        """Callback invoked for every BLE advertisement received.

        Filters for Apple proximity pairing messages and forwards the
        decoded state. Payloads that fail to decode are dropped.
        """
        if not self._running:
            return

        if not adv_data.manufacturer_data:
            return

        apple_data = adv_data.manufacturer_data.get(APPLE_COMPANY_ID)
        if apple_data is None:
            return

        payload = extract_proximity_payload(bytes(apple_data))
        if payload is None:
            return

        seen_at = time.monotonic()
        try:
            state = decode(payload)
        except MalformedMessageError as exc:
            logger.debug("Dropping advertisement from %s: %s", device.address, exc)
            return

        logger.debug(
            "%s from %s | L:%s R:%s C:%s",
            state.model,
            device.address,
            state.left_battery,
            state.right_battery,
            state.case_battery,
        )
        try:
            self._on_state(state, seen_at)
        except Exception:
            logger.exception("State callback error")
