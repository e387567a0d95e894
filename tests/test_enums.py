"""
Unit tests for raw byte → enum resolution.
"""

import pytest

from dualpods.enums import ConnectionState, DeviceColor, LidState, resolve


class TestLidState:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (0x31, LidState.OPEN),
            (0x38, LidState.CLOSED),
            (0x01, LidState.NOT_IN_CASE),
            (0xFF, LidState.UNKNOWN),
            (0x00, LidState.UNKNOWN),
        ],
    )
    def test_resolve(self, raw, expected):
        assert resolve(LidState, raw) is expected

    def test_unknown_has_no_raw_value(self):
        assert LidState.UNKNOWN.raw is None
        assert LidState.OPEN.raw == 0x31


class TestDeviceColor:

    def test_pink(self):
        assert resolve(DeviceColor, 0x04) is DeviceColor.PINK

    def test_yellow(self):
        assert resolve(DeviceColor, 0x0C) is DeviceColor.YELLOW

    def test_unrecognized_color(self):
        assert resolve(DeviceColor, 0x7F) is DeviceColor.UNKNOWN

    def test_thirteen_named_colors(self):
        """0x00–0x0c each map to a distinct named color."""
        colors = {DeviceColor.from_raw(raw) for raw in range(0x0D)}
        assert len(colors) == 13
        assert DeviceColor.UNKNOWN not in colors


class TestConnectionState:

    def test_call(self):
        assert resolve(ConnectionState, 0x06) is ConnectionState.CALL

    def test_unmapped_suffix(self):
        assert resolve(ConnectionState, 0x02) is ConnectionState.UNKNOWN

    def test_never_raises(self):
        """Every byte value resolves to some member."""
        for raw in range(256):
            assert isinstance(resolve(ConnectionState, raw), ConnectionState)
            assert isinstance(resolve(LidState, raw), LidState)
            assert isinstance(resolve(DeviceColor, raw), DeviceColor)
