"""Tests for the NMEA loop and its configuration."""

import asyncio
import json
import logging
from unittest.mock import MagicMock

import pytest

from gnssfix.gnss import GnssMonitor
from server.broadcaster import add_subscriber, remove_subscriber
from server.sensors import create_fix_monitor, nmea_source_address, run_nmea_loop
from tests.server.helpers import GGA_FIX, GGA_NO_FIX, ControlledNmeaReader


class TestNmeaSourceAddress:
    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("GNSSFIX_NMEA_HOST", raising=False)
        monkeypatch.delenv("GNSSFIX_NMEA_PORT", raising=False)
        assert nmea_source_address() == ("localhost", 10110)

    def test_environment_override(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("GNSSFIX_NMEA_HOST", "receiver.local")
        monkeypatch.setenv("GNSSFIX_NMEA_PORT", "2000")
        assert nmea_source_address() == ("receiver.local", 2000)


class TestRunNmeaLoop:
    def test_feeds_monitor_until_cancelled(self) -> None:
        reader = ControlledNmeaReader()
        monitor = GnssMonitor()
        reader.put_sentence(GGA_FIX)
        reader.cancel()

        run_nmea_loop(reader, monitor)  # type: ignore[arg-type]

        assert monitor.is_valid

    def test_unreachable_source_is_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        reader = MagicMock()
        reader.__enter__.side_effect = ConnectionRefusedError("refused")

        with caplog.at_level(logging.ERROR, logger="server.sensors"):
            run_nmea_loop(reader, GnssMonitor())

        assert "Cannot read from NMEA source" in caplog.text


class TestFixMonitorBroadcast:
    def test_change_and_loss_are_broadcast(self) -> None:
        loop = MagicMock(spec=asyncio.AbstractEventLoop)
        messages: list[str] = []
        loop.call_soon_threadsafe.side_effect = lambda _func, _queue, message: messages.append(
            message
        )
        queue: asyncio.Queue[str] = asyncio.Queue()
        add_subscriber(queue)
        try:
            reader = ControlledNmeaReader()
            reader.put_sentence(GGA_FIX)
            reader.put_sentence(GGA_NO_FIX)
            reader.cancel()
            run_nmea_loop(reader, create_fix_monitor(loop))  # type: ignore[arg-type]
        finally:
            remove_subscriber(queue)

        events = [json.loads(message)["event"] for message in messages]
        assert events == ["changed", "lost"]

    def test_no_subscribers_no_dispatch(self) -> None:
        loop = MagicMock(spec=asyncio.AbstractEventLoop)
        reader = ControlledNmeaReader()
        reader.put_sentence(GGA_FIX)
        reader.cancel()

        run_nmea_loop(reader, create_fix_monitor(loop))  # type: ignore[arg-type]

        loop.call_soon_threadsafe.assert_not_called()
