"""Pytest fixtures for server module testing."""

from collections.abc import Iterator
from unittest.mock import patch

import pytest

from tests.server.helpers import ControlledNmeaReader


@pytest.fixture(autouse=True)
def nmea_controller() -> Iterator[ControlledNmeaReader]:
    controller = ControlledNmeaReader()
    with patch("server.sensors.NmeaReader", return_value=controller):
        yield controller
    controller.message_queue.put(None)
