"""GnssMonitor: fuses decoded NMEA messages into one current fix.

Receivers report the same solution several ways at once (GGA and RMC for
position, RMC and VTG for velocity, GSA and GGA for HDOP, per-constellation
and combined talkers). The monitor picks one source per quantity:

Position:
    GGA is the high-quality source. Once a GGA has been seen, RMC no longer
    moves the fix; before that, RMC active/void drives it.

Talkers:
    Once any combined-talker (GN) sentence arrives, every non-combined
    sentence is ignored for fusion. This keeps a multi-constellation
    receiver from flip-flopping between its GP and GN solutions.

Datum:
    A DTM naming a different local datum invalidates the current position,
    since coordinates in two datums cannot be compared without re-projection.

Notifications:
    ``on_location_changed`` fires on every accepted new fix, even when the
    coordinates did not move. ``on_location_lost`` fires once, on the
    valid-to-invalid edge.

The monitor is single-writer: ``on_message`` must be called from one thread
at a time. Callbacks run synchronously on that thread.
"""

import dataclasses
import math
from collections.abc import Callable, Mapping
from enum import Enum
from types import MappingProxyType

from gnssfix.gnss.types import FixState
from gnssfix.nmea.accuracy import Gst
from gnssfix.nmea.navigation import Vtg
from gnssfix.nmea.position import Gga, Rmc
from gnssfix.nmea.reference import Dtm
from gnssfix.nmea.satellites import Gsa, Gsv, SatelliteVehicle
from gnssfix.nmea.talker import Talker
from gnssfix.nmea.types import FixQuality, NmeaMessage
from gnssfix.nmea.vendor import Pgrme

__all__ = ["GnssMonitor"]

_DEFAULT_DATUM = "W84"

_DATUM_NAMES = {
    "W84": "WGS84",
    "W72": "WGS72",
    "S85": "SGS85",
    "P90": "PE90",
}

_KNOTS_TO_METERS_PER_SECOND = 0.514444

FixCallback = Callable[[FixState], None]


class _Transition(Enum):
    NONE = 0
    NEW_FIX = 1
    LOST_FIX = 2


def _first_known(*values: float) -> float:
    for value in values:
        if not math.isnan(value):
            return value
    return math.nan


class GnssMonitor:
    """Maintains the best current fix from a stream of decoded messages.

    Usage::

        monitor = GnssMonitor(on_location_changed=print)
        with NmeaReader(host, port) as reader:
            for message in reader:
                monitor.on_message(message)

    Args:
        on_location_changed: Called with a snapshot of the state after every
            accepted new fix.
        on_location_lost: Called with a snapshot of the state when a valid
            fix becomes invalid.
    """

    def __init__(
        self,
        on_location_changed: FixCallback | None = None,
        on_location_lost: FixCallback | None = None,
    ) -> None:
        self.on_location_changed = on_location_changed
        self.on_location_lost = on_location_lost

        self._state = FixState()
        self._messages: dict[str, NmeaMessage] = {}
        self._gsv_cycles: dict[str, dict[int, Gsv]] = {}

        self._uses_combined_talker_only = False
        self._has_position_fix_sentence = False

        # Position is staged here and committed to the state on a new fix
        self._pending_latitude = math.nan
        self._pending_longitude = math.nan

        self._datum_code = _DEFAULT_DATUM
        self._gga: Gga | None = None
        self._rmc: Rmc | None = None
        self._vtg: Vtg | None = None
        self._gsa: Gsa | None = None

    # --- message intake -------------------------------------------------------

    def on_message(self, message: NmeaMessage) -> None:
        """Record one decoded message and update the fix from it."""
        self._record(message)

        if message.talker is Talker.COMBINED:
            self._uses_combined_talker_only = True
        elif self._uses_combined_talker_only:
            return

        transition = self._apply(message)
        self._resolve(transition)

    def _record(self, message: NmeaMessage) -> None:
        self._messages[message.code] = message
        if isinstance(message, Gsv):
            self._record_gsv_page(message)

    def _record_gsv_page(self, page: Gsv) -> None:
        """Keep the pages of the current GSV cycle for ``page.code``.

        Page 1 or a changed page total starts a new cycle. So does a page
        number that does not follow the kept pages, which happens when the
        first page of a report was lost.
        """
        cycle = self._gsv_cycles.get(page.code)
        if (
            cycle is None
            or page.message_number == 1
            or any(kept.total_messages != page.total_messages for kept in cycle.values())
            or page.message_number <= max(cycle)
        ):
            cycle = {}
            self._gsv_cycles[page.code] = cycle
        cycle[page.message_number] = page

    def _apply(self, message: NmeaMessage) -> _Transition:
        if isinstance(message, Gst):
            self._state.horizontal_error = round(
                math.sqrt(
                    message.sigma_latitude_error**2 + message.sigma_longitude_error**2
                ),
                3,
            )
            self._state.vertical_error = message.sigma_height_error
        elif isinstance(message, Pgrme):
            self._state.horizontal_error = message.horizontal_error
            self._state.vertical_error = message.vertical_error
        elif isinstance(message, Rmc):
            return self._apply_rmc(message)
        elif isinstance(message, Vtg):
            self._vtg = message
        elif isinstance(message, Dtm):
            self._apply_dtm(message)
        elif isinstance(message, Gga):
            return self._apply_gga(message)
        elif isinstance(message, Gsa):
            self._gsa = message
        return _Transition.NONE

    def _apply_rmc(self, rmc: Rmc) -> _Transition:
        self._rmc = rmc
        if self._has_position_fix_sentence:
            return _Transition.NONE
        if not rmc.active:
            return _Transition.LOST_FIX

        self._pending_latitude = rmc.latitude
        self._pending_longitude = rmc.longitude
        if rmc.fix_time is not None:
            self._state.fix_time = rmc.fix_time.time()
        return _Transition.NEW_FIX

    def _apply_dtm(self, dtm: Dtm) -> None:
        if dtm.local_datum == self._datum_code:
            return
        self._datum_code = dtm.local_datum
        self._state.latitude = math.nan
        self._state.longitude = math.nan
        self._pending_latitude = math.nan
        self._pending_longitude = math.nan
        self._state.is_valid = False

    def _apply_gga(self, gga: Gga) -> _Transition:
        self._gga = gga
        self._has_position_fix_sentence = True

        self._pending_latitude = gga.latitude
        self._pending_longitude = gga.longitude
        self._state.fix_time = gga.fix_time
        if gga.quality is not FixQuality.INVALID:
            self._state.geoid_height = gga.geoid_separation
            # GGA altitude is above MSL; the fix reports ellipsoidal height
            self._state.altitude = gga.altitude + gga.geoid_separation

        if gga.quality in (FixQuality.INVALID, FixQuality.ESTIMATED):
            return _Transition.LOST_FIX
        return _Transition.NEW_FIX

    def _resolve(self, transition: _Transition) -> None:
        if transition is _Transition.LOST_FIX:
            if not self._state.is_valid:
                return
            self._state.is_valid = False
            if self.on_location_lost is not None:
                self.on_location_lost(self.state)
        elif transition is _Transition.NEW_FIX:
            self._state.is_valid = True
            self._state.latitude = self._pending_latitude
            self._state.longitude = self._pending_longitude
            if self.on_location_changed is not None:
                self.on_location_changed(self.state)

    # --- derived accessors ----------------------------------------------------

    @property
    def state(self) -> FixState:
        """A copy of the current fix state."""
        return dataclasses.replace(self._state)

    @property
    def is_valid(self) -> bool:
        return self._state.is_valid

    @property
    def messages(self) -> Mapping[str, NmeaMessage]:
        """Read-only copy of the last message received for each code."""
        return MappingProxyType(dict(self._messages))

    @property
    def uses_combined_talker_only(self) -> bool:
        return self._uses_combined_talker_only

    @property
    def has_position_fix_sentence(self) -> bool:
        return self._has_position_fix_sentence

    @property
    def speed(self) -> float:
        """Speed over ground in knots: RMC first, VTG as fallback."""
        return _first_known(
            self._rmc.speed if self._rmc is not None else math.nan,
            self._vtg.speed_knots if self._vtg is not None else math.nan,
        )

    @property
    def speed_meters_per_second(self) -> float:
        return self.speed * _KNOTS_TO_METERS_PER_SECOND

    @property
    def course(self) -> float:
        """Course over ground in degrees from true north: RMC first, VTG as fallback."""
        return _first_known(
            self._rmc.course if self._rmc is not None else math.nan,
            self._vtg.course_true if self._vtg is not None else math.nan,
        )

    @property
    def hdop(self) -> float:
        """HDOP reported by GGA, or by GSA when GGA left it empty."""
        return _first_known(
            self._gga.hdop if self._gga is not None else math.nan,
            self._gsa.hdop if self._gsa is not None else math.nan,
        )

    @property
    def pdop(self) -> float:
        return self._gsa.pdop if self._gsa is not None else math.nan

    @property
    def vdop(self) -> float:
        return self._gsa.vdop if self._gsa is not None else math.nan

    @property
    def fix_quality(self) -> FixQuality:
        if not self._state.is_valid:
            return FixQuality.INVALID
        if self._gga is not None:
            return self._gga.quality
        return FixQuality.GPS_FIX

    @property
    def datum(self) -> str:
        """Name of the datum positions are reported in, WGS84 by default."""
        return _DATUM_NAMES.get(self._datum_code, self._datum_code)

    @property
    def satellites(self) -> tuple[SatelliteVehicle, ...]:
        """Satellites in the current GSV report of every talker, in page order."""
        return tuple(
            satellite
            for cycle in self._gsv_cycles.values()
            for _, page in sorted(cycle.items())
            for satellite in page.satellites
        )

    @property
    def satellites_in_view(self) -> int:
        """Sum of the satellites-in-view counts of every talker's GSV report."""
        total = 0
        for cycle in self._gsv_cycles.values():
            latest = cycle[max(cycle)]
            total += latest.satellites_in_view
        return total
