"""Fused fix state maintained by ``GnssMonitor``."""

import math
from dataclasses import dataclass, field
from datetime import time


@dataclass
class FixState:
    """The best current navigation state derived from a sentence stream.

    One ``FixState`` is owned by one ``GnssMonitor`` for its whole lifetime.
    It starts with every quantity unknown and is only overwritten, never
    recreated.

    Attributes:
        is_valid: True while the receiver reports a usable fix.

        latitude: Decimal degrees, positive North. NaN until the first fix
            and after a datum change.

        longitude: Decimal degrees, positive East. NaN until the first fix
            and after a datum change.

        altitude: Ellipsoidal height in meters: the GGA altitude above MSL
            plus the geoid separation.

        geoid_height: Height of the geoid above the ellipsoid in meters.

        horizontal_error: Receiver-estimated 1-sigma horizontal error in
            meters, from GST or Garmin PGRME.

        vertical_error: Receiver-estimated 1-sigma vertical error in meters.

        fix_time: UTC time of day of the last position update, or None.

    Example:
        >>> monitor = GnssMonitor()
        >>> monitor.on_message(parse("$GPGGA,123519,4807.038,N,01131.000,E,1,08,0.9,545.4,M,46.9,M,,*47"))
        >>> monitor.state.altitude
        592.3
    """

    is_valid: bool = False
    latitude: float = field(default=math.nan)
    longitude: float = field(default=math.nan)
    altitude: float = field(default=math.nan)
    geoid_height: float = field(default=math.nan)
    horizontal_error: float = field(default=math.nan)
    vertical_error: float = field(default=math.nan)
    fix_time: time | None = None
