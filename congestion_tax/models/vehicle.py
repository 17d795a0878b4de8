"""Vehicle categories known to the congestion tax rules."""

from enum import Enum


class VehicleType(str, Enum):
    """Closed set of vehicle categories.

    Values are the lowercase tags used in the tax rules file and on the
    command line. Constructing a VehicleType from any other value raises
    ValueError.

    Example:
        >>> VehicleType("car")
        <VehicleType.CAR: 'car'>
    """

    EMERGENCY = "emergency"
    BUS = "bus"
    DIPLOMAT = "diplomat"
    MOTORCYCLE = "motorcycle"
    MILITARY = "military"
    FOREIGN = "foreign"
    CAR = "car"
