"""Exceptions raised by the congestion tax core."""


class CongestionTaxError(Exception):
    """Base class for all congestion tax errors."""


class TariffConfigurationError(CongestionTaxError):
    """The price table or tax rules are missing, malformed or inconsistent."""


class NoMatchingSegmentError(TariffConfigurationError):
    """No time segment in the price table covers the requested time of day.

    The price table is expected to cover the whole day, so this always
    points at a configuration problem rather than at bad input.
    """

    def __init__(self, time_of_day):
        self.time_of_day = time_of_day
        super().__init__(
            f"No price segment covers {time_of_day}; "
            "the price table must cover all 24 hours"
        )
