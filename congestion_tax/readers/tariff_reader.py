"""Tariff reader for loading the price table and tax rules from JSON files.

This module reads the two static tables the calculator needs. Both are read
once per reader and cached; the returned models are immutable.

Price table file (list of segments, ordered for first-match lookup):
```
[
  {"id": "1", "start": "06:00:00", "end": "06:29:59", "price": 8},
  {"id": "10", "start": "18:30:00", "end": "05:59:59", "price": 0}
]
```

Tax rules file:
```
{
  "maxDailyCharge": 60,
  "tollFreeDays": {
    "dow": ["Sat", "Sun"],
    "months": ["Jul"],
    "publicHolidays": [{"date": "2021-04-02", "name": "Good Friday"}],
    "publicHolidayEve": 1
  },
  "tollFreeVehicles": ["emergency", "bus"],
  "singleCharge": {"timeThreshold": 60, "type": "highest"}
}
```
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Tuple, Union

from pydantic import ValidationError

from congestion_tax.exceptions import TariffConfigurationError
from congestion_tax.models.tariff import TaxRules, TimeSegment

logger = logging.getLogger(__name__)


class TariffReader:
    """Reader for the congestion tax tariff files.

    Attributes:
        prices_file: Path of the time-of-day price table
        rules_file: Path of the tax rules

    Example:
        >>> reader = TariffReader("congestion_charges.json", "tax_rules.json")
        >>> segments = reader.read_time_segments()
        >>> segments[0].price
        Decimal('8')
    """

    def __init__(self, prices_file: Union[str, Path], rules_file: Union[str, Path]):
        self.prices_file = Path(prices_file)
        self.rules_file = Path(rules_file)

        self._segments_cache: Optional[Tuple[TimeSegment, ...]] = None
        self._rules_cache: Optional[TaxRules] = None

    def read_time_segments(self) -> Tuple[TimeSegment, ...]:
        """Load the price table, keeping file order.

        Returns:
            Tuple of TimeSegment rows

        Raises:
            TariffConfigurationError: If the file is missing, is not a JSON
                list, or a row fails validation
        """
        if self._segments_cache is not None:
            logger.debug("Using cached price table")
            return self._segments_cache

        logger.info(f"Loading price table from {self.prices_file}")
        data = self._load_json(self.prices_file)
        if not isinstance(data, list):
            raise TariffConfigurationError(
                f"Price table {self.prices_file} must contain a JSON list of segments"
            )

        segments = []
        for index, row in enumerate(data):
            try:
                segments.append(TimeSegment.model_validate(row))
            except ValidationError as e:
                logger.error(f"Invalid price segment at index {index}: {e}")
                raise TariffConfigurationError(
                    f"Invalid price segment at index {index} in "
                    f"{self.prices_file}: {e}"
                ) from e

        self._segments_cache = tuple(segments)
        logger.info(f"Loaded {len(segments)} price segment(s)")
        return self._segments_cache

    def read_tax_rules(self) -> TaxRules:
        """Load the tax rules.

        Raises:
            TariffConfigurationError: If the file is missing or invalid
        """
        if self._rules_cache is not None:
            logger.debug("Using cached tax rules")
            return self._rules_cache

        logger.info(f"Loading tax rules from {self.rules_file}")
        data = self._load_json(self.rules_file)
        try:
            rules = TaxRules.model_validate(data)
        except ValidationError as e:
            logger.error(f"Invalid tax rules in {self.rules_file}: {e}")
            raise TariffConfigurationError(
                f"Invalid tax rules in {self.rules_file}: {e}"
            ) from e

        self._rules_cache = rules
        return rules

    def invalidate_cache(self) -> None:
        """Forget cached tables so the next read goes back to the files."""
        logger.info("Invalidating tariff cache")
        self._segments_cache = None
        self._rules_cache = None

    @staticmethod
    def _load_json(path: Path) -> Any:
        try:
            with path.open(encoding="utf-8") as f:
                return json.load(f)
        except FileNotFoundError as e:
            raise TariffConfigurationError(f"Tariff file not found: {path}") from e
        except json.JSONDecodeError as e:
            raise TariffConfigurationError(f"Tariff file {path} is not valid JSON: {e}") from e
        except UnicodeDecodeError as e:
            raise TariffConfigurationError(f"Tariff file {path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise TariffConfigurationError(f"Cannot read tariff file {path}: {e}") from e
