"""Base model for the tariff data models.

Price tables and tax rules are loaded once and then shared by every
calculation, so all models derived from this base are frozen.
"""

from pydantic import BaseModel, ConfigDict


class BaseDataModel(BaseModel):
    """Base class for all data models.

    Provides common configuration:
    - Immutability (frozen models, hashable where the fields allow it)
    - Unknown fields are rejected
    - Fields can be populated by their JSON alias or their Python name

    Example:
        >>> class Toll(BaseDataModel):
        ...     station: str
        >>> toll = Toll(station="Backa")
        >>> toll.model_dump()
        {'station': 'Backa'}
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        strict=False,
    )
