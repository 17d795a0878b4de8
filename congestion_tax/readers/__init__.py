"""Readers for loading tariff data."""

from congestion_tax.readers.tariff_reader import TariffReader

__all__ = ["TariffReader"]
