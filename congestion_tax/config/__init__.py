"""
Configuration module for the congestion tax calculator.
"""
from .settings import (
    CongestionTaxConfig,
    get_config,
    load_config,
    reload_config,
)

__all__ = [
    "CongestionTaxConfig",
    "get_config",
    "load_config",
    "reload_config",
]
