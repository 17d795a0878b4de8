"""
Global pytest configuration and fixtures.
"""
import pytest
from typing import Dict, List

from congestion_tax.calculators.congestion_calculator import CongestionTaxCalculator
from congestion_tax.config import CongestionTaxConfig, reload_config
from congestion_tax.config.logging_config import reset_logging
from congestion_tax.models.tariff import TaxRules, TimeSegment


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        'ENVIRONMENT': 'testing',
        'DEBUG': 'true',
        'LOG_LEVEL': 'WARNING',
        'CURRENCY_SYMBOL': 'kr',
    }


@pytest.fixture
def mock_env(test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)
    monkeypatch.delenv('CONGESTION_PRICES_FILE', raising=False)
    monkeypatch.delenv('CONGESTION_RULES_FILE', raising=False)

    # Clear the global config to force reload with test values
    import congestion_tax.config.settings
    congestion_tax.config.settings._config = None

    yield test_env_vars

    congestion_tax.config.settings._config = None


@pytest.fixture
def test_config(mock_env) -> CongestionTaxConfig:
    """Test configuration instance pointing at the bundled tariff files."""
    return reload_config()


@pytest.fixture
def price_table() -> List[TimeSegment]:
    """Gothenburg time-of-day price table.

    | Time        | Amount |
    | ----------- | :----: |
    | 06:00–06:29 | 8      |
    | 06:30–06:59 | 13     |
    | 07:00–07:59 | 18     |
    | 08:00–08:29 | 13     |
    | 08:30–14:59 | 8      |
    | 15:00–15:29 | 13     |
    | 15:30–16:59 | 18     |
    | 17:00–17:59 | 13     |
    | 18:00–18:29 | 8      |
    | 18:30–05:59 | 0      |
    """
    rows = [
        ('1', '06:00:00', '06:29:59', 8),
        ('2', '06:30:00', '06:59:59', 13),
        ('3', '07:00:00', '07:59:59', 18),
        ('4', '08:00:00', '08:29:59', 13),
        ('5', '08:30:00', '14:59:59', 8),
        ('6', '15:00:00', '15:29:59', 13),
        ('7', '15:30:00', '16:59:59', 18),
        ('8', '17:00:00', '17:59:59', 13),
        ('9', '18:00:00', '18:29:59', 8),
        ('10', '18:30:00', '05:59:59', 0),
    ]
    return [
        TimeSegment(id=segment_id, start=start, end=end, price=price)
        for segment_id, start, end, price in rows
    ]


@pytest.fixture
def tax_rules_data() -> dict:
    """Raw tax rules as they appear in a tariff file."""
    return {
        'maxDailyCharge': 60,
        'tollFreeDays': {
            'description': 'Weekends, July, public holidays and the day before',
            'dow': ['Sat', 'Sun'],
            'months': ['Jul'],
            'publicHolidays': [
                {'date': '2021-04-02', 'name': 'Good Friday'},
                {'date': '2021-04-05', 'name': 'Easter Monday'},
            ],
            'publicHolidayEve': 1,
        },
        'tollFreeVehicles': [
            'emergency', 'bus', 'diplomat', 'motorcycle', 'military', 'foreign'
        ],
        'singleCharge': {'timeThreshold': 60, 'type': 'highest'},
    }


@pytest.fixture
def tax_rules(tax_rules_data) -> TaxRules:
    """Gothenburg tax rules (threshold 60 minutes, daily maximum 60)."""
    return TaxRules.model_validate(tax_rules_data)


@pytest.fixture
def calculator(price_table, tax_rules) -> CongestionTaxCalculator:
    """Calculator over the test price table and rules."""
    return CongestionTaxCalculator.from_tables(price_table, tax_rules)


@pytest.fixture(autouse=True)
def cleanup_logging():
    """Remove handlers installed by tests (e.g. through the CLI)."""
    yield
    reset_logging()


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "cli: mark test as exercising the command-line interface"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        if "tests/unit/cli/" in str(item.fspath):
            item.add_marker(pytest.mark.cli)
