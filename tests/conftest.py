"""Session-wide test setup."""

from apicontract.common.config import BaseConfig
from apicontract.common.logging import configure_logging
from apicontract.contract.matchers import explain_comparison


def pytest_configure(config):
    """Configure structured logging once per test session."""
    settings = BaseConfig()
    configure_logging(
        "api-contract-tests",
        settings.api_log_level,
        settings.api_log_format,
        environment=settings.api_env,
    )


def pytest_assertrepr_compare(op, left, right):
    """Readable failures for ``assert value == within_range(a, b)``."""
    return explain_comparison(op, left, right)
