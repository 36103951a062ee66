"""Common utilities shared across API suites.

Includes:
- ``config``: pydantic-settings configuration for each API under test.
- ``logging``: structured logging setup with structlog.
- ``metrics``: Prometheus request metrics for contract runs.

Import pattern:
- from apicontract.common.config import get_config
- from apicontract.common.logging import configure_logging
"""
