"""Contract-test toolkit for public HTTP APIs.

Subpackages:
- ``apicontract.common``: configuration, logging, and metrics.
- ``apicontract.client``: the asynchronous ``ApiClient`` and its records.
- ``apicontract.contract``: validators, expectations, matchers, generators.

Usage:
- Suites create a client with ``client.factory.create_api_client`` and check
  responses with the helpers in ``contract.validators``.
"""

__version__ = "1.0.0"
