"""Tests for the API contract toolkit.

Top-level modules are offline unit tests of the client, validators,
expectations, and common utilities; they talk to ``httpx.MockTransport``
only. ``tests/contract`` holds the live suites against the public APIs.
"""
