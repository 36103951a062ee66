"""API-contract verification helpers.

Primary components:
- ``validators``: assertion functions over captured responses.
- ``expectations``: declarative expectation records and ``verify``.
- ``matchers``: the ``within_range`` fluent matcher.
- ``generators``: random fixture payloads.
- ``concurrency``: ``run_concurrently`` for request batches.
"""
