"""HTTP client adapter for the APIs under test.

Primary components:
- ``api_client``: ``ApiClient``, the asynchronous session every suite uses.
- ``models``: ``RequestDescriptor`` and ``CapturedResponse`` records.
- ``errors``: ``TransportError`` (no response) and ``HttpStatusError``.
- ``observers``: lifecycle hooks for logging and metrics.
- ``factory``: ``create_api_client`` wired from configuration.
"""
