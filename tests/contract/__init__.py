"""Live API contract suites.

These tests call the public APIs over the network and check that responses
keep their agreed shape, status codes, headers, and timing. They are marked
``contract`` and deselected by default; run them with
``python -m scripts.run_contract_tests``.
"""
