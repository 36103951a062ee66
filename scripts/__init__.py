"""Operational scripts for the contract suite.

- ``run_contract_tests.py``: run the live contract suites against the public APIs.
"""
