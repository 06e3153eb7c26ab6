"""Unit test configuration.

Unit tests use the in-memory adapters only. Shared fixtures live in
tests/conftest.py.
"""
