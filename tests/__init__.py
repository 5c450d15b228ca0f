"""Test suite for authcore.

- unit/: Unit tests - domain logic, state store, handlers and the
  repository over the in-memory provider adapters

Async tests run on pytest-asyncio; no external services are required.
"""
