"""
SQLegend Test Suite.

This package contains:
- unit/: Unit tests (identifiers, store lifecycle, dispatch, envelopes)
- integration/: Integration tests (real SQLite files, in-process HTTP)
"""
