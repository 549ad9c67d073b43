"""Repository interfaces and implementations.

This package defines the abstract read-only repositories for races and
sporting events, and their SQLite adapters under
:mod:`catalog.repositories.sqlite`.
"""
