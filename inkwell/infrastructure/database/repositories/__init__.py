"""SQLAlchemy-backed repository implementations.

Import the concrete modules directly; this package stays empty so that
domain services can defer the import without creating cycles.
"""
