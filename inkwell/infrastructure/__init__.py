"""Adapters for the database, blob storage and identity providers."""
