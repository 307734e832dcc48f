"""Shared helpers: DomainError, hashing, store paths."""
