"""Shared data-layer infrastructure (Redis)."""
