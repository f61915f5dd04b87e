"""Incident reporting backend: models, storage, token checks, validation and request handlers."""

__version__ = "0.1.0"