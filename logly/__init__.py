"""Append-only log with in-memory and file-backed stores and an HTTPS JSON API."""

__version__ = "0.1.0"