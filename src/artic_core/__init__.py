"""Core logic for the artwork catalog table: API client, page fetching and selection."""

__version__ = "0.1.0"
