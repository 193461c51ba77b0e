"""
Application package initializer.

This package contains the entrypoint for the API and its submodules.
The code is split into small layers: ``core`` (configuration, logging,
errors, formatting and the in‑memory repository), ``models`` (stored
entities), ``schemas`` (wire payloads), ``services`` (business logic)
and ``api`` (HTTP routes).
"""

from .main import app  # noqa: F401
