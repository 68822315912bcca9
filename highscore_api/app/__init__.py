"""
Application package initializer.

This package contains the entrypoint for the API and its submodules:
``core`` (settings, logging, storage access), ``schemas`` (wire
models), ``services`` (the highscore store) and ``api`` (HTTP routes).
"""

from .main import app  # noqa: F401
