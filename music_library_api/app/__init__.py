"""
Application package initializer.

This package contains the main entrypoint for the API and its
submodules: ``core`` (configuration, logging, store client),
``schemas`` (pydantic models), ``services`` (queries) and
``api/<version>/`` (routers).  Songs are currently the only domain.
"""

from .main import app  # noqa: F401
