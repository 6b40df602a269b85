"""
Top‑level package for the Music Library API.

All functionality lives in submodules under ``app``; import them with
fully qualified names such as ``music_library_api.app.main``.
"""

__all__ = []
