"""
API package containing versioned routes.

Each version subpackage (currently only ``v1``) exposes a ``router``
that the application mounts under ``Settings.api_prefix``.
"""
