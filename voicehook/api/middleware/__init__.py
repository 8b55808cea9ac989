"""API middleware."""

from voicehook.api.middleware.context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
