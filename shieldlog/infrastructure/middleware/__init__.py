"""Middleware infrastructure."""

from .starlette import InterceptorMiddleware, StarletteRequest, StarletteResponse

__all__ = [
    "InterceptorMiddleware",
    "StarletteRequest",
    "StarletteResponse",
]
