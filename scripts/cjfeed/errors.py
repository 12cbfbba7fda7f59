"""
Errores del pipeline de feed.

Solo estos errores llegan al handler HTTP; el resto de irregularidades
se absorben con valores por defecto u omisión.
"""

from __future__ import annotations

from typing import Optional


class FeedError(Exception):
    """Error base del feed."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(FeedError):
    """Falta configuración obligatoria (p. ej. el token de CJ)."""


class UpstreamError(FeedError):
    """La API de CJ respondió con error en una llamada obligatoria."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
