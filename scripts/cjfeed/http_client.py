"""
Cliente HTTP para la API de CJdropshipping.

Capa fina sobre requests con:
- Timeout configurable
- Headers de autenticación fijos por sesión
- Conversión de fallos HTTP, de red y de JSON en UpstreamError
- Logging estructurado

Sin reintentos ni backoff: cada llamada se hace una sola vez.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .errors import UpstreamError

logger = logging.getLogger(__name__)


class HttpClient:
    """Cliente HTTP síncrono, una petición por llamada."""

    DEFAULT_HEADERS = {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }

    def __init__(
        self,
        timeout: int = 30,
        headers: Optional[Dict[str, str]] = None,
        session: Optional[requests.Session] = None,
    ):
        """
        Inicializa el cliente HTTP.

        Args:
            timeout: Timeout por request en segundos.
            headers: Headers adicionales para las peticiones.
            session: Sesión a reutilizar (por defecto, una nueva).
        """
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(self.DEFAULT_HEADERS)
        if headers:
            self.session.headers.update(headers)

    def get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Realiza una petición GET y devuelve el cuerpo JSON.

        Args:
            url: URL a consultar.
            params: Parámetros de query string.

        Returns:
            Cuerpo de la respuesta decodificado.

        Raises:
            UpstreamError: Si la respuesta no es 2xx, falla la red
                o el cuerpo no es JSON.
        """
        logger.debug(f"GET {url} {params or {}}")

        try:
            response = self.session.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as exc:
            raise UpstreamError(f"Error de conexión con CJ: {exc}") from exc

        if not response.ok:
            raise UpstreamError(
                f"Error de la API de CJ: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise UpstreamError(
                f"Respuesta de CJ no es JSON válido: {exc}",
                status_code=response.status_code,
            ) from exc
