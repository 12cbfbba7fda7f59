"""
Fetcher de CJdropshipping.

Obtiene productos crudos de la API de CJ, por palabra clave o por lista de IDs.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from .errors import ConfigurationError, UpstreamError
from .http_client import HttpClient
from .models import FeedQuery, RawProduct

logger = logging.getLogger(__name__)


class CjFetcher:
    """Cliente de lectura del catálogo de CJ."""

    # Rutas de la API (relativas a base_url)
    QUERY_PATH = "/v1/product/query"
    DETAIL_PATH = "/v1/product/detail"
    TOKEN_HEADER = "CJ-Access-Token"

    def __init__(
        self,
        config: Dict[str, Any],
        http_client: Optional[HttpClient] = None,
    ):
        """
        Inicializa el fetcher.

        Args:
            config: Configuración con token, base_url y timeout
                (ver config.get_cj_config).
            http_client: Cliente HTTP a usar. Si no se proporciona,
                        se crea uno con el token como header.

        Raises:
            ConfigurationError: Si no hay token configurado.
        """
        token = (config.get("token") or "").strip()
        if not token:
            raise ConfigurationError(
                "CJ_TOKEN no configurado: define la variable de entorno CJ_TOKEN."
            )

        self.base_url = (config.get("base_url") or "").rstrip("/")
        self.http = http_client or HttpClient(
            timeout=config.get("timeout", 30),
            headers={self.TOKEN_HEADER: token},
        )

    def fetch(self, query: FeedQuery) -> List[RawProduct]:
        """
        Obtiene los productos que pide la consulta.

        Con keyword hace una búsqueda; si no, con ids consulta el detalle
        de cada uno; sin ninguno de los dos no llama a la API.
        """
        if query.keyword:
            return self.search(query.keyword, query.page_number, query.page_size)

        ids = query.id_list()
        if ids:
            return self.details(ids)

        logger.info("Consulta sin keyword ni ids: feed vacío")
        return []

    def search(
        self,
        keyword: str,
        page_number: int = 1,
        page_size: int = 50,
    ) -> List[RawProduct]:
        """
        Busca productos por palabra clave (una sola página).

        Raises:
            UpstreamError: Si la API responde con error.
        """
        url = f"{self.base_url}{self.QUERY_PATH}"
        params = {
            "keyWords": keyword,
            "pageNum": page_number,
            "pageSize": page_size,
        }

        try:
            payload = self.http.get_json(url, params=params)
        except UpstreamError as exc:
            logger.error(f"Búsqueda '{keyword}' fallida: {exc.message}")
            raise

        items = extract_search_list(payload)
        logger.info(f"Productos encontrados para '{keyword}': {len(items)}")
        return [RawProduct(raw_data=item if isinstance(item, dict) else {}) for item in items]

    def details(self, ids: List[str]) -> List[RawProduct]:
        """
        Obtiene el detalle de cada ID, en orden y de uno en uno.

        Los IDs que fallan se omiten sin interrumpir el resto.
        """
        url = f"{self.base_url}{self.DETAIL_PATH}"
        products: List[RawProduct] = []
        skipped = 0

        for product_id in ids:
            try:
                payload = self.http.get_json(url, params={"id": product_id})
            except UpstreamError as exc:
                skipped += 1
                logger.warning(f"Detalle omitido para {product_id}: {exc.message}")
                continue

            data = payload.get("data") if isinstance(payload, dict) else None
            # {} y [] cuentan como producto (sin datos, todo por defecto)
            if data is None or (not data and not isinstance(data, (dict, list))):
                skipped += 1
                logger.warning(f"Detalle sin datos para {product_id}")
                continue

            products.append(RawProduct(raw_data=data if isinstance(data, dict) else {}))

        if skipped > 0:
            logger.info(f"IDs omitidos: {skipped}")

        return products


def extract_search_list(payload: Any) -> List[Any]:
    """
    Extrae la lista de productos de una respuesta de búsqueda.

    Usa `data.list`; si no existe, `data`; si ninguno es una lista, [].
    """
    data = payload.get("data") if isinstance(payload, dict) else None
    items = data.get("list") if isinstance(data, dict) else None
    if not items:
        items = data
    return items if isinstance(items, list) else []
