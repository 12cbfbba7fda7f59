"""
Pipeline completo: fetch -> normalización -> XML.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from .fetcher import CjFetcher
from .models import FeedQuery
from .normalizer import normalize_products
from .serializer import build_feed_xml

logger = logging.getLogger(__name__)


def parse_positive_int(value: Any, default: int) -> int:
    """Convierte un parámetro a entero >= 1 o devuelve `default`."""
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


def build_query(
    kw: Optional[str] = None,
    ids: Optional[str] = None,
    page_num: Any = None,
    page_size: Any = None,
) -> FeedQuery:
    """Construye un FeedQuery a partir de parámetros sin validar."""
    return FeedQuery(
        keyword=(kw or "").strip(),
        ids=(ids or "").strip(),
        page_number=parse_positive_int(page_num, FeedQuery.page_number),
        page_size=parse_positive_int(page_size, FeedQuery.page_size),
    )


def generate_feed(
    query: FeedQuery,
    config: Optional[Dict[str, Any]] = None,
    fetcher: Optional[CjFetcher] = None,
    generated_at: Optional[datetime] = None,
) -> str:
    """
    Genera el feed XML para una consulta.

    Args:
        query: Consulta a la API de CJ.
        config: Configuración para crear el fetcher si no se pasa uno.
        fetcher: Fetcher ya configurado.
        generated_at: Momento de generación para el atributo del XML.

    Returns:
        Documento XML del feed.

    Raises:
        ConfigurationError: Si falta el token de CJ.
        UpstreamError: Si falla la búsqueda por keyword.
    """
    if fetcher is None:
        fetcher = CjFetcher(config or {})

    raw_products = fetcher.fetch(query)
    products = normalize_products(raw_products)
    return build_feed_xml(products, generated_at=generated_at)
