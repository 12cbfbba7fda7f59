"""
API HTTP del feed de CJ.

Expone el feed como XML en GET /api/feed.
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI, Query
from fastapi.responses import Response

from config import get_cj_config

from .feed import build_query, generate_feed
from .serializer import build_error_xml

logger = logging.getLogger(__name__)

XML_MEDIA_TYPE = "application/xml; charset=utf-8"

app = FastAPI(
    title="CJ XML Feed",
    version="1.0.0",
)


def _xml_response(body: str, status_code: int = 200) -> Response:
    return Response(
        content=body.encode("utf-8"),
        status_code=status_code,
        headers={"Content-Type": XML_MEDIA_TYPE},
    )


@app.get("/health")
def health():
    return {"status": "ok"}


@app.get("/api/feed")
def product_feed(
    kw: Optional[str] = Query(None, description="Palabra clave de búsqueda"),
    ids: Optional[str] = Query(None, description="IDs de producto separados por comas"),
    page_num: Optional[str] = Query(None, alias="pageNum"),
    page_size: Optional[str] = Query(None, alias="pageSize"),
):
    """Devuelve el feed XML; cualquier error se convierte en un XML de error (500)."""
    try:
        query = build_query(kw, ids, page_num, page_size)
        xml = generate_feed(query, config=get_cj_config())
    except Exception as exc:
        logger.exception(f"Error generando el feed: {exc}")
        message = getattr(exc, "message", None) or str(exc)
        return _xml_response(build_error_xml(message), status_code=500)

    return _xml_response(xml)
