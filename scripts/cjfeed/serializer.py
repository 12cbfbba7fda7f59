"""
Serialización del feed a XML.

Genera un documento completo en memoria, con escapado de entidades,
descripción en CDATA y omisión de campos opcionales vacíos.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime, timezone
from typing import List, Optional, Sequence
from xml.sax.saxutils import escape

from .models import CanonicalProduct, CanonicalVariant

logger = logging.getLogger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="UTF-8"?>'
DEFAULT_ERROR_MESSAGE = "Server error"

# escape() ya cubre & < >
_EXTRA_ENTITIES = {'"': "&quot;"}

# Caracteres fuera de la producción Char de XML 1.0
_INVALID_XML_CHARS = re.compile(
    "[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def _clean_text(value: object) -> str:
    if value is None:
        return ""
    return _INVALID_XML_CHARS.sub("", str(value))


def xml_escape(value: object) -> str:
    """Escapa & < > " y elimina caracteres no válidos en XML 1.0."""
    return escape(_clean_text(value), _EXTRA_ENTITIES)


def cdata(value: object) -> str:
    """
    Envuelve el texto en CDATA.

    Un "]]>" dentro del texto se parte en dos secciones CDATA.
    """
    text = _clean_text(value)
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


def format_price(value: float) -> str:
    """Precio con dos decimales, sin símbolo de moneda."""
    return f"{float(value):.2f}"


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 en UTC con milisegundos y sufijo Z."""
    if moment.tzinfo is not None:
        moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def _variant_lines(variant: CanonicalVariant, product: CanonicalProduct) -> List[str]:
    lines = [
        "      <variant>",
        f"        <id>{xml_escape(variant.id)}</id>",
        f"        <sku>{xml_escape(variant.sku)}</sku>",
        f"        <price>{format_price(variant.price or product.price)}</price>",
        f"        <inventory>{int(variant.inventory or 0)}</inventory>",
    ]
    for tag in ("option1", "option2", "option3", "image"):
        value = getattr(variant, tag)
        if value:
            lines.append(f"        <{tag}>{xml_escape(value)}</{tag}>")
    lines.append("      </variant>")
    return lines


def _product_lines(product: CanonicalProduct) -> List[str]:
    lines = [
        "  <product>",
        f"    <id>{xml_escape(product.id)}</id>",
        f"    <title>{xml_escape(product.title)}</title>",
        f"    <description>{cdata(product.description)}</description>",
        f"    <vendor>{xml_escape(product.vendor)}</vendor>",
        f"    <sku>{xml_escape(product.sku)}</sku>",
        f"    <price>{format_price(product.price)}</price>",
        f"    <currency>{xml_escape(product.currency)}</currency>",
        f"    <inventory>{int(product.inventory)}</inventory>",
        f"    <image>{xml_escape(product.image)}</image>",
    ]
    if product.variants:
        lines.append("    <variants>")
        for variant in product.variants:
            lines.extend(_variant_lines(variant, product))
        lines.append("    </variants>")
    lines.append("  </product>")
    return lines


def build_feed_xml(
    products: Sequence[CanonicalProduct],
    generated_at: Optional[datetime] = None,
) -> str:
    """
    Construye el documento XML del feed.

    Args:
        products: Productos normalizados, en el orden de salida.
        generated_at: Momento de generación (por defecto, ahora en UTC).

    Returns:
        Documento XML completo.
    """
    moment = generated_at or datetime.now(timezone.utc)

    parts = [
        XML_DECLARATION,
        f'<products generated_at="{xml_escape(format_timestamp(moment))}">',
    ]
    for product in products:
        parts.extend(_product_lines(product))
    parts.append("</products>")

    logger.info(f"Feed XML generado con {len(products)} productos")
    return "\n".join(parts)


def build_error_xml(message: Optional[str]) -> str:
    """Documento XML mínimo de error."""
    return f"{XML_DECLARATION}<error>{xml_escape(message or DEFAULT_ERROR_MESSAGE)}</error>"
