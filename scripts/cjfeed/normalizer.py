"""
Normalización de productos de CJ al formato canónico.

Los registros de la API no tienen un esquema fijo: cada atributo puede venir
con varios nombres. Las tablas de alias definen, en orden, qué campos se
consultan; gana el primero con valor.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Mapping, Sequence, Union

from .models import CanonicalProduct, CanonicalVariant, RawProduct

logger = logging.getLogger(__name__)

DEFAULT_VENDOR = "CJdropshipping"
DEFAULT_CURRENCY = "USD"

# Alias por atributo del producto (orden = prioridad)
PRODUCT_ALIASES = {
    "id": ("id", "productId", "sku", "productSku"),
    "title": ("name", "productName", "title"),
    "description": ("description", "productDescription", "productDesc", "sellPoint"),
    "vendor": ("vendorName", "storeName", "brand"),
    "image": ("image", "mainImage", "img"),
    "price": ("sellPrice", "price", "retailPrice", "wholesalePrice"),
    "currency": ("currency",),
    "inventory": ("inventory", "stock", "quantity"),
    "sku": ("productSku", "sku"),
}

# Listas de imágenes que tienen prioridad sobre los campos simples
PRODUCT_IMAGE_LISTS = ("productImages",)

# Campos donde pueden venir las variantes (gana el primero que sea lista)
VARIANT_LIST_FIELDS = ("variants", "variantList")

# Alias por atributo de la variante
VARIANT_ALIASES = {
    "id": ("id", "variantId"),
    "sku": ("sku", "variantSku", "productSku"),
    "price": ("sellPrice", "price", "retailPrice"),
    "inventory": ("inventory", "stock", "quantity"),
    "option1": ("option1", "size", "attribute1", "attributeName", "color"),
    "option2": ("option2", "attribute2", "style"),
    "option3": ("option3", "attribute3"),
    "image": ("image", "img"),
}

VARIANT_IMAGE_LISTS = ("images",)


def first_present(record: Any, keys: Sequence[str], default: Any = None) -> Any:
    """
    Devuelve el primer valor con contenido entre los campos `keys`.

    Valores None, vacíos, cero o False cuentan como ausentes.
    """
    if not isinstance(record, Mapping):
        return default
    for key in keys:
        value = record.get(key)
        if value:
            return value
    return default


def first_list_item(record: Any, keys: Sequence[str]) -> Any:
    """Devuelve el primer elemento de la primera lista no vacía entre `keys`."""
    if not isinstance(record, Mapping):
        return None
    for key in keys:
        value = record.get(key)
        if isinstance(value, list) and value and value[0]:
            return value[0]
    return None


def parse_non_negative_number(value: Any, default: float = 0.0) -> float:
    """
    Convierte un valor a float no negativo.

    Devuelve `default` si el valor falta, no es numérico, es negativo
    o no es finito.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    if math.isnan(number) or math.isinf(number) or number < 0:
        return default
    return number


def parse_non_negative_int(value: Any, default: int = 0) -> int:
    """Como parse_non_negative_number, truncando a entero."""
    number = parse_non_negative_number(value, default=-1.0)
    if number < 0:
        return default
    return int(number)


def to_text(value: Any) -> str:
    """Convierte un valor de la API a string (None -> "")."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def find_variant_records(record: Mapping[str, Any]) -> List[Any]:
    """Devuelve la lista de variantes crudas o [] si no hay ninguna lista."""
    for key in VARIANT_LIST_FIELDS:
        value = record.get(key)
        if isinstance(value, list):
            return value
    return []


def normalize_variant(
    raw: Any,
    index: int,
    product_id: str,
    product_price: float,
    product_image: str,
) -> CanonicalVariant:
    """
    Normaliza una variante.

    Args:
        raw: Variante cruda (cualquier valor que no sea dict cuenta como vacío).
        index: Posición (0-based) de la variante en la lista original.
        product_id: ID del producto, para el ID de respaldo.
        product_price: Precio del producto, usado si la variante no tiene.
        product_image: Imagen del producto, usada si la variante no tiene.
    """
    if not isinstance(raw, Mapping):
        raw = {}

    variant_id = to_text(first_present(raw, VARIANT_ALIASES["id"])) or f"{product_id}-{index + 1}"
    sku = to_text(first_present(raw, VARIANT_ALIASES["sku"])) or variant_id
    price = parse_non_negative_number(
        first_present(raw, VARIANT_ALIASES["price"]), default=product_price
    )
    inventory = parse_non_negative_int(first_present(raw, VARIANT_ALIASES["inventory"]))

    image = (
        first_present(raw, VARIANT_ALIASES["image"])
        or first_list_item(raw, VARIANT_IMAGE_LISTS)
        or product_image
    )

    return CanonicalVariant(
        id=variant_id,
        sku=sku,
        price=price,
        inventory=inventory,
        option1=to_text(first_present(raw, VARIANT_ALIASES["option1"], "")),
        option2=to_text(first_present(raw, VARIANT_ALIASES["option2"], "")),
        option3=to_text(first_present(raw, VARIANT_ALIASES["option3"], "")),
        image=to_text(image),
    )


def normalize_product(raw: Union[RawProduct, Mapping[str, Any], Any]) -> CanonicalProduct:
    """
    Transforma un producto crudo de CJ al formato canónico.

    Nunca lanza excepciones por datos mal formados: cada atributo
    termina en un valor por defecto.

    Args:
        raw: Producto crudo (RawProduct o dict de la API).

    Returns:
        Producto normalizado.
    """
    record = raw.raw_data if isinstance(raw, RawProduct) else raw
    if not isinstance(record, Mapping):
        record = {}

    product_id = to_text(first_present(record, PRODUCT_ALIASES["id"], ""))
    image = to_text(
        first_list_item(record, PRODUCT_IMAGE_LISTS)
        or first_present(record, PRODUCT_ALIASES["image"], "")
    )
    price = parse_non_negative_number(first_present(record, PRODUCT_ALIASES["price"]))
    inventory = parse_non_negative_int(first_present(record, PRODUCT_ALIASES["inventory"]))

    variants = [
        normalize_variant(item, idx, product_id, price, image)
        for idx, item in enumerate(find_variant_records(record))
    ]

    if not inventory and variants:
        inventory = sum(v.inventory for v in variants)
    if not image and variants:
        image = variants[0].image

    sku = to_text(first_present(record, PRODUCT_ALIASES["sku"]))
    if not sku:
        sku = variants[0].sku if variants else product_id

    return CanonicalProduct(
        id=product_id,
        title=to_text(first_present(record, PRODUCT_ALIASES["title"], "")),
        description=to_text(first_present(record, PRODUCT_ALIASES["description"], "")),
        vendor=to_text(first_present(record, PRODUCT_ALIASES["vendor"], DEFAULT_VENDOR)),
        image=image,
        price=price,
        currency=to_text(first_present(record, PRODUCT_ALIASES["currency"], DEFAULT_CURRENCY)),
        inventory=inventory,
        sku=sku,
        variants=variants,
    )


def normalize_products(
    raw_products: Sequence[Union[RawProduct, Mapping[str, Any]]],
) -> List[CanonicalProduct]:
    """
    Normaliza una lista de productos manteniendo el orden.

    Args:
        raw_products: Productos crudos de la API.

    Returns:
        Lista de productos normalizados.
    """
    products = [normalize_product(raw) for raw in raw_products]
    without_id = sum(1 for p in products if not p.id)

    if without_id > 0:
        logger.warning(f"Productos sin ID en la respuesta de CJ: {without_id}")

    return products
