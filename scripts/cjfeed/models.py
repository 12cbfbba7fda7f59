"""
Modelos de datos del feed.

Define el contrato común entre el fetcher, el normalizador y el serializador.
"""

from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List


@dataclass(frozen=True)
class FeedQuery:
    """Parámetros de una petición al catálogo de CJ."""

    keyword: str = ""
    ids: str = ""
    page_number: int = 1
    page_size: int = 50

    def id_list(self) -> List[str]:
        """Separa `ids` por comas, descartando tokens vacíos."""
        return [token.strip() for token in self.ids.split(",") if token.strip()]


@dataclass
class RawProduct:
    """
    Datos crudos de un producto tal como vienen de la API.

    El esquema no está garantizado: los nombres de campo cambian según
    el endpoint y la versión de la API.
    """

    raw_data: Dict[str, Any]

    def get(self, key: str, default: Any = None) -> Any:
        """Acceso conveniente a raw_data."""
        return self.raw_data.get(key, default)


@dataclass(frozen=True)
class CanonicalVariant:
    """Variante normalizada de un producto."""

    id: str
    sku: str
    price: float
    inventory: int
    option1: str = ""
    option2: str = ""
    option3: str = ""
    image: str = ""


@dataclass(frozen=True)
class CanonicalProduct:
    """
    Producto normalizado - formato que consume el serializador XML.

    Todos los campos tienen siempre un valor concreto.
    """

    id: str
    title: str
    description: str
    vendor: str
    image: str
    price: float
    currency: str
    inventory: int
    sku: str
    variants: List[CanonicalVariant] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario (útil para depuración y tests)."""
        return asdict(self)
