"""
Feed XML de productos de CJdropshipping.

Tres etapas: fetcher (API de CJ), normalizador (formato canónico)
y serializador (XML).
"""

from .errors import ConfigurationError, FeedError, UpstreamError
from .fetcher import CjFetcher
from .feed import build_query, generate_feed
from .models import CanonicalProduct, CanonicalVariant, FeedQuery, RawProduct
from .normalizer import normalize_product, normalize_products
from .serializer import build_error_xml, build_feed_xml

__all__ = [
    "CjFetcher",
    "CanonicalProduct",
    "CanonicalVariant",
    "ConfigurationError",
    "FeedError",
    "FeedQuery",
    "RawProduct",
    "UpstreamError",
    "build_error_xml",
    "build_feed_xml",
    "build_query",
    "generate_feed",
    "normalize_product",
    "normalize_products",
]
