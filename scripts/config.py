"""
Configuración de la API de CJ usando variables de entorno.
"""
import os
from dotenv import load_dotenv

# Cargar variables de entorno desde .env
load_dotenv()

DEFAULT_BASE_URL = "https://developers.cjdropshipping.com/api2.0"
DEFAULT_TIMEOUT = 30


def get_cj_config():
    """
    Obtiene la configuración de CJdropshipping desde variables de entorno.

    El token no tiene valor por defecto: si falta, el fetcher lo rechaza
    antes de hacer ninguna llamada.

    Returns:
        dict: token, base_url y timeout para el cliente HTTP
    """
    return {
        'token': os.getenv('CJ_TOKEN', '').strip(),
        'base_url': os.getenv('CJ_BASE_URL', DEFAULT_BASE_URL).rstrip('/'),
        'timeout': _int_env('CJ_TIMEOUT', DEFAULT_TIMEOUT),
    }


def _int_env(name, default):
    """Lee un entero positivo del entorno o devuelve el valor por defecto."""
    try:
        value = int(os.getenv(name, default))
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default
