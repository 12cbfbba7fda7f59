#!/usr/bin/env python3
"""
CLI para generar el feed XML de CJdropshipping.

Uso:
    python main.py feed --kw "phone case"          # Buscar por palabra clave
    python main.py feed --ids 123,456 -o feed.xml  # Detalle por IDs a fichero
    python main.py feed --kw lamp --page-size 20 -v

    python main.py serve                           # API HTTP en :8000
    python main.py serve --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

import argparse
import logging
import sys

from config import get_cj_config
from cjfeed import FeedError, build_query, generate_feed

# Configuración de logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def cmd_feed(args):
    """Comando: feed"""
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    query = build_query(args.kw, args.ids, args.page_num, args.page_size)
    logger.info(
        f"Generando feed (kw='{query.keyword}', ids='{query.ids}', "
        f"página {query.page_number}, tamaño {query.page_size})"
    )

    xml = generate_feed(query, config=get_cj_config())

    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(xml)
        logger.info(f"Feed guardado en {args.output}")
    else:
        sys.stdout.write(xml + "\n")


def cmd_serve(args):
    """Comando: serve"""
    import uvicorn

    logger.info(f"Sirviendo feed en http://{args.host}:{args.port}/api/feed")
    uvicorn.run("cjfeed.api:app", host=args.host, port=args.port)


def main():
    """Punto de entrada del CLI."""
    parser = argparse.ArgumentParser(
        description="Feed XML de productos de CJdropshipping",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Comandos disponibles")

    # Comando: feed
    feed_parser = subparsers.add_parser("feed", help="Generar el feed XML")
    source = feed_parser.add_mutually_exclusive_group()
    source.add_argument("--kw", help="Palabra clave de búsqueda")
    source.add_argument("--ids", help="IDs de producto separados por comas")
    feed_parser.add_argument(
        "--page-num",
        type=int,
        default=1,
        metavar="N",
        help="Página de resultados (solo con --kw)",
    )
    feed_parser.add_argument(
        "--page-size",
        type=int,
        default=50,
        metavar="N",
        help="Productos por página (solo con --kw)",
    )
    feed_parser.add_argument(
        "-o", "--output",
        metavar="FICHERO",
        help="Escribir el XML en un fichero en vez de stdout",
    )
    feed_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Mostrar información detallada",
    )
    feed_parser.set_defaults(func=cmd_feed)

    # Comando: serve
    serve_parser = subparsers.add_parser("serve", help="Levantar la API HTTP")
    serve_parser.add_argument("--host", default="127.0.0.1")
    serve_parser.add_argument("--port", type=int, default=8000)
    serve_parser.set_defaults(func=cmd_serve)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except KeyboardInterrupt:
        logger.warning("Proceso interrumpido por el usuario")
        sys.exit(1)
    except FeedError as e:
        logger.error(f"Error: {e.message}")
        sys.exit(1)


if __name__ == "__main__":
    main()
