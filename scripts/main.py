#!/usr/bin/env python3
"""
CLI unificado para importar productos a partir de las imágenes del catálogo.

Uso:
    python main.py init-db                     # Crear tablas
    python main.py import                      # Importar desde el directorio por defecto
    python main.py import --dry-run            # Simular sin escribir
    python main.py import --update             # Actualizar productos existentes
    python main.py import -c Plateaux          # Solo una categoría
    python main.py import-missing              # Importar solo los que faltan

    python main.py analyze                     # Agrupación de archivos
    python main.py conflicts                   # REF/slug repetidos entre archivos
    python main.py duplicates                  # REF/slug repetidos en la base de datos
    python main.py missing                     # Archivos sin producto en la base de datos
    python main.py categories                  # Categorías y productos
    python main.py stats                       # Totales del catálogo

    python main.py prices --file precios.csv   # Precios promocionales desde CSV
    python main.py prices                      # Precios desde la hoja configurada
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from config import get_import_config, get_price_sheet_config
from database import PostgresCatalogStore, close_connection, init_database
from product_import.audit import (
    analyze_files,
    category_overview,
    compare_files_with_catalog,
    find_conflicts,
    find_duplicates,
)
from product_import.grouping import read_image_files
from product_import.http_client import HttpClient
from product_import.models import ImportOptions
from product_import.pipeline import import_missing, run_import
from product_import.prices import apply_price_updates, fetch_price_csv, parse_price_csv
from product_import.reports import print_summary, save_reports

# Configuración de logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)

MAX_LISTED = 10


def build_options(args) -> ImportOptions:
    """Combina la configuración del entorno con los argumentos del CLI."""
    config = get_import_config()
    return ImportOptions(
        directory=args.dir or config["directory"],
        dry_run=getattr(args, "dry_run", False),
        category=getattr(args, "category", None),
        update_existing=getattr(args, "update", False),
        verbose=args.verbose,
        image_url_prefix=config["image_url_prefix"],
        sku_prefix=config["sku_prefix"],
    )


def print_stats(store) -> None:
    stats = store.get_product_stats()
    print("\n📊 Estadísticas de la base de datos:")
    print(f"  Productos totales: {stats['total']}")
    print("  Categorías:")
    for category, count in sorted(stats["by_category"].items()):
        print(f"    - {category}: {count}")
    if stats["by_store"]:
        print("  Tiendas:")
        for store_name, count in sorted(stats["by_store"].items()):
            print(f"    - {store_name}: {count}")


def cmd_init_db(args):
    """Comando: init-db"""
    try:
        if not init_database():
            sys.exit(1)
    finally:
        close_connection()


def cmd_import(args):
    """Comando: import"""
    options = build_options(args)
    if options.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    inicio = datetime.now()
    logger.info("Iniciando importación de productos...")
    logger.info(f"  Directorio: {options.directory}")
    logger.info(f"  Dry run: {'SÍ' if options.dry_run else 'NO'}")
    logger.info(f"  Actualizar existentes: {'SÍ' if options.update_existing else 'NO'}")
    if options.category:
        logger.info(f"  Categoría: {options.category}")

    store = None if options.dry_run else PostgresCatalogStore()
    try:
        result = run_import(options, store)

        print_summary(result)

        if options.dry_run:
            print("\n[DRY RUN] No se ha modificado la base de datos.")
        else:
            reports_dir = args.reports_dir or get_import_config()["reports_dir"]
            for path in save_reports(result, reports_dir):
                print(f"  Reporte: {path}")
            print_stats(store)
    finally:
        if store is not None:
            close_connection()

    duracion = (datetime.now() - inicio).total_seconds()
    logger.info(f"Duración: {duracion:.1f}s")

    if args.fail_on_error and result.errors:
        sys.exit(2)


def cmd_import_missing(args):
    """Comando: import-missing"""
    options = build_options(args)
    store = PostgresCatalogStore()
    try:
        result = import_missing(options, store)
        print_summary(result)
        print_stats(store)
    finally:
        close_connection()


def cmd_analyze(args):
    """Comando: analyze"""
    files = read_image_files(build_options(args).directory)
    analysis = analyze_files(files)

    print("=" * 60)
    print("📊 ANÁLISIS")
    print("=" * 60)
    print(f"Archivos: {analysis.total_files}")
    print(f"Grupos de producto: {analysis.groups}")
    print(f"Productos con 1 imagen: {len(analysis.single_image)}")
    print(f"Productos con varias imágenes: {len(analysis.multi_image)}")

    if analysis.ungrouped:
        print(f"\n⚠ Archivos sin agrupar ({len(analysis.ungrouped)}):")
        for filename in analysis.ungrouped:
            print(f"  - {filename}")

    for product in analysis.multi_image[:MAX_LISTED]:
        print(f"\n  {product['name']} ({product['count']} imágenes):")
        for filename in product["files"]:
            print(f"    - {filename}")
    if len(analysis.multi_image) > MAX_LISTED:
        print(f"\n  ... y {len(analysis.multi_image) - MAX_LISTED} más")


def cmd_conflicts(args):
    """Comando: conflicts"""
    files = read_image_files(build_options(args).directory)
    conflicts = find_conflicts(files)

    for kind, label in (("refs", "REF"), ("slugs", "Slug")):
        items = conflicts[kind]
        if not items:
            print(f"✓ Sin conflictos de {label}")
            continue
        print(f"\n✗ Conflictos de {label} ({len(items)}):")
        for key, filenames in items.items():
            print(f"  {label}: {key} ({len(filenames)} archivos)")
            for filename in filenames:
                print(f"    - {filename}")


def cmd_duplicates(args):
    """Comando: duplicates"""
    store = PostgresCatalogStore()
    try:
        products = store.list_products()
    finally:
        close_connection()

    duplicates = find_duplicates(products)
    print(f"Productos totales: {len(products)}")
    for kind, label in (("refs", "REF"), ("slugs", "Slug")):
        items = duplicates[kind]
        if not items:
            print(f"✓ Sin {label} duplicados")
            continue
        print(f"\n✗ {label} duplicados ({len(items)}):")
        for key, records in items.items():
            print(f"  {label}: {key} ({len(records)} veces)")
            for record in records:
                print(f"    - {record['name']} ({record['ref']}, {record['slug']})")


def cmd_missing(args):
    """Comando: missing"""
    files = read_image_files(build_options(args).directory)
    store = PostgresCatalogStore()
    try:
        products = store.list_products()
    finally:
        close_connection()

    comparison = compare_files_with_catalog(files, products)
    missing = comparison["missing"]

    print(f"Archivos: {len(files)}")
    print(f"Grupos de producto: {comparison['groups']}")
    print(f"Productos en la base de datos: {len(products)}")
    print(f"Encontrados: {len(comparison['found'])}")
    print(f"Faltantes: {len(missing)}")

    for item in missing:
        print(f"\n  📦 {item.name}")
        print(f"     Archivo: {item.file}")
        print(f"     Slug: {item.slug}")
        if item.possible_ref:
            print(f"     ⚠ Posible coincidencia por nombre: {item.possible_ref}")


def cmd_categories(args):
    """Comando: categories"""
    store = PostgresCatalogStore()
    try:
        overview = category_overview(store.list_categories(), store.list_products())
    finally:
        close_connection()

    print("\n📂 Categorías:")
    print("=" * 60)
    for category in overview:
        print(f"\n{category['name']} ({category['count']} productos):")
        print(f"  Subcategorías: {', '.join(category['subcategories']) or 'Ninguna'}")
        for name in category["sample"]:
            print(f"  - {name}")
        if category["count"] > len(category["sample"]):
            print(f"  ... y {category['count'] - len(category['sample'])} más")


def cmd_stats(args):
    """Comando: stats"""
    store = PostgresCatalogStore()
    try:
        print_stats(store)
    finally:
        close_connection()


def cmd_prices(args):
    """Comando: prices"""
    if args.file:
        text = Path(args.file).read_text(encoding="utf-8")
    else:
        config = get_price_sheet_config()
        sheet_id = args.sheet_id or config["sheet_id"]
        if not sheet_id:
            print("Error: indica --file o configura PRICE_SHEET_ID")
            sys.exit(1)
        text = fetch_price_csv(sheet_id, HttpClient(timeout=config["timeout"]))

    updates = parse_price_csv(text)
    logger.info(f"{len(updates)} precios leídos")

    store = PostgresCatalogStore()
    try:
        stats = apply_price_updates(store, updates)
    finally:
        close_connection()

    print(f"\nPrecios actualizados: {stats['updated']}")
    print(f"Referencias no encontradas: {stats['not_found']}")
    print(f"Total procesado: {stats['total_processed']}")


def add_directory_arguments(parser):
    parser.add_argument(
        "--dir", "--directory",
        dest="dir",
        help="Directorio con las imágenes de producto",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Mostrar información detallada",
    )


def main():
    """Punto de entrada del CLI."""
    parser = argparse.ArgumentParser(
        description="Importación de productos del catálogo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Comandos disponibles")

    init_parser = subparsers.add_parser("init-db", help="Crear el esquema de la base de datos")
    init_parser.set_defaults(func=cmd_init_db)

    # Comando: import
    import_parser = subparsers.add_parser("import", help="Importar productos")
    add_directory_arguments(import_parser)
    import_parser.add_argument(
        "-d", "--dry-run",
        action="store_true",
        help="Simular la importación sin escribir en la base de datos",
    )
    import_parser.add_argument(
        "-c", "--category",
        help="Importar solo una categoría principal (ej: Plateaux)",
    )
    import_parser.add_argument(
        "-u", "--update",
        action="store_true",
        help="Actualizar los productos existentes en lugar de omitirlos",
    )
    import_parser.add_argument(
        "--reports-dir",
        help="Directorio de los reportes CSV/TXT/JSON",
    )
    import_parser.add_argument(
        "--fail-on-error",
        action="store_true",
        help="Terminar con código 2 si algún producto falla",
    )
    import_parser.set_defaults(func=cmd_import)

    missing_import_parser = subparsers.add_parser(
        "import-missing", help="Importar solo los productos que faltan"
    )
    add_directory_arguments(missing_import_parser)
    missing_import_parser.set_defaults(func=cmd_import_missing)

    for name, help_text, func in (
        ("analyze", "Analizar la agrupación de archivos", cmd_analyze),
        ("conflicts", "Buscar REF/slug repetidos entre archivos", cmd_conflicts),
        ("missing", "Archivos sin producto en la base de datos", cmd_missing),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        add_directory_arguments(sub)
        sub.set_defaults(func=func)

    for name, help_text, func in (
        ("duplicates", "Buscar REF/slug duplicados en la base de datos", cmd_duplicates),
        ("categories", "Ver categorías y productos", cmd_categories),
        ("stats", "Ver estadísticas del catálogo", cmd_stats),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.set_defaults(func=func)

    # Comando: prices
    prices_parser = subparsers.add_parser(
        "prices", help="Actualizar precios promocionales por REF"
    )
    prices_parser.add_argument("--file", help="CSV local con product_ref,bf_price")
    prices_parser.add_argument("--sheet-id", help="ID de la hoja de cálculo pública")
    prices_parser.set_defaults(func=cmd_prices)

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        args.func(args)
    except KeyboardInterrupt:
        logger.warning("Proceso interrumpido por el usuario")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
