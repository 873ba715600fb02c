"""
Pipeline de importación: directorio -> grupos -> productos -> catálogo.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import List, Optional, Set, Tuple

from .grouping import group_files_by_product, read_image_files
from .identifiers import generate_ref, generate_slug
from .ingest import import_products
from .keywords import DEFAULT_CHOCOLATE_TYPE, ESTIMATED_QUANTITY, ESTIMATED_WEIGHT_GRAMS
from .models import (
    STATUS_CREATED,
    STATUS_SKIPPED,
    STATUS_UPDATED,
    ImportFailure,
    ImportOptions,
    ImportResult,
    ParsedMetadata,
    ParsedProduct,
    ProductSummary,
)
from .parser import get_dimensions, parse_filename
from .store import CatalogStore
from .validators import validate_filename, validate_product_data

logger = logging.getLogger(__name__)

DEFAULT_EXPIRATION_DAYS = 180


def build_description(metadata: ParsedMetadata) -> str:
    description = f"Boîte de chocolats {metadata.base_name.lower()}."
    if metadata.is_gift_box:
        description += " Idéal pour offrir."
    return description


def build_product(
    metadata: ParsedMetadata,
    files: List[str],
    ref: str,
    slug: str,
    image_url_prefix: str = "/Photos avec prix",
    sku_prefix: str = "JDB",
) -> ParsedProduct:
    """
    Construye el producto a partir de los metadatos de su grupo de archivos.

    El primer archivo es la imagen principal; el resto forman la galería
    en el mismo orden.
    """
    prefix = image_url_prefix.rstrip("/")
    main_image = f"{prefix}/{files[0]}"
    gallery = [f"{prefix}/{f}" for f in files[1:]]
    gallery = [path for path in gallery if path != main_image]

    size_code = metadata.size_code

    return ParsedProduct(
        name=metadata.base_name,
        ref=ref,
        slug=slug,
        main_image=main_image,
        gallery=gallery,
        initial_price=metadata.price or 0,
        dimensions=get_dimensions(size_code),
        main_category=metadata.main_category,
        sub_category=metadata.sub_category,
        store=metadata.brand,
        is_active=True,
        size_code=size_code,
        raw_filename=files[0],
        description=build_description(metadata),
        weight=ESTIMATED_WEIGHT_GRAMS.get(size_code) if size_code else None,
        weight_unit="g",
        quantity=ESTIMATED_QUANTITY.get(size_code) if size_code else None,
        chocolate_type=metadata.chocolate_type or DEFAULT_CHOCOLATE_TYPE,
        ingredients=[],
        allergens=[],
        tags=list(metadata.tags),
        stock=0,
        sku=f"{sku_prefix}-{ref}",
        expiration_days=DEFAULT_EXPIRATION_DAYS,
        is_gift_box=metadata.is_gift_box,
        is_premium=metadata.is_premium,
        brand=metadata.brand,
        material=metadata.material,
        shape=metadata.shape,
    )


def process_files(
    files: List[str],
    existing_refs: Set[str],
    options: ImportOptions,
) -> Tuple[List[ParsedProduct], List[ImportFailure]]:
    """
    Agrupa, analiza y valida los archivos.

    Cada referencia generada se añade a ``existing_refs``. Los slugs son
    únicos dentro de la ejecución.

    Args:
        files: Nombres de archivo en orden de descubrimiento.
        existing_refs: Registro de referencias en uso (se modifica).
        options: Opciones de importación.

    Returns:
        Tupla (productos válidos, errores).
    """
    products: List[ParsedProduct] = []
    errors: List[ImportFailure] = []
    claimed_slugs: Set[str] = set()

    for group_files in group_files_by_product(files).values():
        first_file = group_files[0]

        try:
            filename_errors = validate_filename(first_file)
            if filename_errors:
                logger.warning(f"Archivo descartado: {first_file} - {', '.join(filename_errors)}")
                errors.append(ImportFailure(filename=first_file, error=", ".join(filename_errors)))
                continue

            metadata = parse_filename(first_file)

            if options.category and metadata.main_category != options.category:
                continue

            ref = generate_ref(
                metadata.main_category,
                metadata.brand,
                metadata.size_code,
                metadata.price,
                existing_refs,
            )
            existing_refs.add(ref)

            slug = generate_slug(
                metadata.base_name,
                metadata.size_code,
                metadata.price,
                claimed_slugs,
            )
            claimed_slugs.add(slug)

            product = build_product(
                metadata,
                group_files,
                ref,
                slug,
                image_url_prefix=options.image_url_prefix,
                sku_prefix=options.sku_prefix,
            )

            product_errors = validate_product_data(product)
            if product_errors:
                logger.warning(f"Producto descartado: {first_file} - {', '.join(product_errors)}")
                errors.append(ImportFailure(filename=first_file, error=", ".join(product_errors)))
                continue

            products.append(product)

            if options.verbose:
                print(f"✓ Processed: {metadata.base_name} ({ref})")

        except Exception as e:
            logger.error(f"Error al procesar {first_file}: {e}")
            errors.append(ImportFailure(filename=first_file, error=str(e)))

    return products, errors


def build_result(
    summary: List[ProductSummary],
    errors: List[ImportFailure],
) -> ImportResult:
    return ImportResult(
        success=not errors,
        products_created=sum(1 for s in summary if s.status == STATUS_CREATED),
        products_updated=sum(1 for s in summary if s.status == STATUS_UPDATED),
        products_skipped=sum(1 for s in summary if s.status == STATUS_SKIPPED),
        errors=errors,
        summary=summary,
    )


def run_import(
    options: ImportOptions,
    store: Optional[CatalogStore] = None,
) -> ImportResult:
    """
    Ejecuta una importación completa.

    Args:
        options: Opciones de importación.
        store: Almacén del catálogo; puede ser None en dry-run.

    Returns:
        Resultado de la importación.
    """
    logger.info(f"Leyendo archivos de {options.directory}")
    files = read_image_files(options.directory)
    logger.info(f"{len(files)} imágenes encontradas")

    if options.dry_run or store is None:
        existing_refs: Set[str] = set()
    else:
        existing_refs = store.get_all_refs()
    logger.info(f"{len(existing_refs)} referencias existentes")

    products, processing_errors = process_files(files, existing_refs, options)
    logger.info(f"{len(products)} productos procesados, {len(processing_errors)} con errores")

    summary, import_errors = import_products(products, options, store)

    return build_result(summary, processing_errors + import_errors)


def import_missing(
    options: ImportOptions,
    store: CatalogStore,
) -> ImportResult:
    """
    Importa solo los productos cuyo slug no está en el catálogo.

    Nunca actualiza productos existentes.
    """
    files = read_image_files(options.directory)
    existing_slugs = store.get_all_slugs()

    products, errors = process_files(files, store.get_all_refs(), options)
    missing = [p for p in products if p.slug not in existing_slugs]
    logger.info(f"Productos faltantes: {len(missing)} de {len(products)}")

    summary, import_errors = import_products(
        missing,
        replace(options, update_existing=False),
        store,
    )
    return build_result(summary, errors + import_errors)
