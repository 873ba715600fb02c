"""
Módulo de ingesta al catálogo.

Crea, actualiza u omite productos de forma idempotente, manteniendo la
tabla de categorías. Cada producto se escribe en su propia transacción.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Tuple

from .models import (
    STATUS_CREATED,
    STATUS_ERROR,
    STATUS_SKIPPED,
    STATUS_UPDATED,
    ImportFailure,
    ImportOptions,
    ParsedProduct,
    ProductSummary,
    UpsertResult,
)
from .store import CatalogStore
from .validators import ensure_valid_product

logger = logging.getLogger(__name__)

STATUS_ICONS = {
    STATUS_CREATED: "✓",
    STATUS_UPDATED: "↻",
    STATUS_SKIPPED: "⊘",
    STATUS_ERROR: "✗",
}


def find_existing_product(
    store: CatalogStore,
    ref: str,
    slug: str,
) -> Optional[Dict[str, Any]]:
    """Busca un producto por referencia y, si no existe, por slug."""
    product = store.find_product_by_ref(ref)
    if product is None:
        product = store.find_product_by_slug(slug)
    return product


def with_stored_identity(product: ParsedProduct, existing: Dict[str, Any]) -> ParsedProduct:
    """
    Copia del producto con la referencia y el slug almacenados.

    El SKU se deriva de la referencia, así que se rehace con la almacenada.
    """
    stored_ref = existing["ref"]
    sku = product.sku
    if sku and sku.endswith(product.ref):
        sku = sku[: len(sku) - len(product.ref)] + stored_ref
    return replace(product, ref=stored_ref, slug=existing["slug"], sku=sku)


def upsert_product(
    store: CatalogStore,
    product: ParsedProduct,
    update_existing: bool = False,
) -> UpsertResult:
    """
    Crea o actualiza un producto dentro de una transacción.

    La categoría se asegura siempre, también cuando el producto se omite.

    Args:
        store: Almacén del catálogo.
        product: Producto a escribir.
        update_existing: Si True, actualiza los productos existentes.

    Returns:
        Acción aplicada (created, updated, skipped) e ID del producto.

    Raises:
        ProductValidationError: Si el producto no es válido.
    """
    ensure_valid_product(product)

    with store.transaction():
        store.ensure_category(product.main_category, product.sub_category)

        existing = find_existing_product(store, product.ref, product.slug)

        if existing is None:
            product_id = store.create_product(product)
            return UpsertResult(action=STATUS_CREATED, product_id=product_id, ref=product.ref)

        if update_existing:
            store.update_product(existing["id"], with_stored_identity(product, existing))
            return UpsertResult(action=STATUS_UPDATED, product_id=existing["id"], ref=existing["ref"])

        return UpsertResult(action=STATUS_SKIPPED, product_id=existing["id"], ref=existing["ref"])


def _summary(
    product: ParsedProduct,
    status: str,
    message: Optional[str] = None,
    ref: Optional[str] = None,
) -> ProductSummary:
    return ProductSummary(
        ref=ref or product.ref,
        name=product.name,
        price=product.initial_price,
        category=product.main_category,
        status=status,
        message=message,
    )


def import_products(
    products: List[ParsedProduct],
    options: ImportOptions,
    store: Optional[CatalogStore] = None,
) -> Tuple[List[ProductSummary], List[ImportFailure]]:
    """
    Importa productos uno a uno.

    Un error en un producto no detiene el lote: se registra y se continúa.

    Args:
        products: Productos a importar.
        options: Opciones de importación.
        store: Almacén del catálogo (no se usa en dry-run).

    Returns:
        Tupla (resúmenes por producto, errores).
    """
    summary: List[ProductSummary] = []
    errors: List[ImportFailure] = []

    if not options.dry_run and store is None:
        raise ValueError("Se necesita un almacén del catálogo fuera del modo dry-run")

    for product in products:
        if options.dry_run:
            summary.append(_summary(product, STATUS_CREATED, "[DRY RUN] Would create"))
            continue

        try:
            result = upsert_product(store, product, options.update_existing)
        except Exception as e:
            logger.error(f"Error al importar {product.name} ({product.raw_filename}): {e}")
            errors.append(ImportFailure(filename=product.raw_filename, error=str(e)))
            summary.append(_summary(product, STATUS_ERROR, str(e)))
            continue

        message = "Already exists" if result.action == STATUS_SKIPPED else None
        summary.append(_summary(product, result.action, message, ref=result.ref))

        if options.verbose:
            print(f"{STATUS_ICONS[result.action]} {result.action.upper()}: {product.name}")

    return summary, errors
