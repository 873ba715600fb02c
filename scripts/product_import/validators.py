"""
Validación de archivos y productos antes de escribir en el catálogo.
"""

from __future__ import annotations

import logging
from typing import List

from .models import ParsedProduct
from .parser import clean_product_name, extract_price, has_image_extension

logger = logging.getLogger(__name__)

MIN_NAME_LENGTH = 3


class ProductValidationError(ValueError):
    """Producto con datos inválidos: nunca se escribe en el catálogo."""

    def __init__(self, ref: str, errors: List[str]):
        self.ref = ref
        self.errors = errors
        super().__init__(", ".join(errors))


def validate_filename(filename: str) -> List[str]:
    """
    Comprueba que un nombre de archivo tenga los datos obligatorios.

    Returns:
        Lista de errores; vacía si el archivo es válido.
    """
    errors = []

    if not has_image_extension(filename):
        errors.append("Invalid file extension (must be .jpeg, .jpg, or .png)")

    if extract_price(filename) is None:
        errors.append("No price found in filename")

    clean_name = clean_product_name(filename)
    if not clean_name or len(clean_name) < MIN_NAME_LENGTH:
        errors.append("Product name too short or empty")

    return errors


def validate_product_data(product: ParsedProduct) -> List[str]:
    """
    Valida un producto antes de insertarlo o actualizarlo.

    Returns:
        Lista de errores; vacía si el producto es válido.
    """
    errors = []

    if not product.name or len(product.name) < MIN_NAME_LENGTH:
        errors.append("Product name is too short")

    if not product.ref:
        errors.append("Product reference is missing")

    if not product.slug:
        errors.append("Product slug is missing")

    if not product.main_image:
        errors.append("Main image is missing")

    if not product.initial_price or product.initial_price <= 0:
        errors.append("Invalid price")

    if not product.main_category:
        errors.append("Main category is missing")

    if not product.sub_category:
        errors.append("Sub category is missing")

    if product.main_image and product.main_image in product.gallery:
        errors.append("Gallery contains the main image")

    return errors


def ensure_valid_product(product: ParsedProduct) -> None:
    """
    Raises:
        ProductValidationError: Si el producto no pasa la validación.
    """
    errors = validate_product_data(product)
    if errors:
        logger.warning(f"Producto descartado: {product.ref or product.name} - {', '.join(errors)}")
        raise ProductValidationError(product.ref, errors)
