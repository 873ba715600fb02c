"""
Generación de referencias y slugs únicos para el catálogo.
"""

from __future__ import annotations

import math
import re
import unicodedata
from typing import AbstractSet, Optional

MAX_SLUG_LENGTH = 100


def create_slug(text: str) -> str:
    """
    Crea un slug apto para URL.

    Minúsculas, sin acentos, cualquier secuencia no alfanumérica se
    sustituye por un guion.
    """
    text = text.lower()

    # Eliminar acentos
    text = unicodedata.normalize("NFD", text)
    text = "".join(c for c in text if not unicodedata.combining(c))

    text = re.sub(r"[^a-z0-9]+", "-", text)
    text = text.strip("-")
    return re.sub(r"-+", "-", text)


def _truncate_slug(slug: str) -> str:
    return slug[:MAX_SLUG_LENGTH].rstrip("-")


def build_product_slug(base_name: str, size_code: Optional[str]) -> str:
    """Slug del producto: nombre más la talla, para separar tallas."""
    slug_base = f"{base_name} {size_code}".lower() if size_code else base_name
    return _truncate_slug(create_slug(slug_base))


def _slug_price(price: Optional[float]) -> str:
    if not price:
        return ""
    if float(price).is_integer():
        return str(int(price))
    return create_slug(str(price))


def _append_slug_suffix(slug: str, suffix: str) -> str:
    head = slug[:MAX_SLUG_LENGTH - len(suffix) - 1].rstrip("-")
    return f"{head}-{suffix}"


def generate_slug(
    base_name: str,
    size_code: Optional[str],
    price: Optional[float],
    existing_slugs: AbstractSet[str],
) -> str:
    """
    Genera un slug que no está en ``existing_slugs``.

    El primer grupo conserva el slug de nombre y talla; los siguientes
    añaden el precio y, si aún coincide, un contador. Igual que
    ``generate_ref``, no modifica ``existing_slugs``.

    Args:
        base_name: Nombre limpio del producto.
        size_code: Talla o None.
        price: Precio del grupo.
        existing_slugs: Slugs ya asignados en esta ejecución.

    Returns:
        Slug de como máximo MAX_SLUG_LENGTH caracteres.
    """
    slug = build_product_slug(base_name, size_code)
    if slug not in existing_slugs:
        return slug

    price_part = _slug_price(price)
    final_slug = _append_slug_suffix(slug, price_part) if price_part else slug
    counter = 1
    while final_slug in existing_slugs:
        suffix = f"{price_part}-{counter}" if price_part else str(counter)
        final_slug = _append_slug_suffix(slug, suffix)
        counter += 1

    return final_slug


def generate_ref(
    main_category: str,
    brand: Optional[str],
    size_code: Optional[str],
    price: Optional[float],
    existing_refs: AbstractSet[str],
) -> str:
    """
    Genera una referencia única ``CAT-MAR-TALLA-PRECIO[-N]``.

    No modifica ``existing_refs``: el llamador debe añadir la referencia
    devuelta a su registro antes de generar la siguiente.

    Args:
        main_category: Categoría principal.
        brand: Marca detectada o None ("GEN").
        size_code: Talla o None ("STD").
        price: Precio o None ("0000").
        existing_refs: Referencias ya en uso.

    Returns:
        Referencia que no está en ``existing_refs``.
    """
    category_part = main_category[:3].upper()
    brand_part = brand[:3].upper() if brand else "GEN"
    size_part = size_code or "STD"
    price_part = str(math.floor(price)).zfill(4)[-4:] if price else "0000"

    ref = f"{category_part}-{brand_part}-{size_part}-{price_part}"

    final_ref = ref
    counter = 1
    while final_ref in existing_refs:
        final_ref = f"{ref}-{counter}"
        counter += 1

    return final_ref
