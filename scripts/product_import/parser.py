"""
Parser de nombres de archivo de imágenes de producto.

Convierte nombres del tipo ``<nombre>[ <talla>]_<precio> MAD.<ext>`` en
metadatos estructurados. Todas las funciones son puras: sin I/O.
"""

from __future__ import annotations

import re
from typing import List, Optional

from .keywords import (
    BRAND_KEYWORDS,
    CATEGORY_MAPPINGS,
    CHOCOLATE_TYPE_RULES,
    COLLECTION_BRAND,
    COMMON_COLOR_WORDS,
    DEFAULT_MAIN_CATEGORY,
    DEFAULT_SUB_CATEGORY,
    GIFT_BOX_KEYWORDS,
    MATERIAL_FALLBACKS,
    MATERIAL_KEYWORDS,
    PREMIUM_KEYWORDS,
    SHAPE_KEYWORDS,
    SIZE_DIMENSIONS,
    TAG_RULES,
)
from .models import ParsedMetadata

SIZE_PATTERN = re.compile(r"\b(TGM|GM|MM|PM)(?:_|\s)", re.IGNORECASE)
PRICE_PATTERN = re.compile(r"[_\s](\d+)\s*MAD", re.IGNORECASE)
EXTENSION_PATTERN = re.compile(r"\.(jpeg|jpg|png)$", re.IGNORECASE)
PRICE_SUFFIX_PATTERN = re.compile(r"[_\s]?\d+\s*MAD.*$", re.IGNORECASE)
TRAILING_SIZE_PATTERN = re.compile(r"\s*(TGM|GM|MM|PM)\s*$", re.IGNORECASE)
TRAILING_SEPARATORS_PATTERN = re.compile(r"[_\s]+$")
CAPITALIZED_WORD_PATTERN = re.compile(r"^[A-Z][a-z]+")

DEFAULT_EXTENSION = "jpeg"


def extract_size_code(filename: str) -> Optional[str]:
    """Extrae la talla (TGM, GM, MM, PM). Solo cuenta la primera."""
    match = SIZE_PATTERN.search(filename)
    return match.group(1).upper() if match else None


def extract_price(filename: str) -> Optional[float]:
    """Extrae el precio: número justo antes de "MAD"."""
    match = PRICE_PATTERN.search(filename)
    return float(match.group(1)) if match else None


def extract_extension(filename: str) -> str:
    match = EXTENSION_PATTERN.search(filename)
    return match.group(1).lower() if match else DEFAULT_EXTENSION


def has_image_extension(filename: str) -> bool:
    return EXTENSION_PATTERN.search(filename) is not None


def clean_product_name(filename: str) -> str:
    """
    Limpia el nombre del producto.

    Quita la extensión, el precio (y todo lo que le sigue), la talla final
    y los separadores finales.
    """
    name = EXTENSION_PATTERN.sub("", filename)
    name = PRICE_SUFFIX_PATTERN.sub("", name, count=1)
    name = TRAILING_SIZE_PATTERN.sub("", name, count=1)
    name = TRAILING_SEPARATORS_PATTERN.sub("", name)
    return name.strip()


def _format_keyword(keyword: str) -> str:
    """'en similicuir' -> 'Similicuir', 'sur pied' -> 'Sur Pied'."""
    keyword = re.sub(r"^en\s+", "", keyword, flags=re.IGNORECASE)
    return " ".join(word[:1].upper() + word[1:] for word in keyword.split(" "))


def _contains_any(text: str, needles) -> bool:
    return any(needle in text for needle in needles)


def detect_main_category(product_name: str) -> str:
    """
    Detecta la categoría principal por el inicio del nombre.

    CATEGORY_MAPPINGS está ordenada con las claves específicas primero
    ("petit plateau" antes de "plateau").
    """
    lower_name = product_name.lower()
    for keyword, category in CATEGORY_MAPPINGS:
        if lower_name.startswith(keyword):
            return category
    return DEFAULT_MAIN_CATEGORY


def detect_sub_category(product_name: str) -> str:
    """
    Detecta la subcategoría (material o estilo).

    Las palabras clave más largas se prueban primero. Si ninguna coincide,
    usa las palabras 3 y 4 del nombre como descripción.
    """
    lower_name = product_name.lower()

    for material in sorted(MATERIAL_KEYWORDS, key=len, reverse=True):
        if material.lower() in lower_name:
            return _format_keyword(material)

    words = product_name.split(" ")
    if len(words) >= 3:
        descriptive = " ".join(words[2:4])
        if descriptive and len(descriptive) > 2:
            return descriptive

    return DEFAULT_SUB_CATEGORY


def detect_brand(product_name: str) -> Optional[str]:
    """Detecta la marca o colección a partir del nombre."""
    if COLLECTION_BRAND.lower() in product_name.lower():
        return COLLECTION_BRAND

    words = product_name.split(" ")
    for word in words:
        clean_word = re.sub(r"[,.]", "", word).lower()
        for brand in BRAND_KEYWORDS:
            if clean_word == brand.lower():
                return brand

    # Última palabra capitalizada que no sea un color común
    last_word = re.sub(r"[,.]", "", words[-1])
    if last_word and CAPITALIZED_WORD_PATTERN.match(last_word):
        if last_word.lower() not in COMMON_COLOR_WORDS:
            return last_word

    return None


def detect_shape(product_name: str) -> Optional[str]:
    lower_name = product_name.lower()
    for shape in SHAPE_KEYWORDS:
        if shape in lower_name:
            return shape[:1].upper() + shape[1:]
    return None


def detect_material(product_name: str) -> Optional[str]:
    """Detecta el material, primero con las palabras "en ...", luego sueltas."""
    lower_name = product_name.lower()

    for material in MATERIAL_KEYWORDS:
        if material.lower() in lower_name:
            return _format_keyword(material)

    for needles, material in MATERIAL_FALLBACKS:
        if _contains_any(lower_name, needles):
            return material

    return None


def detect_chocolate_type(product_name: str) -> Optional[str]:
    lower_name = product_name.lower()
    for needles, chocolate_type in CHOCOLATE_TYPE_RULES:
        if _contains_any(lower_name, needles):
            return chocolate_type
    return None


def detect_tags(product_name: str) -> List[str]:
    """Tags de marketing. Puede haber repetidos ("premium" y "VIP")."""
    lower_name = product_name.lower()
    tags: List[str] = []
    for needles, rule_tags in TAG_RULES:
        if _contains_any(lower_name, needles):
            tags.extend(rule_tags)
    return tags


def detect_is_gift_box(product_name: str) -> bool:
    return _contains_any(product_name.lower(), GIFT_BOX_KEYWORDS)


def detect_is_premium(product_name: str) -> bool:
    return _contains_any(product_name.lower(), PREMIUM_KEYWORDS)


def get_dimensions(size_code: Optional[str]) -> str:
    """Texto de dimensiones para una talla ("Standard" si no hay talla)."""
    if not size_code:
        return "Standard"
    return SIZE_DIMENSIONS.get(size_code, size_code)


def parse_filename(filename: str) -> ParsedMetadata:
    """
    Analiza un nombre de archivo completo.

    Args:
        filename: Nombre del archivo (sin directorio).

    Returns:
        Metadatos extraídos del nombre.
    """
    base_name = clean_product_name(filename)

    return ParsedMetadata(
        base_name=base_name,
        size_code=extract_size_code(filename),
        price=extract_price(filename),
        extension=extract_extension(filename),
        main_category=detect_main_category(base_name),
        sub_category=detect_sub_category(base_name),
        brand=detect_brand(base_name),
        shape=detect_shape(base_name),
        material=detect_material(base_name),
        chocolate_type=detect_chocolate_type(base_name),
        tags=detect_tags(base_name),
        is_gift_box=detect_is_gift_box(base_name),
        is_premium=detect_is_premium(base_name),
    )
