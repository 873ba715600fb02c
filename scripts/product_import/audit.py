"""
Análisis de solo lectura de archivos y catálogo.

Detecta conflictos de referencia o slug, duplicados en el catálogo y
productos de los archivos que aún no están importados.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .grouping import group_files_by_product
from .identifiers import build_product_slug, generate_ref, generate_slug
from .parser import clean_product_name, extract_price, extract_size_code, parse_filename

logger = logging.getLogger(__name__)


@dataclass
class FileAnalysis:
    """Estadísticas de agrupación de un directorio."""

    total_files: int
    groups: int
    single_image: List[str] = field(default_factory=list)
    multi_image: List[Dict[str, Any]] = field(default_factory=list)
    ungrouped: List[str] = field(default_factory=list)


@dataclass
class MissingProduct:
    """Grupo de archivos sin producto en el catálogo."""

    file: str
    slug: str
    name: str
    possible_ref: Optional[str] = None


def analyze_files(files: List[str]) -> FileAnalysis:
    groups = group_files_by_product(files)
    analysis = FileAnalysis(total_files=len(files), groups=len(groups))

    grouped = set()
    for group_files in groups.values():
        grouped.update(group_files)
        if len(group_files) > 1:
            analysis.multi_image.append(
                {
                    "name": clean_product_name(group_files[0]),
                    "count": len(group_files),
                    "files": group_files,
                }
            )
        else:
            analysis.single_image.append(group_files[0])

    analysis.ungrouped = [f for f in files if f not in grouped]
    return analysis


def _collisions(mapping: Dict[str, List[str]]) -> Dict[str, List[str]]:
    return {key: values for key, values in mapping.items() if len(values) > 1}


def find_conflicts(files: List[str]) -> Dict[str, Dict[str, List[str]]]:
    """
    Referencias y slugs que coinciden entre grupos distintos.

    Las referencias se calculan sin registro previo, es decir antes de
    añadir el sufijo numérico.

    Returns:
        ``{"refs": {ref: [archivos]}, "slugs": {slug: [archivos]}}``
    """
    ref_map: Dict[str, List[str]] = {}
    slug_map: Dict[str, List[str]] = {}

    for group_files in group_files_by_product(files).values():
        first_file = group_files[0]
        metadata = parse_filename(first_file)
        ref = generate_ref(
            metadata.main_category,
            metadata.brand,
            metadata.size_code,
            metadata.price,
            set(),
        )
        slug = build_product_slug(metadata.base_name, metadata.size_code)
        ref_map.setdefault(ref, []).append(first_file)
        slug_map.setdefault(slug, []).append(first_file)

    return {"refs": _collisions(ref_map), "slugs": _collisions(slug_map)}


def find_duplicates(records: List[Dict[str, Any]]) -> Dict[str, Dict[str, List[Dict[str, Any]]]]:
    """
    Referencias y slugs repetidos en los productos almacenados.

    Returns:
        ``{"refs": {ref: [productos]}, "slugs": {slug: [productos]}}``
    """
    by_ref: Dict[str, List[Dict[str, Any]]] = {}
    by_slug: Dict[str, List[Dict[str, Any]]] = {}
    for record in records:
        by_ref.setdefault(record["ref"], []).append(record)
        by_slug.setdefault(record["slug"], []).append(record)
    return {"refs": _collisions(by_ref), "slugs": _collisions(by_slug)}


def _match_by_name(name: str, records: List[Dict[str, Any]]) -> Optional[str]:
    lower_name = name.lower()
    for record in records:
        record_name = (record.get("name") or "").lower()
        if not record_name:
            continue
        if record_name == lower_name or lower_name in record_name or record_name in lower_name:
            return record["ref"]
    return None


def compare_files_with_catalog(
    files: List[str],
    records: List[Dict[str, Any]],
) -> Dict[str, Any]:
    """
    Compara los grupos de archivos con el catálogo por slug.

    Returns:
        ``{"found": [slugs], "missing": [MissingProduct], "groups": n}``
    """
    slugs = {record["slug"] for record in records}
    found: List[str] = []
    missing: List[MissingProduct] = []
    claimed_slugs = set()

    groups = group_files_by_product(files)
    for group_files in groups.values():
        first_file = group_files[0]
        base_name = clean_product_name(first_file)
        slug = generate_slug(
            base_name,
            extract_size_code(first_file),
            extract_price(first_file),
            claimed_slugs,
        )
        claimed_slugs.add(slug)

        if slug in slugs:
            found.append(slug)
        else:
            missing.append(
                MissingProduct(
                    file=first_file,
                    slug=slug,
                    name=base_name,
                    possible_ref=_match_by_name(base_name, records),
                )
            )

    return {"found": found, "missing": missing, "groups": len(groups)}


def category_overview(
    categories: List[Dict[str, Any]],
    products: List[Dict[str, Any]],
    sample_size: int = 5,
) -> List[Dict[str, Any]]:
    """
    Categorías con subcategorías, número de productos y algunos nombres.

    Incluye las categorías usadas por productos aunque falten en la
    tabla de categorías.
    """
    by_category: Dict[str, List[str]] = {}
    for product in sorted(products, key=lambda p: (p["main_category"], p["name"])):
        by_category.setdefault(product["main_category"], []).append(product["name"])

    subcategories = {c["name"]: list(c["subcategories"]) for c in categories}
    names = sorted(set(subcategories) | set(by_category))

    return [
        {
            "name": name,
            "subcategories": subcategories.get(name, []),
            "count": len(by_category.get(name, [])),
            "sample": by_category.get(name, [])[:sample_size],
        }
        for name in names
    ]
