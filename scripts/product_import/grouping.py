"""
Lectura del directorio de imágenes y agrupación de archivos por producto.

Varios archivos con el mismo nombre limpio, talla y precio son imágenes
del mismo producto: el primero es la imagen principal y el resto la
galería. Dos productos distintos que compartan esos tres datos se
agrupan juntos; no hay otra forma de distinguirlos a partir del nombre.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List

from .parser import clean_product_name, extract_price, extract_size_code, has_image_extension

logger = logging.getLogger(__name__)


def read_image_files(directory: str) -> List[str]:
    """
    Lista los archivos de imagen (jpeg, jpg, png) de un directorio.

    Raises:
        FileNotFoundError: Si el directorio no existe.
    """
    path = Path(directory)
    if not path.is_dir():
        raise FileNotFoundError(f"Directorio no encontrado: {directory}")

    files = sorted(
        entry.name
        for entry in path.iterdir()
        if entry.is_file() and has_image_extension(entry.name)
    )
    logger.debug(f"{len(files)} imágenes en {directory}")
    return files


def product_group_key(filename: str) -> str:
    """Clave de grupo: ``{nombre}_{talla}_{precio}``."""
    base_name = clean_product_name(filename)
    size_code = extract_size_code(filename)
    price = extract_price(filename)
    price_text = _format_key_price(price)
    return f"{base_name}_{size_code or 'None'}_{price_text}"


def _format_key_price(price) -> str:
    if price is None:
        return "None"
    if float(price).is_integer():
        return str(int(price))
    return str(price)


def group_files_by_product(filenames: List[str]) -> Dict[str, List[str]]:
    """
    Agrupa archivos por producto conservando el orden de entrada.

    Args:
        filenames: Nombres de archivo en orden de descubrimiento.

    Returns:
        Diccionario clave de grupo -> archivos del grupo.
    """
    groups: Dict[str, List[str]] = {}
    for filename in filenames:
        groups.setdefault(product_group_key(filename), []).append(filename)
    return groups
