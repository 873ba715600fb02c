"""
Módulo de importación de productos a partir de nombres de archivo.

Las imágenes del catálogo llevan en el nombre los datos del producto
(nombre, talla y precio); este módulo los extrae y los escribe en el
catálogo de forma idempotente.
"""

from .models import ImportOptions, ImportResult, ParsedMetadata, ParsedProduct
from .parser import parse_filename
from .identifiers import create_slug, generate_ref
from .grouping import group_files_by_product
from .validators import ProductValidationError, validate_filename, validate_product_data
from .store import CatalogStore
from .ingest import import_products, upsert_product
from .pipeline import run_import

__all__ = [
    "ImportOptions",
    "ImportResult",
    "ParsedMetadata",
    "ParsedProduct",
    "parse_filename",
    "create_slug",
    "generate_ref",
    "group_files_by_product",
    "ProductValidationError",
    "validate_filename",
    "validate_product_data",
    "CatalogStore",
    "import_products",
    "upsert_product",
    "run_import",
]
