"""
Modelos de datos para la importación de productos.

Define el contrato común entre el parser de nombres de archivo,
la capa de base de datos y los reportes.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

# Estados posibles de un producto tras la importación
STATUS_CREATED = "created"
STATUS_UPDATED = "updated"
STATUS_SKIPPED = "skipped"
STATUS_ERROR = "error"

# Campos de ParsedProduct que no son columnas de la tabla products
NON_RECORD_FIELDS = ("gallery", "size_code", "raw_filename")


@dataclass
class ParsedMetadata:
    """Metadatos extraídos de un nombre de archivo."""

    base_name: str
    size_code: Optional[str]
    price: Optional[float]
    extension: str
    main_category: str
    sub_category: str
    brand: Optional[str]
    shape: Optional[str]
    material: Optional[str]
    chocolate_type: Optional[str]
    tags: List[str] = field(default_factory=list)
    is_gift_box: bool = False
    is_premium: bool = False


@dataclass
class ParsedProduct:
    """
    Producto listo para insertar en el catálogo.

    Todos los campos opcionales del dominio chocolate están presentes
    aunque sean None, para validar siempre contra el mismo esquema.
    """

    name: str
    ref: str
    slug: str
    main_image: str
    gallery: List[str]
    initial_price: float
    dimensions: str
    main_category: str
    sub_category: str
    store: Optional[str]
    is_active: bool = True
    size_code: Optional[str] = None
    raw_filename: str = ""
    flash_price: Optional[float] = None
    description: Optional[str] = None
    weight: Optional[float] = None
    weight_unit: Optional[str] = None
    quantity: Optional[int] = None
    chocolate_type: Optional[str] = None
    ingredients: List[str] = field(default_factory=list)
    allergens: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)
    stock: Optional[int] = None
    sku: Optional[str] = None
    expiration_days: Optional[int] = None
    is_gift_box: bool = False
    is_premium: bool = False
    brand: Optional[str] = None
    material: Optional[str] = None
    shape: Optional[str] = None

    def to_record(self) -> Dict[str, Any]:
        """Columnas de la tabla products (sin galería ni campos del parser)."""
        data = asdict(self)
        for key in NON_RECORD_FIELDS:
            data.pop(key, None)
        return data


@dataclass
class ImportOptions:
    """Opciones de una ejecución de importación."""

    directory: str
    dry_run: bool = False
    category: Optional[str] = None
    update_existing: bool = False
    verbose: bool = False
    image_url_prefix: str = "/Photos avec prix"
    sku_prefix: str = "JDB"


@dataclass
class ImportFailure:
    """Error asociado a un archivo durante la importación."""

    filename: str
    error: str
    timestamp: datetime = field(default_factory=datetime.now)


@dataclass
class ProductSummary:
    """Resultado de la importación de un producto."""

    ref: str
    name: str
    price: float
    category: str
    status: str
    message: Optional[str] = None


@dataclass
class UpsertResult:
    """Acción aplicada a un producto por la capa de base de datos."""

    action: str
    product_id: Any = None
    ref: Optional[str] = None


@dataclass
class ImportResult:
    """Resultado completo de una ejecución."""

    success: bool
    products_created: int
    products_updated: int
    products_skipped: int
    errors: List[ImportFailure] = field(default_factory=list)
    summary: List[ProductSummary] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convierte a diccionario para el reporte JSON."""
        return asdict(self)
