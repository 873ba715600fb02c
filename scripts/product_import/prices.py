"""
Sincronización de precios promocionales (vente flash) por referencia.

Lee un CSV con columnas ``product_ref,bf_price`` desde un archivo local o
desde la exportación CSV de una hoja de cálculo.
"""

from __future__ import annotations

import csv
import io
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from .http_client import HttpClient
from .store import CatalogStore

logger = logging.getLogger(__name__)

SHEET_EXPORT_URLS = (
    "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv&gid=0",
    "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv",
    "https://docs.google.com/spreadsheets/d/{sheet_id}/export?format=csv&gid=0&single=true&output=csv",
)
EXPECTED_COLUMNS = ("product_ref", "bf_price")


class PriceSourceError(RuntimeError):
    """No se pudo obtener el CSV de precios."""


@dataclass
class PriceUpdate:
    ref: str
    price: float


def parse_price_csv(text: str) -> List[PriceUpdate]:
    """
    Parsea el CSV de precios. La primera fila es la cabecera.

    Las filas sin referencia o con precio no numérico se ignoran.
    """
    updates: List[PriceUpdate] = []
    rows = csv.reader(io.StringIO(text))

    next(rows, None)
    for row in rows:
        if len(row) < 2:
            continue
        ref = row[0].strip()
        raw_price = row[1].strip()
        if not ref or not raw_price:
            continue
        try:
            price = float(raw_price)
        except ValueError:
            logger.debug(f"Precio no numérico para {ref}: {raw_price}")
            continue
        updates.append(PriceUpdate(ref=ref, price=price))

    return updates


def looks_like_price_csv(text: str) -> bool:
    """Descarta páginas HTML de error devueltas en lugar del CSV."""
    if any(column in text for column in EXPECTED_COLUMNS):
        return True
    return len(text.split("\n")) > 2


def fetch_price_csv(sheet_id: str, http_client: Optional[HttpClient] = None) -> str:
    """
    Descarga el CSV de la hoja probando las URLs de exportación en orden.

    Raises:
        PriceSourceError: Si ninguna URL devuelve datos CSV.
    """
    client = http_client or HttpClient()

    for template in SHEET_EXPORT_URLS:
        url = template.format(sheet_id=sheet_id)
        text = client.get_text(url)
        if text and looks_like_price_csv(text):
            logger.info(f"CSV de precios descargado desde {url}")
            return text
        logger.warning(f"Respuesta no válida desde {url}")

    raise PriceSourceError(
        "Unable to access the price sheet. Make sure it is publicly "
        "accessible or provide the CSV file manually."
    )


def apply_price_updates(store: CatalogStore, updates: List[PriceUpdate]) -> Dict[str, int]:
    """
    Aplica los precios promocionales al catálogo.

    Returns:
        Estadísticas: updated, not_found, total_processed.
    """
    stats = {"updated": 0, "not_found": 0, "total_processed": len(updates)}

    for update in updates:
        try:
            with store.transaction():
                count = store.set_flash_price(update.ref, update.price)
        except Exception as e:
            logger.error(f"Error al actualizar el precio de {update.ref}: {e}")
            stats["not_found"] += 1
            continue

        if count > 0:
            stats["updated"] += 1
        else:
            stats["not_found"] += 1

    logger.info(
        f"Precios: {stats['updated']} actualizados, "
        f"{stats['not_found']} no encontrados"
    )
    return stats
