"""
Reportes de importación en CSV, texto y JSON.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional

from .models import (
    STATUS_CREATED,
    STATUS_ERROR,
    STATUS_SKIPPED,
    STATUS_UPDATED,
    ImportResult,
    ProductSummary,
)

logger = logging.getLogger(__name__)

DEFAULT_REPORTS_DIR = "./reports"
CSV_HEADERS = ["REF", "Name", "Price (MAD)", "Category", "Status", "Message"]
MAX_EXAMPLES = 10
CSV_SPECIAL_CHARS = (",", '"', "\n", "\r")
SEPARATOR = "=" * 60

# (estado, título, icono, mostrar precio)
STATUS_SECTIONS = (
    (STATUS_CREATED, "Created Products", "✓", True),
    (STATUS_UPDATED, "Updated Products", "↻", True),
    (STATUS_SKIPPED, "Skipped Products", "⊘", False),
    (STATUS_ERROR, "Failed Products", "✗", False),
)


def format_price(price: Any) -> str:
    """1000.0 -> '1000', 12.5 -> '12.5'."""
    if price is None:
        return ""
    if isinstance(price, float) and price.is_integer():
        return str(int(price))
    return str(price)


def escape_csv(value: Any) -> str:
    """Entrecomilla los campos con comas, comillas o saltos de línea."""
    if value is None:
        return ""
    text = value if isinstance(value, str) else format_price(value)
    if any(char in text for char in CSV_SPECIAL_CHARS):
        return '"' + text.replace('"', '""') + '"'
    return text


def generate_csv_report(result: ImportResult) -> str:
    rows = [",".join(escape_csv(h) for h in CSV_HEADERS)]
    for item in result.summary:
        row = [item.ref, item.name, item.price, item.category, item.status, item.message or ""]
        rows.append(",".join(escape_csv(v) for v in row))
    return "\n".join(rows)


def _format_entry(item: ProductSummary, icon: str, with_price: bool) -> str:
    if item.status == STATUS_ERROR:
        return f"  {icon} {item.name}: {item.message}"
    line = f"  {icon} {item.ref} - {item.name}"
    if with_price:
        line += f" ({format_price(item.price)} MAD)"
    return line


def generate_text_summary(result: ImportResult) -> str:
    """
    Resumen legible: totales, hasta 10 ejemplos por estado y lista de errores.
    """
    lines: List[str] = [
        SEPARATOR,
        "PRODUCT IMPORT SUMMARY",
        SEPARATOR,
        "",
        f"Status: {'✓ SUCCESS' if result.success else '✗ FAILED'}",
        "",
        "Statistics:",
        f"  Products Created: {result.products_created}",
        f"  Products Updated: {result.products_updated}",
        f"  Products Skipped: {result.products_skipped}",
        f"  Errors: {len(result.errors)}",
        "",
    ]

    for status, title, icon, with_price in STATUS_SECTIONS:
        items = [s for s in result.summary if s.status == status]
        if not items:
            continue
        lines.append(f"{title} ({len(items)}):")
        for item in items[:MAX_EXAMPLES]:
            lines.append(_format_entry(item, icon, with_price))
        if len(items) > MAX_EXAMPLES:
            lines.append(f"  ... and {len(items) - MAX_EXAMPLES} more")
        lines.append("")

    if result.errors:
        lines.append("Errors:")
        for error in result.errors:
            lines.append(f"  - {error.filename}: {error.error}")
        lines.append("")

    lines.append(SEPARATOR)
    return "\n".join(lines)


def _json_default(value: Any) -> str:
    """Fechas en ISO-8601; el resto como texto."""
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def generate_json_report(result: ImportResult) -> str:
    return json.dumps(result.to_dict(), ensure_ascii=False, indent=2, default=_json_default)


def _report_path(output_dir: str, name: str, extension: str, date: Optional[datetime]) -> Path:
    directory = Path(output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    timestamp = (date or datetime.now()).strftime("%Y-%m-%d")
    return directory / f"{name}-{timestamp}.{extension}"


def save_csv_report(
    result: ImportResult,
    output_dir: str = DEFAULT_REPORTS_DIR,
    date: Optional[datetime] = None,
) -> Path:
    path = _report_path(output_dir, "product-import", "csv", date)
    path.write_text(generate_csv_report(result), encoding="utf-8")
    logger.info(f"Reporte CSV guardado: {path}")
    return path


def save_text_summary(
    result: ImportResult,
    output_dir: str = DEFAULT_REPORTS_DIR,
    date: Optional[datetime] = None,
) -> Path:
    path = _report_path(output_dir, "product-import-summary", "txt", date)
    path.write_text(generate_text_summary(result), encoding="utf-8")
    logger.info(f"Resumen guardado: {path}")
    return path


def save_json_report(
    result: ImportResult,
    output_dir: str = DEFAULT_REPORTS_DIR,
    date: Optional[datetime] = None,
) -> Path:
    path = _report_path(output_dir, "product-import", "json", date)
    path.write_text(generate_json_report(result), encoding="utf-8")
    logger.info(f"Reporte JSON guardado: {path}")
    return path


def save_reports(
    result: ImportResult,
    output_dir: str = DEFAULT_REPORTS_DIR,
    date: Optional[datetime] = None,
) -> List[Path]:
    """Guarda los tres reportes. Los errores de escritura se propagan."""
    return [
        save_csv_report(result, output_dir, date),
        save_text_summary(result, output_dir, date),
        save_json_report(result, output_dir, date),
    ]


def print_summary(result: ImportResult) -> None:
    print("\n" + generate_text_summary(result))
