"""
Clase base abstracta para el almacén del catálogo.

Define el contrato que la capa de importación usa para leer y escribir
productos y categorías. La implementación PostgreSQL está en database.py.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Set

from .models import ParsedProduct


class CatalogStore(ABC):
    """
    Almacén de productos, galerías y categorías.

    Los productos devueltos son diccionarios con al menos las claves
    ``id``, ``ref``, ``slug``, ``name``, ``main_category``,
    ``sub_category`` y ``store``.
    """

    @contextmanager
    def transaction(self) -> Iterator["CatalogStore"]:
        """
        Transacción atómica: confirma al salir, revierte ante cualquier error.
        """
        self.begin()
        try:
            yield self
        except Exception:
            self.rollback()
            raise
        else:
            self.commit()

    def begin(self) -> None:
        """Inicio de transacción (implícito en la mayoría de backends)."""

    @abstractmethod
    def commit(self) -> None:
        pass

    @abstractmethod
    def rollback(self) -> None:
        pass

    @abstractmethod
    def find_product_by_ref(self, ref: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def find_product_by_slug(self, slug: str) -> Optional[Dict[str, Any]]:
        pass

    @abstractmethod
    def create_product(self, product: ParsedProduct) -> Any:
        """
        Inserta el producto y su galería.

        Returns:
            ID del producto creado.
        """
        pass

    @abstractmethod
    def update_product(self, product_id: Any, product: ParsedProduct) -> None:
        """
        Reemplaza los campos del producto y recrea toda su galería.

        La referencia y el slug almacenados no cambian.
        """
        pass

    @abstractmethod
    def ensure_category(self, name: str, sub_category: str) -> List[str]:
        """
        Crea la categoría si no existe y añade la subcategoría si falta.

        Returns:
            Subcategorías de la categoría tras la operación.
        """
        pass

    @abstractmethod
    def get_all_refs(self) -> Set[str]:
        pass

    @abstractmethod
    def get_all_slugs(self) -> Set[str]:
        pass

    @abstractmethod
    def list_products(self) -> List[Dict[str, Any]]:
        pass

    @abstractmethod
    def list_categories(self) -> List[Dict[str, Any]]:
        """Categorías ordenadas por nombre: ``name`` y ``subcategories``."""
        pass

    @abstractmethod
    def set_flash_price(self, ref: str, price: float) -> int:
        """
        Fija el precio promocional de los productos con esa referencia.

        Returns:
            Número de productos actualizados.
        """
        pass

    def get_product_stats(self) -> Dict[str, Any]:
        """Totales por categoría y por tienda."""
        products = self.list_products()
        by_category: Dict[str, int] = {}
        by_store: Dict[str, int] = {}
        for product in products:
            category = product["main_category"]
            by_category[category] = by_category.get(category, 0) + 1
            if product.get("store"):
                by_store[product["store"]] = by_store.get(product["store"], 0) + 1
        return {
            "total": len(products),
            "by_category": by_category,
            "by_store": by_store,
        }
