"""Shared test fixtures for the product import test suite."""

import copy
from pathlib import Path
from typing import Any, Dict, List, Optional

import pytest

from product_import.models import ParsedProduct
from product_import.store import CatalogStore


class InMemoryCatalogStore(CatalogStore):
    """Dict-backed catalog with snapshot/restore transactions."""

    def __init__(self):
        self.products: Dict[int, Dict[str, Any]] = {}
        self.galleries: Dict[int, List[str]] = {}
        self.categories: Dict[str, List[str]] = {}
        self.fail_refs = set()
        self.commits = 0
        self.rollbacks = 0
        self._next_id = 1
        self._snapshot = None

    def begin(self):
        self._snapshot = copy.deepcopy(
            (self.products, self.galleries, self.categories, self._next_id)
        )

    def commit(self):
        self._snapshot = None
        self.commits += 1

    def rollback(self):
        if self._snapshot is not None:
            self.products, self.galleries, self.categories, self._next_id = self._snapshot
            self._snapshot = None
        self.rollbacks += 1

    def _find(self, key, value) -> Optional[Dict[str, Any]]:
        for record in self.products.values():
            if record[key] == value:
                return dict(record)
        return None

    def find_product_by_ref(self, ref):
        return self._find("ref", ref)

    def find_product_by_slug(self, slug):
        return self._find("slug", slug)

    def create_product(self, product):
        if product.ref in self.fail_refs:
            raise RuntimeError("database unavailable")
        product_id = self._next_id
        self._next_id += 1
        record = product.to_record()
        record["id"] = product_id
        self.products[product_id] = record
        self.galleries[product_id] = list(product.gallery)
        return product_id

    def update_product(self, product_id, product):
        if product.ref in self.fail_refs:
            raise RuntimeError("database unavailable")
        record = product.to_record()
        record.pop("ref")
        record.pop("slug")
        self.products[product_id].update(record)
        self.galleries[product_id] = list(product.gallery)

    def ensure_category(self, name, sub_category):
        subcategories = self.categories.setdefault(name, [])
        if sub_category not in subcategories:
            subcategories.append(sub_category)
        return list(subcategories)

    def get_all_refs(self):
        return {record["ref"] for record in self.products.values()}

    def get_all_slugs(self):
        return {record["slug"] for record in self.products.values()}

    def list_products(self):
        return [dict(record) for record in self.products.values()]

    def list_categories(self):
        return [
            {"name": name, "subcategories": list(subs)}
            for name, subs in sorted(self.categories.items())
        ]

    def set_flash_price(self, ref, price):
        count = 0
        for record in self.products.values():
            if record["ref"] == ref:
                record["flash_price"] = price
                count += 1
        return count


@pytest.fixture
def store():
    """Empty in-memory catalog."""
    return InMemoryCatalogStore()


@pytest.fixture
def make_product():
    """Factory for valid ParsedProduct instances."""

    def _make(**overrides):
        data = dict(
            name="Petit plateau rectangulaire en similicuir rose Alice",
            ref="PLA-ALI-GM-1000",
            slug="petit-plateau-rectangulaire-en-similicuir-rose-alice-gm",
            main_image="/Photos avec prix/plateau.jpeg",
            gallery=["/Photos avec prix/plateau_2.jpeg"],
            initial_price=1000.0,
            dimensions="Grand Modèle (40cm)",
            main_category="Plateaux",
            sub_category="Similicuir",
            store="Alice",
            size_code="GM",
            raw_filename="plateau.jpeg",
        )
        data.update(overrides)
        return ParsedProduct(**data)

    return _make


@pytest.fixture
def image_dir(tmp_path):
    """Factory that creates an image directory with empty files."""

    def _make(filenames, name="photos") -> Path:
        directory = tmp_path / name
        directory.mkdir(exist_ok=True)
        for filename in filenames:
            (directory / filename).write_bytes(b"")
        return directory

    return _make
