"""Tests for the PostgreSQL catalog store with a mocked connection."""

from unittest.mock import MagicMock

import pytest

from database import PostgresCatalogStore


@pytest.fixture
def connection():
    return MagicMock()


@pytest.fixture
def cursor(connection):
    return connection.cursor.return_value.__enter__.return_value


@pytest.fixture
def pg_store(connection):
    return PostgresCatalogStore(connection=connection)


class TestTransaction:
    def test_commit_on_success(self, pg_store, connection):
        with pg_store.transaction():
            pg_store.set_flash_price("A", 10.0)

        connection.commit.assert_called_once()
        connection.rollback.assert_not_called()

    def test_rollback_on_error(self, pg_store, connection):
        with pytest.raises(RuntimeError):
            with pg_store.transaction():
                raise RuntimeError("boom")

        connection.rollback.assert_called_once()
        connection.commit.assert_not_called()


class TestWrites:
    """Tests for the write queries."""

    def test_create_product_inserts_gallery_in_order(self, pg_store, cursor, make_product):
        cursor.fetchone.return_value = (7,)
        product = make_product(gallery=["/p/2.jpeg", "/p/3.jpeg"])

        product_id = pg_store.create_product(product)

        assert product_id == 7
        rows = cursor.executemany.call_args.args[1]
        assert rows == [(7, "/p/2.jpeg", 0), (7, "/p/3.jpeg", 1)]

    def test_create_product_without_gallery(self, pg_store, cursor, make_product):
        cursor.fetchone.return_value = (3,)

        pg_store.create_product(make_product(gallery=[]))

        cursor.executemany.assert_not_called()

    def test_update_keeps_identity(self, pg_store, cursor, make_product):
        pg_store.update_product(5, make_product(ref="NEW-REF", slug="new-slug"))

        update_params = cursor.execute.call_args_list[0].args[1]
        assert "NEW-REF" not in update_params
        assert "new-slug" not in update_params
        assert update_params[-1] == 5
        delete_call = cursor.execute.call_args_list[1]
        assert delete_call.args == ("DELETE FROM product_gallery WHERE product_id = %s", (5,))

    def test_ensure_category(self, pg_store, cursor):
        cursor.fetchone.return_value = (["Similicuir", "Nacre"],)

        subcategories = pg_store.ensure_category("Plateaux", "Nacre")

        assert subcategories == ["Similicuir", "Nacre"]
        assert cursor.execute.call_args.args[1] == ("Plateaux", ["Nacre"])

    def test_set_flash_price_returns_row_count(self, pg_store, cursor):
        cursor.rowcount = 2

        assert pg_store.set_flash_price("PLA-ALI-GM-1000", 850.0) == 2
        assert cursor.execute.call_args.args[1] == (850.0, "PLA-ALI-GM-1000")


class TestReads:
    def test_get_all_refs(self, pg_store, cursor):
        cursor.fetchall.return_value = [("A",), ("B",)]

        assert pg_store.get_all_refs() == {"A", "B"}

    def test_missing_product(self, pg_store, cursor):
        cursor.fetchone.return_value = None

        assert pg_store.find_product_by_ref("NOPE") is None

    def test_stats(self, pg_store, cursor):
        cursor.fetchall.return_value = [
            {"id": 1, "ref": "A", "slug": "a", "name": "A", "main_category": "Bols",
             "sub_category": "Divers", "store": "Alice"},
            {"id": 2, "ref": "B", "slug": "b", "name": "B", "main_category": "Bols",
             "sub_category": "Divers", "store": None},
        ]

        stats = pg_store.get_product_stats()

        assert stats == {"total": 2, "by_category": {"Bols": 2}, "by_store": {"Alice": 1}}
