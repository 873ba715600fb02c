"""
Módulo para manejar operaciones de base de datos PostgreSQL.
"""
import os
import psycopg2
from psycopg2.extras import RealDictCursor
from psycopg2 import sql
from config import get_db_config
from product_import.store import CatalogStore

# Variable global para la conexión
_connection = None

# Columnas devueltas en las búsquedas de productos
PRODUCT_LOOKUP_COLUMNS = (
    "id", "ref", "slug", "name", "main_category", "sub_category", "store",
)

# Identidad del producto: no cambia al actualizar
IDENTITY_COLUMNS = ("ref", "slug")


def get_connection():
    """
    Obtiene una conexión a la base de datos PostgreSQL.
    Si ya existe una conexión activa, la reutiliza.

    Returns:
        psycopg2.connection: Conexión a la base de datos

    Raises:
        psycopg2.OperationalError: Si no se puede conectar a la base de datos
    """
    global _connection

    if _connection is None or _connection.closed:
        config = get_db_config()
        try:
            _connection = psycopg2.connect(**config)
            print("✓ Conexión a la base de datos establecida")
        except psycopg2.OperationalError as e:
            print(f"✗ Error al conectar a la base de datos: {e}")
            print("\n⚠ Verifica que:")
            print("  1. PostgreSQL esté instalado y ejecutándose")
            print("  2. La base de datos exista (CREATE DATABASE catalogue;)")
            print("  3. El archivo .env esté configurado correctamente")
            print("  4. Las credenciales en .env sean correctas")
            raise

    return _connection


def close_connection():
    """
    Cierra la conexión a la base de datos.
    """
    global _connection

    if _connection and not _connection.closed:
        _connection.close()
        _connection = None
        print("✓ Conexión a la base de datos cerrada")


def init_database():
    """
    Inicializa la base de datos ejecutando el script de esquema.
    Lee el archivo database_schema.sql y ejecuta las sentencias SQL.

    Returns:
        bool: True si el esquema se aplicó correctamente
    """
    conn = None
    try:
        conn = get_connection()
        schema_path = os.path.join(os.path.dirname(__file__), 'database_schema.sql')
        with open(schema_path, 'r', encoding='utf-8') as f:
            schema_sql = f.read()

        with conn.cursor() as cursor:
            cursor.execute(schema_sql)
        conn.commit()

        print("✓ Base de datos inicializada correctamente")
        return True

    except FileNotFoundError:
        print("✗ No se encontró el archivo database_schema.sql")
        return False
    except psycopg2.Error as e:
        print(f"✗ Error al inicializar la base de datos: {e}")
        if conn:
            conn.rollback()
        return False


class PostgresCatalogStore(CatalogStore):
    """
    Catálogo sobre PostgreSQL.

    Las escrituras no se confirman por sí solas: se agrupan con
    ``transaction()``, que confirma o revierte la conexión completa.
    """

    def __init__(self, connection=None):
        """
        Args:
            connection: Conexión psycopg2. Si no se proporciona, se usa
                        la conexión global.
        """
        self.connection = connection or get_connection()

    def commit(self):
        self.connection.commit()

    def rollback(self):
        self.connection.rollback()

    def _fetch_product(self, column, value):
        query = sql.SQL("SELECT {} FROM products WHERE {} = %s").format(
            sql.SQL(", ").join(map(sql.Identifier, PRODUCT_LOOKUP_COLUMNS)),
            sql.Identifier(column),
        )
        with self.connection.cursor(cursor_factory=RealDictCursor) as cursor:
            cursor.execute(query, (value,))
            row = cursor.fetchone()
        return dict(row) if row else None

    def find_product_by_ref(self, ref):
        return self._fetch_product("ref", ref)

    def find_product_by_slug(self, slug):
        return self._fetch_product("slug", slug)

    def _insert_gallery(self, cursor, product_id, gallery):
        if not gallery:
            return
        cursor.executemany(
            """
            INSERT INTO product_gallery (product_id, url, position)
            VALUES (%s, %s, %s)
            """,
            [(product_id, url, position) for position, url in enumerate(gallery)],
        )

    def create_product(self, product):
        """
        Inserta un producto nuevo y su galería.

        Returns:
            int: ID del producto creado
        """
        record = product.to_record()
        columns = list(record)
        query = sql.SQL("INSERT INTO products ({}) VALUES ({}) RETURNING id").format(
            sql.SQL(", ").join(map(sql.Identifier, columns)),
            sql.SQL(", ").join(sql.Placeholder() * len(columns)),
        )

        with self.connection.cursor() as cursor:
            cursor.execute(query, [record[c] for c in columns])
            product_id = cursor.fetchone()[0]
            self._insert_gallery(cursor, product_id, product.gallery)

        return product_id

    def update_product(self, product_id, product):
        """
        Actualiza todos los campos de un producto y recrea su galería.
        La referencia y el slug existentes se conservan.
        """
        record = product.to_record()
        for column in IDENTITY_COLUMNS:
            record.pop(column, None)
        columns = list(record)

        query = sql.SQL("UPDATE products SET {}, updated_at = NOW() WHERE id = %s").format(
            sql.SQL(", ").join(
                sql.SQL("{} = %s").format(sql.Identifier(c)) for c in columns
            ),
        )

        with self.connection.cursor() as cursor:
            cursor.execute(query, [record[c] for c in columns] + [product_id])
            cursor.execute(
                "DELETE FROM product_gallery WHERE product_id = %s",
                (product_id,),
            )
            self._insert_gallery(cursor, product_id, product.gallery)

    def ensure_category(self, name, sub_category):
        """
        Crea la categoría o le añade la subcategoría si aún no la tiene.

        Returns:
            list: Subcategorías de la categoría
        """
        query = """
            INSERT INTO categories (name, subcategories)
            VALUES (%s, %s)
            ON CONFLICT (name)
            DO UPDATE SET subcategories = CASE
                WHEN EXCLUDED.subcategories[1] = ANY(categories.subcategories)
                    THEN categories.subcategories
                ELSE array_append(categories.subcategories, EXCLUDED.subcategories[1])
            END
            RETURNING subcategories
        """
        with self.connection.cursor() as cursor:
            cursor.execute(query, (name, [sub_category]))
            return list(cursor.fetchone()[0])

    def _fetch_column(self, column):
        query = sql.SQL("SELECT {} FROM products").format(sql.Identifier(column))
        with self.connection.cursor() as cursor:
            cursor.execute(query)
            return {row[0] for row in cursor.fetchall()}

    def get_all_refs(self):
        return self._fetch_column("ref")

    def get_all_slugs(self):
        return self._fetch_column("slug")

    def list_products(self):
        query = sql.SQL("SELECT {} FROM products ORDER BY main_category, name").format(
            sql.SQL(", ").join(map(sql.Identifier, PRODUCT_LOOKUP_COLUMNS)),
        )
        with self.connection.cursor(cursor_factory=RealDictCursor) as cursor:
            cursor.execute(query)
            return [dict(row) for row in cursor.fetchall()]

    def list_categories(self):
        with self.connection.cursor(cursor_factory=RealDictCursor) as cursor:
            cursor.execute("SELECT name, subcategories FROM categories ORDER BY name")
            return [dict(row) for row in cursor.fetchall()]

    def set_flash_price(self, ref, price):
        with self.connection.cursor() as cursor:
            cursor.execute(
                """
                UPDATE products
                SET flash_price = %s,
                    updated_at = NOW()
                WHERE ref = %s
                """,
                (price, ref),
            )
            return cursor.rowcount
