"""
Configuración de la base de datos y de la importación usando variables de entorno.
"""
import os
from dotenv import load_dotenv

# Cargar variables de entorno desde .env
load_dotenv()


def get_db_config():
    """
    Obtiene la configuración de la base de datos desde variables de entorno.

    Returns:
        dict: Diccionario con los parámetros de conexión a PostgreSQL
    """
    return {
        'host': os.getenv('DB_HOST', 'localhost'),
        'port': os.getenv('DB_PORT', '5432'),
        'database': os.getenv('DB_NAME', 'catalogue'),
        'user': os.getenv('DB_USER', 'postgres'),
        'password': os.getenv('DB_PASSWORD', '')
    }


def get_import_config():
    """
    Obtiene la configuración de la importación de productos.

    Returns:
        dict: Directorio de imágenes, prefijo de URL, directorio de reportes
        y prefijo de SKU
    """
    return {
        'directory': os.getenv('IMPORT_DIRECTORY', './public/Photos avec prix'),
        'image_url_prefix': os.getenv('IMAGE_URL_PREFIX', '/Photos avec prix'),
        'reports_dir': os.getenv('REPORTS_DIR', './reports'),
        'sku_prefix': os.getenv('SKU_PREFIX', 'JDB'),
    }


def get_price_sheet_config():
    """
    Obtiene la configuración de la hoja de precios promocionales.

    Returns:
        dict: ID de la hoja (None si no está configurada) y timeout
    """
    return {
        'sheet_id': os.getenv('PRICE_SHEET_ID') or None,
        'timeout': int(os.getenv('PRICE_SHEET_TIMEOUT', '30')),
    }
