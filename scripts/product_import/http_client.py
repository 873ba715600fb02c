"""
Cliente HTTP con retry y backoff para descargar CSV.

Proporciona una capa de abstracción sobre requests con:
- Timeout configurable
- Reintentos con backoff exponencial
- Manejo de rate limiting (429)
"""

from __future__ import annotations

import logging
import time
from typing import Dict, Optional

import requests

logger = logging.getLogger(__name__)


class HttpClient:
    """Cliente HTTP con retry y backoff."""

    DEFAULT_HEADERS = {
        "User-Agent": (
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
            "(KHTML, like Gecko) Chrome/118.0.0.0 Safari/537.36"
        ),
        "Accept": "text/csv, text/plain, */*",
    }

    def __init__(
        self,
        timeout: int = 30,
        max_retries: int = 3,
        headers: Optional[Dict[str, str]] = None,
    ):
        """
        Inicializa el cliente HTTP.

        Args:
            timeout: Timeout por request en segundos.
            max_retries: Número máximo de reintentos.
            headers: Headers adicionales para las peticiones.
        """
        self.timeout = timeout
        self.max_retries = max_retries
        self.session = requests.Session()
        self.session.headers.update(self.DEFAULT_HEADERS)
        if headers:
            self.session.headers.update(headers)

    def get_text(self, url: str) -> Optional[str]:
        """
        Realiza una petición GET con retry y backoff.

        Args:
            url: URL a consultar.

        Returns:
            Cuerpo de la respuesta como texto o None si falla.
        """
        for attempt in range(self.max_retries):
            try:
                logger.debug(f"GET {url} (intento {attempt + 1}/{self.max_retries})")
                response = self.session.get(url, timeout=self.timeout)

                # Rate limiting
                if response.status_code == 429:
                    wait_time = 2 ** (attempt + 1)
                    logger.warning(f"Rate limited (429). Esperando {wait_time}s...")
                    time.sleep(wait_time)
                    continue

                if response.status_code >= 500:
                    wait_time = 2 ** attempt
                    logger.warning(
                        f"Error de servidor ({response.status_code}). "
                        f"Reintentando en {wait_time}s..."
                    )
                    time.sleep(wait_time)
                    continue

                response.raise_for_status()
                return response.text

            except requests.Timeout:
                logger.warning(f"Timeout en {url} (intento {attempt + 1})")
                if attempt < self.max_retries - 1:
                    time.sleep(2 ** attempt)

            except requests.HTTPError as e:
                # 4xx: no tiene sentido reintentar
                logger.error(f"Error HTTP en GET {url}: {e}")
                return None

            except requests.RequestException as e:
                logger.warning(f"Error de red en {url} (intento {attempt + 1}): {e}")
                if attempt < self.max_retries - 1:
                    time.sleep(2 ** attempt)

        logger.error(f"Falló después de {self.max_retries} intentos: {url}")
        return None
