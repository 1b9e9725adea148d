"""Parametros globales del proyecto."""

from __future__ import annotations

import logging
import os

BACKEND_URL = os.getenv("CATALOGO_BACKEND_URL", "https://backend-gis-1.onrender.com/api")
REQUEST_TIMEOUT_SECONDS = float(os.getenv("CATALOGO_TIMEOUT_SECONDS", "15"))

PORCENTAJE_IVA_DEFAULT = 16
UMBRAL_STOCK_BAJO = 5
MONEDA_DEFAULT = "$"
CATEGORIA_SIN_ASIGNAR = "Sin categoría"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)
