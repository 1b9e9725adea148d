"""Conversion tolerante de valores sueltos (JSON, formularios) a numeros."""

from __future__ import annotations

import math
import re
from typing import Any

_NUMERO_PATTERN = re.compile(r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|[+-]?Infinity")


def es_numero(valor: Any) -> bool:
    """Retorna True para int/float, excluyendo bool."""
    return isinstance(valor, (int, float)) and not isinstance(valor, bool)


def a_numero(valor: Any) -> float:
    """Convierte un valor a float; retorna NaN si no es numerico.

    ``None`` y el texto vacio valen 0, los bool valen 1/0 y el texto se
    interpreta tras quitar espacios.
    """
    if valor is None:
        return 0.0

    if isinstance(valor, (int, float)):
        return float(valor)

    if isinstance(valor, str):
        texto = valor.strip()
        if not texto:
            return 0.0
        if not _NUMERO_PATTERN.fullmatch(texto):
            return math.nan
        return float(texto)

    return math.nan


def a_numero_o_cero(valor: Any) -> float:
    """Como ``a_numero`` pero reemplaza NaN por 0."""
    numero = a_numero(valor)
    return 0.0 if math.isnan(numero) else numero


def numero_a_texto(valor: float) -> str:
    """Representa enteros sin decimales: 3.0 -> "3"."""
    if valor.is_integer():
        return str(int(valor))
    return str(valor)
