"""Utilidades genericas del cliente."""

from __future__ import annotations

import re
from datetime import date
from typing import Any

from shared.numeros import a_numero_o_cero

_EMAIL_PATTERN = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")


def format_date(fecha: Any) -> str:
    """Formatea una fecha como DD/MM/YYYY o retorna mensaje de fecha invalida."""
    if not isinstance(fecha, date):
        return "Fecha inválida"

    return f"{fecha.day:02d}/{fecha.month:02d}/{fecha.year}"


def validate_email(email: Any) -> bool:
    """Valida formato basico usuario@dominio.tld."""
    if not email or not isinstance(email, str):
        return False

    return bool(_EMAIL_PATTERN.fullmatch(email))


def calculate_total(numeros: Any) -> float:
    """Suma una lista de numeros; valores no numericos aportan 0."""
    if not isinstance(numeros, list):
        return 0

    return sum((a_numero_o_cero(numero) for numero in numeros), 0)
