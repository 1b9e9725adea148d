"""Reglas del panel de alertas de stock bajo."""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

from parametros import UMBRAL_STOCK_BAJO
from shared.numeros import a_numero, a_numero_o_cero
from shared.protocol import EstadoStock, ResumenStock

_UMBRAL_CRITICO = 2


def filtrar_stock_bajo(productos: list[Any], umbral: float = UMBRAL_STOCK_BAJO) -> list[Any]:
    """Retorna productos con stock entre 0 y el umbral, de menor a mayor stock."""
    if not isinstance(productos, list):
        return []

    con_stock_bajo = [
        producto for producto in productos if 0 <= _stock(producto) <= umbral
    ]
    return sorted(con_stock_bajo, key=_stock)


def estado_stock(stock: Any) -> EstadoStock:
    """Clasifica el stock en agotado, critico, bajo o normal."""
    cantidad = a_numero_o_cero(stock)

    if cantidad == 0:
        return EstadoStock(texto="Sin stock", nivel="agotado")
    if cantidad <= _UMBRAL_CRITICO:
        return EstadoStock(texto="Stock bajo", nivel="critico")
    if cantidad <= UMBRAL_STOCK_BAJO:
        return EstadoStock(texto="Stock bajo", nivel="bajo")
    return EstadoStock(texto="En stock", nivel="normal")


def resumir_stock(productos: list[Any], umbral: float = UMBRAL_STOCK_BAJO) -> ResumenStock:
    """Cuenta productos agotados y con stock bajo."""
    if not isinstance(productos, list):
        return ResumenStock(sin_stock=0, stock_bajo=0, total=0)

    stocks = [_stock(producto) for producto in productos]
    return ResumenStock(
        sin_stock=sum(1 for stock in stocks if stock == 0),
        stock_bajo=sum(1 for stock in stocks if 0 < stock <= umbral),
        total=len(stocks),
    )


def etiqueta_unidades(stock: Any) -> str:
    return "unidad" if a_numero_o_cero(stock) == 1 else "unidades"


def _stock(producto: Any) -> float:
    """Stock numerico del producto; NaN si falta o no es numerico."""
    if not isinstance(producto, Mapping) or "stock" not in producto:
        return math.nan
    return a_numero(producto["stock"])
