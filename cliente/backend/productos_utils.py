"""Reglas de negocio de productos: validacion, precios, colecciones y stock."""

from __future__ import annotations

import math
import re
import unicodedata
from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from parametros import CATEGORIA_SIN_ASIGNAR, MONEDA_DEFAULT, PORCENTAJE_IVA_DEFAULT
from shared.errors import InvalidArgumentError
from shared.numeros import a_numero, a_numero_o_cero, es_numero, numero_a_texto
from shared.protocol import DesgloseImpuesto, ResultadoStock, ResultadoValidacion

_IMAGEN_URL_PATTERN = re.compile(r"https?://.+\.(jpg|jpeg|png|gif|webp)", re.IGNORECASE)
_DIACRITICOS_PATTERN = re.compile(r"[\u0300-\u036f]")
_NO_PERMITIDOS_PATTERN = re.compile(r"[^a-z0-9\s-]")
_ESPACIOS_PATTERN = re.compile(r"\s+")

_CENTESIMOS = Decimal("0.01")
# Desde 1e21 el redondeo a 2 decimales no altera el valor.
_LIMITE_REDONDEO = 1e21


def validar_producto(producto: Mapping[str, Any] | None) -> ResultadoValidacion:
    """Valida nombre, precio, stock e imagen acumulando todos los errores."""
    if not isinstance(producto, Mapping):
        return ResultadoValidacion(valido=False, errores=["El producto es requerido"])

    errores: list[str] = []

    nombre = producto.get("nombre")
    if not nombre or not isinstance(nombre, str):
        errores.append("El nombre es requerido")
    elif len(nombre.strip()) < 3:
        errores.append("El nombre debe tener al menos 3 caracteres")

    precio = producto.get("precio")
    if precio is None:
        errores.append("El precio es requerido")
    elif not (es_numero(precio) or isinstance(precio, str)) or math.isnan(a_numero(precio)):
        errores.append("El precio debe ser un número")
    elif a_numero(precio) <= 0:
        errores.append("El precio debe ser mayor a 0")

    stock = producto.get("stock")
    if stock is not None and a_numero(stock) < 0:
        errores.append("El stock no puede ser negativo")

    imagen = producto.get("imagen")
    if imagen and not _IMAGEN_URL_PATTERN.fullmatch(str(imagen)):
        errores.append("La URL de la imagen no es válida")

    return ResultadoValidacion(valido=not errores, errores=errores)


def calcular_precio_con_descuento(precio: float, descuento: float) -> float:
    """Aplica un descuento porcentual y redondea a 2 decimales.

    Lanza ``InvalidArgumentError`` si el precio es negativo o el descuento
    esta fuera de [0, 100]; el llamador debe validar antes.
    """
    if not es_numero(precio) or not precio >= 0:
        raise InvalidArgumentError("El precio debe ser un número positivo")

    if not es_numero(descuento) or not 0 <= descuento <= 100:
        raise InvalidArgumentError("El descuento debe estar entre 0 y 100")

    return _redondear(precio - (precio * descuento / 100))


def calcular_porcentaje_descuento(precio_original: float, precio_con_descuento: float) -> float:
    """Deriva el porcentaje de descuento entre dos precios, o 0 si no aplica."""
    if not es_numero(precio_original) or not es_numero(precio_con_descuento):
        return 0
    if math.isnan(precio_original) or math.isnan(precio_con_descuento):
        return 0

    if precio_original <= 0 or precio_con_descuento >= precio_original:
        return 0

    descuento = ((precio_original - precio_con_descuento) / precio_original) * 100
    return _redondear(descuento)


def aplicar_impuesto(
    subtotal: float,
    porcentaje_iva: float = PORCENTAJE_IVA_DEFAULT,
) -> DesgloseImpuesto:
    """Calcula IVA y total; el subtotal se retorna sin redondear."""
    if not es_numero(subtotal) or not subtotal >= 0:
        raise InvalidArgumentError("El subtotal debe ser un número positivo")

    iva = _redondear(subtotal * porcentaje_iva / 100)
    total = _redondear(subtotal + iva)
    return DesgloseImpuesto(subtotal=subtotal, iva=iva, total=total)


def formatear_precio(precio: float, moneda: str = MONEDA_DEFAULT) -> str:
    """Formatea con separador de miles ``,`` y 2 decimales, sin depender del locale."""
    if not es_numero(precio) or not math.isfinite(precio):
        return f"{moneda}0.00"

    return f"{moneda}{_redondear(precio):,.2f}"


def filtrar_productos_por_categoria(productos: list[Any], categoria: str | None) -> list[Any]:
    """Filtra por categoria exacta sin distinguir mayusculas.

    Si la categoria no es un texto no vacio retorna la misma lista recibida,
    no una copia.
    """
    if not isinstance(productos, list):
        return []

    if not categoria or not isinstance(categoria, str):
        return productos

    categoria_buscada = categoria.lower()
    return [
        producto
        for producto in productos
        if _texto_minusculas(producto, "categoria") == categoria_buscada
    ]


def ordenar_productos_por_precio(productos: list[Any], orden: str = "asc") -> list[Any]:
    """Retorna una lista nueva ordenada por precio; ``desc`` invierte el orden."""
    if not isinstance(productos, list):
        return []

    return sorted(
        productos,
        key=lambda producto: a_numero_o_cero(_campo(producto, "precio")),
        reverse=orden == "desc",
    )


def filtrar_por_rango_precio(
    productos: list[Any],
    precio_min: float,
    precio_max: float,
) -> list[Any]:
    """Filtra productos con precio dentro de [precio_min, precio_max]."""
    if not isinstance(productos, list):
        return []

    minimo = a_numero(precio_min)
    maximo = a_numero(precio_max)
    return [
        producto
        for producto in productos
        if minimo <= a_numero_o_cero(_campo(producto, "precio")) <= maximo
    ]


def buscar_productos(productos: list[Any], termino: str | None) -> list[Any]:
    """Busca el termino en nombre o descripcion, sin distinguir mayusculas."""
    if not isinstance(productos, list) or not termino or not isinstance(termino, str):
        return productos or []

    termino_normalizado = termino.lower().strip()
    return [
        producto
        for producto in productos
        if termino_normalizado in _texto_minusculas(producto, "nombre")
        or termino_normalizado in _texto_minusculas(producto, "descripcion")
    ]


def calcular_total(carrito: list[Any]) -> float:
    """Suma precio por cantidad; un precio invalido aporta 0."""
    if not isinstance(carrito, list):
        return 0

    total = 0
    for item in carrito:
        precio = a_numero_o_cero(_campo(item, "precio"))
        cantidad = _campo(item, "cantidad")
        if cantidad is None:
            cantidad_efectiva = 1
        else:
            cantidad_efectiva = a_numero(cantidad)
            if math.isnan(cantidad_efectiva):
                cantidad_efectiva = 1
        total += precio * cantidad_efectiva

    return total


def agrupar_por_categoria(productos: list[Any]) -> dict[str, list[Any]]:
    """Agrupa productos por categoria preservando el orden de entrada."""
    if not isinstance(productos, list):
        return {}

    grupos: dict[str, list[Any]] = {}
    for producto in productos:
        categoria = _campo(producto, "categoria") or CATEGORIA_SIN_ASIGNAR
        grupos.setdefault(str(categoria), []).append(producto)

    return grupos


def validar_stock_disponible(
    producto: Mapping[str, Any] | None,
    cantidad_solicitada: float,
) -> ResultadoStock:
    """Indica si el stock alcanza para la cantidad solicitada."""
    if not isinstance(producto, Mapping):
        return ResultadoStock(disponible=False, mensaje="Producto no válido")

    if not es_numero(cantidad_solicitada) or not cantidad_solicitada > 0:
        return ResultadoStock(disponible=False, mensaje="Cantidad no válida")

    stock = a_numero_o_cero(producto.get("stock"))

    if stock == 0:
        return ResultadoStock(disponible=False, mensaje="Producto agotado")

    if cantidad_solicitada > stock:
        return ResultadoStock(
            disponible=False,
            mensaje=f"Solo hay {numero_a_texto(stock)} unidades disponibles",
        )

    return ResultadoStock(disponible=True, mensaje="Stock disponible")


def tiene_stock(producto: Mapping[str, Any] | None) -> bool:
    """Retorna True si el stock del producto es numerico y mayor a 0."""
    if not isinstance(producto, Mapping):
        return False

    stock = a_numero(producto.get("stock"))
    return not math.isnan(stock) and stock > 0


def generar_slug(nombre: str | None) -> str:
    """Genera un identificador para URL en minusculas, sin acentos y con guiones."""
    if not nombre or not isinstance(nombre, str):
        return ""

    slug = unicodedata.normalize("NFD", nombre.lower().strip())
    slug = _DIACRITICOS_PATTERN.sub("", slug)
    slug = _NO_PERMITIDOS_PATTERN.sub("", slug)
    slug = _ESPACIOS_PATTERN.sub("-", slug)
    # Una sola pasada por pares: "---" queda como "--".
    return slug.replace("--", "-")


def _redondear(valor: float) -> float:
    """Redondea a 2 decimales alejandose de cero en empates exactos."""
    if not math.isfinite(valor) or abs(valor) >= _LIMITE_REDONDEO:
        return valor

    return float(Decimal(valor).quantize(_CENTESIMOS, rounding=ROUND_HALF_UP))


def _campo(producto: Any, clave: str) -> Any:
    if not isinstance(producto, Mapping):
        return None
    return producto.get(clave)


def _texto_minusculas(producto: Any, clave: str) -> str:
    return str(_campo(producto, clave) or "").lower()
