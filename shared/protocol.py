"""DTOs del protocolo cliente-servidor."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class ResultadoValidacion:
    """Resultado de validar un producto contra las reglas de negocio."""

    valido: bool
    errores: list[str] = field(default_factory=list)


@dataclass(slots=True)
class DesgloseImpuesto:
    """Subtotal, IVA y total de una venta."""

    subtotal: float
    iva: float
    total: float


@dataclass(slots=True)
class ResultadoStock:
    """Disponibilidad de stock para una cantidad solicitada."""

    disponible: bool
    mensaje: str


@dataclass(slots=True)
class EstadoStock:
    """Etiqueta de stock para el panel de alertas."""

    texto: str
    nivel: str


@dataclass(slots=True)
class ResumenStock:
    """Conteos del panel de alertas de stock."""

    sin_stock: int
    stock_bajo: int
    total: int


@dataclass(slots=True)
class ProductoFormulario:
    """DTO con los campos del formulario de creacion/edicion de producto."""

    nombre_producto: str
    descripcion: str
    precio: float | str
    stock: int | str
    id_categoria: int | str | None = None
    id_color: int | str | None = None
    id_talla: int | str | None = None
    id_genero: int | str | None = None

    def como_campos(self) -> dict[str, str]:
        """Retorna los campos no nulos como texto, listos para multipart."""
        valores = {
            "nombre_producto": self.nombre_producto,
            "descripcion": self.descripcion,
            "precio": self.precio,
            "stock": self.stock,
            "id_categoria": self.id_categoria,
            "id_color": self.id_color,
            "id_talla": self.id_talla,
            "id_genero": self.id_genero,
        }
        return {clave: str(valor) for clave, valor in valores.items() if valor is not None}


@dataclass(slots=True)
class ImagenAdjunta:
    """Imagen nueva a subir junto al formulario."""

    nombre: str
    contenido: bytes
    tipo: str = "image/jpeg"


@dataclass(slots=True)
class Catalogos:
    """Listas de referencia usadas por el formulario de producto."""

    categorias: list[dict[str, Any]]
    colores: list[dict[str, Any]]
    tallas: list[dict[str, Any]]
    generos: list[dict[str, Any]]


@dataclass(slots=True)
class SesionUsuario:
    """Usuario autenticado en la aplicacion."""

    id: int | str
    tipo: str
    correo: str
    datos: dict[str, Any] = field(default_factory=dict)
