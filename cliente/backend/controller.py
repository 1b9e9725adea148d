"""Controlador principal del cliente."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from parametros import UMBRAL_STOCK_BAJO
from shared.errors import ServiceError, ValidationError
from shared.protocol import Catalogos, ImagenAdjunta, ProductoFormulario, SesionUsuario

from .gateway import CatalogoGateway
from .productos_utils import validar_producto
from .stock_alertas import filtrar_stock_bajo

LOGGER = logging.getLogger(__name__)

_TIPO_ADMIN = "admin"


class CatalogoController:
    """Coordina validaciones de negocio y llamadas al backend."""

    def __init__(self, gateway: CatalogoGateway) -> None:
        self._gateway = gateway

    def iniciar_sesion(self, correo: str, password: str) -> SesionUsuario:
        """Autentica y retorna la sesion; solo administradores pueden ingresar."""
        correo_limpio = (correo or "").strip()
        password_limpio = (password or "").strip()
        if not correo_limpio or not password_limpio:
            raise ValidationError("Por favor, ingresa tus credenciales.")

        data = self._gateway.iniciar_sesion(correo_limpio, password_limpio)
        if not data.get("tipo") or not data.get("id"):
            raise ServiceError("No se recibió información completa del usuario.")

        if data["tipo"] != _TIPO_ADMIN:
            LOGGER.info("Acceso denegado para usuario tipo=%s", data["tipo"])
            raise ValidationError("Solo los administradores pueden ingresar a esta aplicación.")

        LOGGER.info("Sesion iniciada: id=%s", data["id"])
        return SesionUsuario(id=data["id"], tipo=data["tipo"], correo=correo_limpio, datos=data)

    def cargar_productos(self) -> list[dict[str, Any]]:
        """Retorna todos los productos del backend."""
        productos = self._gateway.obtener_productos()
        LOGGER.info("Productos cargados: %s", len(productos))
        return productos

    def cargar_catalogos(self) -> Catalogos:
        """Carga categorias, colores, tallas y generos para el formulario."""
        return Catalogos(
            categorias=self._gateway.obtener_categorias(),
            colores=self._gateway.obtener_colores(),
            tallas=self._gateway.obtener_tallas(),
            generos=self._gateway.obtener_generos(),
        )

    def cargar_producto(
        self,
        id_producto: int | str,
    ) -> tuple[dict[str, Any], list[dict[str, Any]]]:
        """Retorna el producto y sus imagenes para edicion."""
        producto = self._gateway.obtener_producto(id_producto)
        imagenes = self._gateway.obtener_imagenes(id_producto)
        return producto, imagenes

    def guardar_producto(
        self,
        formulario: ProductoFormulario,
        imagenes: Sequence[ImagenAdjunta] = (),
        id_producto: int | str | None = None,
        imagenes_existentes: Sequence[int | str] = (),
    ) -> dict[str, Any]:
        """Valida el formulario y crea o actualiza el producto."""
        self._validate_formulario(formulario)

        if id_producto is None:
            if not imagenes:
                raise ValidationError("Debe subir al menos una imagen")
            response = self._gateway.crear_producto(formulario, imagenes)
            LOGGER.info("Producto creado: %s", formulario.nombre_producto)
            return response

        response = self._gateway.actualizar_producto(
            id_producto,
            formulario,
            imagenes,
            imagenes_existentes,
        )
        LOGGER.info("Producto actualizado: id=%s", id_producto)
        return response

    def eliminar_producto(self, id_producto: int | str) -> dict[str, Any]:
        """Elimina un producto por ID."""
        response = self._gateway.eliminar_producto(id_producto)
        LOGGER.info("Producto eliminado: id=%s", id_producto)
        return response

    def cargar_stock_bajo(self, umbral: float = UMBRAL_STOCK_BAJO) -> list[dict[str, Any]]:
        """Retorna productos con stock bajo junto con sus imagenes.

        Si falla la carga de imagenes de un producto, se incluye sin imagenes.
        """
        productos = filtrar_stock_bajo(self._gateway.obtener_productos(), umbral)

        enriquecidos: list[dict[str, Any]] = []
        for producto in productos:
            try:
                imagenes = self._gateway.obtener_imagenes(producto.get("id")) or []
            except ServiceError:
                LOGGER.exception("Error al cargar imagenes del producto %s", producto.get("id"))
                imagenes = []

            enriquecidos.append(
                {
                    **producto,
                    "imagenes": imagenes,
                    "imagen_url": imagenes[0].get("url") if imagenes else None,
                }
            )

        LOGGER.info("Productos con stock bajo: %s", len(enriquecidos))
        return enriquecidos

    @staticmethod
    def _validate_formulario(formulario: ProductoFormulario) -> None:
        """Aplica las reglas de producto al formulario antes de enviarlo."""
        resultado = validar_producto(
            {
                "nombre": formulario.nombre_producto,
                "precio": formulario.precio,
                "stock": formulario.stock,
            }
        )
        if not resultado.valido:
            raise ValidationError("; ".join(resultado.errores))
