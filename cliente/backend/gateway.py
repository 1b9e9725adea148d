"""Gateway de comunicacion cliente-servidor."""

from __future__ import annotations

import json
import logging
from collections.abc import Sequence
from typing import Any, Protocol

import requests

from parametros import BACKEND_URL, REQUEST_TIMEOUT_SECONDS
from shared.errors import ApiError, ServiceError
from shared.protocol import ImagenAdjunta, ProductoFormulario

LOGGER = logging.getLogger(__name__)

_JSON_HEADERS = {"Content-Type": "application/json"}


class CatalogoGateway(Protocol):
    """Interfaz de acceso del cliente al backend del catalogo."""

    def obtener_productos(self) -> list[dict[str, Any]]:
        """Lista todos los productos."""

    def obtener_producto(self, id_producto: int | str) -> dict[str, Any]:
        """Obtiene el detalle de un producto."""

    def obtener_imagenes(self, id_producto: int | str) -> list[dict[str, Any]]:
        """Lista las imagenes de un producto."""

    def obtener_categorias(self) -> list[dict[str, Any]]:
        """Lista las categorias disponibles."""

    def obtener_colores(self) -> list[dict[str, Any]]:
        """Lista los colores disponibles."""

    def obtener_tallas(self) -> list[dict[str, Any]]:
        """Lista las tallas disponibles."""

    def obtener_generos(self) -> list[dict[str, Any]]:
        """Lista los generos disponibles."""

    def crear_producto(
        self,
        formulario: ProductoFormulario,
        imagenes: Sequence[ImagenAdjunta],
    ) -> dict[str, Any]:
        """Crea un producto con sus imagenes."""

    def actualizar_producto(
        self,
        id_producto: int | str,
        formulario: ProductoFormulario,
        imagenes: Sequence[ImagenAdjunta],
        mantener_imagenes: Sequence[int | str] = (),
    ) -> dict[str, Any]:
        """Actualiza un producto, agregando imagenes nuevas y conservando las indicadas."""

    def eliminar_producto(self, id_producto: int | str) -> dict[str, Any]:
        """Elimina un producto."""

    def iniciar_sesion(self, correo: str, password: str) -> dict[str, Any]:
        """Autentica un usuario y retorna sus datos."""


class HttpCatalogoGateway:
    """Implementacion HTTP del gateway sobre el backend REST."""

    def __init__(
        self,
        base_url: str = BACKEND_URL,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    def obtener_productos(self) -> list[dict[str, Any]]:
        return self._request_json("GET", "obtener", "Error al cargar productos")

    def obtener_producto(self, id_producto: int | str) -> dict[str, Any]:
        return self._request_json("GET", f"obtener/{id_producto}", "Error al cargar el producto")

    def obtener_imagenes(self, id_producto: int | str) -> list[dict[str, Any]]:
        return self._request_json("GET", f"imagenes/{id_producto}", "Error al cargar imágenes")

    def obtener_categorias(self) -> list[dict[str, Any]]:
        return self._request_json("GET", "obtenercat", "Error al cargar categorías")

    def obtener_colores(self) -> list[dict[str, Any]]:
        return self._request_json("GET", "colores", "Error al cargar colores")

    def obtener_tallas(self) -> list[dict[str, Any]]:
        return self._request_json("GET", "tallas", "Error al cargar tallas")

    def obtener_generos(self) -> list[dict[str, Any]]:
        return self._request_json("GET", "generos", "Error al cargar géneros")

    def crear_producto(
        self,
        formulario: ProductoFormulario,
        imagenes: Sequence[ImagenAdjunta],
    ) -> dict[str, Any]:
        """Envia el formulario como multipart a ``agregarproducto``."""
        return self._request_json(
            "POST",
            "agregarproducto",
            "Error al crear producto",
            files=self._build_multipart(formulario, imagenes),
        )

    def actualizar_producto(
        self,
        id_producto: int | str,
        formulario: ProductoFormulario,
        imagenes: Sequence[ImagenAdjunta],
        mantener_imagenes: Sequence[int | str] = (),
    ) -> dict[str, Any]:
        """Envia el formulario como multipart a ``actualizar/{id}``."""
        return self._request_json(
            "PUT",
            f"actualizar/{id_producto}",
            "Error al actualizar producto",
            files=self._build_multipart(formulario, imagenes, mantener_imagenes),
        )

    def eliminar_producto(self, id_producto: int | str) -> dict[str, Any]:
        return self._request_json("DELETE", f"eliminar/{id_producto}", "Error al eliminar producto")

    def iniciar_sesion(self, correo: str, password: str) -> dict[str, Any]:
        """Autentica contra ``loginMovil``; el mensaje de error viene del backend si existe."""
        response = self._send(
            "POST",
            "loginMovil",
            "Error al iniciar sesión",
            json={"correo": correo, "password": password},
        )
        data = self._parse_json(response)

        if not response.ok:
            mensaje = "Usuario o contraseña incorrectos."
            if isinstance(data, dict) and data.get("error"):
                mensaje = str(data["error"])
            raise ApiError(mensaje, status_code=response.status_code)

        if not isinstance(data, dict):
            raise ServiceError("No se recibió información completa del usuario.")
        return data

    def _request_json(self, method: str, path: str, accion: str, **kwargs: Any) -> Any:
        """Ejecuta la solicitud, valida el status y decodifica el JSON."""
        if "files" not in kwargs:
            kwargs.setdefault("headers", _JSON_HEADERS)

        response = self._send(method, path, accion, **kwargs)
        if not response.ok:
            raise ApiError(
                f"{accion}: {response.status_code} {response.text}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise ServiceError(f"{accion}: respuesta invalida del servidor.") from exc

    def _send(self, method: str, path: str, accion: str, **kwargs: Any) -> requests.Response:
        url = f"{self._base_url}/{path}"
        LOGGER.debug("%s %s", method, url)
        try:
            return self._session.request(method, url, timeout=self._timeout, **kwargs)
        except requests.RequestException as exc:
            LOGGER.exception("Fallo de conexion en %s %s", method, url)
            raise ServiceError(f"{accion}: no fue posible conectar con el servidor.") from exc

    @staticmethod
    def _parse_json(response: requests.Response) -> Any:
        try:
            return response.json()
        except ValueError:
            return None

    @staticmethod
    def _build_multipart(
        formulario: ProductoFormulario,
        imagenes: Sequence[ImagenAdjunta],
        mantener_imagenes: Sequence[int | str] = (),
    ) -> list[tuple[str, tuple[Any, ...]]]:
        """Arma las partes multipart; los campos van sin nombre de archivo."""
        partes: list[tuple[str, tuple[Any, ...]]] = [
            (clave, (None, valor)) for clave, valor in formulario.como_campos().items()
        ]
        partes.extend(
            ("imagenes", (imagen.nombre, imagen.contenido, imagen.tipo)) for imagen in imagenes
        )
        if mantener_imagenes:
            partes.append(("mantenerImagenes", (None, json.dumps(list(mantener_imagenes)))))
        return partes
