"""Tests del gateway HTTP contra el backend del catalogo."""

from __future__ import annotations

import unittest
from typing import Any
from unittest import mock

import requests

from cliente.backend.gateway import HttpCatalogoGateway
from shared.errors import ApiError, ServiceError
from shared.protocol import ImagenAdjunta, ProductoFormulario

BASE_URL = "https://api.test/api"


class HttpCatalogoGatewayTests(unittest.TestCase):
    """Valida URLs, cuerpos y manejo de errores del gateway."""

    def setUp(self) -> None:
        self.session = mock.Mock(spec=requests.Session)
        self.gateway = HttpCatalogoGateway(
            base_url=f"{BASE_URL}/",
            timeout=5,
            session=self.session,
        )

    def test_obtener_productos(self) -> None:
        """Debe hacer GET a obtener con headers JSON y retornar el cuerpo."""
        productos = [{"id": 1, "nombre_producto": "Uniforme Clínico", "precio": 500}]
        self.session.request.return_value = self._response(200, productos)

        resultado = self.gateway.obtener_productos()

        self.assertEqual(resultado, productos)
        self.session.request.assert_called_once_with(
            "GET",
            f"{BASE_URL}/obtener",
            timeout=5,
            headers={"Content-Type": "application/json"},
        )

    def test_endpoints_de_lectura(self) -> None:
        """Cada consulta debe apuntar a su endpoint."""
        self.session.request.return_value = self._response(200, [])
        casos = [
            (lambda: self.gateway.obtener_producto(7), "obtener/7"),
            (lambda: self.gateway.obtener_imagenes(7), "imagenes/7"),
            (self.gateway.obtener_categorias, "obtenercat"),
            (self.gateway.obtener_colores, "colores"),
            (self.gateway.obtener_tallas, "tallas"),
            (self.gateway.obtener_generos, "generos"),
        ]

        for llamada, path in casos:
            with self.subTest(path=path):
                llamada()
                method, url = self.session.request.call_args.args
                self.assertEqual(method, "GET")
                self.assertEqual(url, f"{BASE_URL}/{path}")

    def test_eliminar_producto(self) -> None:
        """Debe hacer DELETE a eliminar/{id}."""
        self.session.request.return_value = self._response(200, {"mensaje": "ok"})

        self.gateway.eliminar_producto(3)

        method, url = self.session.request.call_args.args
        self.assertEqual((method, url), ("DELETE", f"{BASE_URL}/eliminar/3"))

    def test_respuesta_no_exitosa_lanza_api_error(self) -> None:
        """Debe incluir accion, status y cuerpo en el mensaje."""
        self.session.request.return_value = self._response(500, text="boom")

        with self.assertRaises(ApiError) as ctx:
            self.gateway.obtener_productos()

        self.assertEqual(str(ctx.exception), "Error al cargar productos: 500 boom")
        self.assertEqual(ctx.exception.status_code, 500)
        self.assertIsInstance(ctx.exception, ServiceError)

    def test_fallo_de_conexion_lanza_service_error(self) -> None:
        """Errores de transporte se envuelven en ServiceError sin reintentos."""
        self.session.request.side_effect = requests.ConnectionError("down")

        with self.assertLogs("cliente.backend.gateway", level="ERROR"):
            with self.assertRaises(ServiceError) as ctx:
                self.gateway.obtener_tallas()

        self.assertIsInstance(ctx.exception.__cause__, requests.ConnectionError)
        self.assertEqual(self.session.request.call_count, 1)

    def test_respuesta_no_json_lanza_service_error(self) -> None:
        """Un cuerpo que no es JSON se reporta como respuesta invalida."""
        response = self._response(200)
        response.json.side_effect = ValueError("no json")
        self.session.request.return_value = response

        with self.assertRaises(ServiceError):
            self.gateway.obtener_colores()

    def test_crear_producto_envia_multipart(self) -> None:
        """Debe enviar campos e imagenes como partes multipart."""
        self.session.request.return_value = self._response(201, {"id": 10})
        formulario = self._build_formulario()
        imagen = ImagenAdjunta(nombre="frente.jpg", contenido=b"\xff\xd8")

        resultado = self.gateway.crear_producto(formulario, [imagen])

        self.assertEqual(resultado, {"id": 10})
        call = self.session.request.call_args
        self.assertEqual(call.args, ("POST", f"{BASE_URL}/agregarproducto"))
        self.assertNotIn("headers", call.kwargs)
        files = call.kwargs["files"]
        self.assertIn(("nombre_producto", (None, "Filipina Azul")), files)
        self.assertIn(("precio", (None, "450.5")), files)
        self.assertIn(("imagenes", ("frente.jpg", b"\xff\xd8", "image/jpeg")), files)
        self.assertNotIn("id_genero", [clave for clave, _ in files])

    def test_actualizar_producto_conserva_imagenes(self) -> None:
        """Debe enviar mantenerImagenes como lista JSON."""
        self.session.request.return_value = self._response(200, {"id": 10})

        self.gateway.actualizar_producto(10, self._build_formulario(), [], [1, 2])

        call = self.session.request.call_args
        self.assertEqual(call.args, ("PUT", f"{BASE_URL}/actualizar/10"))
        self.assertIn(("mantenerImagenes", (None, "[1, 2]")), call.kwargs["files"])

    def test_iniciar_sesion(self) -> None:
        """Debe enviar correo y password como JSON."""
        usuario = {"id": 1, "tipo": "admin"}
        self.session.request.return_value = self._response(200, usuario)

        resultado = self.gateway.iniciar_sesion("admin@tienda.mx", "secreto")

        self.assertEqual(resultado, usuario)
        call = self.session.request.call_args
        self.assertEqual(call.args, ("POST", f"{BASE_URL}/loginMovil"))
        self.assertEqual(call.kwargs["json"], {"correo": "admin@tienda.mx", "password": "secreto"})

    def test_iniciar_sesion_error_del_backend(self) -> None:
        """Debe usar el mensaje de error del backend si existe."""
        self.session.request.return_value = self._response(401, {"error": "Cuenta bloqueada"})

        with self.assertRaises(ApiError) as ctx:
            self.gateway.iniciar_sesion("a@b.co", "x")

        self.assertEqual(str(ctx.exception), "Cuenta bloqueada")
        self.assertEqual(ctx.exception.status_code, 401)

    def test_iniciar_sesion_error_sin_cuerpo(self) -> None:
        """Sin cuerpo JSON usa el mensaje generico de credenciales."""
        response = self._response(401, text="Unauthorized")
        response.json.side_effect = ValueError("no json")
        self.session.request.return_value = response

        with self.assertRaises(ApiError) as ctx:
            self.gateway.iniciar_sesion("a@b.co", "x")

        self.assertEqual(str(ctx.exception), "Usuario o contraseña incorrectos.")

    @staticmethod
    def _response(status_code: int, data: Any = None, text: str = "") -> mock.Mock:
        response = mock.Mock(spec=requests.Response)
        response.status_code = status_code
        response.ok = 200 <= status_code < 400
        response.text = text
        response.json.return_value = data
        return response

    @staticmethod
    def _build_formulario() -> ProductoFormulario:
        return ProductoFormulario(
            nombre_producto="Filipina Azul",
            descripcion="Filipina clínica",
            precio=450.5,
            stock=8,
            id_categoria=1,
            id_color=2,
            id_talla=3,
        )


if __name__ == "__main__":
    unittest.main()
