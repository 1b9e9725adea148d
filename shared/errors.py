"""Excepciones compartidas del proyecto."""

from __future__ import annotations


class ValidationError(Exception):
    """Error de validacion de datos de entrada."""


class ServiceError(Exception):
    """Error en la ejecucion de servicios."""


class ApiError(ServiceError):
    """Respuesta no exitosa del backend."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidArgumentError(ValueError):
    """Argumento fuera del dominio numerico de una regla de precios."""
