"""
Jerarquía de excepciones tipadas del dominio de inventario.

Cada excepción expone un `code` legible por máquina y un `status_code` HTTP
por defecto. Los servicios lanzan estas excepciones sin capturarlas; la capa
HTTP las traduce mediante los handlers registrados en `registrar_handlers`.

    InventarioError (base)
    |
    +-- RecursoNoEncontradoError
    +-- ValidacionError
    |   +-- OrigenYaConciliadoError
    +-- CapacidadAgotadaError
    +-- ConflictoCodigoError
    +-- IntegridadDatosError
    +-- TransaccionError
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class InventarioError(Exception):
    """Excepción base de todos los errores de dominio."""

    code: str = "INVENTARIO_ERROR"
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, **datos: Any):
        super().__init__(message)
        self.message = message
        self.datos: Dict[str, Any] = datos


class RecursoNoEncontradoError(InventarioError):
    """El registro referenciado (inventario origen, activo nuevo, etc.) no existe."""

    code = "NO_ENCONTRADO"
    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, entidad: str, entidad_id: Any, message: Optional[str] = None):
        super().__init__(
            message or f"El {entidad} especificado no existe",
            entidad=entidad,
            entidad_id=entidad_id,
        )
        self.entidad = entidad
        self.entidad_id = entidad_id


class ValidacionError(InventarioError):
    """Datos de entrada inválidos para la operación solicitada."""

    code = "VALIDACION"
    status_code = status.HTTP_400_BAD_REQUEST


class OrigenYaConciliadoError(ValidacionError):
    """El inventario histórico ya fue conciliado con otro activo nuevo."""

    code = "ORIGEN_YA_CONCILIADO"

    def __init__(self, inventario_id: str, cod_af_inventario: Optional[str]):
        super().__init__(
            f"El inventario origen ya fue conciliado ({cod_af_inventario or 'sin código AF'})",
            inventario_id=inventario_id,
            cod_af_inventario=cod_af_inventario,
        )


class CapacidadAgotadaError(InventarioError):
    """La secuencia diaria de un código generado superó su límite."""

    code = "CAPACIDAD_AGOTADA"

    def __init__(self, prefijo: str, limite: int):
        super().__init__(
            f"Se ha alcanzado el límite de {limite} activos por día (prefijo {prefijo})",
            prefijo=prefijo,
            limite=limite,
        )
        self.prefijo = prefijo
        self.limite = limite


class ConflictoCodigoError(InventarioError):
    """Colisión persistente de un código generado tras agotar los reintentos."""

    code = "CONFLICTO_CODIGO"


class IntegridadDatosError(InventarioError):
    """Un dato persistido no cumple el formato que el sistema garantiza al generarlo."""

    code = "INTEGRIDAD_DATOS"


class TransaccionError(InventarioError):
    """Falla de base de datos durante una operación transaccional."""

    code = "TRANSACCION"

    def __init__(self, operacion: str, message: Optional[str] = None):
        super().__init__(
            message or f"La operación {operacion} falló en la base de datos y fue revertida",
            operacion=operacion,
        )
        self.operacion = operacion


def _respuesta(exc: InventarioError, status_code: Optional[int] = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code or exc.status_code,
        content={"detail": exc.message, "code": exc.code},
    )


def registrar_handlers(app: FastAPI) -> None:
    """Registra los handlers que traducen errores de dominio a respuestas HTTP."""

    def _error_interno(exc: InventarioError) -> JSONResponse:
        # El detalle interno no se expone al cliente
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": "Error interno del servidor", "code": exc.code},
        )

    @app.exception_handler(InventarioError)
    async def inventario_error_handler(request: Request, exc: InventarioError):
        if exc.status_code >= 500:
            logger.error(
                "Error de dominio %s en %s %s: %s",
                exc.code, request.method, request.url.path, exc.message
            )
            return _error_interno(exc)
        return _respuesta(exc)

    @app.exception_handler(SQLAlchemyError)
    async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
        """Errores de base de datos no envueltos por un servicio."""
        logger.error(
            "Error de base de datos en %s %s: %s",
            request.method, request.url.path, str(exc),
            exc_info=exc,
        )
        return _error_interno(TransaccionError(f"{request.method} {request.url.path}"))
