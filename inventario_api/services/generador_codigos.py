# inventario_api/services/generador_codigos.py
"""
Generación de códigos legibles sin tabla de contadores.

- Etiqueta:   YYMMDD + secuencia de 4 dígitos        (2511160001)
- Código AF:  AF-YYYYMMDD- + secuencia de 4 dígitos  (AF-20251116-0001)
- Hijos:      {codigo_padre}-{n}, n = hijos existentes + 1

Las secuencias diarias se calculan leyendo el máximo vigente del prefijo en
`inventario_nuevo`. En PostgreSQL se toma un advisory lock de transacción por
prefijo antes de leer; en cualquier motor la restricción UNIQUE de la columna
detecta la colisión y la conciliación reintenta el registro.
"""

import logging
from datetime import date
from typing import Optional

from sqlalchemy import func, text
from sqlalchemy.orm import Session

from inventario_api.core.errors import CapacidadAgotadaError, IntegridadDatosError
from inventario_api.models.inventario_nuevo import InventarioNuevo
from inventario_api.utils.fechas import FechaHelper

logger = logging.getLogger(__name__)

LIMITE_SECUENCIA_DIARIA = 9999
ANCHO_SECUENCIA = 4


class GeneradorCodigos:
    def __init__(self, db: Session):
        self.db = db

    # ==================== SECUENCIAS DIARIAS ====================

    def generar_cod_etiqueta(self, hoy: Optional[date] = None) -> str:
        prefijo = (hoy or FechaHelper.hoy()).strftime("%y%m%d")
        codigo = f"{prefijo}{self._siguiente(InventarioNuevo.cod_etiqueta, prefijo):04d}"
        logger.info(f"Código de etiqueta generado: {codigo}")
        return codigo

    def generar_cod_af_inventario(self, hoy: Optional[date] = None) -> str:
        prefijo = f"AF-{(hoy or FechaHelper.hoy()).strftime('%Y%m%d')}-"
        codigo = f"{prefijo}{self._siguiente(InventarioNuevo.cod_af_inventario, prefijo):04d}"
        logger.info(f"Código AF generado: {codigo}")
        return codigo

    def _siguiente(self, columna, prefijo: str) -> int:
        self._bloquear_prefijo(prefijo)

        ultimo = (
            self.db.query(func.max(columna))
            .filter(columna.like(f"{prefijo}%"))
            .scalar()
        )
        if not ultimo:
            return 1

        sufijo = ultimo[len(prefijo):]
        if len(sufijo) != ANCHO_SECUENCIA or not sufijo.isdigit():
            # Reiniciar en 1 chocaría con los códigos ya emitidos del día
            raise IntegridadDatosError(
                f"El código '{ultimo}' no tiene el formato esperado para el prefijo {prefijo}; "
                f"corrija el dato antes de generar nuevos códigos",
                columna=columna.key,
                prefijo=prefijo,
                codigo=ultimo,
            )

        siguiente = int(sufijo) + 1
        if siguiente > LIMITE_SECUENCIA_DIARIA:
            raise CapacidadAgotadaError(prefijo, LIMITE_SECUENCIA_DIARIA)
        return siguiente

    def _bloquear_prefijo(self, prefijo: str) -> None:
        # Se libera solo al terminar la transacción (commit o rollback)
        if self.db.get_bind().dialect.name == "postgresql":
            self.db.execute(
                text("SELECT pg_advisory_xact_lock(hashtext(:prefijo))"),
                {"prefijo": prefijo}
            )

    # ==================== SECUENCIA POR PADRE ====================

    def generar_codigo_hijo(self, columna_padre, padre_id: str, codigo_padre: str) -> str:
        """
        Código de sucursal, área o responsable: `{codigo_padre}-{n}`.

        Args:
            columna_padre: columna FK del modelo hijo (p. ej. `Area.sucursal_id`)
            padre_id: id del registro padre
            codigo_padre: código del padre (p. ej. "PRJ01-2")
        """
        existentes = (
            self.db.query(func.count())
            .select_from(columna_padre.class_)
            .filter(columna_padre == padre_id)
            .scalar()
        )
        return f"{codigo_padre}-{existentes + 1}"
