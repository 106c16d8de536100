# inventario_api/services/reportes_service.py
"""
Estadísticas de avance del inventario.

    inventario_anterior = históricos que cumplen el filtro
    inventario_actual   = históricos con encontrado = true y cod_af_inventario informado
    faltantes           = inventario_anterior - inventario_actual (mínimo 0)
    avance              = redondeo de inventario_actual / inventario_anterior * 100
    sobrantes           = activos nuevos sin inventario origen
    total               = inventario_actual + sobrantes

Los filtros (proyecto, sucursal, área) son códigos y se combinan con AND.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy import and_, case, func
from sqlalchemy.orm import Session

from inventario_api.models.inventario import Inventario
from inventario_api.models.inventario_nuevo import InventarioNuevo

logger = logging.getLogger(__name__)

COLUMNAS_AGRUPACION = {
    "proyecto": "cod_proyecto",
    "sucursal": "cod_sucursal",
    "area": "cod_area",
}


class ReportesService:
    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _aplicar_filtros(query, modelo, filtros: Dict[str, Optional[str]]):
        for columna, valor in filtros.items():
            if valor:
                query = query.filter(getattr(modelo, columna) == valor)
        return query

    @staticmethod
    def calcular(inventario_anterior: int, inventario_actual: int, sobrantes: int, contexto: str = "") -> Dict[str, int]:
        faltantes = inventario_anterior - inventario_actual
        if faltantes < 0:
            logger.warning(
                f"Inconsistencia de datos{contexto}: {inventario_actual} conciliados "
                f"sobre {inventario_anterior} históricos; faltantes se reporta en 0"
            )
            faltantes = 0

        # Redondeo half-up con aritmética entera
        avance = 0
        if inventario_anterior > 0:
            avance = (inventario_actual * 200 + inventario_anterior) // (2 * inventario_anterior)

        return {
            "inventario_anterior": inventario_anterior,
            "inventario_actual": inventario_actual,
            "faltantes": faltantes,
            "avance": avance,
            "sobrantes": sobrantes,
            "total": inventario_actual + sobrantes,
        }

    def obtener_estadisticas(
        self,
        cod_proyecto: Optional[str] = None,
        cod_sucursal: Optional[str] = None,
        cod_area: Optional[str] = None,
    ) -> Dict[str, int]:
        filtros = {"cod_proyecto": cod_proyecto, "cod_sucursal": cod_sucursal, "cod_area": cod_area}

        inventario_anterior = self._aplicar_filtros(
            self.db.query(func.count(Inventario.id)), Inventario, filtros
        ).scalar()

        inventario_actual = self._aplicar_filtros(
            self.db.query(func.count(Inventario.id)).filter(
                Inventario.encontrado.is_(True),
                Inventario.cod_af_inventario.isnot(None),
            ),
            Inventario,
            filtros,
        ).scalar()

        sobrantes = self._aplicar_filtros(
            self.db.query(func.count(InventarioNuevo.id)).filter(
                InventarioNuevo.inventario_origen_id.is_(None)
            ),
            InventarioNuevo,
            filtros,
        ).scalar()

        return self.calcular(inventario_anterior or 0, inventario_actual or 0, sobrantes or 0)

    def obtener_estadisticas_agrupadas(
        self,
        agrupar_por: str,
        cod_proyecto: Optional[str] = None,
        cod_sucursal: Optional[str] = None,
        cod_area: Optional[str] = None,
    ) -> List[Dict]:
        """
        Una fila por valor distinto de la columna de agrupación, presente en
        el inventario histórico o en los sobrantes, ordenadas por código.
        """
        nombre_columna = COLUMNAS_AGRUPACION[agrupar_por]
        filtros = {"cod_proyecto": cod_proyecto, "cod_sucursal": cod_sucursal, "cod_area": cod_area}

        col_historico = getattr(Inventario, nombre_columna)
        conciliado = case(
            (and_(Inventario.encontrado.is_(True), Inventario.cod_af_inventario.isnot(None)), 1),
            else_=0,
        )
        historicos = self._aplicar_filtros(
            self.db.query(col_historico, func.count(Inventario.id), func.sum(conciliado))
            .filter(col_historico.isnot(None)),
            Inventario,
            filtros,
        ).group_by(col_historico).all()

        col_nuevo = getattr(InventarioNuevo, nombre_columna)
        sobrantes = self._aplicar_filtros(
            self.db.query(col_nuevo, func.count(InventarioNuevo.id))
            .filter(InventarioNuevo.inventario_origen_id.is_(None)),
            InventarioNuevo,
            filtros,
        ).group_by(col_nuevo).all()

        por_grupo = {clave: (int(total), int(actual or 0)) for clave, total, actual in historicos}
        sobrantes_por_grupo = {clave: int(total) for clave, total in sobrantes}

        estadisticas = []
        for clave in sorted(set(por_grupo) | set(sobrantes_por_grupo)):
            anterior, actual = por_grupo.get(clave, (0, 0))
            fila = {agrupar_por: clave}
            fila.update(self.calcular(anterior, actual, sobrantes_por_grupo.get(clave, 0), f" en {agrupar_por} {clave}"))
            estadisticas.append(fila)

        logger.info(f"Estadísticas agrupadas por {agrupar_por}: {len(estadisticas)} grupos")
        return estadisticas
