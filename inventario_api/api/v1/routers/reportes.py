# inventario_api/api/v1/routers/reportes.py
from typing import Optional, Union

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from inventario_api.core.config import Roles
from inventario_api.core.security import require_role
from inventario_api.db.session import get_db
from inventario_api.schemas.reportes import AgruparPor, Estadisticas, EstadisticasAgrupadas
from inventario_api.services.reportes_service import ReportesService
from inventario_api.utils.logger import logger

router = APIRouter(tags=["Reportes"])


@router.get(
    "/estadisticas",
    response_model=Union[EstadisticasAgrupadas, Estadisticas],
    response_model_exclude_none=True,
    summary="Estadísticas de avance del inventario",
    description="""
    Sin `agruparPor` retorna los totales; con `agruparPor` retorna
    `{"estadisticas": [...]}` con una fila por proyecto, sucursal o área.

    Un usuario no administrador asignado a un proyecto solo ve su proyecto.
    """,
)
def estadisticas(
    proyecto_id: Optional[str] = Query(None, alias="proyectoId", description="Código de proyecto"),
    sucursal_id: Optional[str] = Query(None, alias="sucursalId", description="Código de sucursal"),
    area_id: Optional[str] = Query(None, alias="areaId", description="Código de área"),
    agrupar_por: Optional[AgruparPor] = Query(None, alias="agruparPor"),
    db: Session = Depends(get_db),
    current_user=Depends(require_role([Roles.ADMINISTRADOR, Roles.COORDINADOR])),
):
    if current_user.rol != Roles.ADMINISTRADOR and current_user.proyecto:
        if proyecto_id and proyecto_id != current_user.proyecto.cod_proyecto:
            logger.warning(
                f"Usuario {current_user.usuario} pidió estadísticas de {proyecto_id}; "
                f"se restringe a {current_user.proyecto.cod_proyecto}"
            )
        proyecto_id = current_user.proyecto.cod_proyecto

    service = ReportesService(db)
    if agrupar_por:
        return {
            "estadisticas": service.obtener_estadisticas_agrupadas(
                agrupar_por.value, proyecto_id, sucursal_id, area_id
            )
        }
    return service.obtener_estadisticas(proyecto_id, sucursal_id, area_id)
