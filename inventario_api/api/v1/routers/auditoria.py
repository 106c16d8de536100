# inventario_api/api/v1/routers/auditoria.py
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from inventario_api.core.config import Roles
from inventario_api.core.security import require_role
from inventario_api.db.session import get_db
from inventario_api.schemas.auditoria import AuditoriaListado
from inventario_api.services.auditoria_service import AuditoriaService

router = APIRouter(tags=["Auditoría"])

supervisores = require_role([Roles.ADMINISTRADOR, Roles.COORDINADOR])


@router.get(
    "/ubicacion/{inventario_nuevo_id}",
    response_model=AuditoriaListado,
    summary="Historial de ubicaciones de un activo",
    description="Todos los registros GPS del activo, del más reciente al más antiguo.",
)
def por_inventario_nuevo(
    inventario_nuevo_id: str,
    db: Session = Depends(get_db),
    current_user=Depends(supervisores),
):
    registros = AuditoriaService(db).por_inventario_nuevo(inventario_nuevo_id)
    return {"total": len(registros), "registros": registros}


@router.get(
    "/ubicacion/user/{user_id}",
    response_model=AuditoriaListado,
    summary="Historial de ubicaciones de un usuario",
    description="Filtrable por rango de fechas ISO (`fechaDesde`, `fechaHasta`), ambos inclusivos.",
)
def por_usuario(
    user_id: str,
    fecha_desde: Optional[date] = Query(None, alias="fechaDesde"),
    fecha_hasta: Optional[date] = Query(None, alias="fechaHasta"),
    db: Session = Depends(get_db),
    current_user=Depends(supervisores),
):
    registros = AuditoriaService(db).por_usuario(user_id, fecha_desde, fecha_hasta)
    return {"total": len(registros), "registros": registros}
