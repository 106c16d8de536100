# inventario_api/api/v1/routers/inventario.py
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from inventario_api.core.config import Roles
from inventario_api.core.security import get_current_usuario
from inventario_api.crud import inventario as crud_inventario
from inventario_api.db.session import get_db
from inventario_api.schemas.inventario import (
    BusquedaGeneralResponse,
    InventarioDetalle,
    InventarioRead,
    MisRegistrosResponse,
)
from inventario_api.services.inventario_service import InventarioService

router = APIRouter(tags=["Inventario"])


@router.get(
    "/etiqueta/{cod_etiqueta}",
    response_model=InventarioDetalle,
    summary="Detalle por código de etiqueta (escaneo)",
    description="Activo histórico, su activo nuevo vinculado (si existe) y su estado actual/futuro.",
)
def get_by_etiqueta(cod_etiqueta: str, db: Session = Depends(get_db), current_user=Depends(get_current_usuario)):
    detalle = InventarioService(db).detalle_por_etiqueta(cod_etiqueta)
    if not detalle:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Inventario con etiqueta {cod_etiqueta} no encontrado")
    return detalle


@router.get("/patrimonial/{cod_patrimonial}", response_model=InventarioDetalle, summary="Detalle por código patrimonial")
def get_by_patrimonial(cod_patrimonial: str, db: Session = Depends(get_db), current_user=Depends(get_current_usuario)):
    detalle = InventarioService(db).detalle_por_patrimonial(cod_patrimonial)
    if not detalle:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Inventario con código patrimonial {cod_patrimonial} no encontrado")
    return detalle


@router.get("/buscar", response_model=List[InventarioRead], summary="Búsqueda libre en el inventario histórico")
def buscar(
    q: str = Query(..., min_length=2, description="Descripción, marca, modelo, serie o códigos"),
    limit: int = Query(20, ge=1, le=100),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_usuario),
):
    return crud_inventario.buscar(db, q, limit)


def _proyecto_del_registrador(current_user) -> Optional[str]:
    if current_user.rol == Roles.REGISTRADOR and current_user.proyecto:
        return current_user.proyecto.cod_proyecto
    return None


@router.get(
    "/mis-registros",
    response_model=MisRegistrosResponse,
    summary="Activos registrados por el usuario autenticado",
    description="""
    Históricos conciliados con los códigos AF del usuario y sus registros sobrantes,
    más recientes primero. Un registrador asignado a un proyecto solo ve ese proyecto.
    """,
)
def mis_registros(db: Session = Depends(get_db), current_user=Depends(get_current_usuario)):
    return InventarioService(db).mis_registros(current_user.id, _proyecto_del_registrador(current_user))


@router.get(
    "/buscar-todos",
    response_model=BusquedaGeneralResponse,
    summary="Búsqueda paginada en histórico y sobrantes",
    description="""
    Busca por descripción, código patrimonial o código de etiqueta (desde 3 caracteres).
    Un registrador queda limitado a su proyecto; administradores y coordinadores
    pueden filtrar con `proyectoId`.
    """,
)
def buscar_todos(
    q: Optional[str] = Query(None, description="Término de búsqueda; se ignora con menos de 3 caracteres"),
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    proyecto_id: Optional[str] = Query(None, alias="proyectoId", description="Código de proyecto"),
    db: Session = Depends(get_db),
    current_user=Depends(get_current_usuario),
):
    if current_user.rol == Roles.REGISTRADOR:
        proyecto_id = _proyecto_del_registrador(current_user)
    return InventarioService(db).buscar_todos(q, proyecto_id, offset, limit)


@router.get("/{inventario_id}", response_model=InventarioDetalle, summary="Detalle por id")
def get_one(inventario_id: str, db: Session = Depends(get_db), current_user=Depends(get_current_usuario)):
    detalle = InventarioService(db).detalle_por_id(inventario_id)
    if not detalle:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Inventario no encontrado")
    return detalle
