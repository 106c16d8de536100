# inventario_api/api/v1/routers/inventario_nuevo.py
"""
Router de activos registrados en campo.

Incluye las dos operaciones de conciliación (registro y corrección) y las
consultas de lectura de inventario_nuevo.
"""
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from inventario_api.core.config import Roles
from inventario_api.core.errors import RecursoNoEncontradoError
from inventario_api.core.security import get_current_usuario, require_role
from inventario_api.crud import inventario_nuevo as crud_inventario_nuevo
from inventario_api.db.session import get_db
from inventario_api.models.inventario import ActivoEstado
from inventario_api.schemas.common import ErrorResponse, PaginatedResponse, construir_paginacion
from inventario_api.schemas.inventario_nuevo import (
    InventarioNuevoDetalle,
    InventarioNuevoOperacionResponse,
    InventarioNuevoRead,
    RegisterFromExistingRequest,
    UpdateFromExistingRequest,
)
from inventario_api.services.conciliacion_service import ConciliacionService

router = APIRouter(tags=["Inventario Nuevo"])

registradores = require_role([Roles.ADMINISTRADOR, Roles.REGISTRADOR])


# ==================== CONCILIACIÓN ====================

@router.post(
    "/register-from-existing",
    response_model=InventarioNuevoOperacionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Registrar activo (conciliado o sobrante)",
    description="""
    Registra un activo confirmado en campo.

    - Con `inventario_origen_id`: concilia el activo histórico (queda `encontrado`)
    - Sin `inventario_origen_id`: activo sobrante, `tipo_activo_fijo` obligatorio

    Genera el código de etiqueta (YYMMDDNNNN) y el código AF (AF-YYYYMMDD-NNNN)
    y deja un registro de auditoría con la ubicación GPS enviada.
    """,
    responses={400: {"model": ErrorResponse}},
)
def register_from_existing(
    payload: RegisterFromExistingRequest,
    db: Session = Depends(get_db),
    current_user=Depends(registradores),
):
    try:
        inventario = ConciliacionService(db).registrar_desde_existente(payload, current_user.id)
    except RecursoNoEncontradoError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return {
        "message": "Activo fijo registrado correctamente desde inventario existente",
        "inventario": inventario,
    }


@router.put(
    "/{inventario_nuevo_id}/update-from-existing",
    response_model=InventarioNuevoOperacionResponse,
    summary="Corregir un activo registrado",
    description="Actualiza los datos de un activo sin regenerar sus códigos y agrega un registro de auditoría.",
    responses={400: {"model": ErrorResponse}},
)
def update_from_existing(
    inventario_nuevo_id: str,
    payload: UpdateFromExistingRequest,
    db: Session = Depends(get_db),
    current_user=Depends(registradores),
):
    try:
        inventario = ConciliacionService(db).actualizar_desde_existente(
            inventario_nuevo_id, payload, current_user.id
        )
    except RecursoNoEncontradoError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
    return {"message": "Activo fijo actualizado correctamente", "inventario": inventario}


# ==================== CONSULTAS ====================

@router.get(
    "",
    response_model=PaginatedResponse[InventarioNuevoRead],
    summary="Listar activos registrados",
)
def list_all(
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=500),
    search: Optional[str] = Query(None, description="Descripción, código patrimonial o de etiqueta"),
    cod_proyecto: Optional[str] = None,
    cod_sucursal: Optional[str] = None,
    cod_area: Optional[str] = None,
    estado: Optional[ActivoEstado] = None,
    creado_por: Optional[str] = None,
    fecha_desde: Optional[date] = None,
    fecha_hasta: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_usuario),
):
    """Un registrador asignado a un proyecto solo ve los activos de ese proyecto."""
    if current_user.rol == Roles.REGISTRADOR and current_user.proyecto:
        cod_proyecto = current_user.proyecto.cod_proyecto

    registros, total = crud_inventario_nuevo.list_inventario_nuevo(
        db,
        skip=(page - 1) * per_page,
        limit=per_page,
        search=search,
        cod_proyecto=cod_proyecto,
        cod_sucursal=cod_sucursal,
        cod_area=cod_area,
        estado=estado,
        creado_por=creado_por,
        fecha_desde=fecha_desde,
        fecha_hasta=fecha_hasta,
    )
    return {"data": registros, "pagination": construir_paginacion(total, page, per_page)}


@router.get("/etiqueta/{cod_etiqueta}", response_model=InventarioNuevoDetalle, summary="Buscar por código de etiqueta")
def get_by_etiqueta(
    cod_etiqueta: str,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_usuario),
):
    inventario = crud_inventario_nuevo.get_by_cod_etiqueta(db, cod_etiqueta)
    if not inventario:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Activo con etiqueta {cod_etiqueta} no encontrado")
    return inventario


@router.get("/{inventario_nuevo_id}", response_model=InventarioNuevoDetalle, summary="Detalle de un activo registrado")
def get_one(
    inventario_nuevo_id: str,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_usuario),
):
    inventario = crud_inventario_nuevo.get_inventario_nuevo(db, inventario_nuevo_id)
    if not inventario:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Activo no encontrado")
    return inventario
