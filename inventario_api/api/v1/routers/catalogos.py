# inventario_api/api/v1/routers/catalogos.py
from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from inventario_api.core.config import Roles
from inventario_api.core.security import get_current_usuario, require_role
from inventario_api.crud import catalogo as crud_catalogo
from inventario_api.db.session import get_db
from inventario_api.schemas.catalogo import (
    AreaCreate,
    AreaRead,
    ProyectoCreate,
    ProyectoRead,
    ResponsableCreate,
    ResponsableRead,
    SucursalCreate,
    SucursalRead,
)
from inventario_api.services.catalogo_service import CatalogoService

router = APIRouter(tags=["Catálogos"])

solo_admin = require_role(Roles.ADMINISTRADOR)


# ==================== PROYECTOS ====================

@router.post("/proyectos", response_model=ProyectoRead, status_code=status.HTTP_201_CREATED, summary="Crear proyecto")
def crear_proyecto(data: ProyectoCreate, db: Session = Depends(get_db), current_user=Depends(solo_admin)):
    return CatalogoService(db).crear_proyecto(data)


@router.get("/proyectos", response_model=List[ProyectoRead], summary="Listar proyectos")
def listar_proyectos(db: Session = Depends(get_db), current_user=Depends(get_current_usuario)):
    return crud_catalogo.list_proyectos(db)


# ==================== SUCURSALES ====================

@router.post("/sucursales", response_model=SucursalRead, status_code=status.HTTP_201_CREATED, summary="Crear sucursal")
def crear_sucursal(data: SucursalCreate, db: Session = Depends(get_db), current_user=Depends(solo_admin)):
    return CatalogoService(db).crear_sucursal(data)


@router.get("/sucursales", response_model=List[SucursalRead], summary="Listar sucursales")
def listar_sucursales(
    proyecto_id: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_usuario),
):
    return crud_catalogo.list_sucursales(db, proyecto_id)


# ==================== ÁREAS ====================

@router.post("/areas", response_model=AreaRead, status_code=status.HTTP_201_CREATED, summary="Crear área")
def crear_area(data: AreaCreate, db: Session = Depends(get_db), current_user=Depends(solo_admin)):
    return CatalogoService(db).crear_area(data)


@router.get("/areas", response_model=List[AreaRead], summary="Listar áreas")
def listar_areas(
    sucursal_id: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_usuario),
):
    return crud_catalogo.list_areas(db, sucursal_id)


# ==================== RESPONSABLES ====================

@router.post("/responsables", response_model=ResponsableRead, status_code=status.HTTP_201_CREATED, summary="Crear responsable")
def crear_responsable(data: ResponsableCreate, db: Session = Depends(get_db), current_user=Depends(solo_admin)):
    return CatalogoService(db).crear_responsable(data)


@router.get("/responsables", response_model=List[ResponsableRead], summary="Listar responsables")
def listar_responsables(
    area_id: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_usuario),
):
    return crud_catalogo.list_responsables(db, area_id)
