# inventario_api/api/v1/routers/usuarios.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from inventario_api.core.config import Roles
from inventario_api.core.security import require_role
from inventario_api.crud import catalogo as crud_catalogo
from inventario_api.crud.usuario import create_usuario, get_role_by_nombre, get_usuario_by_usuario, list_usuarios
from inventario_api.db.session import get_db
from inventario_api.schemas.auth import UsuarioCreate, UsuarioResponse
from inventario_api.utils.logger import logger

router = APIRouter(tags=["Usuarios"])

solo_admin = require_role(Roles.ADMINISTRADOR)


@router.post("", response_model=UsuarioResponse, status_code=status.HTTP_201_CREATED, summary="Crear usuario")
def create(data: UsuarioCreate, db: Session = Depends(get_db), current_user=Depends(solo_admin)):
    role = get_role_by_nombre(db, data.rol)
    if not role:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Rol {data.rol} no existe")
    if data.proyecto_id and not crud_catalogo.get_proyecto(db, data.proyecto_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="El proyecto especificado no existe")
    if get_usuario_by_usuario(db, data.usuario):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"El usuario '{data.usuario}' ya existe")

    usuario = create_usuario(db, data, role)
    logger.info(f"Usuario creado: {usuario.usuario} ({role.nombre}) por {current_user.usuario}")
    return usuario


@router.get("", response_model=List[UsuarioResponse], summary="Listar usuarios")
def list_all(skip: int = 0, limit: int = 100, db: Session = Depends(get_db), current_user=Depends(solo_admin)):
    return list_usuarios(db, skip=skip, limit=limit)
