# inventario_api/api/v1/routers/auth.py
"""
Router de autenticación - login, rotación de refresh token, logout y cambio de contraseña.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from inventario_api.core.security import get_current_usuario
from inventario_api.db.session import get_db
from inventario_api.schemas.auth import (
    ChangePasswordRequest,
    LoginRequest,
    RefreshRequest,
    TokenResponse,
    UsuarioResponse,
)
from inventario_api.schemas.common import MensajeResponse
from inventario_api.services import auth_service
from inventario_api.utils.logger import logger

router = APIRouter()


@router.post("/login", response_model=TokenResponse, summary="Login con usuario y contraseña")
def login(credentials: LoginRequest, db: Session = Depends(get_db)):
    """
    Retorna access token (JWT), refresh token y datos del usuario.
    """
    resultado = auth_service.login(db, credentials.usuario, credentials.password)
    if not resultado:
        logger.warning(f"Login fallido para usuario: {credentials.usuario}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Usuario o contraseña incorrectos"
        )
    return resultado


@router.post("/refresh", response_model=TokenResponse, summary="Renovar tokens")
def refresh(data: RefreshRequest, db: Session = Depends(get_db)):
    """El refresh token usado queda revocado y se entrega uno nuevo."""
    resultado = auth_service.refresh(db, data.refresh_token)
    if not resultado:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Refresh token inválido o expirado")
    return resultado


@router.post("/logout", response_model=MensajeResponse, summary="Cerrar sesión")
def logout(data: RefreshRequest, db: Session = Depends(get_db)):
    auth_service.logout(db, data.refresh_token)
    return {"message": "Sesión cerrada correctamente"}


@router.post("/change-password", response_model=MensajeResponse, summary="Cambiar contraseña")
def change_password(
    data: ChangePasswordRequest,
    db: Session = Depends(get_db),
    current_user=Depends(get_current_usuario),
):
    """Requiere la contraseña actual. Cierra todas las sesiones abiertas del usuario."""
    if not auth_service.cambiar_password(db, current_user, data.old_password, data.new_password):
        logger.warning(f"Cambio de contraseña rechazado para {current_user.usuario}")
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Contraseña actual incorrecta")
    return {"message": "Contraseña actualizada correctamente"}


@router.get("/me", response_model=UsuarioResponse, summary="Usuario autenticado")
def me(current_user=Depends(get_current_usuario)):
    return current_user
