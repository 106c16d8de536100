# inventario_api/services/auth_service.py
"""
Emisión de tokens de sesión.

El access token es un JWT de corta duración. El refresh token es un valor
aleatorio opaco: se entrega una sola vez al cliente y en base de datos solo
se guarda su hash SHA-256. Cada uso lo revoca y emite uno nuevo (rotación).
"""

import hashlib
import secrets
from datetime import timedelta
from typing import Optional

from sqlalchemy.orm import Session

from inventario_api.core.config import settings
from inventario_api.core.security import create_access_token, hash_password, verify_password
from inventario_api.crud.usuario import authenticate
from inventario_api.models.refresh_token import RefreshToken
from inventario_api.models.usuario import Usuario
from inventario_api.schemas.auth import UsuarioResponse
from inventario_api.utils.fechas import FechaHelper
from inventario_api.utils.logger import logger


def _hash_token(token: str) -> str:
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def _emitir_tokens(db: Session, user: Usuario) -> dict:
    access_token = create_access_token(
        subject=user.id,
        extra_claims={"rol": user.rol, "proyecto_id": user.proyecto_id},
    )
    refresh_token = secrets.token_urlsafe(48)
    db.add(RefreshToken(
        usuario_id=user.id,
        token_hash=_hash_token(refresh_token),
        expira_en=FechaHelper.ahora_utc() + timedelta(days=settings.refresh_token_expire_days),
    ))
    db.commit()
    return {
        "access_token": access_token,
        "refresh_token": refresh_token,
        "token_type": "bearer",
        "expires_in": settings.access_token_expire_minutes * 60,
        "user": UsuarioResponse.model_validate(user),
    }


def login(db: Session, username: str, password: str) -> Optional[dict]:
    user = authenticate(db, username, password)
    if not user or not user.activo:
        return None
    user.last_login = FechaHelper.ahora_utc()
    logger.info(f"Login exitoso: {user.usuario}")
    return _emitir_tokens(db, user)


def _token_vigente(db: Session, refresh_token: str) -> Optional[RefreshToken]:
    registro = db.query(RefreshToken).filter(
        RefreshToken.token_hash == _hash_token(refresh_token)
    ).first()
    if not registro or registro.revocado:
        return None
    # SQLite devuelve datetimes naive
    if registro.expira_en.replace(tzinfo=None) < FechaHelper.ahora_utc():
        return None
    return registro


def refresh(db: Session, refresh_token: str) -> Optional[dict]:
    registro = _token_vigente(db, refresh_token)
    if not registro or not registro.usuario.activo:
        return None
    registro.revocado = True
    return _emitir_tokens(db, registro.usuario)


def logout(db: Session, refresh_token: str) -> bool:
    registro = _token_vigente(db, refresh_token)
    if not registro:
        return False
    registro.revocado = True
    db.commit()
    logger.info(f"Refresh token revocado para usuario {registro.usuario_id}")
    return True


def cambiar_password(db: Session, user: Usuario, password_actual: str, password_nueva: str) -> bool:
    """
    Cambia la contraseña y revoca todas las sesiones abiertas del usuario.

    Retorna False si `password_actual` no coincide.
    """
    if not verify_password(password_actual, user.hashed_password):
        return False
    user.hashed_password = hash_password(password_nueva)
    user.must_change_password = False
    revocados = (
        db.query(RefreshToken)
        .filter(RefreshToken.usuario_id == user.id, RefreshToken.revocado.is_(False))
        .update({RefreshToken.revocado: True}, synchronize_session=False)
    )
    db.commit()
    logger.info(f"Contraseña actualizada para {user.usuario}; {revocados} refresh token(s) revocados")
    return True
