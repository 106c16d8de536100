# inventario_api/core/security.py
from passlib.context import CryptContext
from datetime import timedelta
from typing import Optional, Dict, Any
from jose import jwt, JWTError
from fastapi import HTTPException, status, Depends
from fastapi.security import OAuth2PasswordBearer
from inventario_api.core.config import settings
from inventario_api.db.session import get_db
from sqlalchemy.orm import Session
from inventario_api.crud.usuario import get_usuario_by_id
from inventario_api.utils.logger import logger
from inventario_api.utils.fechas import FechaHelper

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login")

TIPO_TOKEN_ACCESO = "access"


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)


def _no_autenticado(detalle: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detalle,
        headers={"WWW-Authenticate": "Bearer"},
    )


# ==================== TOKENS ====================

def create_access_token(
    subject: str,
    expires_delta: Optional[timedelta] = None,
    extra_claims: Optional[Dict[str, Any]] = None,
) -> str:
    """JWT de acceso con `sub` = id del usuario. `extra_claims` puede agregar o reemplazar claims."""
    emitido = FechaHelper.ahora_utc()
    vigencia = expires_delta if expires_delta is not None else timedelta(minutes=settings.access_token_expire_minutes)
    claims: Dict[str, Any] = {
        "sub": str(subject),
        "iat": emitido,
        "exp": emitido + vigencia,
        "type": TIPO_TOKEN_ACCESO,
    }
    claims.update(extra_claims or {})
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        raise _no_autenticado("Token inválido o expirado")
    if claims.get("type") != TIPO_TOKEN_ACCESO or not claims.get("sub"):
        raise _no_autenticado("Token inválido")
    return claims


# ==================== DEPENDENCIES ====================

def get_current_usuario(token: str = Depends(oauth2_scheme), db: Session = Depends(get_db)):
    """Usuario activo dueño del bearer token."""
    claims = decode_access_token(token)
    user = get_usuario_by_id(db, claims["sub"])
    if user is None:
        raise _no_autenticado("Usuario no encontrado")
    if not user.activo:
        raise _no_autenticado("Usuario inactivo")
    return user


def require_role(role_names):
    """
    Dependency que exige uno de los roles indicados.

    Acepta un rol (`require_role(Roles.ADMINISTRADOR)`) o una lista
    (`require_role([Roles.ADMINISTRADOR, Roles.COORDINADOR])`).
    """
    permitidos = [role_names] if isinstance(role_names, str) else list(role_names)

    def verificar_rol(current_user=Depends(get_current_usuario)):
        if current_user.rol not in permitidos:
            logger.warning(
                f"Acceso denegado: usuario {current_user.usuario} con rol '{current_user.rol}' "
                f"(requiere {', '.join(permitidos)})"
            )
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Permisos insuficientes")
        return current_user
    return verificar_rol
