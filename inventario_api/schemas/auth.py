# inventario_api/schemas/auth.py
import re

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import datetime


class UsuarioResponse(BaseModel):
    id: str
    usuario: str
    nombre: str
    email: Optional[str] = None
    rol: str
    proyecto_id: Optional[str] = None
    activo: bool
    must_change_password: bool
    creado_en: datetime

    class Config:
        from_attributes = True


class UsuarioCreate(BaseModel):
    usuario: str = Field(..., min_length=3, max_length=100, example="registrador.lima")
    nombre: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    dni: Optional[str] = Field(None, max_length=20)
    celular: Optional[str] = Field(None, max_length=20)
    password: str = Field(..., min_length=8)
    rol: str = Field(..., description="ADMINISTRADOR | COORDINADOR | REGISTRADOR")
    proyecto_id: Optional[str] = Field(None, description="Restringe el usuario a un proyecto")


class LoginRequest(BaseModel):
    usuario: str
    password: str


class RefreshRequest(BaseModel):
    refresh_token: str


class TokenResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Vigencia del access token en segundos")
    user: UsuarioResponse


class ChangePasswordRequest(BaseModel):
    old_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8, description="Mínimo 8 caracteres con mayúscula, minúscula y número")

    @field_validator("new_password")
    @classmethod
    def complejidad(cls, valor: str) -> str:
        if not (re.search(r"[a-z]", valor) and re.search(r"[A-Z]", valor) and re.search(r"\d", valor)):
            raise ValueError("La contraseña debe contener al menos una mayúscula, una minúscula y un número")
        return valor
