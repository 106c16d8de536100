from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func, expression
from sqlalchemy.orm import relationship
from inventario_api.db.base import Base, generar_uuid
from inventario_api.utils.fechas import FechaHelper


class Usuario(Base):
    __tablename__ = "usuarios"

    id = Column(String(36), primary_key=True, default=generar_uuid)
    usuario = Column(String(100), nullable=False, unique=True)  # login
    nombre = Column(String(255), nullable=False)
    dni = Column(String(20), nullable=True, unique=True)
    email = Column(String(255), nullable=True, unique=True)
    celular = Column(String(20), nullable=True)
    activo = Column(Boolean, default=True, server_default=expression.true(), nullable=False)
    last_login = Column(DateTime(timezone=True), nullable=True)
    role_id = Column(String(36), ForeignKey("roles.id", onupdate="CASCADE", ondelete="RESTRICT"), nullable=False)
    hashed_password = Column(String(255), nullable=False)
    must_change_password = Column(Boolean, default=True, server_default=expression.true(), nullable=False)

    # Registradores y coordinadores pueden quedar restringidos a un único proyecto
    proyecto_id = Column(String(36), ForeignKey("proyectos.id", ondelete="SET NULL"), nullable=True, index=True)

    creado_en = Column(DateTime(timezone=True), default=FechaHelper.ahora_utc, server_default=func.now(), nullable=False)

    # Relaciones
    role = relationship("Role", back_populates="usuarios", lazy="joined")
    proyecto = relationship("Proyecto", back_populates="usuarios", lazy="joined")
    refresh_tokens = relationship("RefreshToken", back_populates="usuario", cascade="all, delete-orphan", lazy="select")

    @property
    def rol(self) -> str:
        """Nombre del rol, o cadena vacía si el usuario no tiene rol cargado."""
        return self.role.nombre if self.role else ""
