from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func, expression
from sqlalchemy.orm import relationship
from inventario_api.db.base import Base, generar_uuid
from inventario_api.utils.fechas import FechaHelper


class RefreshToken(Base):
    """Refresh token persistido como hash SHA-256; se revoca al rotarlo o en logout."""

    __tablename__ = "refresh_tokens"

    id = Column(String(36), primary_key=True, default=generar_uuid)
    usuario_id = Column(String(36), ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False, index=True)
    token_hash = Column(String(64), nullable=False, unique=True)
    expira_en = Column(DateTime(timezone=True), nullable=False)
    revocado = Column(Boolean, default=False, server_default=expression.false(), nullable=False)
    creado_en = Column(DateTime(timezone=True), default=FechaHelper.ahora_utc, server_default=func.now(), nullable=False)

    usuario = relationship("Usuario", back_populates="refresh_tokens")
