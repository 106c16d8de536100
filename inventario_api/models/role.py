from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from inventario_api.db.base import Base, generar_uuid


class Role(Base):
    __tablename__ = "roles"

    id = Column(String(36), primary_key=True, default=generar_uuid)
    nombre = Column(String(50), unique=True, nullable=False)

    # Relación inversa
    usuarios = relationship("Usuario", back_populates="role", lazy="selectin")
