from sqlalchemy.orm import Session
from typing import List, Optional

from inventario_api.models.role import Role
from inventario_api.models.usuario import Usuario


# -----------------------------------------------------
# Obtener usuario por ID
# -----------------------------------------------------
def get_usuario_by_id(db: Session, usuario_id: str) -> Optional[Usuario]:
    return db.query(Usuario).filter(Usuario.id == usuario_id).first()


# -----------------------------------------------------
# Obtener usuario por nombre de usuario
# -----------------------------------------------------
def get_usuario_by_usuario(db: Session, usuario: str) -> Optional[Usuario]:
    return db.query(Usuario).filter(Usuario.usuario == usuario).first()


def get_role_by_nombre(db: Session, nombre: str) -> Optional[Role]:
    return db.query(Role).filter(Role.nombre == nombre).first()


# -----------------------------------------------------
# Autenticar usuario
# -----------------------------------------------------
def authenticate(db: Session, usuario: str, password: str) -> Optional[Usuario]:
    from inventario_api.core.security import verify_password
    user = get_usuario_by_usuario(db, usuario)
    if not user or not user.hashed_password:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


# -----------------------------------------------------
# Crear usuario
# -----------------------------------------------------
def create_usuario(db: Session, data, role: Role) -> Usuario:
    from inventario_api.core.security import hash_password
    create_data = data.model_dump(exclude={"rol"})
    create_data["hashed_password"] = hash_password(create_data.pop("password"))

    obj = Usuario(**create_data, role_id=role.id)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


def list_usuarios(db: Session, skip: int = 0, limit: int = 100) -> List[Usuario]:
    return db.query(Usuario).order_by(Usuario.usuario).offset(skip).limit(limit).all()
