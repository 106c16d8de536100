# inventario_api/db/init_db.py
from sqlalchemy.orm import Session
from inventario_api.models.role import Role
from inventario_api.models.usuario import Usuario
from inventario_api.core.config import settings, Roles
from inventario_api.core.security import hash_password
from inventario_api.utils.logger import logger


def create_default_roles_and_admin(db: Session):
    # === Crear roles si no existen ===
    for role_name in Roles.TODOS:
        if not db.query(Role).filter(Role.nombre == role_name).first():
            db.add(Role(nombre=role_name))
            logger.info("Rol creado: %s", role_name)
    db.commit()

    # === Crear usuario administrador si no existe ===
    admin = db.query(Usuario).filter(Usuario.usuario == settings.admin_username).first()
    if admin:
        logger.info("Administrador ya existe: %s", admin.usuario)
        return

    email_exists = db.query(Usuario).filter(Usuario.email == settings.admin_email).first()
    if email_exists:
        logger.info("Email %s ya está asociado a otro usuario, saltando creación del administrador", settings.admin_email)
        return

    admin_role = db.query(Role).filter(Role.nombre == Roles.ADMINISTRADOR).first()
    admin = Usuario(
        usuario=settings.admin_username,
        nombre="Administrador",
        email=settings.admin_email,
        hashed_password=hash_password(settings.admin_password),
        activo=True,
        role_id=admin_role.id,
        must_change_password=True
    )
    db.add(admin)
    db.commit()
    logger.info("Administrador creado: %s", admin.usuario)
