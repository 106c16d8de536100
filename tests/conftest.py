"""
Configuración central de pytest y fixtures compartidas para todos los tests.

Proporciona:
- Base de datos SQLite en memoria, recreada en cada test
- Cliente HTTP de prueba con `get_db` sobrescrito
- Usuarios y tokens por rol (ADMINISTRADOR, COORDINADOR, REGISTRADOR)
- Fábricas de inventario histórico, activos nuevos y payloads de registro
"""
import os

# Debe definirse antes de importar la aplicación
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("SECRET_KEY", "clave-de-pruebas-no-usar-en-produccion")

import itertools
import time

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from inventario_api.main import app
from inventario_api.core.config import Roles
from inventario_api.core.security import create_access_token, hash_password
from inventario_api.db.session import get_db
from inventario_api.models import (
    Base,
    Inventario,
    InventarioNuevo,
    Proyecto,
    RegistroInventario,
    Role,
    TipoActivoFijo,
    Usuario,
)

PASSWORD_PRUEBAS = "clave-segura-123"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


# ==================== FIXTURES GLOBALES ====================

@pytest.fixture
def db():
    """Sesión sobre un esquema recién creado; se descarta al terminar el test."""
    Base.metadata.create_all(bind=engine)
    session = TestingSessionLocal()
    for nombre in Roles.TODOS:
        session.add(Role(nombre=nombre))
    session.commit()

    yield session

    session.rollback()
    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session):
    """Cliente HTTP que comparte la sesión del test."""
    def _get_db():
        yield db

    app.dependency_overrides[get_db] = _get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# ==================== USUARIOS Y TOKENS ====================

@pytest.fixture
def proyecto(db: Session) -> Proyecto:
    obj = Proyecto(cod_proyecto="PRJ01", empresa="Empresa de Pruebas S.A.C.")
    db.add(obj)
    db.commit()
    return obj


def _crear_usuario(db: Session, usuario: str, rol: str, proyecto_id=None) -> Usuario:
    role = db.query(Role).filter(Role.nombre == rol).first()
    obj = Usuario(
        usuario=usuario,
        nombre=usuario.replace(".", " ").title(),
        email=f"{usuario}@empresa.com",
        hashed_password=hash_password(PASSWORD_PRUEBAS),
        role_id=role.id,
        proyecto_id=proyecto_id,
        must_change_password=False,
    )
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


@pytest.fixture
def admin(db: Session) -> Usuario:
    return _crear_usuario(db, "admin.test", Roles.ADMINISTRADOR)


@pytest.fixture
def coordinador(db: Session) -> Usuario:
    return _crear_usuario(db, "coordinador.test", Roles.COORDINADOR)


@pytest.fixture
def registrador(db: Session) -> Usuario:
    return _crear_usuario(db, "registrador.test", Roles.REGISTRADOR)


@pytest.fixture
def usuario_factory(db: Session):
    """Crea usuarios adicionales: usuario_factory("x", Roles.COORDINADOR, proyecto_id)."""
    def _crear(usuario: str, rol: str, proyecto_id=None) -> Usuario:
        return _crear_usuario(db, usuario, rol, proyecto_id)
    return _crear


def auth_headers(usuario: Usuario) -> dict:
    return {"Authorization": f"Bearer {create_access_token(usuario.id)}"}


@pytest.fixture
def headers_admin(admin):
    return auth_headers(admin)


@pytest.fixture
def headers_coordinador(coordinador):
    return auth_headers(coordinador)


@pytest.fixture
def headers_registrador(registrador):
    return auth_headers(registrador)


# ==================== DATOS DE INVENTARIO ====================

@pytest.fixture
def inventario_factory(db: Session):
    """Crea filas del inventario histórico con valores por defecto razonables."""
    contador = itertools.count(1)

    def _crear(**campos) -> Inventario:
        n = next(contador)
        valores = {
            "cod_proyecto": "PRJ01",
            "cod_sucursal": "PRJ01-1",
            "cod_area": "PRJ01-1-1",
            "cod_patrimonial": f"PAT-{n:05d}",
            "cod_etiqueta": f"LEG{n:07d}",
            "descripcion": f"ACTIVO HISTORICO {n}",
        }
        valores.update(campos)
        obj = Inventario(**valores)
        db.add(obj)
        db.commit()
        return obj
    return _crear


@pytest.fixture
def activo_factory(db: Session, registrador):
    """Inserta activos nuevos directamente (sin pasar por la conciliación)."""
    contador = itertools.count(1)

    def _crear(**campos) -> InventarioNuevo:
        n = next(contador)
        valores = {
            "cod_proyecto": "PRJ01",
            "cod_sucursal": "PRJ01-1",
            "cod_area": "PRJ01-1-1",
            "cod_af_inventario": f"AF-20200101-{n:04d}",
            "cod_etiqueta": f"200101{n:04d}",
            "descripcion": f"ACTIVO NUEVO {n}",
            "tipo_activo_fijo": TipoActivoFijo.MOBILIARIO,
            "cod_responsable": "PRJ01-1-1-1",
            "registro_inventario": RegistroInventario.AF_CONCILIADO,
            "creado_por": registrador.id,
        }
        valores.update(campos)
        obj = InventarioNuevo(**valores)
        db.add(obj)
        db.commit()
        return obj
    return _crear


@pytest.fixture
def payload_registro():
    """Payload JSON válido de registro; los argumentos reemplazan o agregan claves."""
    def _payload(**campos) -> dict:
        payload = {
            "cod_proyecto": "PRJ01",
            "cod_sucursal": "PRJ01-1",
            "cod_area": "PRJ01-1-1",
            "descripcion": "LAPTOP LENOVO THINKPAD T14",
            "cod_responsable": "PRJ01-1-1-1",
            "estado": "BUENO",
            "location": {"lat": -12.05, "lng": -77.03},
        }
        payload.update(campos)
        return payload
    return _payload


# ==================== ZONA HORARIA ====================

@pytest.fixture
def zona_horaria():
    """Fija la zona horaria del proceso: zona_horaria("America/Lima"). Se restaura al terminar."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset no disponible en esta plataforma")
    anterior = os.environ.get("TZ")

    def _fijar(nombre: str) -> None:
        os.environ["TZ"] = nombre
        time.tzset()

    yield _fijar

    if anterior is None:
        os.environ.pop("TZ", None)
    else:
        os.environ["TZ"] = anterior
    time.tzset()


# ==================== CONFIGURACIÓN DE PYTEST ====================

def pytest_configure(config):
    """Configuración inicial de pytest.

    Define marcadores personalizados para categorizar tests.
    """
    config.addinivalue_line(
        "markers",
        "integration: pruebas de integración (API completa sobre la BD de pruebas)"
    )
    config.addinivalue_line(
        "markers",
        "unit: pruebas unitarias de servicios"
    )
