"""esquema inicial de inventario de activos

Revision ID: 3f1c9a7d2b10
Revises:
Create Date: 2026-10-19 09:00:00.000000

Crea la estructura organizacional, usuarios y sesiones, el inventario
histórico, los activos nuevos con sus tablas por categoría y la bitácora de
ubicación. Las columnas de enums son VARCHAR; los valores se validan en la
aplicación.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _uuid_pk():
    return sa.Column('id', sa.String(36), primary_key=True)


def _creado_en(nullable=True):
    return sa.Column('creado_en', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=nullable)


def upgrade() -> None:
    # ============================================================================
    # 1. ROLES Y ESTRUCTURA ORGANIZACIONAL
    # ============================================================================
    op.create_table(
        'roles',
        _uuid_pk(),
        sa.Column('nombre', sa.String(50), nullable=False, unique=True),
    )

    op.create_table(
        'proyectos',
        _uuid_pk(),
        sa.Column('cod_proyecto', sa.String(50), nullable=False),
        sa.Column('empresa', sa.String(255), nullable=False),
        sa.Column('razon_social', sa.String(255), nullable=True),
        sa.Column('situacion', sa.String(50), nullable=True),
        _creado_en(),
    )
    op.create_index('ix_proyectos_cod_proyecto', 'proyectos', ['cod_proyecto'], unique=True)

    op.create_table(
        'sucursales',
        _uuid_pk(),
        sa.Column('proyecto_id', sa.String(36), sa.ForeignKey('proyectos.id', ondelete='CASCADE'), nullable=False),
        sa.Column('cod_sucursal', sa.String(80), nullable=False),
        sa.Column('nombre_sucursal', sa.String(255), nullable=False),
        sa.Column('departamento', sa.String(100), nullable=True),
        sa.Column('provincia', sa.String(100), nullable=True),
        sa.Column('distrito', sa.String(100), nullable=True),
        sa.Column('direccion', sa.String(500), nullable=True),
        _creado_en(),
    )
    op.create_index('ix_sucursales_proyecto_id', 'sucursales', ['proyecto_id'])
    op.create_index('ix_sucursales_cod_sucursal', 'sucursales', ['cod_sucursal'], unique=True)

    op.create_table(
        'areas',
        _uuid_pk(),
        sa.Column('sucursal_id', sa.String(36), sa.ForeignKey('sucursales.id', ondelete='CASCADE'), nullable=False),
        sa.Column('cod_area', sa.String(100), nullable=False),
        sa.Column('area', sa.String(255), nullable=False),
        _creado_en(),
    )
    op.create_index('ix_areas_sucursal_id', 'areas', ['sucursal_id'])
    op.create_index('ix_areas_cod_area', 'areas', ['cod_area'], unique=True)

    op.create_table(
        'responsables',
        _uuid_pk(),
        sa.Column('area_id', sa.String(36), sa.ForeignKey('areas.id', ondelete='CASCADE'), nullable=False),
        sa.Column('cod_responsable', sa.String(120), nullable=False),
        sa.Column('nombre', sa.String(255), nullable=False),
        sa.Column('dni', sa.String(20), nullable=True),
        sa.Column('cargo', sa.String(150), nullable=True),
        _creado_en(),
    )
    op.create_index('ix_responsables_area_id', 'responsables', ['area_id'])
    op.create_index('ix_responsables_cod_responsable', 'responsables', ['cod_responsable'], unique=True)

    # ============================================================================
    # 2. USUARIOS Y SESIONES
    # ============================================================================
    op.create_table(
        'usuarios',
        _uuid_pk(),
        sa.Column('usuario', sa.String(100), nullable=False, unique=True),
        sa.Column('nombre', sa.String(255), nullable=False),
        sa.Column('dni', sa.String(20), nullable=True, unique=True),
        sa.Column('email', sa.String(255), nullable=True, unique=True),
        sa.Column('celular', sa.String(20), nullable=True),
        sa.Column('activo', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('last_login', sa.DateTime(timezone=True), nullable=True),
        sa.Column('role_id', sa.String(36), sa.ForeignKey('roles.id', onupdate='CASCADE', ondelete='RESTRICT'), nullable=False),
        sa.Column('hashed_password', sa.String(255), nullable=False),
        sa.Column('must_change_password', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('proyecto_id', sa.String(36), sa.ForeignKey('proyectos.id', ondelete='SET NULL'), nullable=True),
        _creado_en(nullable=False),
    )
    op.create_index('ix_usuarios_proyecto_id', 'usuarios', ['proyecto_id'])

    op.create_table(
        'refresh_tokens',
        _uuid_pk(),
        sa.Column('usuario_id', sa.String(36), sa.ForeignKey('usuarios.id', ondelete='CASCADE'), nullable=False),
        sa.Column('token_hash', sa.String(64), nullable=False, unique=True),
        sa.Column('expira_en', sa.DateTime(timezone=True), nullable=False),
        sa.Column('revocado', sa.Boolean(), server_default=sa.false(), nullable=False),
        _creado_en(nullable=False),
    )
    op.create_index('ix_refresh_tokens_usuario_id', 'refresh_tokens', ['usuario_id'])

    # ============================================================================
    # 3. INVENTARIO HISTÓRICO
    # ============================================================================
    op.create_table(
        'inventario',
        _uuid_pk(),
        sa.Column('cod_proyecto', sa.String(50), nullable=True),
        sa.Column('cod_sucursal', sa.String(80), nullable=True),
        sa.Column('cod_area', sa.String(100), nullable=True),
        sa.Column('cod_af', sa.String(100), nullable=True, comment='Código de activo fijo en la data legada'),
        sa.Column('cod_patrimonial', sa.String(100), nullable=True),
        sa.Column('cod_etiqueta', sa.String(100), nullable=True, comment='Código de barras de la etiqueta legada'),
        sa.Column('descripcion', sa.Text(), nullable=False),
        sa.Column('tipo_activo_fijo', sa.String(60), nullable=True),
        sa.Column('material', sa.String(100), nullable=True),
        sa.Column('marca', sa.String(100), nullable=True),
        sa.Column('modelo', sa.String(100), nullable=True),
        sa.Column('serie', sa.String(100), nullable=True),
        sa.Column('color', sa.String(50), nullable=True),
        sa.Column('largo', sa.Numeric(10, 2), nullable=True),
        sa.Column('ancho', sa.Numeric(10, 2), nullable=True),
        sa.Column('profundo', sa.Numeric(10, 2), nullable=True),
        sa.Column('pulgadas', sa.Numeric(10, 2), nullable=True),
        sa.Column('estado', sa.String(60), nullable=True),
        sa.Column('cod_responsable', sa.String(120), nullable=True),
        sa.Column('ubicacion', sa.String(255), nullable=True),
        sa.Column('compuesto', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('detalle_compuesto', sa.Text(), nullable=True),
        sa.Column('encontrado', sa.Boolean(), server_default=sa.false(), nullable=False,
                  comment='True una vez conciliado con un activo de inventario_nuevo'),
        sa.Column('cod_af_inventario', sa.String(30), nullable=True,
                  comment='Código AF generado al conciliar (AF-YYYYMMDD-NNNN)'),
        sa.Column('cta_contable', sa.String(50), nullable=True),
        sa.Column('guia_remision', sa.String(50), nullable=True),
        sa.Column('cod_factura', sa.String(50), nullable=True),
        sa.Column('fecha_compra', sa.Date(), nullable=True),
        sa.Column('valor_activo', sa.Numeric(14, 2), nullable=True),
        sa.Column('observaciones1', sa.Text(), nullable=True),
        sa.Column('observaciones2', sa.Text(), nullable=True),
        sa.Column('observaciones3', sa.Text(), nullable=True),
        _creado_en(),
    )
    op.create_index('ix_inventario_cod_proyecto', 'inventario', ['cod_proyecto'])
    op.create_index('ix_inventario_cod_sucursal', 'inventario', ['cod_sucursal'])
    op.create_index('ix_inventario_cod_area', 'inventario', ['cod_area'])
    op.create_index('ix_inventario_cod_patrimonial', 'inventario', ['cod_patrimonial'])
    op.create_index('ix_inventario_cod_etiqueta', 'inventario', ['cod_etiqueta'])
    op.create_index('idx_inventario_conciliacion', 'inventario', ['cod_proyecto', 'encontrado'])

    # ============================================================================
    # 4. ACTIVOS NUEVOS
    # ============================================================================
    op.create_table(
        'inventario_nuevo',
        _uuid_pk(),
        sa.Column('cod_proyecto', sa.String(50), nullable=False),
        sa.Column('cod_sucursal', sa.String(80), nullable=False),
        sa.Column('cod_area', sa.String(100), nullable=False),
        sa.Column('cod_af_inventario', sa.String(30), nullable=False, comment='AF-YYYYMMDD-NNNN, generado'),
        sa.Column('cod_patrimonial', sa.String(100), nullable=True),
        sa.Column('cod_etiqueta', sa.String(10), nullable=False, comment='YYMMDDNNNN, generado e inmutable'),
        sa.Column('descripcion', sa.Text(), nullable=False),
        sa.Column('tipo_activo_fijo', sa.String(60), nullable=False),
        sa.Column('estado', sa.String(60), nullable=True),
        sa.Column('cod_responsable', sa.String(120), nullable=False),
        sa.Column('compuesto', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('detalle_compuesto', sa.Text(), nullable=True),
        sa.Column('observaciones', sa.Text(), nullable=True),
        sa.Column('registro_inventario', sa.String(60), nullable=False),
        sa.Column('creado_por', sa.String(36), sa.ForeignKey('usuarios.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('inventario_origen_id', sa.String(36), sa.ForeignKey('inventario.id', ondelete='RESTRICT'),
                  nullable=True, comment='NULL = activo sobrante'),
        _creado_en(nullable=False),
        sa.UniqueConstraint('cod_etiqueta', name='uq_inventario_nuevo_cod_etiqueta'),
        sa.UniqueConstraint('cod_af_inventario', name='uq_inventario_nuevo_cod_af_inventario'),
    )
    op.create_index('ix_inventario_nuevo_cod_proyecto', 'inventario_nuevo', ['cod_proyecto'])
    op.create_index('ix_inventario_nuevo_cod_sucursal', 'inventario_nuevo', ['cod_sucursal'])
    op.create_index('ix_inventario_nuevo_cod_area', 'inventario_nuevo', ['cod_area'])
    op.create_index('ix_inventario_nuevo_cod_patrimonial', 'inventario_nuevo', ['cod_patrimonial'])
    op.create_index('ix_inventario_nuevo_creado_por', 'inventario_nuevo', ['creado_por'])
    op.create_index('ix_inventario_nuevo_inventario_origen_id', 'inventario_nuevo', ['inventario_origen_id'])
    op.create_index('idx_inventario_nuevo_proyecto_creado', 'inventario_nuevo', ['cod_proyecto', 'creado_en'])

    # ============================================================================
    # 5. ATRIBUTOS POR CATEGORÍA (1:1 con inventario_nuevo)
    # ============================================================================
    def _fk_inventario_nuevo():
        return sa.Column(
            'inventario_nuevo_id', sa.String(36),
            sa.ForeignKey('inventario_nuevo.id', ondelete='CASCADE'),
            nullable=False, unique=True
        )

    op.create_table(
        'mobiliario',
        _uuid_pk(),
        _fk_inventario_nuevo(),
        sa.Column('marca', sa.String(100), nullable=True),
        sa.Column('modelo', sa.String(100), nullable=True),
        sa.Column('tipo', sa.String(100), nullable=True),
        sa.Column('material', sa.String(100), nullable=True),
        sa.Column('color', sa.String(50), nullable=True),
        sa.Column('largo', sa.Numeric(10, 2), nullable=True),
        sa.Column('ancho', sa.Numeric(10, 2), nullable=True),
        sa.Column('alto', sa.Numeric(10, 2), nullable=True),
    )

    op.create_table(
        'equipos_informaticos',
        _uuid_pk(),
        _fk_inventario_nuevo(),
        sa.Column('marca', sa.String(100), nullable=True),
        sa.Column('modelo', sa.String(100), nullable=True),
        sa.Column('tipo', sa.String(100), nullable=True),
        sa.Column('serie', sa.String(100), nullable=True),
    )

    op.create_table(
        'vehiculos',
        _uuid_pk(),
        _fk_inventario_nuevo(),
        sa.Column('marca', sa.String(100), nullable=True),
        sa.Column('modelo', sa.String(100), nullable=True),
        sa.Column('tipo', sa.String(100), nullable=True),
        sa.Column('numero_motor', sa.String(100), nullable=True),
        sa.Column('numero_chasis', sa.String(100), nullable=True),
        sa.Column('placa', sa.String(20), nullable=True),
        sa.Column('anio', sa.Integer(), nullable=True),
    )

    # ============================================================================
    # 6. BITÁCORA DE UBICACIÓN
    # ============================================================================
    op.create_table(
        'registro_auditoria_ubicacion',
        _uuid_pk(),
        sa.Column('inventario_nuevo_id', sa.String(36), sa.ForeignKey('inventario_nuevo.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('user_id', sa.String(36), sa.ForeignKey('usuarios.id', ondelete='RESTRICT'), nullable=False),
        sa.Column('lat', sa.Numeric(10, 7), nullable=False),
        sa.Column('lng', sa.Numeric(10, 7), nullable=False),
        sa.Column('timestamp', sa.DateTime(), nullable=False),
        sa.Column('device_info', sa.JSON(), nullable=True),
    )
    op.create_index('ix_registro_auditoria_ubicacion_inventario_nuevo_id', 'registro_auditoria_ubicacion', ['inventario_nuevo_id'])
    op.create_index('ix_registro_auditoria_ubicacion_user_id', 'registro_auditoria_ubicacion', ['user_id'])
    op.create_index('idx_auditoria_usuario_fecha', 'registro_auditoria_ubicacion', ['user_id', 'timestamp'])


def downgrade() -> None:
    op.drop_table('registro_auditoria_ubicacion')
    op.drop_table('vehiculos')
    op.drop_table('equipos_informaticos')
    op.drop_table('mobiliario')
    op.drop_table('inventario_nuevo')
    op.drop_table('inventario')
    op.drop_table('refresh_tokens')
    op.drop_table('usuarios')
    op.drop_table('responsables')
    op.drop_table('areas')
    op.drop_table('sucursales')
    op.drop_table('proyectos')
    op.drop_table('roles')
