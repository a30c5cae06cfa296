"""Initial schema - Calculadora

Revision ID: 0000_initial
Revises:
Create Date: 2025-10-20

Tables:
- usuarios (unique email)
- clientes (unique cpf)
- calculos (cliente FK cascades on delete, usuario FK set null on delete)
"""

from alembic import op
import sqlalchemy as sa

revision = '0000_initial'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table(
        'usuarios',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('nome', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('role', sa.String(20), server_default='user', nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_usuarios_email', 'usuarios', ['email'], unique=True)

    op.create_table(
        'clientes',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('nome', sa.String(255), nullable=False),
        sa.Column('telefone', sa.String(20), nullable=False),
        sa.Column('cpf', sa.String(14), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_clientes_cpf', 'clientes', ['cpf'], unique=True)

    op.create_table(
        'calculos',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('valor_locacao', sa.Float(), nullable=False),
        sa.Column('valor_taxas', sa.Float(), nullable=False),
        sa.Column('valor_inicial', sa.Float(), nullable=False),
        sa.Column('valor_original', sa.Float(), nullable=False),
        sa.Column('valor_com_desconto', sa.Float(), nullable=False),
        sa.Column('valor_corrigido', sa.Float(), nullable=False),
        sa.Column('taxa_poupanca', sa.Float(), server_default=sa.text('0.005'), nullable=False),
        sa.Column('cliente_id', sa.Uuid(), nullable=False),
        sa.Column('usuario_id', sa.Uuid(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['cliente_id'], ['clientes.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['usuario_id'], ['usuarios.id'], ondelete='SET NULL'),
    )
    op.create_index('ix_calculos_cliente_id', 'calculos', ['cliente_id'])
    op.create_index('ix_calculos_usuario_id', 'calculos', ['usuario_id'])
    op.create_index('idx_calculos_usuario_created', 'calculos', ['usuario_id', 'created_at'])


def downgrade():
    op.drop_index('idx_calculos_usuario_created', table_name='calculos')
    op.drop_index('ix_calculos_usuario_id', table_name='calculos')
    op.drop_index('ix_calculos_cliente_id', table_name='calculos')
    op.drop_table('calculos')
    op.drop_index('ix_clientes_cpf', table_name='clientes')
    op.drop_table('clientes')
    op.drop_index('ix_usuarios_email', table_name='usuarios')
    op.drop_table('usuarios')
