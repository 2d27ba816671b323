"""catalog tables: lookups, record, junctions, links

Revision ID: 3f1c9a2e7b10
Revises:
Create Date: 2025-11-02 10:14:31.207118

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from luna.common.settings import get_settings
from luna.database.core.seed import seed_unknown_rows

# revision identifiers, used by Alembic.
revision: str = '3f1c9a2e7b10'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_schema = get_settings().db_schema
SCHEMA = _schema if _schema and _schema.lower() != "public" else None

LOOKUP_TABLES = ('director', 'studio', 'label', 'series', 'genre', 'idol')
BigIntPK = sa.BigInteger().with_variant(sa.Integer(), 'sqlite')


def _ref(table: str) -> str:
    return f"{SCHEMA}.{table}.id" if SCHEMA else f"{table}.id"


def upgrade() -> None:
    # 1) Lookup tables (no unique index on name/link/manual)
    for name in LOOKUP_TABLES:
        op.create_table(
            name,
            sa.Column('id', BigIntPK, autoincrement=True, nullable=False),
            sa.Column('name', sa.String(length=255), nullable=False),
            sa.Column('link', sa.Text(), server_default=sa.text("''"), nullable=False),
            sa.Column('manual', sa.Boolean(), server_default=sa.text('false'), nullable=False),
            sa.PrimaryKeyConstraint('id', name=op.f(f'pk_{name}')),
            schema=SCHEMA,
        )
        op.create_index(op.f(f'ix_{name}_name'), name, ['name'], unique=False, schema=SCHEMA)

    # 2) Record (FKs fall back to the "Unknown" rows)
    fk_cols = []
    fk_cons = []
    for name in ('director', 'studio', 'label', 'series'):
        fk_cols.append(sa.Column(f'{name}_id', sa.BigInteger(), server_default=sa.text('1'), nullable=False))
        fk_cons.append(sa.ForeignKeyConstraint(
            [f'{name}_id'], [_ref(name)],
            name=op.f(f'fk_record_{name}_id_{name}'), ondelete='SET DEFAULT',
        ))
    op.create_table(
        'record',
        sa.Column('id', sa.String(length=255), nullable=False),
        sa.Column('title', sa.String(length=1024), server_default='Untitled', nullable=False),
        sa.Column('date', sa.Date(), server_default=sa.text("'1970-01-01'"), nullable=False),
        sa.Column('duration', sa.Integer(), server_default=sa.text('0'), nullable=False),
        *fk_cols,
        sa.Column('has_links', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('permission', sa.Integer(), server_default=sa.text('3'), nullable=False),
        sa.Column('local_img_count', sa.Integer(), server_default=sa.text('-1'), nullable=False),
        sa.Column('create_time', sa.Date(), server_default=sa.func.current_date(), nullable=False),
        sa.Column('update_time', sa.Date(), server_default=sa.func.current_date(), nullable=False),
        sa.Column('creator', sa.String(length=255), server_default='admin', nullable=False),
        sa.Column('modified_by', sa.String(length=255), server_default='admin', nullable=False),
        *fk_cons,
        sa.PrimaryKeyConstraint('id', name=op.f('pk_record')),
        schema=SCHEMA,
    )
    for name in ('director', 'studio', 'label', 'series'):
        op.create_index(f'ix_record_{name}_id', 'record', [f'{name}_id'], unique=False, schema=SCHEMA)

    # 3) Junctions
    for table, col, target in (
        ('record_genre', 'genre_id', 'genre'),
        ('idol_participation', 'idol_id', 'idol'),
    ):
        op.create_table(
            table,
            sa.Column('id', BigIntPK, autoincrement=True, nullable=False),
            sa.Column('record_id', sa.String(length=255), nullable=False),
            sa.Column(col, sa.BigInteger(), nullable=False),
            sa.Column('manual', sa.Boolean(), server_default=sa.text('false'), nullable=False),
            sa.ForeignKeyConstraint(['record_id'], [_ref('record')],
                                    name=op.f(f'fk_{table}_record_id_record'), ondelete='CASCADE'),
            sa.ForeignKeyConstraint([col], [_ref(target)],
                                    name=op.f(f'fk_{table}_{col}_{target}'), ondelete='CASCADE'),
            sa.PrimaryKeyConstraint('id', name=op.f(f'pk_{table}')),
            sa.UniqueConstraint('record_id', col, name=f'uq_{table}_record_{target}'),
            schema=SCHEMA,
        )
        op.create_index(f'ix_{table}_{col}', table, [col], unique=False, schema=SCHEMA)

    # 4) Links
    op.create_table(
        'links',
        sa.Column('id', BigIntPK, autoincrement=True, nullable=False),
        sa.Column('record_id', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('size', sa.Numeric(precision=10, scale=2), server_default=sa.text('-1'), nullable=False),
        sa.Column('date', sa.Date(), server_default=sa.text("'1970-01-01'"), nullable=False),
        sa.Column('link', sa.Text(), server_default=sa.text("''"), nullable=False),
        sa.Column('star', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.ForeignKeyConstraint(['record_id'], [_ref('record')],
                                name=op.f('fk_links_record_id_record'), ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_links')),
        schema=SCHEMA,
    )
    op.create_index('ix_links_record_id', 'links', ['record_id'], unique=False, schema=SCHEMA)

    # 5) "Unknown ..." rows at id 1
    seed_unknown_rows(op.get_bind())


def downgrade() -> None:
    op.drop_index('ix_links_record_id', table_name='links', schema=SCHEMA)
    op.drop_table('links', schema=SCHEMA)
    for table, col in (('idol_participation', 'idol_id'), ('record_genre', 'genre_id')):
        op.drop_index(f'ix_{table}_{col}', table_name=table, schema=SCHEMA)
        op.drop_table(table, schema=SCHEMA)
    for name in ('director', 'studio', 'label', 'series'):
        op.drop_index(f'ix_record_{name}_id', table_name='record', schema=SCHEMA)
    op.drop_table('record', schema=SCHEMA)
    for name in reversed(LOOKUP_TABLES):
        op.drop_index(op.f(f'ix_{name}_name'), table_name=name, schema=SCHEMA)
        op.drop_table(name, schema=SCHEMA)
