"""Create users, attachments, personal_info and teachers tables

Revision ID: 0001_teacher_registration
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '0001_teacher_registration'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('username', sa.String(length=50), nullable=False),
        sa.Column('vat', sa.String(length=20), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('firstname', sa.String(length=100), nullable=True),
        sa.Column('lastname', sa.String(length=100), nullable=True),
        sa.Column('role', sa.Enum('ADMIN', 'TEACHER', name='role'), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint('username', name='uq_users_username'),
        sa.UniqueConstraint('vat', name='uq_users_vat'),
    )

    op.create_table(
        'attachments',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('filename', sa.String(length=255), nullable=True),
        sa.Column('saved_name', sa.String(length=255), nullable=False, unique=True),
        sa.Column('file_path', sa.String(length=500), nullable=False),
        sa.Column('content_type', sa.String(length=100), nullable=True),
        sa.Column('extension', sa.String(length=20), nullable=False),
        *_timestamps(),
    )

    op.create_table(
        'personal_info',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('amka', sa.String(length=20), nullable=False),
        sa.Column('identity_number', sa.String(length=20), nullable=False),
        sa.Column('place_of_birth', sa.String(length=100), nullable=True),
        sa.Column('municipality_of_registration', sa.String(length=100), nullable=True),
        sa.Column('amka_file_id', sa.Integer(), sa.ForeignKey('attachments.id'), nullable=True, unique=True),
        *_timestamps(),
        sa.UniqueConstraint('amka', name='uq_personal_info_amka'),
        sa.UniqueConstraint('identity_number', name='uq_personal_info_identity_number'),
    )

    op.create_table(
        'teachers',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('uuid', sa.String(length=36), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.true(), nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=False, unique=True),
        sa.Column('personal_info_id', sa.Integer(), sa.ForeignKey('personal_info.id'), nullable=False, unique=True),
        *_timestamps(),
    )
    op.create_index('ix_teachers_uuid', 'teachers', ['uuid'], unique=True)


def downgrade() -> None:
    op.drop_index('ix_teachers_uuid', table_name='teachers')
    op.drop_table('teachers')
    op.drop_table('personal_info')
    op.drop_table('attachments')
    op.drop_table('users')
    sa.Enum(name='role').drop(op.get_bind(), checkfirst=True)
