"""Initial migration: create card, subject and review tables

Revision ID: 001_initial_migration
Revises: 
Create Date: 2024-06-01 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '001_initial_migration'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    # Create card table
    op.create_table(
        'card',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('card_name', sa.String(), nullable=False),
        sa.Column('subject', sa.String(), nullable=False),
        sa.Column('note', sa.String(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id')
    )

    # Create subject table
    op.create_table(
        'subject',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name')
    )

    # Create review table
    op.create_table(
        'review',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('card_id', sa.Integer(), nullable=False),
        sa.Column('review_date', sa.Date(), nullable=False),
        sa.Column('familiarity_score', sa.Integer(), nullable=False),
        sa.Column('interval', sa.Integer(), nullable=False),
        sa.Column('next_review_date', sa.Date(), nullable=False),
        sa.Column('review_time_minutes', sa.Integer(), nullable=True),
        sa.Column('review_notes', sa.String(), nullable=True),
        sa.ForeignKeyConstraint(['card_id'], ['card.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_review_card_id'), 'review', ['card_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_review_card_id'), table_name='review')
    op.drop_table('review')
    op.drop_table('subject')
    op.drop_table('card')
