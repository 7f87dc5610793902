"""Create taxonomy remap review and auto-reseed run tables.

This migration adds:
- taxonomy_remap_review_status, taxonomy_remap_auto_reseed_trigger and
  taxonomy_remap_auto_reseed_status ENUM types
- taxonomy_remap_reviews table with one pending proposal per product
- taxonomy_remap_auto_reseed_runs table with at most one running row

The products table is owned by the catalog and is not created here.

Revision ID: 001_taxonomy_remap_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001_taxonomy_remap_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


REVIEW_STATUS = ('pending', 'accepted', 'rejected')
RUN_TRIGGER = ('decision', 'cron', 'manual')
RUN_STATUS = ('running', 'completed', 'skipped', 'failed')


def upgrade() -> None:
    # ===== ENUM types =====
    postgresql.ENUM(*REVIEW_STATUS, name='taxonomy_remap_review_status').create(
        op.get_bind(), checkfirst=True
    )
    postgresql.ENUM(*RUN_TRIGGER, name='taxonomy_remap_auto_reseed_trigger').create(
        op.get_bind(), checkfirst=True
    )
    postgresql.ENUM(*RUN_STATUS, name='taxonomy_remap_auto_reseed_status').create(
        op.get_bind(), checkfirst=True
    )

    # ===== Review proposals =====
    op.create_table(
        'taxonomy_remap_reviews',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True,
                  server_default=sa.text('gen_random_uuid()')),
        sa.Column('product_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('products.id', ondelete='CASCADE'), nullable=False),
        sa.Column('status',
                  postgresql.ENUM(*REVIEW_STATUS, name='taxonomy_remap_review_status', create_type=False),
                  nullable=False, server_default='pending'),
        sa.Column('source', sa.String(120), nullable=True),
        sa.Column('run_key', sa.String(32), nullable=True),
        sa.Column('from_category', sa.String(100), nullable=True),
        sa.Column('from_subcategory', sa.String(150), nullable=True),
        sa.Column('from_gender', sa.String(50), nullable=True),
        sa.Column('to_category', sa.String(100), nullable=True),
        sa.Column('to_subcategory', sa.String(150), nullable=True),
        sa.Column('to_gender', sa.String(50), nullable=True),
        sa.Column('confidence', sa.Float(), nullable=True),
        sa.Column('reasons', postgresql.JSONB(), nullable=False, server_default=sa.text("'[]'::jsonb")),
        sa.Column('field_scores', postgresql.JSONB(), nullable=False, server_default=sa.text("'{}'::jsonb")),
        sa.Column('seo_category_hints', postgresql.JSONB(), nullable=False,
                  server_default=sa.text("'[]'::jsonb")),
        sa.Column('source_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('score_support', sa.Integer(), nullable=True),
        sa.Column('margin_ratio', sa.Float(), nullable=True),
        sa.Column('image_cover_url', sa.Text(), nullable=True),
        sa.Column('source_url', sa.Text(), nullable=True),
        sa.Column('decided_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_taxonomy_remap_reviews_product_id', 'taxonomy_remap_reviews', ['product_id'])
    op.create_index(
        'taxonomy_remap_reviews_pending_product_unique_idx',
        'taxonomy_remap_reviews',
        ['product_id'],
        unique=True,
        postgresql_where=sa.text("status = 'pending'"),
    )
    op.create_index(
        'taxonomy_remap_reviews_status_created_idx',
        'taxonomy_remap_reviews',
        ['status', 'created_at'],
    )
    op.create_index('taxonomy_remap_reviews_source_idx', 'taxonomy_remap_reviews', ['source'])

    # ===== Run audit =====
    op.create_table(
        'taxonomy_remap_auto_reseed_runs',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True,
                  server_default=sa.text('gen_random_uuid()')),
        sa.Column('trigger',
                  postgresql.ENUM(*RUN_TRIGGER, name='taxonomy_remap_auto_reseed_trigger', create_type=False),
                  nullable=False),
        sa.Column('status',
                  postgresql.ENUM(*RUN_STATUS, name='taxonomy_remap_auto_reseed_status', create_type=False),
                  nullable=False, server_default='running'),
        sa.Column('reason', sa.String(80), nullable=True),
        sa.Column('force', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('requested_limit', sa.Integer(), nullable=True),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('pending_count', sa.Integer(), nullable=True),
        sa.Column('pending_threshold', sa.Integer(), nullable=True),
        sa.Column('scanned', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('proposed', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('enqueued', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('failed_products', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('source', sa.String(120), nullable=True),
        sa.Column('run_key', sa.String(32), nullable=True),
        sa.Column('error', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    # At most one running execution: the mutual-exclusion point for runs
    op.create_index(
        'taxonomy_remap_auto_reseed_runs_running_unique_idx',
        'taxonomy_remap_auto_reseed_runs',
        ['status'],
        unique=True,
        postgresql_where=sa.text("status = 'running'"),
    )
    op.create_index(
        'taxonomy_remap_auto_reseed_runs_started_idx',
        'taxonomy_remap_auto_reseed_runs',
        ['started_at'],
    )


def downgrade() -> None:
    op.drop_index('taxonomy_remap_auto_reseed_runs_started_idx', table_name='taxonomy_remap_auto_reseed_runs')
    op.drop_index('taxonomy_remap_auto_reseed_runs_running_unique_idx',
                  table_name='taxonomy_remap_auto_reseed_runs')
    op.drop_table('taxonomy_remap_auto_reseed_runs')

    op.drop_index('taxonomy_remap_reviews_source_idx', table_name='taxonomy_remap_reviews')
    op.drop_index('taxonomy_remap_reviews_status_created_idx', table_name='taxonomy_remap_reviews')
    op.drop_index('taxonomy_remap_reviews_pending_product_unique_idx', table_name='taxonomy_remap_reviews')
    op.drop_index('ix_taxonomy_remap_reviews_product_id', table_name='taxonomy_remap_reviews')
    op.drop_table('taxonomy_remap_reviews')

    op.execute("DROP TYPE IF EXISTS taxonomy_remap_auto_reseed_status")
    op.execute("DROP TYPE IF EXISTS taxonomy_remap_auto_reseed_trigger")
    op.execute("DROP TYPE IF EXISTS taxonomy_remap_review_status")
