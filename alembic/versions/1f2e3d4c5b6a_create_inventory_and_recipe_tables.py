"""Create inventory and recipe tables

Revision ID: 1f2e3d4c5b6a
Revises:
Create Date: 2026-10-18 09:12:44.518302

"""
from alembic import op
import sqlalchemy as sa


revision = '1f2e3d4c5b6a'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        'ingredients',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('quantity', sa.Text(), nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('purchase_date', sa.DateTime(), nullable=False),
        sa.Column('expiration_date', sa.DateTime(), nullable=True),
        sa.Column('is_low_stock', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_ingredients_created_at', 'ingredients', ['created_at'])
    op.create_index('idx_ingredients_expiration_date', 'ingredients', ['expiration_date'])

    op.create_table(
        'recipes',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('serving_size', sa.Integer(), nullable=False),
        sa.Column('cooking_time', sa.Integer(), nullable=True),
        sa.Column('difficulty', sa.String(10), nullable=False),
        sa.Column('instructions', sa.JSON(), nullable=False),
        sa.Column('image_url', sa.String(512), nullable=True),
        sa.Column('match_percentage', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
    )
    op.create_index('idx_recipes_created_at', 'recipes', ['created_at'])

    op.create_table(
        'recipe_ingredients',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('recipe_id', sa.String(36), sa.ForeignKey('recipes.id'), nullable=False),
        sa.Column('ingredient_name', sa.Text(), nullable=False),
        sa.Column('required_quantity', sa.Text(), nullable=False),
        sa.Column('available', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('position', sa.Integer(), nullable=False, server_default='0'),
    )
    op.create_index('idx_recipe_ingredients_recipe_id', 'recipe_ingredients', ['recipe_id'])

    # Append-only; ingredients_used holds [{"name", "quantityUsed"}]
    op.create_table(
        'cooking_history',
        sa.Column('id', sa.String(36), primary_key=True),
        sa.Column('recipe_id', sa.String(36), sa.ForeignKey('recipes.id'), nullable=False),
        sa.Column('cooked_at', sa.DateTime(), nullable=False),
        sa.Column('ingredients_used', sa.JSON(), nullable=False),
    )
    op.create_index('idx_cooking_history_recipe_id', 'cooking_history', ['recipe_id'])
    op.create_index('idx_cooking_history_cooked_at', 'cooking_history', ['cooked_at'])


def downgrade() -> None:
    op.drop_table('cooking_history')
    op.drop_table('recipe_ingredients')
    op.drop_table('recipes')
    op.drop_table('ingredients')
