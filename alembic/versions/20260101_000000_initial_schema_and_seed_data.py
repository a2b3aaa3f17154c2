"""Initial schema and seed data for Quotely

Revision ID: 20260101_000000
Revises: None
Create Date: 2026-01-01 00:00:00.000000

This is the initial migration that creates all necessary tables and seeds
default content for the Quotely service. This includes:
- users, content_items and user_relationships tables
- A starter set of approved quotes and proverbs

Revision format: YYYYMMDD_HHMMSS_description

"""

import json
from datetime import datetime, timezone
from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260101_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


SEED_QUOTES = [
    ("The only true wisdom is in knowing you know nothing.", "Socrates", "wisdom", ["knowledge"]),
    ("Well begun is half done.", "Aristotle", "motivation", ["beginnings"]),
    ("The unexamined life is not worth living.", "Socrates", "philosophy", ["reflection"]),
    ("Knowing yourself is the beginning of all wisdom.", "Aristotle", "wisdom", ["self"]),
    ("No man ever steps in the same river twice.", "Heraclitus", "philosophy", ["change"]),
    ("Waste no more time arguing what a good man should be. Be one.", "Marcus Aurelius", "virtue", []),
    ("It does not matter how slowly you go as long as you do not stop.", "Confucius", "motivation", ["persistence"]),
]

SEED_PROVERBS = [
    ("A journey of a thousand miles begins with a single step.", "Even great tasks start small.", "Chinese", "wisdom"),
    ("Fall seven times, stand up eight.", "Keep going after every failure.", "Japanese", "perseverance"),
    ("If you want to go fast, go alone. If you want to go far, go together.", "Cooperation reaches further.", "African", "community"),
    ("Rome was not built in a day.", "Important work takes time.", "Latin", "patience"),
    ("The pen is mightier than the sword.", "Ideas outlast force.", "English", "wisdom"),
]


def upgrade() -> None:
    """Create all tables and seed initial data."""

    # Create users table
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("password_hash", sa.String(128), nullable=False),
        sa.Column("role", sa.String(16), nullable=False),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)
    op.create_index("ix_users_status", "users", ["status"])

    # Create content_items table
    op.create_table(
        "content_items",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("kind", sa.String(16), nullable=False),
        sa.Column("body", sa.Text(), nullable=False),
        sa.Column("secondary", sa.Text(), nullable=True),
        sa.Column("category", sa.String(64), nullable=True),
        sa.Column("origin", sa.String(128), nullable=True),
        sa.Column("tags", sa.Text(), nullable=False),
        sa.Column("submitter_id", sa.Integer(), nullable=True),
        sa.Column("status", sa.String(16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["submitter_id"], ["users.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_content_items_kind", "content_items", ["kind"])
    op.create_index("ix_content_items_category", "content_items", ["category"])
    op.create_index("ix_content_items_submitter_id", "content_items", ["submitter_id"])
    op.create_index("ix_content_items_status", "content_items", ["status"])
    op.create_index("ix_content_items_created_at", "content_items", ["created_at"])

    # Create user_relationships table
    op.create_table(
        "user_relationships",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("item_id", sa.Integer(), nullable=False),
        sa.Column("kind", sa.String(16), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["item_id"], ["content_items.id"]),
        sa.PrimaryKeyConstraint("user_id", "item_id", "kind"),
    )
    op.create_index("ix_user_relationships_created_at", "user_relationships", ["created_at"])

    # Seed approved content
    content_items = sa.table(
        "content_items",
        sa.column("kind", sa.String),
        sa.column("body", sa.Text),
        sa.column("secondary", sa.Text),
        sa.column("category", sa.String),
        sa.column("origin", sa.String),
        sa.column("tags", sa.Text),
        sa.column("submitter_id", sa.Integer),
        sa.column("status", sa.String),
        sa.column("created_at", sa.DateTime(timezone=True)),
    )
    now = datetime.now(timezone.utc)

    rows = [
        {
            "kind": "quote",
            "body": body,
            "secondary": author,
            "category": category,
            "origin": None,
            "tags": json.dumps(tags),
            "submitter_id": None,
            "status": "approved",
            "created_at": now,
        }
        for body, author, category, tags in SEED_QUOTES
    ]
    rows += [
        {
            "kind": "proverb",
            "body": body,
            "secondary": meaning,
            "category": category,
            "origin": origin,
            "tags": "[]",
            "submitter_id": None,
            "status": "approved",
            "created_at": now,
        }
        for body, meaning, origin, category in SEED_PROVERBS
    ]
    op.bulk_insert(content_items, rows)


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table("user_relationships")
    op.drop_table("content_items")
    op.drop_table("users")
