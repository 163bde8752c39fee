"""Create users, folders, tags, notes and note_tags

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Initial schema. Every folder, tag and note belongs to exactly one user;
       note_tags links notes to tags many-to-many.
How:   Ids are 24-char hex strings generated by the application
       (app.identifiers.new_object_id), so there are no server defaults on
       the primary keys.

Rollback: downgrade() drops all five tables (destructive).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ID = sa.String(24)


def _timestamps():
    return [
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            server_default=sa.text("CURRENT_TIMESTAMP"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", ID, nullable=False),
        sa.Column("fullname", sa.String(255), nullable=True),
        sa.Column("username", sa.String(72), nullable=False),
        sa.Column("password", sa.String(255), nullable=False, comment="bcrypt hash"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("username"),
    )

    for table, constraint in (("folders", "uq_folders_name_user"), ("tags", "uq_tags_name_user")):
        op.create_table(
            table,
            sa.Column("id", ID, nullable=False),
            sa.Column("name", sa.String(100), nullable=False),
            sa.Column(
                "user_id",
                ID,
                sa.ForeignKey("users.id", ondelete="CASCADE"),
                nullable=False,
            ),
            *_timestamps(),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("name", "user_id", name=constraint),
        )
        op.create_index(f"ix_{table}_user_id", table, ["user_id"])

    op.create_table(
        "notes",
        sa.Column("id", ID, nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=True),
        sa.Column(
            "user_id",
            ID,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "folder_id",
            ID,
            sa.ForeignKey("folders.id", ondelete="SET NULL"),
            nullable=True,
        ),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )

    # Listing is always "this user's notes, most recently updated first".
    op.create_index(
        "idx_notes_user_updated",
        "notes",
        ["user_id", "updated_at"],
    )

    op.create_table(
        "note_tags",
        sa.Column(
            "note_id",
            ID,
            sa.ForeignKey("notes.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "tag_id",
            ID,
            sa.ForeignKey("tags.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("note_id", "tag_id"),
    )


def downgrade() -> None:
    op.drop_table("note_tags")
    op.drop_index("idx_notes_user_updated", table_name="notes")
    op.drop_table("notes")
    for table in ("tags", "folders"):
        op.drop_index(f"ix_{table}_user_id", table_name=table)
        op.drop_table(table)
    op.drop_table("users")
