"""Create users, messages_metadata and messages tables

Revision ID: 20251018_create_chat_tables
Revises:
Create Date: 2025-10-18 10:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20251018_create_chat_tables"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

message_type = sa.Enum("plaintext", "image_link", "video_link", name="message_type")


def upgrade() -> None:
    # Users with their bcrypt hash and the salt appended before hashing
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(10), nullable=False),
        sa.Column("username_key", sa.String(40), nullable=False),
        sa.Column("hash", sa.LargeBinary(60), nullable=False),
        sa.Column("salt", sa.LargeBinary(32), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    )
    # Case-insensitive uniqueness; also the lookup path for every request
    op.create_index("ix_users_username_key", "users", ["username_key"], unique=True)

    op.create_table(
        "messages_metadata",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("width", sa.SmallInteger(), nullable=True),
        sa.Column("height", sa.SmallInteger(), nullable=True),
        sa.Column("length", sa.SmallInteger(), nullable=True),
        sa.Column("source", sa.String(16), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
    )

    op.create_table(
        "messages",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("sender_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("recipient_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("message_type", message_type, nullable=False),
        sa.Column("message_content", sa.String(255), nullable=False),
        sa.Column(
            "message_metadata_id",
            sa.Integer(),
            sa.ForeignKey("messages_metadata.id"),
            nullable=True,
        ),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.CheckConstraint(
            "(message_type = 'plaintext') = (message_metadata_id IS NULL)",
            name="ck_messages_metadata_matches_type",
        ),
    )
    # Conversation lookups filter on the (sender, recipient) pair
    op.create_index("sender_recipient_idx", "messages", ["sender_id", "recipient_id"])


def downgrade() -> None:
    op.drop_index("sender_recipient_idx", table_name="messages")
    op.drop_table("messages")
    op.drop_table("messages_metadata")
    op.drop_index("ix_users_username_key", table_name="users")
    op.drop_table("users")
    message_type.drop(op.get_bind(), checkfirst=True)
