"""Entity registry to ensure SQLAlchemy loads all table metadata.

Import all entity modules here so Alembic autogenerate and the test fixtures
can discover them through ``BaseEntity.metadata``.
"""
# Import base first to expose BaseEntity.metadata
from api.shared.entities.base import BaseEntity  # noqa: F401

# Feature: Users
from api.features.users.entities.user import User  # noqa: F401

# Feature: Messages
from api.features.messages.entities.message import (  # noqa: F401
    Message,
    MessageMetadata,
)
