"""
SQLAlchemy models for the translator sync server.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Boolean, Column, DateTime, Index, String, Text, Uuid

from translator_server.database.connection import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class ModelVersion(Base):
    """Model for downloadable translation model releases.

    Rows are maintained out of band; the service only reads them.
    """

    __tablename__ = "model_versions"

    id = Column(Uuid, primary_key=True, default=uuid4)
    version = Column(String(100), nullable=False)
    file_name = Column(String(255), nullable=False)
    release_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index('idx_model_versions_active_release', 'is_active', 'release_date'),
    )


class TrainingData(Base):
    """Model for user-submitted English/Myanmar sentence pairs."""

    __tablename__ = "training_data"

    id = Column(Uuid, primary_key=True, default=uuid4)
    english = Column(Text, nullable=False)
    myanmar = Column(Text, nullable=False)
    timestamp = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    synced = Column(Boolean, nullable=False, default=True)
