import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String


def generate_uuid() -> str:
    return str(uuid.uuid4())


class UUIDPrimaryKeyMixin:
    id = Column(String(36), primary_key=True, default=generate_uuid)


class TimestampMixin:
    """Timestamps are server-local naive datetimes set on the Python side."""
    created_at = Column(DateTime, default=datetime.now, nullable=False, index=True)
    updated_at = Column(DateTime, default=datetime.now,
                        onupdate=datetime.now, nullable=False)


class SoftDeleteMixin:
    """Rows with a deletion timestamp are logically removed."""
    deleted_at = Column(DateTime, nullable=True, index=True)
