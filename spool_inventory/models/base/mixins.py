from sqlalchemy import Column, DateTime
from sqlalchemy.sql import func


class TimestampMixin:
    """First save and last replacement of a stored row."""

    created_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False
    )
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False
    )
