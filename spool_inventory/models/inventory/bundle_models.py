from sqlalchemy import Column, Integer, String, JSON
from spool_inventory.core.db import Base
from spool_inventory.models.base.mixins import TimestampMixin


class BundleSnapshot(Base, TimestampMixin):
    """Whole persisted bundle for one profile, replaced on every write."""

    __tablename__ = "bundle_snapshots"

    id = Column(Integer, primary_key=True)
    profile = Column(String(50), nullable=False, unique=True, index=True)
    schema_version = Column(Integer, nullable=False)
    filament_count = Column(Integer, nullable=False, default=0)
    payload = Column(JSON, nullable=False)

    def __repr__(self):
        return (
            f"<BundleSnapshot profile={self.profile} "
            f"v={self.schema_version} filaments={self.filament_count}>"
        )
