from sqlalchemy import Column, Integer, ForeignKey, UniqueConstraint
from .base import Base

class PropertyRequest(Base):
    """A tenant's pending interest in a property."""

    __tablename__ = "property_requests"
    __table_args__ = (
        UniqueConstraint("tenant_id", "property_id", name="uq_property_requests_pair"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)


class Tenancy(Base):
    """An approved occupancy link. Only ever created by approving a PropertyRequest."""

    __tablename__ = "tenant_properties"
    __table_args__ = (
        UniqueConstraint("tenant_id", "property_id", name="uq_tenant_properties_pair"),
        {"sqlite_autoincrement": True},
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    tenant_id = Column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    property_id = Column(Integer, ForeignKey("properties.id", ondelete="CASCADE"), nullable=False, index=True)
