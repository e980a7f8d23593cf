from sqlalchemy import Column, Integer, String, Text, Boolean, ForeignKey, false
from .base import Base

class Property(Base):
    __tablename__ = "properties"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    landlord_id = Column(Integer, ForeignKey("landlords.id", ondelete="CASCADE"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    address = Column(String(255), nullable=False)
    rent_fee = Column(Integer, nullable=False)
    # Only flipped to True by the owner; approval never resets it
    availability = Column(Boolean, nullable=False, default=False, server_default=false())
    image = Column(Text)
