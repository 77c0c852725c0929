"""Country and state lookup tables referenced by events."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from eventhub.models.base import Base, utcnow


class Country(Base):
    __tablename__ = "countries"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), unique=True, nullable=False)
    # Dial code; shared by some countries (+1)
    code = Column(String(8), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    states = relationship("State", back_populates="country", cascade="all, delete-orphan")


class State(Base):
    __tablename__ = "states"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    country_id = Column(Integer, ForeignKey("countries.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)

    country = relationship("Country", back_populates="states")
