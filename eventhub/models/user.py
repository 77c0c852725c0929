"""User model for the EventHub system."""

from sqlalchemy import Column, String, Boolean, Integer, Enum, UniqueConstraint
from sqlalchemy.orm import relationship

from eventhub.constants.constants import Gender
from eventhub.models.base import Base, TimestampMixin


class User(Base, TimestampMixin):
    __tablename__ = "users"
    __table_args__ = (
        UniqueConstraint("mobile_number", "country_code", name="uq_users_mobile_country"),
    )

    id = Column(Integer, primary_key=True, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    mobile_number = Column(String(20), nullable=False, index=True)
    country_code = Column(String(8), nullable=False)
    gender = Column(Enum(Gender), nullable=False)
    age = Column(Integer, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)

    # Relationships
    otps = relationship("OtpRecord", back_populates="user", cascade="all, delete-orphan")
    created_events = relationship("Event", back_populates="creator")

    def __repr__(self):
        return f"<User {self.country_code} {self.mobile_number}>"
