"""Event model for the EventHub system."""

from sqlalchemy import Column, Integer, String, DateTime, Text, Enum, ForeignKey
from sqlalchemy.orm import relationship
from eventhub.constants.constants import MediaType, PublishStatus
from eventhub.models.base import Base, TimestampMixin, utcnow


class Event(Base, TimestampMixin):
    """Model representing a published or draft event."""

    __tablename__ = "events"
    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    content = Column(Text, nullable=True)
    date = Column(DateTime, default=utcnow, nullable=False)
    media_type = Column(Enum(MediaType), nullable=False)
    file = Column(String(500), nullable=True)
    location = Column(String(255), nullable=False)
    language = Column(String(50), nullable=False)
    publish_status = Column(Enum(PublishStatus), default=PublishStatus.DRAFT, nullable=False)
    publish_date = Column(DateTime, default=utcnow, nullable=False)

    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False, index=True)
    subcategory_id = Column(Integer, ForeignKey("subcategories.id"), nullable=False, index=True)
    country_id = Column(Integer, ForeignKey("countries.id"), nullable=False)
    state_id = Column(Integer, ForeignKey("states.id"), nullable=False)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    category = relationship("Category")
    subcategory = relationship("Subcategory")
    country = relationship("Country")
    state = relationship("State")
    creator = relationship("User", back_populates="created_events", foreign_keys=[created_by])

    def __repr__(self):
        return f"<Event {self.id} {self.title}>"
