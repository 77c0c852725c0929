from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Index
from sqlalchemy.orm import relationship

from eventhub.constants.constants import OtpPurpose
from eventhub.models.base import Base, TimestampMixin


class OtpRecord(Base, TimestampMixin):
    """One-time code issued to a user for a single purpose. Never updated in place."""

    __tablename__ = "otps"
    __table_args__ = (
        Index("ix_otps_user_purpose", "user_id", "purpose"),
    )

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    otp_code = Column(String(10), nullable=False)
    purpose = Column(Enum(OtpPurpose), nullable=False)
    expires_at = Column(DateTime, nullable=False)

    user = relationship("User", back_populates="otps")

    def __repr__(self):
        return f"<OtpRecord user={self.user_id} {self.purpose.value if self.purpose else None}>"
