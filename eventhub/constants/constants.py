"""Constants for genders, OTP purposes, event media types and publish states."""

from enum import Enum


class Gender(str, Enum):
    """Enumeration of genders accepted at registration."""

    M = "M"
    F = "F"
    O = "O"


class OtpPurpose(str, Enum):
    """Enumeration of the flows a one-time code may be consumed by."""

    LOGIN = "LOGIN"
    REGISTRATION = "REGISTRATION"
    RESET_PASSWORD = "RESET_PASSWORD"


class MediaType(str, Enum):
    """Enumeration of event media types."""

    image = "image"
    video = "video"
    audio = "audio"
    text = "text"


class PublishStatus(str, Enum):
    """Enumeration of event publish states."""

    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


# Incoming publishStatus values and the state each one maps to
PUBLISH_STATUS_ALIASES = {
    "publish": PublishStatus.PUBLISHED,
    "published": PublishStatus.PUBLISHED,
    "draft": PublishStatus.DRAFT,
    "archived": PublishStatus.ARCHIVED,
}


# Content types accepted for event attachments and the extension stored on disk
EVENT_FILE_TYPES = {
    "image/jpeg": "jpeg",
    "image/jpg": "jpg",
    "image/png": "png",
    "video/mp4": "mp4",
    "application/pdf": "pdf",
}


class ErrorCode(str, Enum):
    """Machine-readable codes returned in the errorCode field of error payloads."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    MOBILE_NOT_REGISTERED = "MOBILE_NOT_REGISTERED"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    INVALID_OTP = "INVALID_OTP"
    INVALID_TOKEN = "INVALID_TOKEN"
    EVENT_NOT_FOUND = "EVENT_NOT_FOUND"
    INVALID_CATEGORY_ID = "INVALID_CATEGORY_ID"
    INVALID_SUBCATEGORY_ID = "INVALID_SUBCATEGORY_ID"
    INVALID_COUNTRY_ID = "INVALID_COUNTRY_ID"
    INVALID_STATE_ID = "INVALID_STATE_ID"
    NOT_FOUND = "NOT_FOUND"
    RATE_LIMITED = "RATE_LIMITED"
    INTERNAL_SERVER_ERROR = "INTERNAL_SERVER_ERROR"
