"""Domain enumerations for the client portal.

Enums represent fixed sets of domain values (client status, roles,
deliverable types, URL size classes).
"""

from enum import Enum


class ClientStatus(str, Enum):
    """Client account lifecycle status.

    Only ACTIVE accounts can log in to the portal.
    """

    PENDING = "pending"
    ACTIVE = "active"
    SUSPENDED = "suspended"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid status values as strings."""
        return [status.value for status in cls]

    def can_transition_to(self, target: "ClientStatus") -> bool:
        """Return True if an administrator may move an account from self to target.

        Any state may be suspended; pending and suspended accounts may be
        activated. Nothing moves back to pending.
        """
        if target == ClientStatus.SUSPENDED:
            return True
        if target == ClientStatus.ACTIVE:
            return self in (ClientStatus.PENDING, ClientStatus.SUSPENDED, ClientStatus.ACTIVE)
        return self == ClientStatus.PENDING


class Role(str, Enum):
    """Principal role encoded in session tokens."""

    CLIENT = "client"
    ADMIN = "admin"


class ActivationPolicy(str, Enum):
    """When newly provisioned clients gain portal access."""

    IMMEDIATE = "immediate"
    ON_DEPOSIT = "on_deposit"


class DeliverableType(str, Enum):
    """Kind of delivered file."""

    IMAGE = "image"
    MAP = "map"
    MODEL = "model"
    VIDEO = "video"
    REPORT = "report"

    @property
    def access_category(self) -> str:
        """Key used in a client's deliverables_access policy (e.g. 'images')."""
        return f"{self.value}s"


# Every access category a client policy may mention.
ACCESS_CATEGORIES: tuple[str, ...] = tuple(t.access_category for t in DeliverableType)


class AccessType(str, Enum):
    """Kind of deliverable access recorded in the access log."""

    DOWNLOAD = "download"
    VIEW = "view"


class SizeClass(str, Enum):
    """Rendition requested from media storage.

    The media storage collaborator maps each class to its own transformation
    parameters; the portal only decides which class to ask for.
    """

    THUMBNAIL = "thumbnail"
    MEDIUM = "medium"
    LARGE = "large"
    FULL_RESOLUTION = "full_resolution"
    MODEL_PREVIEW = "model_preview"
    VIDEO_POSTER = "video_poster"
    VIDEO_STREAM = "video_stream"
    ORIGINAL = "original"


class ProvisioningResult(str, Enum):
    """Outcome of handling one CRM webhook event."""

    PROVISIONED = "provisioned"
    DUPLICATE = "duplicate"
    UPDATED = "updated"
    IGNORED = "ignored"
