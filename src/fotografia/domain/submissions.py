"""Domain models for submissions and their photos."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class SubmissionStatus(StrEnum):
    """Closed set of workflow statuses."""

    AWAITING_PHOTO = "awaiting_photo"
    PENDING_DRIVE_LINK = "pending_drive_link"
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"


class PhotoKind(StrEnum):
    """Origin of a stored photo."""

    ORIGINAL = "original"
    PROCESSED = "processed"


class Actor(StrEnum):
    """Who is driving a status change."""

    USER = "user"
    ADMIN = "admin"


@dataclass(frozen=True)
class SubmissionDraft:
    """Fields needed to insert a new submission."""

    owner_id: UUID
    display_name: str
    contact_email: str
    profession: str
    specialty_detail: str
    desired_elements: str
    phone: str | None
    status: str


@dataclass(frozen=True)
class SubmissionRecord:
    """Represents a persisted submission."""

    id: UUID
    owner_id: UUID
    display_name: str
    contact_email: str
    profession: str
    specialty_detail: str
    desired_elements: str
    phone: str | None
    status: str
    created_at: datetime
    updated_at: datetime | None


@dataclass(frozen=True)
class PhotoRecord:
    """Represents a persisted photo row."""

    id: UUID
    submission_id: UUID
    kind: str
    url: str
    created_at: datetime


@dataclass(frozen=True)
class SubmissionDetail:
    """Submission together with its photos."""

    submission: SubmissionRecord
    photos: list[PhotoRecord]


@dataclass(frozen=True)
class PhotoUpload:
    """Binary payload received in a form field."""

    field_name: str
    filename: str
    content: bytes
    content_type: str | None = None


@dataclass(frozen=True)
class UpdateStep:
    """Outcome of a single step of an update call."""

    name: str
    ok: bool
    detail: str | None = None


@dataclass
class UpdateReport:
    """Aggregate result of a multi-step update."""

    submission_id: UUID
    status: str
    steps: list[UpdateStep] = field(default_factory=list)
    photos: list[PhotoRecord] = field(default_factory=list)

    @property
    def partial_failure(self) -> bool:
        return any(not step.ok for step in self.steps)


@dataclass(frozen=True)
class ResultsView:
    """What the results page may show for a submission."""

    submission_id: UUID
    status: str
    stage: str
    preview: PhotoRecord | None
    locked_count: int
    checkout_url: str | None
