"""Pydantic response models for the HTTP API."""

from dataclasses import asdict
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from fotografia.domain.models import AuthTokens
from fotografia.domain.submissions import (
    PhotoRecord,
    ResultsView,
    SubmissionDetail,
    UpdateReport,
)


class PhotoOut(BaseModel):
    """Stored photo."""

    id: UUID
    submission_id: UUID
    kind: str
    url: str
    created_at: datetime

    @classmethod
    def from_record(cls, photo: PhotoRecord) -> "PhotoOut":
        return cls(**asdict(photo))


class SubmissionOut(BaseModel):
    """Submission with its photos."""

    id: UUID
    owner_id: UUID
    display_name: str
    contact_email: str
    profession: str
    specialty_detail: str
    desired_elements: str
    phone: str | None = None
    status: str
    created_at: datetime
    updated_at: datetime | None = None
    photos: list[PhotoOut] = Field(default_factory=list)

    @classmethod
    def from_detail(cls, detail: SubmissionDetail) -> "SubmissionOut":
        return cls(
            **asdict(detail.submission),
            photos=[PhotoOut.from_record(photo) for photo in detail.photos],
        )


class SubmissionCreatedOut(BaseModel):
    """Response for a newly created submission."""

    success: bool = True
    submission_id: UUID = Field(serialization_alias="submissionId")


class UpdateStepOut(BaseModel):
    """Outcome of one update step."""

    name: str
    ok: bool
    detail: str | None = None


class UpdateReportOut(BaseModel):
    """Aggregate outcome of a PATCH call."""

    success: bool = True
    message: str
    submission_id: UUID
    status: str
    partial_failure: bool
    steps: list[UpdateStepOut]
    photos: list[PhotoOut]

    @classmethod
    def from_report(cls, report: UpdateReport, message: str) -> "UpdateReportOut":
        return cls(
            message=message,
            submission_id=report.submission_id,
            status=report.status,
            partial_failure=report.partial_failure,
            steps=[UpdateStepOut(**asdict(step)) for step in report.steps],
            photos=[PhotoOut.from_record(photo) for photo in report.photos],
        )


class ResultsOut(BaseModel):
    """Results page payload; only the preview photo URL is exposed."""

    submission_id: UUID
    status: str
    stage: str
    preview: PhotoOut | None
    locked_count: int
    checkout_url: str | None

    @classmethod
    def from_view(cls, view: ResultsView) -> "ResultsOut":
        return cls(
            submission_id=view.submission_id,
            status=view.status,
            stage=view.stage,
            preview=PhotoOut.from_record(view.preview) if view.preview else None,
            locked_count=view.locked_count,
            checkout_url=view.checkout_url,
        )


class TokensOut(BaseModel):
    """Session tokens returned by sign-in."""

    access_token: str
    refresh_token: str
    user_id: UUID
    token_type: str = "bearer"

    @classmethod
    def from_tokens(cls, tokens: AuthTokens) -> "TokensOut":
        return cls(**asdict(tokens))
