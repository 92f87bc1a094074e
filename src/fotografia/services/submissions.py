"""Submission lifecycle: creation, photo attachment and retrieval."""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from fotografia.domain.models import Identity
from fotografia.domain.submissions import (
    Actor,
    PhotoKind,
    PhotoRecord,
    PhotoUpload,
    ResultsView,
    SubmissionDetail,
    SubmissionDraft,
    SubmissionRecord,
    SubmissionStatus,
    UpdateReport,
    UpdateStep,
)
from fotografia.errors import NotFound, PersistenceError, ValidationError
from fotografia.services import workflow

logger = logging.getLogger(__name__)

USER_ORIGINALS_FOLDER = "user_originals"
PROCESSED_FOLDER = "processed"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9.\-_]")


class SubmissionRepository(Protocol):
    """Persistence interface for submissions."""

    def create_submission(self, draft: SubmissionDraft) -> SubmissionRecord:
        """Insert a submission and return it."""

    def get_submission(
        self, submission_id: UUID, owner_id: UUID | None = None
    ) -> SubmissionRecord | None:
        """Return a submission, scoped to an owner when one is given."""

    def list_submissions(self) -> list[SubmissionRecord]:
        """Return all submissions, newest first."""

    def update_status(
        self,
        submission_id: UUID,
        status: str,
        owner_id: UUID | None = None,
        expected_status: str | None = None,
    ) -> SubmissionRecord | None:
        """Set the status; return None when no row matched the filters."""


class PhotoRepository(Protocol):
    """Persistence interface for photo metadata."""

    def create_photo(self, submission_id: UUID, kind: str, url: str) -> PhotoRecord:
        """Create a photo row and return it."""

    def list_photos(self, submission_ids: list[UUID]) -> list[PhotoRecord]:
        """Return photos for the given submissions, oldest first."""


class PhotoStorage(Protocol):
    """Interface for binary photo storage."""

    def upload(self, path: str, content: bytes, content_type: str | None) -> str:
        """Store bytes under a path and return the public URL."""


def sanitize_filename(filename: str) -> str:
    """Replace characters that are unsafe in storage paths."""
    return _UNSAFE_FILENAME_CHARS.sub("_", filename or "photo")


def build_photo_path(
    submission_id: UUID, folder: str, filename: str, now: datetime
) -> str:
    """Return the storage path for an uploaded photo."""
    millis = int(now.timestamp() * 1000)
    return f"{submission_id}/{folder}/{millis}-{sanitize_filename(filename)}"


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class SubmissionService:
    """Application service behind the submission endpoints."""

    submission_repository: SubmissionRepository
    photo_repository: PhotoRepository
    photo_storage: PhotoStorage
    infer_completion: bool = True
    enforce_transitions: bool = False
    checkout_url: str | None = None
    clock: Callable[[], datetime] = field(default=_utcnow)

    def create_submission(  # noqa: PLR0913
        self,
        identity: Identity,
        name: str | None,
        profession: str | None,
        specialty: str | None,
        desired_elements: str | None,
    ) -> SubmissionRecord:
        """Create a submission awaiting photos for the caller."""
        values = {
            "name": name,
            "profession": profession,
            "specialty": specialty,
            "desiredElements": desired_elements,
        }
        missing = [
            key for key, value in values.items() if not value or not value.strip()
        ]
        if missing:
            raise ValidationError("Missing required form fields", fields=missing)
        draft = SubmissionDraft(
            owner_id=identity.user_id,
            display_name=name.strip(),
            contact_email=identity.email or "",
            profession=profession.strip(),
            specialty_detail=specialty.strip(),
            desired_elements=desired_elements.strip(),
            phone=identity.phone,
            status=workflow.INITIAL_STATUS,
        )
        try:
            created = self.submission_repository.create_submission(draft)
        except Exception as exc:
            logger.exception(
                "Failed to create submission", extra={"user_id": identity.user_id}
            )
            raise PersistenceError("Failed to create initial submission") from exc
        logger.info(
            "Submission created",
            extra={"submission_id": created.id, "user_id": identity.user_id},
        )
        return created

    def get_for_owner(
        self, identity: Identity, submission_id: UUID
    ) -> SubmissionDetail:
        """Return a submission with photos when the caller owns it."""
        submission = self._get_owned(identity, submission_id)
        try:
            photos = self.photo_repository.list_photos([submission.id])
        except Exception as exc:
            logger.exception(
                "Failed to list photos", extra={"submission_id": submission_id}
            )
            raise PersistenceError("Failed to fetch submission") from exc
        return SubmissionDetail(submission=submission, photos=photos)

    def list_all(self) -> list[SubmissionDetail]:
        """Return every submission with its photos, newest first."""
        try:
            submissions = self.submission_repository.list_submissions()
            photos = (
                self.photo_repository.list_photos([item.id for item in submissions])
                if submissions
                else []
            )
        except Exception as exc:
            logger.exception("Failed to list submissions")
            raise PersistenceError("Failed to fetch submissions") from exc
        by_submission: dict[UUID, list[PhotoRecord]] = {}
        for photo in photos:
            by_submission.setdefault(photo.submission_id, []).append(photo)
        return [
            SubmissionDetail(submission=item, photos=by_submission.get(item.id, []))
            for item in submissions
        ]

    def get_results(self, identity: Identity, submission_id: UUID) -> ResultsView:
        """Return the paywalled results view for the owner."""
        detail = self.get_for_owner(identity, submission_id)
        processed = sorted(
            (photo for photo in detail.photos if photo.kind == PhotoKind.PROCESSED),
            key=lambda photo: photo.created_at,
        )
        return ResultsView(
            submission_id=detail.submission.id,
            status=detail.submission.status,
            stage=workflow.client_stage(detail.submission.status),
            preview=processed[0] if processed else None,
            locked_count=max(len(processed) - 1, 0),
            checkout_url=self.checkout_url,
        )

    def attach_user_photos(
        self,
        identity: Identity,
        submission_id: UUID,
        uploads: list[PhotoUpload],
        status: str | None = None,
    ) -> UpdateReport:
        """Store the owner's original photos and queue the submission."""
        submission = self._get_owned(identity, submission_id)
        target = (
            workflow.parse_status(status) if status else workflow.USER_UPLOAD_STATUS
        )
        if self.enforce_transitions:
            workflow.ensure_transition(submission.status, target, Actor.USER)

        report = UpdateReport(submission_id=submission.id, status=submission.status)
        self._store_photos(report, uploads, PhotoKind.ORIGINAL, USER_ORIGINALS_FOLDER)
        self._set_status(report, submission, target, owner_id=identity.user_id)
        return report

    def apply_admin_update(
        self,
        submission_id: UUID,
        uploads: list[PhotoUpload],
        status: str | None = None,
    ) -> UpdateReport:
        """Store processed photos and move the submission along."""
        explicit = workflow.parse_status(status) if status else None
        if explicit is None and not uploads:
            raise ValidationError("No valid data provided for update")
        submission = self._load(submission_id)
        if submission is None:
            raise NotFound("Submission not found")
        target = workflow.resolve_admin_status(
            explicit,
            has_processed_photos=bool(uploads),
            infer_completion=self.infer_completion,
        )
        if self.enforce_transitions and target is not None:
            workflow.ensure_transition(submission.status, target, Actor.ADMIN)

        report = UpdateReport(submission_id=submission.id, status=submission.status)
        if explicit is not None:
            self._set_status(report, submission, explicit)
        self._store_photos(report, uploads, PhotoKind.PROCESSED, PROCESSED_FOLDER)
        if explicit is None and target is not None:
            self._set_status(report, submission, target)
        return report

    def _load(
        self, submission_id: UUID, owner_id: UUID | None = None
    ) -> SubmissionRecord | None:
        try:
            return self.submission_repository.get_submission(
                submission_id, owner_id=owner_id
            )
        except Exception as exc:
            logger.exception(
                "Failed to fetch submission", extra={"submission_id": submission_id}
            )
            raise PersistenceError("Failed to fetch submission") from exc

    def _get_owned(self, identity: Identity, submission_id: UUID) -> SubmissionRecord:
        submission = self._load(submission_id, owner_id=identity.user_id)
        if submission is None:
            raise NotFound("Submission not found or access denied")
        return submission

    def _store_photos(
        self,
        report: UpdateReport,
        uploads: list[PhotoUpload],
        kind: PhotoKind,
        folder: str,
    ) -> None:
        for upload in uploads:
            step_name = f"store:{upload.field_name}"
            path = build_photo_path(
                report.submission_id, folder, upload.filename, self.clock()
            )
            try:
                url = self.photo_storage.upload(
                    path, upload.content, upload.content_type
                )
                photo = self.photo_repository.create_photo(
                    report.submission_id, kind, url
                )
            except Exception as exc:
                logger.exception(
                    "Failed to store photo",
                    extra={
                        "submission_id": report.submission_id,
                        "field": upload.field_name,
                        "path": path,
                    },
                )
                report.steps.append(
                    UpdateStep(name=step_name, ok=False, detail=_describe(exc))
                )
                continue
            report.photos.append(photo)
            report.steps.append(UpdateStep(name=step_name, ok=True))

    def _set_status(
        self,
        report: UpdateReport,
        submission: SubmissionRecord,
        target: SubmissionStatus,
        owner_id: UUID | None = None,
    ) -> None:
        try:
            updated = self.submission_repository.update_status(
                submission.id,
                target,
                owner_id=owner_id,
                expected_status=report.status,
            )
        except Exception as exc:
            logger.exception(
                "Failed to update submission status",
                extra={"submission_id": submission.id, "status": str(target)},
            )
            report.steps.append(
                UpdateStep(name="status", ok=False, detail=_describe(exc))
            )
            return
        if updated is None:
            logger.warning(
                "Submission status changed concurrently",
                extra={"submission_id": submission.id, "status": str(target)},
            )
            report.steps.append(UpdateStep(name="status", ok=False, detail="conflict"))
            return
        report.status = updated.status
        report.steps.append(UpdateStep(name="status", ok=True))


def _describe(exc: Exception) -> str:
    return f"{type(exc).__name__}: {exc}".strip()
