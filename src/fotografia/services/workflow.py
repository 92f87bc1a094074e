"""Submission status state machine."""

from fotografia.domain.submissions import Actor, SubmissionStatus
from fotografia.errors import InvalidTransition, ValidationError

INITIAL_STATUS = SubmissionStatus.AWAITING_PHOTO
USER_UPLOAD_STATUS = SubmissionStatus.PENDING

_TRANSITIONS: dict[tuple[SubmissionStatus, SubmissionStatus], Actor] = {
    (SubmissionStatus.AWAITING_PHOTO, SubmissionStatus.PENDING): Actor.USER,
    (SubmissionStatus.PENDING_DRIVE_LINK, SubmissionStatus.PENDING): Actor.USER,
    (SubmissionStatus.PENDING, SubmissionStatus.PROCESSING): Actor.ADMIN,
    (SubmissionStatus.PENDING, SubmissionStatus.COMPLETED): Actor.ADMIN,
    (SubmissionStatus.PROCESSING, SubmissionStatus.COMPLETED): Actor.ADMIN,
}

_WAITING_STATUSES = {
    SubmissionStatus.PENDING_DRIVE_LINK,
    SubmissionStatus.PENDING,
    SubmissionStatus.PROCESSING,
}

STAGE_UPLOAD_PHOTOS = "upload_photos"
STAGE_WAITING = "waiting"
STAGE_RESULTS = "results"


def parse_status(value: str) -> SubmissionStatus:
    """Return the status for a raw value, rejecting unknown values."""
    try:
        return SubmissionStatus(value.strip())
    except ValueError as exc:
        raise ValidationError(f"Unknown status: {value!r}", fields=["status"]) from exc


def can_transition(current: str, target: SubmissionStatus, actor: Actor) -> bool:
    """Return true when the actor may move a submission from current to target."""
    try:
        source = SubmissionStatus(current)
    except ValueError:
        return False
    if source == target:
        return True
    return _TRANSITIONS.get((source, target)) == actor


def ensure_transition(current: str, target: SubmissionStatus, actor: Actor) -> None:
    """Raise when the transition is not part of the workflow."""
    if not can_transition(current, target, actor):
        raise InvalidTransition(
            f"Cannot move submission from {current} to {target} as {actor}"
        )


def resolve_admin_status(
    explicit: SubmissionStatus | None,
    has_processed_photos: bool,
    infer_completion: bool,
) -> SubmissionStatus | None:
    """Return the status an admin update should end in.

    An explicit status always wins. Without one, uploading processed photos
    implies completion when inference is enabled. ``None`` means the status
    is left untouched.
    """
    if explicit is not None:
        return explicit
    if has_processed_photos and infer_completion:
        return SubmissionStatus.COMPLETED
    return None


def client_stage(status: str) -> str:
    """Return the wizard step a client should present for a status."""
    if status == SubmissionStatus.AWAITING_PHOTO:
        return STAGE_UPLOAD_PHOTOS
    if status in _WAITING_STATUSES:
        return STAGE_WAITING
    return STAGE_RESULTS
