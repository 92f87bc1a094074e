"""Submission endpoints used by the client wizard and the admin console."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Form, Header, Request, status
from starlette.datastructures import UploadFile

from fotografia.api.admin import require_admin, verify_admin_token
from fotografia.api.schemas import (
    ResultsOut,
    SubmissionCreatedOut,
    SubmissionOut,
    UpdateReportOut,
)
from fotografia.domain.models import Identity  # noqa: TC001
from fotografia.domain.submissions import PhotoUpload
from fotografia.errors import ValidationError

if TYPE_CHECKING:
    from fotografia.containers import AppContainer

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/submissions", tags=["submissions"])

USER_PHOTO_PREFIX = "user-photo-"
PROCESSED_PHOTO_PREFIX = "processed-"


async def current_identity(
    request: Request, authorization: str | None = Header(default=None)
) -> Identity:
    """Resolve the session bound to the request."""
    container: AppContainer = request.app.state.container
    return container.identity_service.authenticate(authorization)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_submission(  # noqa: PLR0913
    request: Request,
    identity: Identity = Depends(current_identity),
    name: str | None = Form(default=None),
    profession: str | None = Form(default=None),
    specialty: str | None = Form(default=None),
    desired_elements: str | None = Form(default=None, alias="desiredElements"),
) -> SubmissionCreatedOut:
    """Create a submission from the wizard's details step."""
    container: AppContainer = request.app.state.container
    created = container.submission_service.create_submission(
        identity,
        name=name,
        profession=profession,
        specialty=specialty,
        desired_elements=desired_elements,
    )
    return SubmissionCreatedOut(submission_id=created.id)


@router.get("", dependencies=[Depends(require_admin)])
async def list_submissions(request: Request) -> dict[str, list[SubmissionOut]]:
    """Return every submission with photos, newest first."""
    container: AppContainer = request.app.state.container
    details = container.submission_service.list_all()
    return {"submissions": [SubmissionOut.from_detail(item) for item in details]}


@router.get("/{submission_id}")
async def get_submission(
    submission_id: UUID,
    request: Request,
    identity: Identity = Depends(current_identity),
) -> dict[str, SubmissionOut]:
    """Return the caller's submission with its photos."""
    container: AppContainer = request.app.state.container
    detail = container.submission_service.get_for_owner(identity, submission_id)
    return {"submission": SubmissionOut.from_detail(detail)}


@router.get("/{submission_id}/results")
async def get_results(
    submission_id: UUID,
    request: Request,
    identity: Identity = Depends(current_identity),
) -> ResultsOut:
    """Return the results page payload for the caller's submission."""
    container: AppContainer = request.app.state.container
    view = container.submission_service.get_results(identity, submission_id)
    return ResultsOut.from_view(view)


@router.patch("/{submission_id}")
async def update_submission(
    submission_id: UUID,
    request: Request,
    authorization: str | None = Header(default=None),
    x_admin_token: str | None = Header(default=None),
) -> UpdateReportOut:
    """Attach user photos or apply an admin update, depending on the fields."""
    container: AppContainer = request.app.state.container
    form = await request.form()
    items = form.multi_items()
    raw_status = form.get("status")
    requested_status = raw_status if isinstance(raw_status, str) else None

    if _has_prefix(items, USER_PHOTO_PREFIX):
        identity = container.identity_service.authenticate(authorization)
        uploads = await _read_uploads(items, USER_PHOTO_PREFIX)
        report = container.submission_service.attach_user_photos(
            identity, submission_id, uploads, status=requested_status
        )
        message = "User photos uploaded."
    elif _has_prefix(items, PROCESSED_PHOTO_PREFIX) or "status" in form:
        verify_admin_token(request, x_admin_token)
        uploads = await _read_uploads(items, PROCESSED_PHOTO_PREFIX)
        report = container.submission_service.apply_admin_update(
            submission_id, uploads, status=requested_status
        )
        message = "Admin update processed."
    else:
        raise ValidationError("No valid data provided for update")

    if report.partial_failure:
        logger.warning(
            "Submission update finished with failed steps",
            extra={
                "submission_id": submission_id,
                "failed": [step.name for step in report.steps if not step.ok],
            },
        )
    return UpdateReportOut.from_report(report, message)


def _has_prefix(items: list[tuple[str, object]], prefix: str) -> bool:
    return any(key.startswith(prefix) for key, _ in items)


async def _read_uploads(
    items: list[tuple[str, object]], prefix: str
) -> list[PhotoUpload]:
    uploads: list[PhotoUpload] = []
    for key, value in items:
        if not key.startswith(prefix) or not isinstance(value, UploadFile):
            continue
        uploads.append(
            PhotoUpload(
                field_name=key,
                filename=value.filename or key,
                content=await value.read(),
                content_type=value.content_type,
            )
        )
    return uploads
