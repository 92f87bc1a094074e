"""Supabase-backed submission repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from fotografia.domain.submissions import SubmissionDraft, SubmissionRecord
from fotografia.services.submissions import SubmissionRepository

_COLUMNS = (
    "id, user_id, user_name, user_email, specialty, user_specialty, "
    "desired_elements, phone, status, created_at, updated_at"
)


@dataclass
class SupabaseSubmissionRepository(SubmissionRepository):
    """Supabase implementation for submission persistence."""

    client: Client

    def create_submission(self, draft: SubmissionDraft) -> SubmissionRecord:
        """Insert a submission row and return it."""
        response = (
            self.client.table("submissions")
            .insert(
                {
                    "user_id": str(draft.owner_id),
                    "user_name": draft.display_name,
                    "user_email": draft.contact_email,
                    "specialty": draft.profession,
                    "user_specialty": draft.specialty_detail,
                    "desired_elements": draft.desired_elements,
                    "phone": draft.phone,
                    "status": str(draft.status),
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create submission")
        return _to_record(response.data[0])

    def get_submission(
        self, submission_id: UUID, owner_id: UUID | None = None
    ) -> SubmissionRecord | None:
        """Return a submission by id, optionally scoped to its owner."""
        query = (
            self.client.table("submissions")
            .select(_COLUMNS)
            .eq("id", str(submission_id))
        )
        if owner_id is not None:
            query = query.eq("user_id", str(owner_id))
        response = query.limit(1).execute()
        if not response.data:
            return None
        return _to_record(response.data[0])

    def list_submissions(self) -> list[SubmissionRecord]:
        """Return all submissions ordered by creation time, newest first."""
        response = (
            self.client.table("submissions")
            .select(_COLUMNS)
            .order("created_at", desc=True)
            .execute()
        )
        return [_to_record(row) for row in response.data or []]

    def update_status(
        self,
        submission_id: UUID,
        status: str,
        owner_id: UUID | None = None,
        expected_status: str | None = None,
    ) -> SubmissionRecord | None:
        """Set the status when the row still matches the expected state."""
        query = (
            self.client.table("submissions")
            .update(
                {
                    "status": str(status),
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                }
            )
            .eq("id", str(submission_id))
        )
        if owner_id is not None:
            query = query.eq("user_id", str(owner_id))
        if expected_status is not None:
            query = query.eq("status", str(expected_status))
        response = query.execute()
        if not response.data:
            return None
        return _to_record(response.data[0])


def _to_record(row: dict[str, object]) -> SubmissionRecord:
    updated_at = row.get("updated_at")
    return SubmissionRecord(
        id=UUID(str(row["id"])),
        owner_id=UUID(str(row["user_id"])),
        display_name=str(row.get("user_name") or ""),
        contact_email=str(row.get("user_email") or ""),
        profession=str(row.get("specialty") or ""),
        specialty_detail=str(row.get("user_specialty") or ""),
        desired_elements=str(row.get("desired_elements") or ""),
        phone=row.get("phone"),
        status=str(row["status"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        updated_at=(
            datetime.fromisoformat(updated_at)
            if isinstance(updated_at, str) and updated_at
            else None
        ),
    )
