"""Supabase-backed photo repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fotografia.domain.submissions import PhotoRecord
from fotografia.services.submissions import PhotoRepository


@dataclass
class SupabasePhotoRepository(PhotoRepository):
    """Supabase implementation for photo metadata persistence."""

    client: Client

    def create_photo(self, submission_id: UUID, kind: str, url: str) -> PhotoRecord:
        """Create a photo metadata row and return it."""
        response = (
            self.client.table("photos")
            .insert(
                {
                    "submission_id": str(submission_id),
                    "photo_type": str(kind),
                    "photo_url": url,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create photo metadata")
        return _to_record(response.data[0])

    def list_photos(self, submission_ids: list[UUID]) -> list[PhotoRecord]:
        """Return photos for the given submissions in upload order."""
        if not submission_ids:
            return []
        response = (
            self.client.table("photos")
            .select("id, submission_id, photo_type, photo_url, created_at")
            .in_("submission_id", [str(item) for item in submission_ids])
            .order("created_at")
            .execute()
        )
        return [_to_record(row) for row in response.data or []]


def _to_record(row: dict[str, object]) -> PhotoRecord:
    return PhotoRecord(
        id=UUID(str(row["id"])),
        submission_id=UUID(str(row["submission_id"])),
        kind=str(row["photo_type"]),
        url=str(row["photo_url"]),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )
