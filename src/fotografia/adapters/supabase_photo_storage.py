"""Supabase Storage adapter for photo binaries."""

from dataclasses import dataclass

from supabase import Client

from fotografia.services.submissions import PhotoStorage


@dataclass
class SupabasePhotoStorage(PhotoStorage):
    """Stores photos in a Supabase Storage bucket."""

    client: Client
    bucket: str = "photos"

    def upload(self, path: str, content: bytes, content_type: str | None) -> str:
        """Upload bytes and return the object's public URL."""
        file_options = {"content-type": content_type} if content_type else None
        bucket = self.client.storage.from_(self.bucket)
        bucket.upload(path, content, file_options)
        return bucket.get_public_url(path)
