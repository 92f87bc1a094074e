"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import ClientOptions, create_client

from fotografia.adapters.supabase_auth_client import SupabaseAuthClient
from fotografia.adapters.supabase_photo_repository import SupabasePhotoRepository
from fotografia.adapters.supabase_photo_storage import SupabasePhotoStorage
from fotografia.adapters.supabase_submission_repository import (
    SupabaseSubmissionRepository,
)
from fotografia.config import Settings
from fotografia.services.accounts import AccountService
from fotografia.services.identity import IdentityService
from fotografia.services.submissions import SubmissionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    identity_service: IdentityService
    account_service: AccountService
    submission_service: SubmissionService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    # Service-role client bypasses row-level security; ownership is enforced
    # by the queries in SubmissionService.
    service_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    # Shared by every request, so it must not keep the last user's session.
    auth_client = SupabaseAuthClient(
        create_client(
            resolved_settings.supabase_url,
            resolved_settings.supabase_anon_key,
            options=ClientOptions(persist_session=False, auto_refresh_token=False),
        )
    )
    submission_service = SubmissionService(
        submission_repository=SupabaseSubmissionRepository(service_client),
        photo_repository=SupabasePhotoRepository(service_client),
        photo_storage=SupabasePhotoStorage(
            service_client, bucket=resolved_settings.storage_bucket
        ),
        infer_completion=resolved_settings.infer_completion_on_processed_upload,
        enforce_transitions=resolved_settings.enforce_status_transitions,
        checkout_url=resolved_settings.checkout_url,
    )

    return AppContainer(
        settings=resolved_settings,
        identity_service=IdentityService(auth_client),
        account_service=AccountService(auth_client),
        submission_service=submission_service,
    )
