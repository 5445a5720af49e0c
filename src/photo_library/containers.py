"""Dependency container wiring for the application."""

from dataclasses import dataclass

from photo_library.adapters.json_user_repository import JsonUserRepository
from photo_library.adapters.local_files import LocalPhotoFiles
from photo_library.app_logging import configure_logging
from photo_library.config import Settings, parse_stock_photos
from photo_library.services.admin import AdminService
from photo_library.services.albums import AlbumService, PhotoFileInspector
from photo_library.services.search import SearchService
from photo_library.services.sessions import SessionService
from photo_library.services.stock import ensure_stock_user
from photo_library.services.users import UserRepository, UserService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    repository: UserRepository
    user_service: UserService
    session_service: SessionService
    album_service: AlbumService
    search_service: SearchService
    admin_service: AdminService


def build_container(
    settings: Settings | None = None,
    inspector: PhotoFileInspector | None = None,
) -> AppContainer:
    """Create the default dependency container and load user data."""
    resolved_settings = settings or Settings()
    configure_logging(resolved_settings.log_level)
    resolved_inspector = inspector or LocalPhotoFiles()
    repository = JsonUserRepository(resolved_settings.data_file)
    repository.load()
    if resolved_settings.seed_stock_user:
        ensure_stock_user(
            repository,
            resolved_inspector,
            username=resolved_settings.stock_username,
            album_name=resolved_settings.stock_album_name,
            photo_paths=parse_stock_photos(resolved_settings.stock_photos),
        )
    user_service = UserService(repository)
    return AppContainer(
        settings=resolved_settings,
        repository=repository,
        user_service=user_service,
        session_service=SessionService(repository, user_service),
        album_service=AlbumService(repository, resolved_inspector),
        search_service=SearchService(repository, resolved_settings.timezone),
        admin_service=AdminService(repository),
    )
