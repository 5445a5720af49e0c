"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from photo_library.config import Settings
from photo_library.domain.albums import Album
from photo_library.domain.matching import fold
from photo_library.domain.photos import Photo
from photo_library.domain.results import PersistenceError
from photo_library.domain.tags import Tag
from photo_library.domain.users import User
from photo_library.services.admin import AdminService
from photo_library.services.albums import AlbumService, PhotoFileInspector
from photo_library.services.search import SearchService
from photo_library.services.sessions import SessionService
from photo_library.services.users import UserRepository, UserService


def stamp(day: int, hour: int = 12) -> datetime:
    """Return a UTC timestamp in March 2024."""
    return datetime(2024, 3, day, hour, 0, tzinfo=UTC)


def make_photo(
    path: str, day: int = 1, caption: str = "", tags: list[Tag] | None = None
) -> Photo:
    return Photo(path=path, timestamp=stamp(day), caption=caption, tags=tags or [])


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[str, User] = field(default_factory=dict)
    saves: int = 0

    def load(self) -> None:
        return None

    def save(self, user: User) -> None:
        self.users[user.username] = user
        self.save_all()

    def save_all(self) -> None:
        self.saves += 1

    def get(self, username: str) -> User | None:
        for name, user in self.users.items():
            if fold(name) == fold(username):
                return user
        return None

    def delete(self, username: str) -> User | None:
        user = self.get(username)
        if user is not None:
            del self.users[user.username]
        return user

    def list_users(self) -> list[User]:
        return list(self.users.values())


@dataclass
class FailingUserRepository(InMemoryUserRepository):
    """Repository whose writes always fail."""

    def save_all(self) -> None:
        raise PersistenceError("disk full")


@dataclass
class FakePhotoFileInspector(PhotoFileInspector):
    """Returns preset modification times; unknown paths are missing."""

    times: dict[str, datetime] = field(default_factory=dict)

    def modified_at(self, path: str) -> datetime:
        if path not in self.times:
            raise FileNotFoundError(path)
        return self.times[path]


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        data_file=tmp_path / "users.json",
        seed_stock_user=False,
        environment="test",
    )


@pytest.fixture
def repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def inspector() -> FakePhotoFileInspector:
    return FakePhotoFileInspector(
        times={
            "img1.jpg": stamp(1),
            "img2.jpg": stamp(5),
            "img3.jpg": stamp(10),
            "p.jpg": stamp(2),
        }
    )


@pytest.fixture
def user(repository: InMemoryUserRepository) -> User:
    alice = User("alice")
    repository.users[alice.username] = alice
    return alice


@pytest.fixture
def album_service(
    repository: InMemoryUserRepository, inspector: FakePhotoFileInspector
) -> AlbumService:
    return AlbumService(repository, inspector)


@pytest.fixture
def search_service(repository: InMemoryUserRepository) -> SearchService:
    return SearchService(repository, timezone_name="UTC")


@pytest.fixture
def admin_service(repository: InMemoryUserRepository) -> AdminService:
    return AdminService(repository)


@pytest.fixture
def session_service(repository: InMemoryUserRepository) -> SessionService:
    return SessionService(repository, UserService(repository))


@pytest.fixture
def tagged_user() -> User:
    """User with two albums sharing one file and a small tag vocabulary."""
    owner = User("bob")
    trip = Album("Trip")
    home = Album("Home")
    trip.add_photo(
        make_photo(
            "paris.jpg",
            day=3,
            tags=[Tag("location", "Paris"), Tag("person", "Ann")],
        )
    )
    trip.add_photo(make_photo("beach.jpg", day=4, tags=[Tag("person", "Ben")]))
    home.add_photo(
        make_photo(
            "paris.jpg",
            day=3,
            tags=[Tag("location", "Paris"), Tag("person", "Ann")],
        )
    )
    home.add_photo(
        make_photo(
            "garden.jpg",
            day=20,
            caption="Sunny garden",
            tags=[Tag("person", "Ann"), Tag("person", "Ben")],
        )
    )
    owner.create_album(trip)
    owner.create_album(home)
    return owner
