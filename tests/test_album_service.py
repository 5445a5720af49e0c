"""Tests for album editing operations."""

from photo_library.domain.albums import Album
from photo_library.domain.results import ErrorKind
from photo_library.domain.tags import Tag
from photo_library.domain.users import User
from photo_library.services.albums import AlbumService
from photo_library.services.sync import reconcile_album
from tests.conftest import (
    FailingUserRepository,
    FakePhotoFileInspector,
    InMemoryUserRepository,
    make_photo,
    stamp,
)


def _album(service: AlbumService, user: User, name: str = "Trip") -> Album:
    result = service.create_album(user, name)
    assert result.ok
    return result.value


def test_create_album_persists(
    album_service: AlbumService, user: User, repository: InMemoryUserRepository
) -> None:
    result = album_service.create_album(user, "  Trip ")

    assert result.ok
    assert result.value.name == "Trip"
    assert repository.saves == 1


def test_create_album_rejects_blank_and_duplicate(
    album_service: AlbumService, user: User
) -> None:
    _album(album_service, user, "Trip")

    blank = album_service.create_album(user, "   ")
    duplicate = album_service.create_album(user, "TRIP")

    assert blank.kind is ErrorKind.INVALID_INPUT
    assert duplicate.kind is ErrorKind.DUPLICATE_NAME
    assert len(user.albums) == 1


def test_rename_album_collision(album_service: AlbumService, user: User) -> None:
    trip = _album(album_service, user, "Trip")
    _album(album_service, user, "Home")

    result = album_service.rename_album(user, trip, "home")

    assert result.kind is ErrorKind.DUPLICATE_NAME
    assert trip.name == "Trip"


def test_delete_unknown_album(album_service: AlbumService, user: User) -> None:
    result = album_service.delete_album(user, Album("Ghost"))

    assert result.kind is ErrorKind.NOT_FOUND


def test_add_photo_uses_file_timestamp(album_service: AlbumService, user: User) -> None:
    trip = _album(album_service, user)

    result = album_service.add_photo(user, trip, "img2.jpg")

    assert result.ok
    assert result.value.timestamp == stamp(5)
    assert trip.photos == [result.value]


def test_add_photo_missing_file(album_service: AlbumService, user: User) -> None:
    trip = _album(album_service, user)

    result = album_service.add_photo(user, trip, "missing.jpg")

    assert result.kind is ErrorKind.NOT_FOUND
    assert trip.photos == []


def test_add_photo_twice_is_duplicate(album_service: AlbumService, user: User) -> None:
    trip = _album(album_service, user)
    album_service.add_photo(user, trip, "img1.jpg")

    result = album_service.add_photo(user, trip, "img1.jpg")

    assert result.kind is ErrorKind.DUPLICATE_PHOTO
    assert trip.photo_count == 1


def test_remove_photo(album_service: AlbumService, user: User) -> None:
    trip = _album(album_service, user)
    photo = album_service.add_photo(user, trip, "img1.jpg").value

    assert album_service.remove_photo(user, trip, photo).ok
    assert album_service.remove_photo(user, trip, photo).kind is ErrorKind.NOT_FOUND


def test_caption_photo(album_service: AlbumService, user: User) -> None:
    trip = _album(album_service, user)
    photo = album_service.add_photo(user, trip, "img1.jpg").value

    result = album_service.caption_photo(user, trip, photo, " Sunset ")

    assert result.ok
    assert photo.caption == "Sunset"


def test_single_valued_tag_type_rejects_second_value(
    album_service: AlbumService, user: User
) -> None:
    trip = _album(album_service, user)
    photo = album_service.add_photo(user, trip, "img1.jpg").value
    assert album_service.add_tag(user, trip, photo, "location", "Paris").ok

    result = album_service.add_tag(user, trip, photo, "Location", "Rome")

    assert result.kind is ErrorKind.TAG_CAPACITY_EXCEEDED
    assert photo.tags == [Tag("location", "Paris")]


def test_unbounded_tag_type_accepts_many_values(
    album_service: AlbumService, user: User
) -> None:
    trip = _album(album_service, user)
    photo = album_service.add_photo(user, trip, "img1.jpg").value

    for name in ("Ann", "Ben", "Cal", "Dee"):
        assert album_service.add_tag(user, trip, photo, "person", name).ok

    assert len(photo.tags) == 4


def test_duplicate_tag_is_rejected(album_service: AlbumService, user: User) -> None:
    trip = _album(album_service, user)
    photo = album_service.add_photo(user, trip, "img1.jpg").value
    album_service.add_tag(user, trip, photo, "person", "Bob")

    result = album_service.add_tag(user, trip, photo, "PERSON", " bob ")

    assert result.kind is ErrorKind.DUPLICATE_TAG
    assert len(photo.tags) == 1


def test_unknown_tag_type_and_blank_value(
    album_service: AlbumService, user: User
) -> None:
    trip = _album(album_service, user)
    photo = album_service.add_photo(user, trip, "img1.jpg").value

    unknown = album_service.add_tag(user, trip, photo, "mood", "calm")
    blank = album_service.add_tag(user, trip, photo, "person", "  ")

    assert unknown.kind is ErrorKind.INVALID_INPUT
    assert blank.kind is ErrorKind.INVALID_INPUT
    assert photo.tags == []


def test_custom_tag_type_with_cap(album_service: AlbumService, user: User) -> None:
    trip = _album(album_service, user)
    photo = album_service.add_photo(user, trip, "img1.jpg").value

    assert album_service.add_tag_type(user, "Mood", 2).ok
    assert album_service.add_tag(user, trip, photo, "mood", "calm").ok
    assert album_service.add_tag(user, trip, photo, "mood", "happy").ok
    result = album_service.add_tag(user, trip, photo, "mood", "tired")

    assert result.kind is ErrorKind.TAG_CAPACITY_EXCEEDED


def test_add_tag_type_rejects_bad_multiplicity(
    album_service: AlbumService, user: User
) -> None:
    result = album_service.add_tag_type(user, "mood", 0)

    assert result.kind is ErrorKind.INVALID_INPUT
    assert not user.tag_types.is_valid_type("mood")


def test_delete_tag(album_service: AlbumService, user: User) -> None:
    trip = _album(album_service, user)
    photo = album_service.add_photo(user, trip, "img1.jpg").value
    album_service.add_tag(user, trip, photo, "person", "Bob")

    assert album_service.delete_tag(user, trip, photo, Tag("person", "bob")).ok
    missing = album_service.delete_tag(user, trip, photo, Tag("person", "bob"))
    assert missing.kind is ErrorKind.NOT_FOUND


def test_tag_ops_require_photo_in_album(
    album_service: AlbumService, user: User
) -> None:
    trip = _album(album_service, user, "Trip")
    home = _album(album_service, user, "Home")
    photo = album_service.add_photo(user, trip, "img1.jpg").value

    result = album_service.add_tag(user, home, photo, "person", "Bob")

    assert result.kind is ErrorKind.NOT_FOUND


def test_copy_photo_keeps_source_and_metadata(
    album_service: AlbumService, user: User
) -> None:
    trip = _album(album_service, user, "Trip")
    home = _album(album_service, user, "Home")
    photo = album_service.add_photo(user, trip, "img1.jpg").value
    album_service.caption_photo(user, trip, photo, "Beach")
    album_service.add_tag(user, trip, photo, "person", "Bob")

    result = album_service.copy_photo(user, trip, photo, "Home")

    assert result.ok
    copy = result.value
    assert copy is not photo
    assert copy == photo
    assert copy.caption == "Beach"
    assert copy.tags == [Tag("person", "Bob")]
    assert trip.photos == [photo]
    assert home.photos == [copy]


def test_copy_into_album_with_same_photo(
    album_service: AlbumService, user: User
) -> None:
    trip = _album(album_service, user, "Trip")
    _album(album_service, user, "Home")
    photo = album_service.add_photo(user, trip, "img1.jpg").value
    album_service.copy_photo(user, trip, photo, "Home")

    result = album_service.copy_photo(user, trip, photo, "Home")

    assert result.kind is ErrorKind.DUPLICATE_PHOTO


def test_move_photo(album_service: AlbumService, user: User) -> None:
    trip = _album(album_service, user, "Trip")
    home = _album(album_service, user, "Home")
    photo = album_service.add_photo(user, trip, "img1.jpg").value

    result = album_service.move_photo(user, trip, photo, "Home")

    assert result.ok
    assert trip.photos == []
    assert home.photos[0] is photo


def test_move_to_unknown_album(album_service: AlbumService, user: User) -> None:
    trip = _album(album_service, user, "Trip")
    photo = album_service.add_photo(user, trip, "img1.jpg").value

    assert album_service.move_photo(user, trip, photo, "Nowhere").kind is (
        ErrorKind.NOT_FOUND
    )
    assert album_service.move_photo(user, trip, photo, "Trip").kind is (
        ErrorKind.NOT_FOUND
    )
    assert trip.photos == [photo]


def test_list_albums_returns_summaries(
    album_service: AlbumService, user: User
) -> None:
    trip = _album(album_service, user, "Trip")
    album_service.add_photo(user, trip, "img1.jpg")
    album_service.add_photo(user, trip, "img3.jpg")

    [summary] = album_service.list_albums(user)

    assert summary.photo_count == 2
    assert summary.earliest == stamp(1)
    assert summary.latest == stamp(10)


def test_persistence_failure_is_reported(inspector: FakePhotoFileInspector) -> None:
    repository = FailingUserRepository()
    service = AlbumService(repository, inspector)
    user = User("alice")

    result = service.create_album(user, "Trip")

    assert not result.ok
    assert result.kind is ErrorKind.PERSISTENCE_FAILURE
    assert "disk full" in result.reason


def test_edits_apply_to_album_instance_of_equal_photo(
    album_service: AlbumService, tagged_user: User
) -> None:
    trip = tagged_user.get_album_by_name("Trip")
    home = tagged_user.get_album_by_name("Home")
    from_home = home.photos[0]

    captioned = album_service.caption_photo(tagged_user, trip, from_home, "Eiffel")
    tagged = album_service.add_tag(tagged_user, trip, from_home, "person", "Cy")

    assert captioned.value is trip.photos[0]
    assert trip.photos[0].caption == "Eiffel"
    assert Tag("person", "Cy") in trip.photos[0].tags
    assert tagged.ok
    assert from_home.caption == ""
    assert Tag("person", "Cy") not in from_home.tags


def test_edit_through_equal_photo_survives_checkpoint(
    album_service: AlbumService, tagged_user: User
) -> None:
    trip = tagged_user.get_album_by_name("Trip")
    home = tagged_user.get_album_by_name("Home")

    album_service.caption_photo(tagged_user, trip, home.photos[0], "new")
    reconcile_album(tagged_user, trip)

    assert trip.photos[0].caption == "new"
    assert home.photos[0].caption == "new"


def test_move_uses_source_album_instance(
    album_service: AlbumService, tagged_user: User
) -> None:
    trip = tagged_user.get_album_by_name("Trip")
    home = tagged_user.get_album_by_name("Home")
    own = trip.photos[1]
    album_service.create_album(tagged_user, "Beach")
    equal_copy = make_photo("beach.jpg", day=4)

    result = album_service.move_photo(tagged_user, trip, equal_copy, "Beach")

    assert result.value is own
    assert tagged_user.get_album_by_name("Beach").photos == [own]
    assert tagged_user.get_album_by_name("Beach").photos[0] is own
    assert own not in trip.photos
    assert len(home.photos) == 2
