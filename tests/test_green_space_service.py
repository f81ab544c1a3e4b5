"""Green space service: creation outcomes, lookups, updates, deletes, search.

Invariants:
    - Ids are unique and strictly increasing, also across deletes and restarts
    - A rejected payload stores nothing and consumes no id
    - Missing ids raise NotFoundError naming the id and the operation
"""

import pytest

from green_space_api.app.core.codec import MAX_RECORD_SIZE
from green_space_api.app.core.errors import NotFoundError, StorageError
from green_space_api.app.schemas.green_space import (
    Created,
    GreenSpaceCreate,
    GreenSpaceUpdate,
    Rejected,
)
from green_space_api.app.services.green_space_service import (
    GreenSpaceService,
    validate_green_space,
)


def add(service, name, location="Somewhere", description="Green"):
    result = service.add_green_space(
        GreenSpaceCreate(name=name, location=location, description=description)
    )
    assert isinstance(result, Created)
    return result.green_space


def test_central_park_lifecycle(service, central_park):
    result = service.add_green_space(central_park)

    assert isinstance(result, Created)
    space = result.green_space
    assert (space.id, space.name, space.location, space.description) == (
        1, "Central Park", "NYC", "Big park",
    )
    assert service.get_green_space(1) == space
    assert service.count_green_spaces() == 1

    assert service.delete_green_space(1) == space
    with pytest.raises(NotFoundError):
        service.get_green_space(1)
    assert service.count_green_spaces() == 0


@pytest.mark.parametrize("empty_field", ["name", "location", "description"])
def test_empty_field_is_rejected(service, empty_field):
    fields = {"name": "Park", "location": "Town", "description": "Nice"}
    fields[empty_field] = ""

    result = service.add_green_space(GreenSpaceCreate(**fields))

    assert isinstance(result, Rejected)
    assert empty_field in result.reason
    assert service.count_green_spaces() == 0


def test_rejection_does_not_consume_an_id(service, central_park):
    service.add_green_space(GreenSpaceCreate(name="", location="", description=""))

    assert service.add_green_space(central_park).green_space.id == 1


def test_oversized_payload_is_rejected(service):
    payload = GreenSpaceCreate(name="Park", location="Town", description="x" * MAX_RECORD_SIZE)

    result = service.add_green_space(payload)

    assert isinstance(result, Rejected)
    assert "too large" in result.reason
    assert service.allocator.current() == 0


def test_validate_accepts_complete_payload(central_park):
    assert validate_green_space(central_park) is None


def test_ids_unique_and_increasing_across_deletes(service):
    first = add(service, "A")
    second = add(service, "B")
    service.delete_green_space(second.id)
    third = add(service, "C")

    assert [first.id, second.id, third.id] == [1, 2, 3]


def test_ids_continue_after_restart(db_path):
    add(GreenSpaceService.open(db_path), "A")

    restarted = GreenSpaceService.open(db_path)

    assert add(restarted, "B").id == 2
    assert [s.name for s in restarted.list_green_spaces()] == ["A", "B"]


def test_get_missing_id_message(service):
    with pytest.raises(NotFoundError) as exc_info:
        service.get_green_space(99)

    assert exc_info.value.msg == "A green space with id=99 not found"
    assert isinstance(exc_info.value, ValueError)


def test_update_replaces_all_fields(service, central_park):
    space = service.add_green_space(central_park).green_space

    updated = service.update_green_space(
        space.id,
        GreenSpaceUpdate(name="Prospect Park", location="Brooklyn", description="Also big"),
    )

    assert updated.id == space.id
    assert (updated.name, updated.location, updated.description) == (
        "Prospect Park", "Brooklyn", "Also big",
    )
    assert service.get_green_space(space.id) == updated


def test_update_missing_id(service):
    with pytest.raises(NotFoundError) as exc_info:
        service.update_green_space(5, GreenSpaceUpdate(name="a", location="b", description="c"))

    assert exc_info.value.msg == "Couldn't update a green space with id=5. Space not found"


def test_update_too_large_aborts_and_keeps_old_record(service, central_park):
    space = service.add_green_space(central_park).green_space

    with pytest.raises(StorageError):
        service.update_green_space(
            space.id,
            GreenSpaceUpdate(name="a", location="b", description="c" * MAX_RECORD_SIZE),
        )
    assert service.get_green_space(space.id) == space


def test_update_location_is_idempotent(service, central_park):
    space = service.add_green_space(central_park).green_space

    once = service.update_green_space_location(space.id, "Manhattan")
    twice = service.update_green_space_location(space.id, "Manhattan")

    assert once == twice
    stored = service.get_green_space(space.id)
    assert stored.location == "Manhattan"
    assert (stored.id, stored.name, stored.description) == (space.id, space.name, space.description)


def test_update_location_missing_id(service):
    with pytest.raises(NotFoundError) as exc_info:
        service.update_green_space_location(3, "Nowhere")

    assert exc_info.value.msg == (
        "Couldn't update location for green space with id=3. Space not found"
    )


def test_delete_missing_id(service):
    with pytest.raises(NotFoundError) as exc_info:
        service.delete_green_space(8)

    assert exc_info.value.msg == "Couldn't delete a green space with id=8. Space not found"


def test_delete_decrements_count_by_one(service):
    add(service, "A")
    b = add(service, "B")
    add(service, "C")

    service.delete_green_space(b.id)

    assert service.count_green_spaces() == 2
    with pytest.raises(NotFoundError):
        service.get_green_space(b.id)


def test_list_is_in_id_order(service):
    for name in ("Zeta", "Alpha", "Mid"):
        add(service, name)

    assert [s.name for s in service.list_green_spaces()] == ["Zeta", "Alpha", "Mid"]


@pytest.fixture
def populated(service):
    add(service, "Central Park", "New York", "Big urban park")
    add(service, "Hyde Park", "London", "Royal park with a lake")
    add(service, "Englischer Garten", "Munich", "Large public PARK")
    add(service, "Park Güell", "Barcelona", "Gardens by Gaudí")
    return service


@pytest.mark.parametrize("query", ["Park", "park", "Garten", "ü", "x", ""])
def test_search_by_name_is_containment_filter(populated, query):
    expected = [s for s in populated.list_green_spaces() if query in s.name]

    assert populated.search_by_name(query) == expected


def test_search_is_case_sensitive(populated):
    assert [s.name for s in populated.search_by_name("Park")] == [
        "Central Park", "Hyde Park", "Park Güell",
    ]
    assert populated.search_by_name("park") == []


def test_search_by_location(populated):
    assert [s.name for s in populated.search_by_location("on")] == ["Hyde Park", "Park Güell"]


def test_search_by_description(populated):
    assert [s.name for s in populated.search_by_description("park")] == [
        "Central Park", "Hyde Park",
    ]


def test_empty_query_matches_everything(populated):
    everything = populated.list_green_spaces()

    assert populated.search_by_name("") == everything
    assert populated.search_by_location("") == everything
    assert populated.search_by_description("") == everything


def test_search_on_empty_store(service):
    assert service.search_by_name("") == []
