import pytest

from petitbac.game.codes import ROOM_CODE_ALPHABET
from petitbac.game.registry import RoomCodeExhausted, RoomRegistry


def test_created_room_starts_in_lobby(registry):
    room = registry.create_room("sid-a", categories=["Fruit"])

    assert registry.get_room(room.code) is room
    assert room.status == "lobby"
    assert room.round == 0
    assert room.letter is None
    assert room.players == {}
    assert room.arbiter_id == "sid-a"
    assert len(room.code) == 5
    assert set(room.code) <= set(ROOM_CODE_ALPHABET)


def test_lookup_is_case_insensitive(registry):
    room = registry.create_room("sid-a", categories=["Fruit"])
    assert registry.get_room(f"  {room.code.lower()} ") is room
    assert room.code.lower() in registry
    assert registry.get_room("") is None
    assert registry.get_room(None) is None


def test_code_collision_is_retried():
    codes = iter(["ABCDE", "ABCDE", "FGHJK"])
    registry = RoomRegistry(code_factory=lambda: next(codes))

    first = registry.create_room("sid-a", categories=["Fruit"])
    second = registry.create_room("sid-b", categories=["Fruit"])

    assert (first.code, second.code) == ("ABCDE", "FGHJK")
    assert len(registry) == 2


def test_code_exhaustion_raises():
    registry = RoomRegistry(code_factory=lambda: "ABCDE")
    registry.create_room("sid-a", categories=["Fruit"])

    with pytest.raises(RoomCodeExhausted):
        registry.create_room("sid-b", categories=["Fruit"])


def test_remove_is_idempotent_and_code_can_be_reused():
    registry = RoomRegistry(code_factory=lambda: "ABCDE")
    room = registry.create_room("sid-a", categories=["Fruit"])

    assert registry.remove_room(room.code) is True
    assert registry.remove_room(room.code) is False
    assert registry.get_room("ABCDE") is None

    again = registry.create_room("sid-b", categories=["Fruit"])
    assert again.code == "ABCDE"
    assert again is not room


def test_rooms_for_connection(make_room, registry):
    room = make_room("sid-b")
    registry.create_room("sid-x", categories=["Fruit"])

    assert registry.rooms_for("sid-b") == [room]
    assert registry.rooms_for("sid-x") == []
