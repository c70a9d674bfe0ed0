import pytest

from core.exceptions import (
    RoomIdExhausted,
    RoomNotExist,
    RoomAlreadyStarted,
    RoomAlreadyEnded,
    UserAlreadyJoined,
    ValueOutOfRange,
)
from core.room_manager import RoomManager
from models import Room, RoomCounter, RoomStatus
from services.numeric_service import MS_PER_DAY, U32_MAX, U64_MAX, U128_MAX

NOW = 1_700_000_000_000


def clock():
    return NOW


def fill_room(db, creator="alice", joiners=("bob", "carol", "dave"), term_days=10):
    room_id = RoomManager.create_room(db, creator, term_days, 100)
    for account in joiners:
        RoomManager.join_room(db, account, room_id, 50, now_ms=clock)
    return room_id


def test_room_ids_start_at_one_and_increase(db):
    ids = [RoomManager.create_room(db, f"creator-{i}", 1, 10) for i in range(5)]
    assert ids == [1, 2, 3, 4, 5]


def test_create_room_initial_state(db):
    room_id = RoomManager.create_room(db, "alice", 10, 100)

    room = RoomManager.get_room(db, room_id)
    assert room.creator == "alice"
    assert room.status == RoomStatus.CREATED
    assert room.activation_end == 0
    assert room.accrued_value == 100
    assert room.term_days == 10
    assert RoomManager.get_members(db, room_id) == ["alice"]
    assert RoomManager.get_deposit(db, "alice") == 100


def test_join_until_activation(db):
    room_id = RoomManager.create_room(db, "alice", 10, 100)

    room = RoomManager.join_room(db, "bob", room_id, 50, now_ms=clock)
    assert RoomManager.get_members(db, room_id) == ["alice", "bob"]
    assert room.status == RoomStatus.CREATED

    room = RoomManager.join_room(db, "carol", room_id, 50, now_ms=clock)
    assert RoomManager.get_members(db, room_id) == ["alice", "bob", "carol"]
    assert room.status == RoomStatus.CREATED
    assert room.activation_end == 0

    room = RoomManager.join_room(db, "dave", room_id, 50, now_ms=clock)
    assert RoomManager.get_members(db, room_id) == ["alice", "bob", "carol", "dave"]
    assert room.status == RoomStatus.ACTIVE
    assert room.activation_end == NOW + 10 * MS_PER_DAY
    assert RoomManager.get_deposit(db, "dave") == 50


def test_clock_is_only_read_on_activation(db):
    calls = []

    def counting_clock():
        calls.append(1)
        return NOW

    room_id = RoomManager.create_room(db, "alice", 1, 100)
    RoomManager.join_room(db, "bob", room_id, 50, now_ms=counting_clock)
    RoomManager.join_room(db, "carol", room_id, 50, now_ms=counting_clock)
    assert calls == []

    RoomManager.join_room(db, "dave", room_id, 50, now_ms=counting_clock)
    assert calls == [1]


def test_join_after_activation_is_rejected(db):
    room_id = fill_room(db)

    with pytest.raises(RoomAlreadyStarted):
        RoomManager.join_room(db, "erin", room_id, 50, now_ms=clock)
    assert len(RoomManager.get_members(db, room_id)) == 4


def test_repeated_fourth_join_hits_deposit_check_first(db):
    room_id = fill_room(db)

    with pytest.raises(UserAlreadyJoined):
        RoomManager.join_room(db, "dave", room_id, 50, now_ms=clock)


def test_user_already_joined_across_rooms(db):
    first = RoomManager.create_room(db, "alice", 10, 100)
    RoomManager.create_room(db, "bob", 10, 100)

    with pytest.raises(UserAlreadyJoined):
        RoomManager.join_room(db, "bob", first, 50, now_ms=clock)

    RoomManager.join_room(db, "carol", first, 50, now_ms=clock)
    with pytest.raises(UserAlreadyJoined):
        RoomManager.join_room(db, "carol", first, 50, now_ms=clock)


def test_join_beyond_last_id(db):
    last = RoomManager.create_room(db, "alice", 10, 100)

    with pytest.raises(RoomNotExist):
        RoomManager.join_room(db, "bob", last + 1, 50, now_ms=clock)


def test_room_bound_is_checked_before_deposit(db):
    last = RoomManager.create_room(db, "alice", 10, 100)

    with pytest.raises(RoomNotExist):
        RoomManager.join_room(db, "alice", last + 1, 50, now_ms=clock)


def test_room_zero_does_not_exist(db):
    RoomManager.create_room(db, "alice", 10, 100)

    with pytest.raises(RoomNotExist):
        RoomManager.join_room(db, "bob", 0, 50, now_ms=clock)
    with pytest.raises(UserAlreadyJoined):
        RoomManager.join_room(db, "alice", 0, 50, now_ms=clock)


def test_join_with_no_rooms(db):
    with pytest.raises(RoomNotExist):
        RoomManager.join_room(db, "bob", 1, 50, now_ms=clock)


def test_ended_room_rejects_joins(db):
    room_id = RoomManager.create_room(db, "alice", 10, 100)
    # ended is only ever set from outside the lifecycle manager
    room = db.get(Room, room_id)
    room.status = RoomStatus.ENDED
    room.activation_end = NOW
    db.commit()

    with pytest.raises(RoomAlreadyEnded):
        RoomManager.join_room(db, "bob", room_id, 50, now_ms=clock)


def test_rejected_join_leaves_ledger_untouched(db, ledger_snapshot):
    room_id = fill_room(db)
    RoomManager.create_room(db, "erin", 3, 70)
    before = ledger_snapshot()

    with pytest.raises(RoomAlreadyStarted):
        RoomManager.join_room(db, "frank", room_id, 50, now_ms=clock)
    with pytest.raises(UserAlreadyJoined):
        RoomManager.join_room(db, "erin", room_id, 50, now_ms=clock)
    with pytest.raises(RoomNotExist):
        RoomManager.join_room(db, "frank", 99, 50, now_ms=clock)
    with pytest.raises(ValueOutOfRange):
        RoomManager.join_room(db, "frank", 2, U128_MAX + 1, now_ms=clock)

    assert ledger_snapshot() == before


def test_activation_end_saturates(db):
    room_id = fill_room(db, term_days=U64_MAX)

    assert RoomManager.get_room(db, room_id).activation_end == U64_MAX


def test_u128_deposits_round_trip(db):
    room_id = RoomManager.create_room(db, "alice", 10, U128_MAX)
    RoomManager.join_room(db, "bob", room_id, U128_MAX, now_ms=clock)

    assert RoomManager.get_room(db, room_id).accrued_value == U128_MAX
    assert RoomManager.get_deposit(db, "bob") == U128_MAX


@pytest.mark.parametrize("term_days, deposit", [
    (-1, 100),
    (U64_MAX + 1, 100),
    (10, -5),
    (10, U128_MAX + 1),
])
def test_create_room_rejects_out_of_range(db, ledger_snapshot, term_days, deposit):
    before = ledger_snapshot()

    with pytest.raises(ValueOutOfRange):
        RoomManager.create_room(db, "alice", term_days, deposit)
    assert ledger_snapshot() == before


def test_join_rejects_room_id_outside_u32(db):
    with pytest.raises(ValueOutOfRange):
        RoomManager.join_room(db, "bob", U32_MAX + 1, 50, now_ms=clock)


def test_creator_with_deposit_can_create_again(db):
    first = RoomManager.create_room(db, "alice", 1, 10)
    second = RoomManager.create_room(db, "alice", 1, 20)

    assert second == first + 1
    assert RoomManager.get_deposit(db, "alice") == 20
    assert RoomManager.get_members(db, first) == ["alice"]
    assert RoomManager.get_members(db, second) == ["alice"]
    assert RoomManager.get_room(db, second).accrued_value == 20


def test_room_id_counter_does_not_wrap(db, ledger_snapshot):
    db.get(RoomCounter, 1).last_id = U32_MAX
    db.commit()
    before = ledger_snapshot()

    with pytest.raises(RoomIdExhausted):
        RoomManager.create_room(db, "alice", 10, 100)
    assert ledger_snapshot() == before


def test_events_follow_successful_operations(db):
    room_id = RoomManager.create_room(db, "alice", 10, 100)
    RoomManager.join_room(db, "bob", room_id, 50, now_ms=clock)
    with pytest.raises(UserAlreadyJoined):
        RoomManager.join_room(db, "bob", room_id, 50, now_ms=clock)

    events = RoomManager.get_events(db, room_id)
    assert [e.event_type for e in events] == ["CreateRoom", "JoinRoom"]
    assert events[0].data == {"room_id": room_id, "creator": "alice"}
    assert events[1].data == {"room_id": room_id, "user": "bob", "deposit_amount": 50}


def test_queries_on_unknown_room(db):
    with pytest.raises(RoomNotExist):
        RoomManager.get_room(db, 42)
    with pytest.raises(RoomNotExist):
        RoomManager.get_members(db, 42)
    with pytest.raises(RoomNotExist):
        RoomManager.get_events(db, 42)
    assert RoomManager.get_deposit(db, "nobody") is None
