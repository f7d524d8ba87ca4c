from __future__ import annotations

import threading
import uuid
from concurrent.futures import ThreadPoolExecutor

import pytest

from app.user_store import InMemoryUserStore, User, UserNotFoundError


def _user(first: str = "Ann", last: str = "Lee", bio: str = "engineer") -> User:
    return User(first_name=first, last_name=last, biography=bio)


def test_create_then_get_returns_submitted_fields():
    store = InMemoryUserStore()
    user_id = store.create(user=_user())

    assert isinstance(user_id, uuid.UUID)
    assert store.get(user_id=user_id) == _user()


def test_unknown_id_is_not_found_for_every_operation():
    store = InMemoryUserStore()
    missing = uuid.uuid4()

    with pytest.raises(UserNotFoundError):
        store.get(user_id=missing)
    with pytest.raises(UserNotFoundError):
        store.update(user_id=missing, user=_user())
    with pytest.raises(UserNotFoundError):
        store.delete(user_id=missing)

    # update must not create
    assert len(store) == 0


def test_update_replaces_the_whole_record():
    store = InMemoryUserStore()
    user_id = store.create(user=_user())

    replacement = User(first_name="Anne", last_name="", biography="")
    store.update(user_id=user_id, user=replacement)

    assert store.get(user_id=user_id) == replacement
    assert [uid for uid, _ in store.list()] == [user_id]


def test_second_delete_is_not_found():
    store = InMemoryUserStore()
    user_id = store.create(user=_user())

    store.delete(user_id=user_id)
    with pytest.raises(UserNotFoundError) as exc_info:
        store.delete(user_id=user_id)

    assert exc_info.value.user_id == user_id
    with pytest.raises(UserNotFoundError):
        store.get(user_id=user_id)


def test_list_size_tracks_creates_minus_deletes():
    store = InMemoryUserStore()
    ids = [store.create(user=_user(first=f"u{i}")) for i in range(5)]
    store.delete(user_id=ids[1])
    store.delete(user_id=ids[3])

    listed = dict(store.list())
    assert len(listed) == len(store) == 3
    assert set(listed) == {ids[0], ids[2], ids[4]}
    assert listed[ids[2]].first_name == "u2"


def test_list_is_a_snapshot():
    store = InMemoryUserStore()
    store.create(user=_user())

    snapshot = store.list()
    store.create(user=_user(first="Bob"))

    assert len(snapshot) == 1
    assert len(store.list()) == 2


def test_concurrent_creates_get_distinct_ids():
    store = InMemoryUserStore()
    n = 200

    with ThreadPoolExecutor(max_workers=16) as pool:
        ids = list(pool.map(lambda i: store.create(user=_user(first=f"n{i}")), range(n)))

    assert len(set(ids)) == n
    assert {uid for uid, _ in store.list()} == set(ids)


def test_mixed_concurrent_operations_keep_count_consistent():
    store = InMemoryUserStore()
    seed = [store.create(user=_user()) for _ in range(50)]
    start = threading.Barrier(4)

    def creator():
        start.wait()
        for _ in range(50):
            store.create(user=_user())

    def deleter(chunk):
        start.wait()
        for uid in chunk:
            store.delete(user_id=uid)

    def reader():
        start.wait()
        for _ in range(50):
            store.list()

    threads = [
        threading.Thread(target=creator),
        threading.Thread(target=deleter, args=(seed[:25],)),
        threading.Thread(target=deleter, args=(seed[25:],)),
        threading.Thread(target=reader),
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(store) == 50


def test_lock_is_released_after_not_found():
    store = InMemoryUserStore()
    with pytest.raises(UserNotFoundError):
        store.get(user_id=uuid.uuid4())

    # would deadlock if the failed lookup had kept the lock
    assert store.create(user=_user()) is not None
