from datetime import timedelta

from src.attendease.attendease.movement.cooldown import InMemoryCooldownStore

from tests.fakes import ist


def test_key_is_held_for_ttl():
    store = InMemoryCooldownStore()
    t0 = ist(2025, 1, 6, 10, 0)

    assert store.try_acquire("movement:1", now=t0, ttl_seconds=3600) is True
    assert store.try_acquire("movement:1", now=t0 + timedelta(minutes=59), ttl_seconds=3600) is False
    assert store.try_acquire("movement:1", now=t0 + timedelta(minutes=60), ttl_seconds=3600) is True


def test_keys_are_independent():
    store = InMemoryCooldownStore()
    t0 = ist(2025, 1, 6, 10, 0)

    assert store.try_acquire("movement:1", now=t0, ttl_seconds=3600) is True
    assert store.try_acquire("movement:2", now=t0, ttl_seconds=3600) is True


def test_expired_keys_are_evicted():
    store = InMemoryCooldownStore()
    t0 = ist(2025, 1, 6, 10, 0)
    for i in range(5):
        store.try_acquire(f"movement:{i}", now=t0, ttl_seconds=60)

    store.try_acquire("movement:new", now=t0 + timedelta(minutes=5), ttl_seconds=60)

    assert len(store) == 1
