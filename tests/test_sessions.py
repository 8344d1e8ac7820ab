import asyncio

from forum.core.sessions import SessionStore


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


def test_created_session_resolves_to_user() -> None:
    store = SessionStore(ttl_seconds=60, clock=FakeClock())
    sid = store.create(7)

    assert store.get(sid) == 7
    assert store.get("unknown") is None


def test_session_expires_after_ttl() -> None:
    clock = FakeClock()
    store = SessionStore(ttl_seconds=60, clock=clock)
    sid = store.create(7)

    clock.now += 59
    assert store.get(sid) == 7

    clock.now += 1
    assert store.get(sid) is None
    assert len(store) == 0


def test_destroy_removes_session() -> None:
    store = SessionStore(ttl_seconds=60, clock=FakeClock())
    sid = store.create(7)

    store.destroy(sid)
    store.destroy(sid)

    assert store.get(sid) is None


def test_prune_only_drops_expired_sessions() -> None:
    clock = FakeClock()
    store = SessionStore(ttl_seconds=60, clock=clock)
    old = store.create(1)
    clock.now += 30
    fresh = store.create(2)
    clock.now += 31

    assert store.prune() == 1
    assert store.get(old) is None
    assert store.get(fresh) == 2


def test_prune_task_runs_in_background_and_stops() -> None:
    clock = FakeClock()

    async def scenario() -> int:
        store = SessionStore(ttl_seconds=60, clock=clock)
        store.create(1)
        clock.now += 120
        store.start(0.01)
        await asyncio.sleep(0.1)
        remaining = len(store)
        await store.stop()
        return remaining

    assert asyncio.run(scenario()) == 0
