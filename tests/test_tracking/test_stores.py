"""Behavioural tests shared by every tracking store backend."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from pr_reactor.errors import TrackingStoreError
from pr_reactor.models.tracking import ChatLocation, Insertion, Retraction
from pr_reactor.tracking import InMemoryTrackingStore, SqlTrackingStore, TrackingStore

PR_1 = "https://github.com/acme/widgets/pull/1"
PR_2 = "https://github.com/acme/widgets/pull/2"
PR_3 = "https://github.com/acme/widgets/pull/3"

HERE = ChatLocation(channel="C1", timestamp="100.000001")
THERE = ChatLocation(channel="C2", timestamp="200.000002")
T0 = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def insertion(urls: list[str], location: ChatLocation = HERE, at: datetime = T0) -> Insertion:
    return Insertion(urls=urls, location=location, inserted_at=at)


def retraction(urls: list[str], location: ChatLocation = HERE) -> Retraction:
    return Retraction(urls=urls, location=location)


@pytest.fixture(params=["memory", "database"])
async def tracking_store(request, tmp_path):
    if request.param == "memory":
        store = InMemoryTrackingStore()
    else:
        # A file database gives each session its own connection, as in production.
        store = SqlTrackingStore(f"sqlite+aiosqlite:///{tmp_path / 'tracking.db'}")
        await store.init()
    yield store
    await store.close()


async def _urls(store: TrackingStore) -> list[str]:
    return sorted(record.url for record in await store.list_all())


async def test_starts_empty(tracking_store: TrackingStore):
    assert await tracking_store.list_all() == []
    assert await tracking_store.find_by_url(PR_1) == []


async def test_insert_then_find(tracking_store: TrackingStore):
    await tracking_store.insert_all(insertion([PR_1, PR_2]))

    found = await tracking_store.find_by_url(PR_1)
    assert len(found) == 1
    record = found[0]
    assert record.url == PR_1
    assert record.location == HERE
    assert record.inserted_at == T0
    assert await _urls(tracking_store) == [PR_1, PR_2]


async def test_each_record_gets_a_fresh_id(tracking_store: TrackingStore):
    await tracking_store.insert_all(insertion([PR_1]))
    await tracking_store.insert_all(insertion([PR_1], location=THERE))
    ids = {record.id for record in await tracking_store.find_by_url(PR_1)}
    assert len(ids) == 2


async def test_duplicate_urls_make_one_record_each(tracking_store: TrackingStore):
    await tracking_store.insert_all(insertion([PR_1, PR_1]))
    assert len(await tracking_store.find_by_url(PR_1)) == 2


async def test_find_is_exact_match(tracking_store: TrackingStore):
    await tracking_store.insert_all(insertion([PR_1]))
    assert await tracking_store.find_by_url(PR_1 + "0") == []
    assert await tracking_store.find_by_url(PR_1.upper()) == []


async def test_find_orders_by_insertion_time(tracking_store: TrackingStore):
    await tracking_store.insert_all(insertion([PR_1], location=THERE, at=T0 + timedelta(minutes=5)))
    await tracking_store.insert_all(insertion([PR_1], location=HERE, at=T0))
    found = await tracking_store.find_by_url(PR_1)
    assert [record.location for record in found] == [HERE, THERE]


async def test_delete_requires_channel_and_timestamp(tracking_store: TrackingStore):
    await tracking_store.insert_all(insertion([PR_1]))
    await tracking_store.insert_all(insertion([PR_1], location=THERE))
    await tracking_store.insert_all(
        insertion([PR_1], location=ChatLocation(channel="C1", timestamp="999.0"))
    )
    await tracking_store.insert_all(
        insertion([PR_1], location=ChatLocation(channel="C9", timestamp=HERE.timestamp))
    )

    await tracking_store.delete_all(retraction([PR_1]))

    remaining = {record.location for record in await tracking_store.find_by_url(PR_1)}
    assert HERE not in remaining
    assert len(remaining) == 3


async def test_delete_only_listed_urls(tracking_store: TrackingStore):
    await tracking_store.insert_all(insertion([PR_1, PR_2, PR_3]))
    await tracking_store.delete_all(retraction([PR_1, PR_3]))
    assert await _urls(tracking_store) == [PR_2]


async def test_delete_unknown_is_noop(tracking_store: TrackingStore):
    await tracking_store.insert_all(insertion([PR_1]))
    await tracking_store.delete_all(retraction([PR_2]))
    await tracking_store.delete_all(retraction([PR_1], location=THERE))
    assert await _urls(tracking_store) == [PR_1]


async def test_empty_operations_are_noops(tracking_store: TrackingStore):
    await tracking_store.insert_all(insertion([PR_1]))
    await tracking_store.insert_all(insertion([]))
    await tracking_store.delete_all(retraction([]))
    await tracking_store.reconcile()
    await tracking_store.reconcile(retraction([]), insertion([]))
    assert await _urls(tracking_store) == [PR_1]


async def test_reconcile_swaps_urls(tracking_store: TrackingStore):
    await tracking_store.insert_all(insertion([PR_1, PR_2]))
    await tracking_store.reconcile(retraction([PR_1]), insertion([PR_3]))
    assert await _urls(tracking_store) == [PR_2, PR_3]


async def test_reconcile_retract_and_reinsert_same_url(tracking_store: TrackingStore):
    await tracking_store.insert_all(insertion([PR_1]))
    before = (await tracking_store.find_by_url(PR_1))[0]

    await tracking_store.reconcile(retraction([PR_1]), insertion([PR_1]))

    after = await tracking_store.find_by_url(PR_1)
    assert len(after) == 1
    assert after[0].id != before.id


async def test_reconcile_with_one_side(tracking_store: TrackingStore):
    await tracking_store.reconcile(insertion=insertion([PR_1, PR_2]))
    await tracking_store.reconcile(retraction=retraction([PR_2]))
    assert await _urls(tracking_store) == [PR_1]


async def test_failed_reconcile_leaves_store_untouched(tracking_store: TrackingStore):
    await tracking_store.insert_all(insertion([PR_1, PR_2]))

    # An empty URL is rejected while building records, after the delete phase.
    with pytest.raises(TrackingStoreError):
        await tracking_store.reconcile(retraction([PR_1]), insertion([PR_3, ""]))

    assert await _urls(tracking_store) == [PR_1, PR_2]


async def test_failed_insert_keeps_nothing(tracking_store: TrackingStore):
    with pytest.raises(TrackingStoreError):
        await tracking_store.insert_all(insertion([PR_1, ""]))
    assert await tracking_store.list_all() == []


async def test_health_check(tracking_store: TrackingStore):
    assert await tracking_store.health_check() is True


async def test_readers_never_see_half_applied_reconcile(tracking_store: TrackingStore):
    await tracking_store.insert_all(insertion([PR_1, PR_2]))
    before = [PR_1, PR_2]
    after = [PR_3]

    results = await asyncio.gather(
        tracking_store.list_all(),
        tracking_store.reconcile(retraction([PR_1, PR_2]), insertion([PR_3])),
        *[tracking_store.list_all() for _ in range(10)],
    )

    snapshots = [results[0], *results[2:]]
    for snapshot in snapshots:
        assert sorted(record.url for record in snapshot) in (before, after)
    assert await _urls(tracking_store) == after


async def test_lookup_during_reconcile_sees_old_or_new(tracking_store: TrackingStore):
    await tracking_store.insert_all(insertion([PR_1]))

    results = await asyncio.gather(
        tracking_store.reconcile(retraction([PR_1]), insertion([PR_1, PR_2])),
        *[tracking_store.find_by_url(PR_1) for _ in range(10)],
    )

    for found in results[1:]:
        assert len(found) == 1
        assert found[0].location == HERE
