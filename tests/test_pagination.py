from datetime import datetime, timezone

import pytest

from threadkeeper.errors import InvalidArgumentError
from threadkeeper.models import Thread
from threadkeeper.pagination import build_archive_request, select_before
from threadkeeper.store import ThreadStore

CHANNEL_ID = 100000000000000001
ARCHIVED_AT = datetime(2023, 1, 1, tzinfo=timezone.utc)


def _store_with(*threads):
    store = ThreadStore()
    for thread in threads:
        store.add(thread)
    return store


def test_public_listing_with_timestamp_before():
    request = build_archive_request(
        CHANNEL_ID,
        thread_type="public",
        before="2023-01-01T00:00:00.000Z",
        limit=50,
        lookup=ThreadStore().get,
    )

    assert request.path == f"/channels/{CHANNEL_ID}/threads/archived/public"
    assert request.joined is False
    assert request.query == {"limit": 50, "before": "2023-01-01T00:00:00.000Z"}


def test_joined_listing_sends_thread_id_even_without_archive_time():
    thread = Thread(id=111111111111111111, parent_id=CHANNEL_ID)
    request = build_archive_request(
        CHANNEL_ID, thread_type="private", before=thread, lookup=ThreadStore().get
    )

    assert request.path == f"/channels/{CHANNEL_ID}/users/@me/threads/archived/private"
    assert request.joined is True
    assert request.query == {"before": "111111111111111111"}


def test_public_listing_omits_cursor_for_thread_without_archive_time():
    thread = Thread(id=222222222222222222, parent_id=CHANNEL_ID, archived_at=None)
    request = build_archive_request(
        CHANNEL_ID, thread_type="public", before=thread, lookup=ThreadStore().get
    )

    assert request.path == f"/channels/{CHANNEL_ID}/threads/archived/public"
    assert request.query == {}


def test_private_fetch_all_uses_general_listing_and_timestamps():
    thread = Thread(id=222222222222222222, parent_id=CHANNEL_ID, archived_at=ARCHIVED_AT)
    request = build_archive_request(
        CHANNEL_ID,
        thread_type="private",
        fetch_all=True,
        before=thread,
        lookup=ThreadStore().get,
    )

    assert request.path == f"/channels/{CHANNEL_ID}/threads/archived/private"
    assert request.query == {"before": "2023-01-01T00:00:00.000Z"}


def test_raw_id_uses_cached_archive_time_on_general_listing():
    cached = Thread(id=222222222222222222, parent_id=CHANNEL_ID, archived_at=ARCHIVED_AT)
    store = _store_with(cached)

    assert select_before("222222222222222222", joined=False, lookup=store.get) == "2023-01-01T00:00:00.000Z"
    assert select_before("333333333333333333", joined=False, lookup=store.get) is None


def test_joined_listing_drops_plain_dates():
    request = build_archive_request(
        CHANNEL_ID,
        thread_type="private",
        before=datetime(2023, 1, 1, tzinfo=timezone.utc),
        limit=10,
        lookup=ThreadStore().get,
    )

    assert request.query == {"limit": 10}


@pytest.mark.parametrize(
    "before",
    [
        None,
        "2023-01-01T00:00:00.000Z",
        datetime(2023, 1, 1),
        "111111111111111111",
        Thread(id=111111111111111111, archived_at=ARCHIVED_AT),
    ],
)
def test_cursor_selection_table(before):
    store = _store_with(Thread(id=111111111111111111, archived_at=ARCHIVED_AT))

    public = select_before(before, joined=False, lookup=store.get)
    joined = select_before(before, joined=True, lookup=store.get)

    assert public is None or public.endswith("Z")
    assert joined is None or joined.isdigit()


def test_unparseable_before_is_rejected_on_both_listings():
    for thread_type in ("public", "private"):
        with pytest.raises(InvalidArgumentError):
            build_archive_request(
                CHANNEL_ID, thread_type=thread_type, before="last week", lookup=ThreadStore().get
            )


def test_unknown_archive_type_is_rejected():
    with pytest.raises(InvalidArgumentError):
        build_archive_request(CHANNEL_ID, thread_type="news", lookup=ThreadStore().get)
