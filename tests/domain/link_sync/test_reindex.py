from __future__ import annotations

import pytest

from linksync.domain.link_sync import MissingIndexerError, ReindexNotifier
from tests.helpers.link_sync import SpySearchIndexer


def test_notify_sends_one_sorted_batch() -> None:
    indexer = SpySearchIndexer()

    sent = ReindexNotifier(indexer).notify({5, 1, 3})

    assert sent is True
    assert indexer.calls == [([1, 3, 5], True)]


def test_notify_skips_empty_set() -> None:
    indexer = SpySearchIndexer()

    assert ReindexNotifier(indexer).notify(set()) is False
    assert indexer.calls == []


def test_notify_is_suppressed_in_dry_run() -> None:
    indexer = SpySearchIndexer()

    assert ReindexNotifier(indexer, dry_run=True).notify({1}) is False
    assert indexer.calls == []


def test_notify_passes_wait_for_refresh() -> None:
    indexer = SpySearchIndexer()

    ReindexNotifier(indexer, wait_for_refresh=False).notify({2})

    assert indexer.calls == [([2], False)]


def test_notify_without_indexer_fails_only_when_needed() -> None:
    notifier = ReindexNotifier(None)

    assert notifier.notify(set()) is False
    assert ReindexNotifier(None, dry_run=True).notify({1}) is False
    with pytest.raises(MissingIndexerError):
        notifier.notify({1})


def test_notify_propagates_indexer_errors() -> None:
    indexer = SpySearchIndexer(error=RuntimeError("index down"))

    with pytest.raises(RuntimeError, match="index down"):
        ReindexNotifier(indexer).notify({1})
