"""Reconcile observation links against a paginated interaction provider."""

from __future__ import annotations

from .context import LinkSyncContext, LinkSyncOptions, LinkSyncResult, utcnow
from .matching import match_record, parse_observation_id, record_observation_id
from .reconcile import LinkReconciler, UpsertOutcome
from .reindex import MissingIndexerError, ReindexNotifier
from .runner import sync_observation_links
from .task_logging import logged_task

__all__ = [
    "LinkReconciler",
    "LinkSyncContext",
    "LinkSyncOptions",
    "LinkSyncResult",
    "MissingIndexerError",
    "ReindexNotifier",
    "UpsertOutcome",
    "logged_task",
    "match_record",
    "parse_observation_id",
    "record_observation_id",
    "sync_observation_links",
    "utcnow",
]
