"""Map provider records onto local observations."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from linksync.domain.model import Observation
    from linksync.domain.ports.fetching import InteractionRecord
    from linksync.domain.ports.persistence import ObservationRepository

# observation ids are stored in a signed 64-bit integer column
MAX_OBSERVATION_ID = 2**63 - 1
_MAX_ID_DIGITS = len(str(MAX_OBSERVATION_ID))


def parse_observation_id(value: object) -> int | None:
    """Return the trailing ``/<digits>`` of a URL-like value as an int.

    ``"https://www.inaturalist.org/observations/123"`` parses as ``123``;
    anything without a slash followed by ASCII digits up to the end of the
    string (one trailing newline allowed) parses as ``None``, as does an id
    too large to be stored.
    """

    if not isinstance(value, str):
        return None
    value = value.removesuffix("\n")
    _, slash, tail = value.rpartition("/")
    if not slash or not tail or not (tail.isascii() and tail.isdigit()):
        return None
    significant = tail.lstrip("0") or "0"
    if len(significant) > _MAX_ID_DIGITS or int(significant) > MAX_OBSERVATION_ID:
        return None
    return int(significant)


def record_observation_id(record: InteractionRecord) -> int | None:
    if not record:
        return None
    return parse_observation_id(record[0])


def match_record(
    record: InteractionRecord,
    observations: ObservationRepository,
) -> Observation | None:
    """Look up the local observation a provider record refers to, if any."""

    observation_id = record_observation_id(record)
    if observation_id is None:
        return None
    return observations.get(observation_id)
