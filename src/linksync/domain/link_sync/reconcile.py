"""Create, refresh, and expire observation links for one provider."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from linksync.domain.link_sync.context import utcnow
from linksync.domain.model import LinkRelation, ObservationLink

if TYPE_CHECKING:
    from linksync.domain.link_sync.context import Clock, LinkSyncContext
    from linksync.domain.model import Observation
    from linksync.domain.ports.persistence import ObservationLinkRepository

log = getLogger(__name__)

GLOBI_LINK_HREF_TEMPLATE = (
    "http://www.globalbioticinteractions.org/"
    "?interactionType=interactsWith&accordingTo={observation_url}"
)
OBSERVATION_URL_TEMPLATE = "https://www.inaturalist.org/observations/{observation_id}"


class UpsertOutcome(StrEnum):
    CREATED = "created"
    REFRESHED = "refreshed"


@dataclass(slots=True)
class LinkReconciler:
    link_href_template: str = GLOBI_LINK_HREF_TEMPLATE
    observation_url_template: str = OBSERVATION_URL_TEMPLATE
    clock: Clock = field(default=utcnow)

    def build_href(self, observation_id: int) -> str:
        observation_url = self.observation_url_template.format(observation_id=observation_id)
        return self.link_href_template.format(observation_url=observation_url)

    def upsert(
        self,
        links: ObservationLinkRepository,
        observation: Observation,
        context: LinkSyncContext,
    ) -> UpsertOutcome:
        href = self.build_href(observation.id)
        key = (observation.id, href)
        existing = links.get(observation.id, href)

        if existing is not None or (context.dry_run and key in context.seen_links):
            if existing is not None and not context.dry_run:
                existing.touch(self.clock())
            context.refreshed += 1
            context.seen_links.add(key)
            log.debug("\tobservation link for obs %s already exists, skipping", observation.id)
            return UpsertOutcome.REFRESHED

        now = self.clock()
        link = ObservationLink(
            observation_id=observation.id,
            href=href,
            href_name=context.href_name,
            rel=LinkRelation.ALTERNATE,
            created_at=now,
            updated_at=now,
        )
        if not context.dry_run:
            links.add(link)
        context.created += 1
        context.seen_links.add(key)
        context.page_observation_ids.add(observation.id)
        log.debug("\tCreated %s", link)
        return UpsertOutcome.CREATED

    def sweep_stale(
        self,
        links: ObservationLinkRepository,
        context: LinkSyncContext,
    ) -> set[int]:
        """Delete links of this category untouched since the run started.

        Returns the observation ids that lost a link. Dry runs only count, and
        leave out links seen during the run: those were not touched, so a raw
        ``updated_at < run_start`` count would overstate what a real run deletes.
        """

        stale = list(links.find_stale(context.href_name, before=context.run_start))
        if context.dry_run:
            # nothing was touched, so links seen this run still look stale
            stale = [link for link in stale if link.key not in context.seen_links]
        context.deleted = len(stale)
        log.info("Deleting %s ObservationLinks", context.deleted)
        if context.dry_run or not stale:
            return set()

        observation_ids = {link.observation_id for link in stale}
        links.delete_all(stale)
        return observation_ids
