from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session  # noqa: TC002

from linksync.adapters.sqlalchemy.mappings import moderator_action_table
from linksync.domain.model import (
    ModeratedResourceType,
    ModeratorActionKind,
    Observation,
    User,
)


def test_moderator_actions_persist_per_resource(sqlite_session: Session) -> None:
    admin = User(login="admin", is_admin=True)
    author = User(login="author")
    observation = Observation(id=5, user=author)
    sqlite_session.add_all([admin, author, observation])
    sqlite_session.flush()

    observation.add_moderator_action(ModeratorActionKind.HIDE, user=admin, reason="copyright")
    author.add_moderator_action(ModeratorActionKind.SUSPEND, user=admin)
    sqlite_session.commit()
    sqlite_session.expunge_all()

    rows = sqlite_session.execute(
        select(
            moderator_action_table.c.resource_type,
            moderator_action_table.c._resource_id,  # noqa: SLF001
            moderator_action_table.c.action,
        ).order_by(moderator_action_table.c.id)
    ).all()
    assert [tuple(row) for row in rows] == [
        (ModeratedResourceType.OBSERVATION, 5, ModeratorActionKind.HIDE),
        (ModeratedResourceType.USER, author.id, ModeratorActionKind.SUSPEND),
    ]

    stored = sqlite_session.get(Observation, 5)
    assert stored is not None
    assert stored.hidden is True
    assert [action.reason for action in stored.moderator_actions] == ["copyright"]
    latest = stored.latest_moderator_action
    assert latest is not None
    assert latest.user is not None
    assert latest.user.login == "admin"

    stored_author = sqlite_session.get(User, author.id)
    assert stored_author is not None
    assert [action.action for action in stored_author.moderator_actions] == [
        ModeratorActionKind.SUSPEND
    ]


def test_user_and_observation_with_same_id_keep_separate_actions(
    sqlite_session: Session,
) -> None:
    admin = User(login="admin", is_admin=True)
    sqlite_session.add(admin)
    sqlite_session.flush()
    assert admin.id is not None
    observation = Observation(id=admin.id)
    sqlite_session.add(observation)
    observation.add_moderator_action(ModeratorActionKind.HIDE, user=admin)
    sqlite_session.commit()
    sqlite_session.expunge_all()

    stored_admin = sqlite_session.get(User, admin.id)
    stored_observation = sqlite_session.get(Observation, admin.id)

    assert stored_admin is not None
    assert stored_admin.moderator_actions == []
    assert stored_observation is not None
    assert stored_observation.hidden is True
