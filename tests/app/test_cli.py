from __future__ import annotations

import pytest

from linksync.ui import cli


@pytest.fixture
def captured(monkeypatch: pytest.MonkeyPatch) -> dict[str, object]:
    calls: dict[str, object] = {}

    def fake_sync(**kwargs: object) -> None:
        calls.update(kwargs)

    monkeypatch.setattr(cli, "sync_globi_links", fake_sync)
    return calls


def test_cli_globi_defaults(captured: dict[str, object]) -> None:
    cli.main(["globi"])

    assert captured == {"according_to": None, "debug": False, "log_task_name": None}


def test_cli_globi_with_flags(captured: dict[str, object]) -> None:
    cli.main(
        [
            "globi",
            "-p",
            "globi:example/dataset",
            "--debug",
            "--log-task-name",
            "globi_observation_links",
        ]
    )

    assert captured == {
        "according_to": "globi:example/dataset",
        "debug": True,
        "log_task_name": "globi_observation_links",
    }


def test_cli_rejects_blank_provider(captured: dict[str, object]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main(["globi", "--according-to", "  "])

    assert excinfo.value.code == 2
    assert captured == {}


def test_cli_requires_command(captured: dict[str, object]) -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli.main([])

    assert excinfo.value.code == 2
    assert captured == {}


def test_cli_exits_nonzero_on_fatal_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_sync(**_: object) -> None:
        raise RuntimeError("GloBI unreachable")

    monkeypatch.setattr(cli, "sync_globi_links", failing_sync)

    with pytest.raises(SystemExit) as excinfo:
        cli.main(["globi"])

    assert excinfo.value.code == 1
