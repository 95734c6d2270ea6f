"""Tests for the planner CLI, run end to end against a SQLite file."""

from __future__ import annotations

import json

import pytest

from planner.cli import build_parser, main


@pytest.fixture
def cli(tmp_path, capsys):
    """Run the CLI against a fresh database; returns (exit code, stdout)."""
    url = f"sqlite:///{tmp_path / 'planner.db'}"

    def run(*args: str, user: str = "player-1") -> tuple[int, str]:
        code = main(["--database-url", url, "--user", user, *args])
        return code, capsys.readouterr().out

    return run


@pytest.fixture
def seeded_cli(cli):
    code, out = cli("seed")
    assert code == 0
    assert out.startswith("Seeded 26 drills")
    return cli


class TestParser:
    def test_generate_defaults(self) -> None:
        args = build_parser().parse_args(["generate", "--focus", "serve"])
        assert args.intensity == "medium"
        assert args.minutes == 60
        assert args.rating is None
        assert args.environment == "alone"

    def test_unknown_focus_rejected(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["generate", "--focus", "lob"])


class TestGenerate:
    def test_prints_session_json(self, seeded_cli) -> None:
        code, out = seeded_cli(
            "generate", "--focus", "forehand", "serve", "--minutes", "60",
            "--rating", "7.0", "--surface", "clay", "--seed", "4",
        )
        assert code == 0
        session = json.loads(out)
        assert session["name"] == "Medium forehand, serve Session"
        assert session["surface"] == "clay"
        assert sum(d["durationMinutes"] for d in session["drills"]) == 60
        assert {d["category"] for d in session["drills"]} <= {"forehand", "serve"}

    def test_rating_taken_from_profile(self, seeded_cli) -> None:
        seeded_cli("profile", "--rating", "1.5")
        code, out = seeded_cli(
            "generate", "--focus", "movement", "--intensity", "light", "--minutes", "30",
        )
        assert code == 0
        assert [d["drillId"] for d in json.loads(out)["drills"]] == ["mv-split-step-ladder"]

    def test_no_matching_drills(self, seeded_cli) -> None:
        code, out = seeded_cli(
            "generate", "--focus", "patterns", "--intensity", "light", "--rating", "1.5",
        )
        assert code == 1
        assert out == ""
        code, out = seeded_cli("list")
        assert out == ""

    def test_invalid_length(self, seeded_cli) -> None:
        code, _ = seeded_cli("generate", "--focus", "serve", "--minutes", "10")
        assert code == 1


class TestSessionCommands:
    @pytest.fixture
    def session_id(self, seeded_cli) -> str:
        _, out = seeded_cli(
            "generate", "--focus", "backhand", "return", "--rating", "6.0", "--seed", "1",
        )
        return json.loads(out)["id"]

    def test_list_and_show(self, seeded_cli, session_id) -> None:
        code, out = seeded_cli("list")
        assert code == 0
        assert out.startswith(session_id)

        code, out = seeded_cli("show", session_id)
        assert code == 0
        assert json.loads(out)["id"] == session_id

    def test_duplicate(self, seeded_cli, session_id) -> None:
        code, out = seeded_cli("duplicate", session_id)
        copy_id = out.strip()
        assert code == 0
        _, shown = seeded_cli("show", copy_id)
        assert json.loads(shown)["name"].endswith(" (Copy)")

    def test_delete(self, seeded_cli, session_id) -> None:
        assert seeded_cli("delete", session_id)[0] == 0
        assert seeded_cli("show", session_id)[0] == 1

    def test_other_user_cannot_see_session(self, seeded_cli, session_id) -> None:
        code, out = seeded_cli("show", session_id, user="player-2")
        assert code == 1
        assert out == ""
        assert seeded_cli("delete", session_id, user="player-2")[0] == 1
        assert seeded_cli("show", session_id)[0] == 0

    def test_show_marks_starred_drills(self, seeded_cli, session_id) -> None:
        _, out = seeded_cli("show", session_id)
        first = json.loads(out)["drills"][0]["drillId"]
        assert seeded_cli("favorite", first)[0] == 0

        _, out = seeded_cli("show", session_id)
        flags = {d["drillId"]: d["favorite"] for d in json.loads(out)["drills"]}
        assert flags[first] is True
        assert sum(flags.values()) == 1

        _, out = seeded_cli("show", session_id, user="player-2")
        assert out == ""


class TestFavoritesAndProfile:
    def test_favorite_toggles(self, seeded_cli) -> None:
        assert seeded_cli("favorite", "mv-spider-run")[1].strip() == "mv-spider-run starred"
        assert seeded_cli("favorite", "mv-spider-run")[1].strip() == "mv-spider-run unstarred"

    def test_profile_update(self, seeded_cli) -> None:
        _, out = seeded_cli("profile")
        assert out.strip() == "player-1: UTR 5.0, right-handed, baseline"
        _, out = seeded_cli("profile", "--rating", "8.3", "--handedness", "left")
        assert out.strip() == "player-1: UTR 8.3, left-handed, baseline"

    def test_favorite_unknown_drill(self, seeded_cli) -> None:
        code, out = seeded_cli("favorite", "no-such-drill")
        assert code == 1
        assert out == ""

    def test_profile_rating_out_of_range(self, seeded_cli) -> None:
        code, out = seeded_cli("profile", "--rating", "42")
        assert code == 1
        assert out == ""
        _, out = seeded_cli("profile")
        assert out.strip() == "player-1: UTR 5.0, right-handed, baseline"
