from __future__ import annotations

import json

import pytest

from sreader.cli.main import build_session, edit_interactively, main, run_repl
from sreader.display import BufferedSink


@pytest.fixture
def cli(tmp_path):
    (tmp_path / "fox.txt").write_text("The quick brown fox.", encoding="utf-8")
    data_dir = tmp_path / "data"

    def run(*args):
        return main(["--data-dir", str(data_dir), "--workspace", str(tmp_path), *args])

    run.data_dir = data_dir
    run.workspace = tmp_path
    return run


def scripted(*answers):
    it = iter(answers)

    def read(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    return read


def test_show_without_path_fails(cli, capsys):
    assert cli("show") == 1
    assert "not configured" in capsys.readouterr().err


def test_one_shot_commands_share_state(cli, capsys):
    assert cli("set", "path", "fox.txt") == 0
    assert cli("set", "page-size", "5") == 0
    assert cli("show") == 0
    assert cli("forward") == 0
    assert cli("forward") == 0
    assert cli("backward") == 0
    out = capsys.readouterr().out.splitlines()
    assert out[-4:] == ["The q  [0%]", "uick   [25%]", "brown  [50%]", "uick   [25%]"]

    state = json.loads((cli.data_dir / "state.json").read_text(encoding="utf-8"))
    assert state["sreader.offset"] == {str((cli.workspace / "fox.txt").resolve()): 5}


def test_set_offset_out_of_range_exit_code(cli, capsys):
    cli("set", "path", "fox.txt")
    cli("set", "page-size", "5")
    assert cli("set", "offset", "99") == 1
    assert "out of range" in capsys.readouterr().err
    assert cli("set", "offset", "15") == 0


def test_clear_removes_saved_offsets(cli):
    cli("set", "path", "fox.txt")
    cli("forward")
    assert cli("clear") == 0
    state = json.loads((cli.data_dir / "state.json").read_text(encoding="utf-8"))
    assert state["sreader.offset"] == {}


def test_unknown_setting_is_rejected_by_argparse(cli):
    with pytest.raises(SystemExit):
        cli("set", "volume", "11")


def test_repl_pages_and_quits(tmp_path):
    (tmp_path / "fox.txt").write_text("The quick brown fox.", encoding="utf-8")
    sink = BufferedSink()
    session = build_session(tmp_path / "data", tmp_path, sink=sink)
    session.settings.set("textPath", "fox.txt")
    session.settings.set("pageSize", 5)

    assert run_repl(session, scripted("n", "", "p", "q"))
    assert session.document is None
    assert session.store.get("sreader.offset") == {str((tmp_path / "fox.txt").resolve()): 5}


def test_repl_end_of_input_saves(tmp_path):
    (tmp_path / "fox.txt").write_text("The quick brown fox.", encoding="utf-8")
    session = build_session(tmp_path / "data", tmp_path, sink=BufferedSink())
    session.settings.set("textPath", "fox.txt")
    session.settings.set("pageSize", 5)

    assert run_repl(session, scripted("n", "n", "n"))
    assert session.store.get("sreader.offset") == {str((tmp_path / "fox.txt").resolve()): 15}


def test_repl_hide_and_toggle(tmp_path):
    (tmp_path / "fox.txt").write_text("The quick brown fox.", encoding="utf-8")
    sink = BufferedSink()
    session = build_session(tmp_path / "data", tmp_path, sink=sink)
    session.settings.set("textPath", "fox.txt")
    session.settings.set("pageSize", 5)

    read = scripted("n", "h")
    run_repl(session, read)
    assert not sink.visible


def test_edit_interactively_by_number(tmp_path):
    (tmp_path / "fox.txt").write_text("The quick brown fox.", encoding="utf-8")
    sink = BufferedSink()
    session = build_session(tmp_path / "data", tmp_path, sink=sink)
    session.settings.set("textPath", "fox.txt")

    assert edit_interactively(session, scripted("2", "8"))
    assert session.settings.get("pageSize") == 8
    assert sink.status == "Page size set to 8"


def test_edit_interactively_unknown_choice(tmp_path):
    sink = BufferedSink()
    session = build_session(tmp_path / "data", tmp_path, sink=sink)
    assert not edit_interactively(session, scripted("9"))
    assert sink.errors == ["Unknown setting: '9'"]
