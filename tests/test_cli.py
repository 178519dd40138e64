"""Tests for the command-line interface."""

import json

import pytest

from todostore.cli import main


@pytest.fixture
def run(tmp_path, capsys):
    def _run(*argv):
        code = main(["--dir", str(tmp_path), *argv])
        return code, capsys.readouterr().out
    return _run


def listed(run, *query):
    code, out = run("list", "--json", *query)
    assert code == 0
    return json.loads(out)


def test_add_and_list(run):
    code, out = run("add", "Buy milk", "-d", "2 litres", "--due", "2026/01/28")

    assert code == 0
    assert "✅ Created:" in out

    [todo] = listed(run)
    assert todo["title"] == "Buy milk"
    assert todo["description"] == "2 litres"
    assert todo["isCompleted"] is False
    assert todo["dueDate"].startswith("2026-01-28")


def test_add_rejects_bad_due_date(run, tmp_path):
    code, out = run("add", "Buy milk", "--due", "someday")

    assert code == 1
    assert "Unrecognized date" in out
    assert listed(run, "status:all") == []


def test_done_toggles_and_filters(run):
    run("add", "Buy milk")
    run("add", "Pay bills")
    bills_id = listed(run, "bills")[0]["id"]

    code, out = run("done", bills_id)
    assert code == 0
    assert "Marked as complete" in out

    assert [t["title"] for t in listed(run)] == ["Buy milk"]
    assert [t["title"] for t in listed(run, "status:done")] == ["Pay bills"]
    assert [t["title"] for t in listed(run, "milk", "status:all")] == ["Buy milk"]


def test_list_text_output(run):
    run("add", "Buy milk", "--due", "2026-01-28")

    code, out = run("list")
    assert code == 0
    assert "Buy milk" in out
    assert "2026/01/28" in out

    code, out = run("list", "status:done")
    assert "No todos found" in out


def test_edit(run):
    run("add", "Buy milk", "--due", "2026-01-28")
    todo_id = listed(run)[0]["id"]

    code, out = run("edit", todo_id, "--title", "Buy oat milk", "--no-due")
    assert code == 0
    assert "💾 Saved" in out

    [todo] = listed(run)
    assert todo["id"] == todo_id
    assert todo["title"] == "Buy oat milk"
    assert todo["dueDate"] is None


def test_show(run):
    run("add", "Buy milk", "-d", "**2 litres**")
    todo_id = listed(run)[0]["id"]

    code, out = run("show", todo_id)
    assert code == 0
    assert "Buy milk" in out
    assert "**2 litres**" in out

    code, out = run("show", todo_id, "--json")
    assert json.loads(out)["id"] == todo_id


@pytest.mark.parametrize("command", ["show", "edit", "done"])
def test_unknown_id(run, command):
    code, out = run(command, "missing")

    assert code == 1
    assert "Todo not found: missing" in out


def test_corrupt_store_reports_error(run, tmp_path):
    (tmp_path / "todos.json").write_text("not json", encoding="utf-8")

    code, out = run("list")

    assert code == 1
    assert "❌ Corrupt store file" in out


def test_data_dir_from_environment(tmp_path, monkeypatch, capsys):
    monkeypatch.setenv("TODOSTORE_DIR", str(tmp_path / "env"))

    assert main(["add", "Buy milk"]) == 0
    assert (tmp_path / "env" / "todos.json").exists()


def test_no_command_prints_help(tmp_path, capsys):
    assert main(["--dir", str(tmp_path)]) == 1
    assert "usage:" in capsys.readouterr().out


@pytest.mark.parametrize("due", ["", "someday"])
def test_edit_rejects_bad_due_date(run, due):
    run("add", "Buy milk", "--due", "2026-01-28")
    todo_id = listed(run)[0]["id"]

    code, out = run("edit", todo_id, "--due", due)

    assert code == 1
    assert "Unrecognized date" in out
    assert listed(run)[0]["dueDate"].startswith("2026-01-28")


def test_add_rejects_empty_due_date(run):
    code, out = run("add", "Buy milk", "--due", "")

    assert code == 1
    assert "Unrecognized date" in out
    assert listed(run, "status:all") == []
