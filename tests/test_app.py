import io

import pytest

from datahandler import storage
from datahandler.app import main, measurements_prompt, variables_prompt
from datahandler.manager import Manager
from datahandler.variable import Naming, Variable


def _write(tmp_path, name, *variables):
    manager = Manager()
    for variable in variables:
        manager.add_variable(variable)
    path = tmp_path / name
    storage.save(manager, path)
    return path


def _read(path):
    manager = Manager()
    storage.load(manager, path)
    return manager


def _run(monkeypatch, argv, commands):
    monkeypatch.setattr("sys.stdin", io.StringIO(commands))
    return main(argv)


def test_variables_prompt_single():
    assert variables_prompt(1) == "Are you sure you want to delete this variable?"


def test_variables_prompt_many_carries_count():
    assert variables_prompt(3) == "Are you sure you want to delete these variables? (3)"


def test_measurements_prompt_lists_rows_ascending():
    assert measurements_prompt([2, 0]) == (
        "Are you sure you want to delete these \nmeasurements: 1, 3?"
    )


def test_measurements_prompt_lists_only_lowest_rows():
    text = measurements_prompt(range(10))
    listed = text.split("measurements: ")[1]
    for row in range(1, 7):
        assert str(row) in listed.split("...")[0]
    assert "7" not in listed.split("...")[0]
    assert text.endswith("more) ?")


def test_startup_file_is_shown(tmp_path, monkeypatch, capsys):
    path = _write(tmp_path, "in.csv", Variable([5, 4], Naming("Bar")))
    assert _run(monkeypatch, [str(path), "--yes"], "show\nquit\n") == 0
    assert "Bar" in capsys.readouterr().out


def test_missing_startup_file_fails(tmp_path, monkeypatch):
    assert _run(monkeypatch, [str(tmp_path / "absent.csv")], "") == 1


def test_edit_and_save_round_trip(tmp_path, monkeypatch):
    out = tmp_path / "out.json"
    commands = f"addcol\nset 1 1 5\ntitle 1 Speed\nsave {out}\nquit\n"
    assert _run(monkeypatch, ["--yes"], commands) == 0
    manager = _read(out)
    assert manager.variable(0).naming.title == "Speed"
    assert manager.variable(0).measurements == [5.0]


def test_calc_matches_source_case(tmp_path, monkeypatch):
    path = _write(
        tmp_path,
        "in.csv",
        Variable([5, 4, 3, 2, 1], Naming("Bar")),
        Variable([1, 2, 3, 4, 5], Naming("Var")),
    )
    out = tmp_path / "out.csv"
    commands = f'calc Res "Var^3 + Bar^2"\nsave {out}\nquit\n'
    _run(monkeypatch, [str(path), "--yes"], commands)
    assert _read(out).find("Res").measurements == [26, 24, 36, 68, 126]


def test_bad_formula_is_reported(tmp_path, monkeypatch, capsys):
    path = _write(tmp_path, "in.csv", Variable([1, 2], Naming("A")))
    _run(monkeypatch, [str(path), "--yes"], 'calc Res "A +"\nquit\n')
    assert "The formula is written incorrectly" in capsys.readouterr().out


@pytest.mark.parametrize(
    "answer, expected", [("n", [1.0, 2.0, 3.0]), ("y", [1.0, 3.0])]
)
def test_delete_row_asks_first(tmp_path, monkeypatch, answer, expected):
    path = _write(tmp_path, "in.json", Variable([1, 2, 3], Naming("A")))
    out = tmp_path / "out.json"
    _run(monkeypatch, [str(path)], f"delrow 2\n{answer}\nsave {out}\n")
    assert _read(out).variable(0).measurements == expected


def test_delete_columns_with_yes(tmp_path, monkeypatch):
    path = _write(
        tmp_path,
        "in.json",
        Variable([1], Naming("A")),
        Variable([2], Naming("B")),
        Variable([3], Naming("C")),
    )
    out = tmp_path / "out.json"
    _run(monkeypatch, [str(path), "--yes"], f"delcol 1 3\nsave {out}\nquit\n")
    manager = _read(out)
    assert [v.naming.title for v in manager] == ["B"]


def test_quit_asks_when_data_present(tmp_path, monkeypatch, capsys):
    path = _write(tmp_path, "in.csv", Variable([1], Naming("A")))
    assert _run(monkeypatch, [str(path)], "quit\nn\n") == 0
    assert "Are you sure to close program?" in capsys.readouterr().out


def test_duplicate_title_is_rejected(tmp_path, monkeypatch, capsys):
    path = _write(
        tmp_path, "in.json", Variable([1], Naming("A")), Variable([2], Naming("B"))
    )
    out = tmp_path / "out.json"
    _run(monkeypatch, [str(path), "--yes"], f"title 2 A\nsave {out}\nquit\n")
    assert [v.naming.title for v in _read(out)] == ["A", "B"]
    assert "already in use" in capsys.readouterr().out