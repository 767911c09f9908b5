"""
Tests for the command-line interface.
"""

import pytest

from .. import cli
from ..persistence import load_game


def test_no_command_prints_help(capsys):
    assert cli.main([]) == 1
    assert "usage: homestead" in capsys.readouterr().out


def test_show_config(tmp_path, capsys):
    path = tmp_path / "config.txt"
    path.write_text("difficulty hard\n")

    assert cli.main(["--config", str(path), "show-config"]) == 0

    out = capsys.readouterr().out
    assert "difficulty hard" in out
    assert "auto_save True" in out


def test_show_config_rejects_bad_values(tmp_path, capsys):
    path = tmp_path / "config.txt"
    path.write_text("turn_delay soon\n")

    with pytest.raises(SystemExit) as exc_info:
        cli.main(["--config", str(path), "show-config"])
    assert exc_info.value.code == 1
    assert "Error: Invalid configuration" in capsys.readouterr().out


def test_show_config_with_unreadable_file(tmp_path, capsys):
    """A directory given as the config file falls back to defaults."""
    assert cli.main(["--config", str(tmp_path), "show-config"]) == 0
    assert "difficulty normal" in capsys.readouterr().out


def test_play_saves_and_loads(tmp_path, monkeypatch, capsys):
    """Play one turn, save, then resume from the save file."""
    save = tmp_path / "save.txt"
    config = tmp_path / "config.txt"
    config.write_text("auto_save false\n")
    answers = iter(["", "4"])
    monkeypatch.setattr("builtins.input", lambda prompt="": next(answers))

    code = cli.main([
        "--config", str(config), "play",
        "--seed", "4", "--save", str(save), "--delay", "0", "--turns", "1",
    ])

    assert code == 0
    assert "Game saved successfully!" in capsys.readouterr().out
    saved = load_game(save)
    assert saved.state.turn == 1
    assert len(saved.colony.roster) == 3

    answers = iter(["5"])
    code = cli.main([
        "--config", str(config), "play",
        "--save", str(save), "--load", "--delay", "0", "--turns", "1",
    ])
    assert code == 0
    assert "Game loaded successfully!" in capsys.readouterr().out


def test_load_missing_save(tmp_path, capsys):
    config = tmp_path / "config.txt"
    config.write_text("")
    code = cli.main([
        "--config", str(config), "play", "--load", "--save", str(tmp_path / "none.txt"),
    ])
    assert code == 1
    assert "Failed to load game" in capsys.readouterr().out


def test_load_non_utf8_save(tmp_path, capsys):
    config = tmp_path / "config.txt"
    config.write_text("")
    save = tmp_path / "save.txt"
    save.write_bytes(b"\xff\xfe garbage\n")

    code = cli.main(["--config", str(config), "play", "--load", "--save", str(save)])

    assert code == 1
    assert "Failed to load game" in capsys.readouterr().out
