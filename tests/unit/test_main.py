"""
Unit tests for the command line.
"""
import argparse
import json
import random

from treasure_sweeper.game import GameConfig, start_new_game
from treasure_sweeper.main import build_config, main, parse_move, play


def play_args(**overrides) -> argparse.Namespace:
    values = dict(
        config=None, width=None, height=None, mines=None, lives=None,
        seed=7, wallet=False,
    )
    values.update(overrides)
    return argparse.Namespace(**values)


class TestParsing:
    """Argument and move parsing."""

    def test_parse_move(self) -> None:
        assert parse_move("3 4") == (3, 4)
        assert parse_move("3,4") == (3, 4)
        assert parse_move("3") is None
        assert parse_move("a b") is None

    def test_overrides_apply_to_config_file(self, tmp_path) -> None:
        path = tmp_path / "game.json"
        path.write_text(json.dumps({"width": 12, "num_mines": 15}))
        config = build_config(play_args(config=str(path), lives=1))
        assert config.width == 12
        assert config.num_mines == 15
        assert config.starting_lives == 1


class TestCommands:
    """End-to-end command runs."""

    def test_leaderboard(self, capsys) -> None:
        assert main(["leaderboard", "--size", "3", "--xp", "50"]) == 0
        out = capsys.readouterr().out
        assert "Your rank" in out
        assert out.count("0x") == 4

    def test_demo(self, capsys) -> None:
        assert main(["demo", "--games", "2", "--seed", "3"]) == 0
        out = capsys.readouterr().out
        assert "Game 2/2" in out
        assert "Final" in out

    def test_bad_config_exits_with_error(self, capsys) -> None:
        code = main(["demo", "--width", "2", "--height", "2", "--mines", "1"])
        assert code == 2
        assert "error:" in capsys.readouterr().err

    def test_play_quit(self, capsys) -> None:
        play(play_args(), input_fn=lambda prompt: "q")
        assert "Score: 0" in capsys.readouterr().out

    def test_play_until_lost_and_claim(self, capsys) -> None:
        grid = start_new_game(GameConfig(starting_lives=1), seed=7).grid
        mines = grid.mine_positions()
        moves = iter([
            "bad", "99 99", f"{mines[0][0]} {mines[0][1]}", "y", "n",
        ])
        play(play_args(lives=1, wallet=True), input_fn=lambda prompt: next(moves))
        out = capsys.readouterr().out
        assert "Expected two numbers" in out
        assert "outside" in out
        assert "Game Over!" in out
        assert "XP: 0" in out
        assert "Game 2" not in out

    def test_play_again_starts_fresh_board(self, capsys) -> None:
        config = GameConfig(starting_lives=1)
        rng = random.Random(7)
        first = start_new_game(config, rng=rng).grid
        second = start_new_game(config, rng=rng).grid
        row, col = first.mine_positions()[0]
        next_row, next_col = second.mine_positions()[0]
        moves = iter([f"{row} {col}", "y", f"{next_row} {next_col}", ""])
        play(play_args(lives=1), input_fn=lambda prompt: next(moves))
        out = capsys.readouterr().out
        assert "=== Game 2 ===" in out
        assert out.count("Game Over!") == 2
        assert "Game 3" not in out

    def test_play_ends_on_eof_at_replay_prompt(self, capsys) -> None:
        grid = start_new_game(GameConfig(starting_lives=1), seed=7).grid
        row, col = grid.mine_positions()[0]
        answers = iter([f"{row} {col}"])

        def read(prompt: str) -> str:
            try:
                return next(answers)
            except StopIteration:
                raise EOFError from None

        play(play_args(lives=1), input_fn=read)
        out = capsys.readouterr().out
        assert "Game Over!" in out
        assert "Game 2" not in out

    def test_config_with_wrong_types_exits_with_error(self, tmp_path, capsys) -> None:
        path = tmp_path / "game.json"
        path.write_text(json.dumps({"width": "ten"}))
        assert main(["demo", "--config", str(path)]) == 2
        assert "must be an integer" in capsys.readouterr().err
