"""终端脚本测试"""
import pytest

from freecell.cards import Card, str_to_cards
from freecell.locations import Location
from engine import FreeCellEngine
from scripts.play import (
    handle_command,
    parse_args,
    parse_location,
    render_state,
    run_auto_moves,
)


def make_engine(columns=None, freecells=None, foundations=(0, 0, 0, 0)):
    cols = [[] for _ in range(8)]
    for i, text in (columns or {}).items():
        cols[i] = str_to_cards(text)
    cells = [None] * 4
    for i, text in (freecells or {}).items():
        cells[i] = Card.from_str(text)
    engine = FreeCellEngine()
    engine.set_game_state(cols, cells, foundations)
    return engine


class TestParseLocation:
    """位置解析测试"""

    @pytest.mark.parametrize("text,expected", [
        ("c3", Location.column(3)),
        ("C3", Location.column(3)),
        ("c3:2", Location.column(3, 2)),
        ("f1", Location.freecell(1)),
        ("h0", Location.foundation(0)),
    ])
    def test_valid(self, text, expected):
        assert parse_location(text) == expected

    @pytest.mark.parametrize("text", ["", "x1", "c", "cx", "f1:2", "c1:x"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            parse_location(text)


class TestRunAutoMoves:
    """连续自动收牌测试"""

    def test_runs_until_none(self):
        engine = make_engine(columns={0: "3h 2h Ah"})
        results = run_auto_moves(engine)
        # A♥、2♥ 安全，3♥ 需要黑色花色到 1
        assert len(results) == 2
        assert engine.get_game_state().foundations == (2, 0, 0, 0)

    def test_limit(self):
        engine = make_engine(columns={0: "Ac", 1: "Ah"})
        assert len(run_auto_moves(engine, limit=1)) == 1

    def test_finishes_game(self):
        # 每种花色: 一列 9..A (列顶 A)，一列 K..10 (列顶 10)
        columns = {i: " ".join(f"{r}{s}" for r in reversed("A23456789")) for i, s in enumerate("hdcs")}
        columns.update({4 + i: "Kh Qh Jh 10h".replace("h", s) for i, s in enumerate("hdcs")})
        engine = make_engine(columns=columns)
        results = run_auto_moves(engine)
        assert len(results) == 52
        assert results[-1].is_won


class TestHandleCommand:
    """命令处理测试"""

    def test_move(self):
        engine = make_engine(columns={0: "Ah"})
        assert handle_command(engine, "c0 h0") == "OK"
        assert engine.get_game_state().foundations[0] == 1

    def test_rejected_move(self):
        engine = make_engine(columns={0: "2h"})
        assert handle_command(engine, "c0 h0") == "Cannot move card to foundation"

    def test_bad_location(self):
        engine = make_engine()
        assert "Bad location" in handle_command(engine, "z0 h0")

    def test_undo_redo(self):
        engine = make_engine(columns={0: "Ah"})
        handle_command(engine, "c0 f0")
        assert handle_command(engine, "u") == "已撤销"
        assert handle_command(engine, "u") == "无法撤销"
        assert handle_command(engine, "r") == "已重做"

    def test_double_click(self):
        engine = make_engine(columns={0: "5c"})
        assert handle_command(engine, "d c0") == "OK"
        assert engine.get_game_state().freecells[0] == Card.from_str("5c")

    def test_auto_after_move(self):
        engine = make_engine(columns={0: "Ah 5c", 1: "6h"})
        message = handle_command(engine, "c0 c1", auto=True)
        assert "1" in message
        assert engine.get_game_state().foundations[0] == 1

    def test_unknown(self):
        assert "?" in handle_command(make_engine(), "what is this")

    def test_empty_line(self):
        assert handle_command(make_engine(), "   ") == ""


class TestRender:
    """渲染测试"""

    def test_render(self):
        engine = make_engine(columns={0: "Kc Qh"}, freecells={1: "2s"}, foundations=(1, 0, 0, 0))
        text = render_state(engine.get_game_state())
        assert "Q♥" in text
        assert "2♠" in text
        assert "步数: 0" in text


class TestParseArgs:
    """参数解析测试"""

    def test_defaults(self):
        args = parse_args([])
        assert args.seed is None
        assert args.auto is False
        assert args.max_history == 100

    def test_options(self):
        args = parse_args(["--seed", "5", "--auto", "--log-level", "DEBUG"])
        assert args.seed == 5
        assert args.auto is True
        assert args.log_level == "DEBUG"
