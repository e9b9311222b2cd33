"""自动收牌策略测试"""
import pytest

from freecell.cards import Card, str_to_cards
from freecell.locations import Location
from freecell.state import GameState
from engine.autoplay import is_safe_to_auto_move, find_auto_moves


def make_state(columns=None, freecells=None, foundations=(0, 0, 0, 0)):
    cols = [[] for _ in range(8)]
    for i, text in (columns or {}).items():
        cols[i] = str_to_cards(text)
    cells = [None] * 4
    for i, text in (freecells or {}).items():
        cells[i] = Card.from_str(text)
    return GameState.from_board(cols, cells, foundations)


class TestIsSafeToAutoMove:
    """安全判定测试"""

    @pytest.mark.parametrize("card", ["Ah", "As", "2d", "2c"])
    def test_ace_and_two_always_safe(self, card):
        assert is_safe_to_auto_move(Card.from_str(card), (0, 0, 0, 0))

    def test_three_hearts_mixed_foundations(self):
        # 红桃 2、方块空、梅花 A、黑桃 2
        assert is_safe_to_auto_move(Card.from_str("3h"), (2, 0, 1, 2))

    def test_needs_both_opposite_suits(self):
        # 5♥ 需要梅花、黑桃都至少到 3
        assert not is_safe_to_auto_move(Card.from_str("5h"), (4, 0, 3, 2))
        assert is_safe_to_auto_move(Card.from_str("5h"), (4, 0, 3, 3))

    def test_same_color_suits_ignored(self):
        assert not is_safe_to_auto_move(Card.from_str("4s"), (0, 0, 13, 3))
        assert is_safe_to_auto_move(Card.from_str("4s"), (2, 2, 0, 3))


class TestFindAutoMoves:
    """候选扫描测试"""

    def test_no_moves(self):
        assert find_auto_moves(make_state(columns={0: "5h"})) == []

    def test_column_ace(self):
        moves = find_auto_moves(make_state(columns={2: "Kc Ad"}))
        assert len(moves) == 1
        assert moves[0].source == Location.column(2)
        assert moves[0].target == Location.foundation(1)
        assert moves[0].card == Card.from_str("Ad")

    def test_columns_before_freecells(self):
        state = make_state(columns={5: "Ac"}, freecells={0: "Ah"})
        moves = find_auto_moves(state)
        assert [m.source for m in moves] == [Location.column(5), Location.freecell(0)]

    def test_column_order(self):
        state = make_state(columns={3: "As", 1: "Ah"})
        moves = find_auto_moves(state)
        assert [m.source.index for m in moves] == [1, 3]

    def test_unsafe_excluded(self):
        # 3♥ 合法但不安全 (梅花、黑桃为空)
        state = make_state(columns={0: "3h"}, foundations=(2, 0, 0, 0))
        assert find_auto_moves(state) == []

    def test_buried_ace_ignored(self):
        assert find_auto_moves(make_state(columns={0: "Ah Kc"})) == []
