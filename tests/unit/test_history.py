"""撤销/重做历史测试"""
import pytest

from freecell.state import GameState
from engine.history import History


def states(n):
    """move_count 互不相同的 n 个状态"""
    base = GameState.empty()
    return [GameState(base.columns, base.freecells, base.foundations, i) for i in range(n)]


class TestHistoryBasics:
    """基础行为测试"""

    def test_new_history(self):
        history = History()
        assert len(history) == 0
        assert history.current is None
        assert not history.can_undo()
        assert not history.can_redo()

    def test_reset(self):
        s = states(3)
        history = History()
        history.reset(s[0])
        history.push(s[1])
        history.reset(s[2])
        assert len(history) == 1
        assert history.current == s[2]
        assert not history.can_undo()

    def test_invalid_size(self):
        with pytest.raises(ValueError):
            History(max_size=0)


class TestUndoRedo:
    """撤销/重做测试"""

    def test_undo_redo(self):
        s = states(3)
        history = History()
        history.reset(s[0])
        history.push(s[1])
        history.push(s[2])

        assert history.undo() == s[1]
        assert history.undo() == s[0]
        assert history.undo() is None
        assert history.redo() == s[1]
        assert history.redo() == s[2]
        assert history.redo() is None

    def test_push_discards_redo_branch(self):
        s = states(4)
        history = History()
        history.reset(s[0])
        history.push(s[1])
        history.push(s[2])
        history.undo()
        history.undo()
        history.push(s[3])

        assert len(history) == 2
        assert not history.can_redo()
        assert history.undo() == s[0]

    def test_redo_unavailable_after_push(self):
        s = states(2)
        history = History()
        history.reset(s[0])
        history.push(s[1])
        assert not history.can_redo()
        assert history.redo() is None


class TestEviction:
    """容量淘汰测试"""

    def test_evicts_oldest(self):
        s = states(5)
        history = History(max_size=3)
        history.reset(s[0])
        for state in s[1:]:
            history.push(state)

        assert len(history) == 3
        assert history.cursor == 2
        assert history.current == s[4]
        assert history.undo() == s[3]
        assert history.undo() == s[2]
        assert history.undo() is None

    def test_size_one(self):
        s = states(2)
        history = History(max_size=1)
        history.reset(s[0])
        history.push(s[1])
        assert len(history) == 1
        assert history.current == s[1]
        assert not history.can_undo()
