"""位置/移动/错误分类测试"""
import pytest

from freecell.cards import Card, Suit
from freecell.locations import Location, LocationType, Move, MoveError


class TestLocation:
    """Location 测试"""

    def test_column(self):
        loc = Location.column(3)
        assert loc.kind == LocationType.COLUMN
        assert loc.index == 3
        assert loc.depth is None
        assert loc.is_column and not loc.is_freecell and not loc.is_foundation

    def test_column_with_depth(self):
        loc = Location.column(2, 0)
        assert loc.depth == 0

    def test_freecell(self):
        loc = Location.freecell(1)
        assert loc.is_freecell
        assert loc.kind.value == "freecell"

    def test_foundation(self):
        assert Location.foundation(0).is_foundation

    def test_equality(self):
        assert Location.column(1) == Location(LocationType.COLUMN, 1, None)
        assert Location.column(1) != Location.column(1, 0)

    def test_str(self):
        assert str(Location.column(1, 4)) == "column[1:4]"
        assert str(Location.freecell(2)) == "freecell[2]"


class TestMove:
    """Move 测试"""

    def test_str_with_card(self):
        move = Move(Location.column(0), Location.foundation(0), Card(Suit.HEARTS, 'A'))
        assert str(move) == "A♥ column[0] -> foundation[0]"

    def test_str_without_card(self):
        move = Move(Location.freecell(0), Location.column(3))
        assert str(move) == "freecell[0] -> column[3]"


class TestMoveError:
    """MoveError 测试"""

    @pytest.mark.parametrize("error", list(MoveError))
    def test_every_error_has_message(self, error):
        assert isinstance(error.message, str)
        assert error.message

    def test_stable_values(self):
        assert MoveError.SOURCE_EMPTY.value == "source_empty"
        assert MoveError.SEQUENCE_EXCEEDS_CAPACITY.value == "sequence_exceeds_capacity"
        assert MoveError.INVALID_LOCATION.value == "invalid_location"
