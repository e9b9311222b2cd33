"""
规则引擎 - 序列检测、合法性验证

所有方法都是纯函数，无状态
"""
from typing import List, Optional, Sequence, TYPE_CHECKING

from .cards import ACE, KING, Card, Suit
from .locations import Location, MoveError

if TYPE_CHECKING:
    from .state import GameState


class RuleEngine:
    """
    空当接龙规则引擎

    提供序列检测、容量计算、移动合法性验证等功能
    所有方法都是静态方法，无状态
    """

    @staticmethod
    def can_stack(lower: Card, upper: Card) -> bool:
        """upper 能否叠放在 lower 上 (颜色相反且点数小 1)"""
        return upper.color != lower.color and upper.value == lower.value - 1

    @staticmethod
    def get_movable_sequence(column: Sequence[Card], start_index: int) -> List[Card]:
        """
        从 start_index 开始向上扫描可整体移动的序列

        Args:
            column: 牌列 (最后一张为列顶)
            start_index: 起始位置

        Returns:
            从 start_index 开始的最长合法序列，起始牌不存在时为空
        """
        if not 0 <= start_index < len(column):
            return []

        sequence = [column[start_index]]
        for card in column[start_index + 1:]:
            if not RuleEngine.can_stack(sequence[-1], card):
                break
            sequence.append(card)
        return sequence

    @staticmethod
    def can_move_to_column(card: Card, column: Sequence[Card]) -> bool:
        """空列可放任意牌，否则须颜色相反且比列顶小 1"""
        if not column:
            return True
        return RuleEngine.can_stack(column[-1], card)

    @staticmethod
    def max_movable(empty_freecells: int, empty_columns: int) -> int:
        """一次最多可移动的牌数: (空当数 + 1) * 2^空列数"""
        return (empty_freecells + 1) * (2 ** empty_columns)

    @staticmethod
    def check_sequence_move(
        state: 'GameState',
        sequence: Sequence[Card],
        target_index: int,
    ) -> Optional[MoveError]:
        """
        检查序列能否移动到目标列

        Args:
            state: 当前状态
            sequence: 待移动序列 (第一张为最底下的牌)
            target_index: 目标列

        Returns:
            None 表示合法，否则为失败分类
        """
        if not sequence:
            return MoveError.SOURCE_EMPTY

        target = state.columns[target_index]
        empty_columns = state.empty_column_count
        # 目标列本身不能作为中转
        if not target:
            empty_columns -= 1

        capacity = RuleEngine.max_movable(state.empty_freecell_count, empty_columns)
        if len(sequence) > capacity:
            return MoveError.SEQUENCE_EXCEEDS_CAPACITY

        if not RuleEngine.can_move_to_column(sequence[0], target):
            return MoveError.ILLEGAL_COLUMN_SEQUENCE
        return None

    @staticmethod
    def can_move_sequence(state: 'GameState', sequence: Sequence[Card], target_index: int) -> bool:
        return RuleEngine.check_sequence_move(state, sequence, target_index) is None

    @staticmethod
    def can_move_to_foundation(card: Card, foundations: Sequence[int], foundation_index: int) -> bool:
        """
        检查牌能否放入基础堆

        Args:
            card: 牌
            foundations: 各基础堆顶点数 (0 表示空)
            foundation_index: 基础堆槽位

        Returns:
            是否合法
        """
        if foundation_index != int(card.suit):
            return False

        top = foundations[foundation_index]
        if top == 0:
            return card.value == ACE
        return card.value == top + 1

    @staticmethod
    def is_won(foundations: Sequence[int]) -> bool:
        return all(top == KING for top in foundations)

    @staticmethod
    def is_top(state: 'GameState', location: Location) -> bool:
        """位置是否指向列顶 (未指定 depth 视为列顶)"""
        if location.depth is None:
            return True
        return location.depth == len(state.columns[location.index]) - 1

    @staticmethod
    def check_move(state: 'GameState', source: Location, target: Location) -> Optional[MoveError]:
        """
        完整验证一次移动 (不修改状态)

        Args:
            state: 当前状态
            source: 起点
            target: 终点

        Returns:
            None 表示合法，否则为失败分类
        """
        if not state.is_valid_location(source) or not state.is_valid_location(target):
            return MoveError.INVALID_LOCATION

        card = state.get_card(source)
        if card is None:
            return MoveError.SOURCE_EMPTY

        # 列 -> 列: 序列移动
        if source.is_column and target.is_column:
            column = state.columns[source.index]
            start = source.depth if source.depth is not None else len(column) - 1
            sequence = RuleEngine.get_movable_sequence(column, start)
            return RuleEngine.check_sequence_move(state, sequence, target.index)

        # 任意 -> 空当
        if target.is_freecell:
            if state.freecells[target.index] is not None:
                return MoveError.OCCUPIED_FREECELL
            if source.is_column:
                if not RuleEngine.is_top(state, source):
                    return MoveError.BURIED_CARD_NOT_TOP
                return None
            if source.is_freecell:
                return None
            return MoveError.UNSUPPORTED_MOVE

        # 任意 -> 基础堆
        if target.is_foundation:
            if source.is_foundation:
                return MoveError.UNSUPPORTED_MOVE
            if not RuleEngine.can_move_to_foundation(card, state.foundations, target.index):
                return MoveError.ILLEGAL_FOUNDATION_MOVE
            if source.is_column and not RuleEngine.is_top(state, source):
                return MoveError.BURIED_CARD_NOT_TOP
            return None

        # 空当 -> 列
        if source.is_freecell:
            if not RuleEngine.can_move_to_column(card, state.columns[target.index]):
                return MoveError.ILLEGAL_COLUMN_SEQUENCE
            return None

        return MoveError.UNSUPPORTED_MOVE

    @staticmethod
    def foundation_index(card: Card) -> int:
        """牌对应的基础堆槽位"""
        return int(Suit(card.suit))
