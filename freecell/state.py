"""
游戏状态定义

使用不可变数据结构，支持:
- 快照共享 (历史记录无需深拷贝)
- 调用方无法修改引擎内部状态
- 易于比较与序列化
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .cards import (
    KING,
    NUM_CARDS,
    Card,
    Suit,
    create_deck,
    deal,
    shuffle_deck,
)
from .locations import Location, LocationType, MoveError
from .rules import RuleEngine


NUM_COLUMNS = 8
NUM_FREECELLS = 4
NUM_FOUNDATIONS = len(Suit)

_SLOT_COUNTS: Dict[LocationType, int] = {
    LocationType.COLUMN: NUM_COLUMNS,
    LocationType.FREECELL: NUM_FREECELLS,
    LocationType.FOUNDATION: NUM_FOUNDATIONS,
}


class IllegalMoveError(ValueError):
    """对非法移动调用 with_move 时抛出"""

    def __init__(self, error: MoveError):
        super().__init__(error.message)
        self.error = error


class InconsistentStateError(RuntimeError):
    """移动后的状态不再恰好包含 52 张各一张的牌"""


@dataclass(frozen=True)
class GameState:
    """
    不可变游戏状态

    Attributes:
        columns: 8 列牌，每列最后一张为列顶
        freecells: 4 个空当，None 表示空
        foundations: 按花色槽位存储的基础堆顶点数，0 表示空
        move_count: 已执行的移动次数
    """
    columns: Tuple[Tuple[Card, ...], ...]
    freecells: Tuple[Optional[Card], ...]
    foundations: Tuple[int, ...]
    move_count: int = 0

    @classmethod
    def empty(cls) -> 'GameState':
        """空牌桌"""
        return cls(
            columns=((),) * NUM_COLUMNS,
            freecells=(None,) * NUM_FREECELLS,
            foundations=(0,) * NUM_FOUNDATIONS,
        )

    @classmethod
    def initial(
        cls,
        deck: Optional[Sequence[Card]] = None,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> 'GameState':
        """
        创建初始游戏状态

        Args:
            deck: 预先指定的牌组 (按发牌顺序)，None 表示随机洗牌
            seed: 随机种子 (仅在 deck 与 rng 均为 None 时使用)
            rng: 随机数生成器，连续发多局时复用同一个生成器

        Returns:
            发好牌的初始状态
        """
        if deck is None:
            if rng is None:
                rng = np.random.default_rng(seed)
            deck = shuffle_deck(create_deck(), rng)

        columns = deal(deck)
        return cls(
            columns=tuple(tuple(column) for column in columns),
            freecells=(None,) * NUM_FREECELLS,
            foundations=(0,) * NUM_FOUNDATIONS,
        )

    @classmethod
    def from_board(
        cls,
        columns: Sequence[Sequence[Card]],
        freecells: Sequence[Optional[Card]],
        foundations: Sequence[int],
        move_count: int = 0,
    ) -> 'GameState':
        """
        从外部提供的牌桌构造状态 (复制输入，调用方之后修改输入不受影响)

        Args:
            columns: 8 列牌
            freecells: 4 个空当
            foundations: 4 个基础堆顶点数
            move_count: 移动次数

        Returns:
            新状态
        """
        if len(columns) != NUM_COLUMNS:
            raise ValueError(f"Expected {NUM_COLUMNS} columns, got {len(columns)}")
        if len(freecells) != NUM_FREECELLS:
            raise ValueError(f"Expected {NUM_FREECELLS} freecells, got {len(freecells)}")
        if len(foundations) != NUM_FOUNDATIONS:
            raise ValueError(f"Expected {NUM_FOUNDATIONS} foundations, got {len(foundations)}")
        if any(not 0 <= top <= KING for top in foundations):
            raise ValueError(f"Foundation values must be within 0..{KING}: {list(foundations)}")
        if move_count < 0:
            raise ValueError(f"move_count must be non-negative, got {move_count}")

        for card in [c for column in columns for c in column] + [c for c in freecells if c is not None]:
            if not isinstance(card, Card):
                raise ValueError(f"Not a card: {card!r}")

        return cls(
            columns=tuple(tuple(column) for column in columns),
            freecells=tuple(freecells),
            foundations=tuple(int(top) for top in foundations),
            move_count=move_count,
        )

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    def is_valid_location(self, location: Location) -> bool:
        """下标越界、负数或 depth 超出列长度均视为无效"""
        count = _SLOT_COUNTS.get(location.kind)
        if count is None or not 0 <= location.index < count:
            return False
        if location.depth is not None:
            if location.kind != LocationType.COLUMN:
                return False
            return 0 <= location.depth < len(self.columns[location.index])
        return True

    def get_card(self, location: Location) -> Optional[Card]:
        """
        解析位置上的牌

        Args:
            location: 位置

        Returns:
            牌，位置为空或无效时返回 None
        """
        if not self.is_valid_location(location):
            return None

        if location.kind == LocationType.COLUMN:
            column = self.columns[location.index]
            if location.depth is not None:
                return column[location.depth]
            return column[-1] if column else None

        if location.kind == LocationType.FREECELL:
            return self.freecells[location.index]

        top = self.foundations[location.index]
        if top == 0:
            return None
        return Card.from_value(Suit(location.index), top)

    @property
    def empty_freecell_count(self) -> int:
        return sum(1 for cell in self.freecells if cell is None)

    @property
    def empty_column_count(self) -> int:
        return sum(1 for column in self.columns if not column)

    @property
    def is_won(self) -> bool:
        return RuleEngine.is_won(self.foundations)

    def is_card_in_play(self, card: Card) -> bool:
        """牌是否仍在牌列或空当中 (尚未进入基础堆)"""
        if any(card in column for column in self.columns):
            return True
        return card in self.freecells

    def foundation_cards(self) -> List[Card]:
        """基础堆中隐含的牌 (每个花色从 A 到堆顶)"""
        return [
            Card.from_value(suit, value)
            for suit in Suit
            for value in range(1, self.foundations[suit] + 1)
        ]

    def all_cards(self) -> List[Card]:
        """牌桌上的全部牌 (牌列 + 空当 + 基础堆)"""
        cards = [card for column in self.columns for card in column]
        cards.extend(card for card in self.freecells if card is not None)
        cards.extend(self.foundation_cards())
        return cards

    def is_consistent(self) -> bool:
        """52 张牌是否恰好各出现一次"""
        cards = self.all_cards()
        if len(cards) != NUM_CARDS:
            return False
        counts = np.bincount([card.index for card in cards], minlength=NUM_CARDS)
        return bool((counts == 1).all())

    # ------------------------------------------------------------------
    # 状态转移
    # ------------------------------------------------------------------

    def with_move(self, source: Location, target: Location) -> 'GameState':
        """
        移动后的新状态

        Args:
            source: 起点
            target: 终点

        Returns:
            新状态 (move_count + 1)
        """
        error = RuleEngine.check_move(self, source, target)
        if error is not None:
            raise IllegalMoveError(error)

        columns = [list(column) for column in self.columns]
        freecells = list(self.freecells)
        foundations = list(self.foundations)

        if source.is_column and target.is_column:
            column = columns[source.index]
            start = source.depth if source.depth is not None else len(column) - 1
            # 只移走从 start 开始的序列，序列之上断开的牌留在原列
            end = start + len(RuleEngine.get_movable_sequence(column, start))
            columns[target.index].extend(column[start:end])
            del column[start:end]
        else:
            if source.is_column:
                card = columns[source.index].pop()
            else:
                card = freecells[source.index]
                freecells[source.index] = None

            if target.is_freecell:
                freecells[target.index] = card
            elif target.is_foundation:
                # 基础堆只记录点数
                foundations[target.index] = card.value
            else:
                columns[target.index].append(card)

        return GameState(
            columns=tuple(tuple(column) for column in columns),
            freecells=tuple(freecells),
            foundations=tuple(foundations),
            move_count=self.move_count + 1,
        )

    # ------------------------------------------------------------------
    # 导出
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """导出为独立的普通列表/字典副本"""
        return {
            "columns": [list(column) for column in self.columns],
            "freecells": list(self.freecells),
            "foundations": list(self.foundations),
            "move_count": self.move_count,
            "is_won": self.is_won,
        }
