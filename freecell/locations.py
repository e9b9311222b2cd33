"""
位置、移动与错误分类

位置 (Location) 既可指向一张牌，也可指向一个目标槽位
"""
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .cards import Card


class LocationType(Enum):
    """位置类型"""
    COLUMN = "column"          # 牌列
    FREECELL = "freecell"      # 空当
    FOUNDATION = "foundation"  # 基础堆


class MoveError(Enum):
    """移动失败的分类 (稳定取值，供表现层决定提示)"""
    SOURCE_EMPTY = "source_empty"
    OCCUPIED_FREECELL = "occupied_freecell"
    ILLEGAL_FOUNDATION_MOVE = "illegal_foundation_move"
    ILLEGAL_COLUMN_SEQUENCE = "illegal_column_sequence"
    SEQUENCE_EXCEEDS_CAPACITY = "sequence_exceeds_capacity"
    BURIED_CARD_NOT_TOP = "buried_card_not_top"
    NO_VALID_MOVE = "no_valid_move"
    NO_AUTO_MOVE_AVAILABLE = "no_auto_move_available"
    INVALID_LOCATION = "invalid_location"
    UNSUPPORTED_MOVE = "unsupported_move"

    @property
    def message(self) -> str:
        return _ERROR_MESSAGES[self]


_ERROR_MESSAGES = {
    MoveError.SOURCE_EMPTY: "Source card not found",
    MoveError.OCCUPIED_FREECELL: "Freecell is occupied",
    MoveError.ILLEGAL_FOUNDATION_MOVE: "Cannot move card to foundation",
    MoveError.ILLEGAL_COLUMN_SEQUENCE: "Cannot move sequence to target column",
    MoveError.SEQUENCE_EXCEEDS_CAPACITY: "Not enough free space to move that many cards",
    MoveError.BURIED_CARD_NOT_TOP: "Can only move the top card of a column",
    MoveError.NO_VALID_MOVE: "No valid moves available",
    MoveError.NO_AUTO_MOVE_AVAILABLE: "No auto moves available",
    MoveError.INVALID_LOCATION: "Location is out of range",
    MoveError.UNSUPPORTED_MOVE: "Cards cannot move between those locations",
}


@dataclass(frozen=True, slots=True)
class Location:
    """
    不可变位置引用

    Attributes:
        kind: 位置类型
        index: 槽位下标 (从 0 开始)
        depth: 牌列中指定的牌位置，None 表示列顶
    """
    kind: LocationType
    index: int
    depth: Optional[int] = None

    @classmethod
    def column(cls, index: int, depth: Optional[int] = None) -> 'Location':
        return cls(LocationType.COLUMN, index, depth)

    @classmethod
    def freecell(cls, index: int) -> 'Location':
        return cls(LocationType.FREECELL, index)

    @classmethod
    def foundation(cls, index: int) -> 'Location':
        return cls(LocationType.FOUNDATION, index)

    @property
    def is_column(self) -> bool:
        return self.kind == LocationType.COLUMN

    @property
    def is_freecell(self) -> bool:
        return self.kind == LocationType.FREECELL

    @property
    def is_foundation(self) -> bool:
        return self.kind == LocationType.FOUNDATION

    def __str__(self) -> str:
        if self.depth is not None:
            return f"{self.kind.value}[{self.index}:{self.depth}]"
        return f"{self.kind.value}[{self.index}]"


@dataclass(frozen=True, slots=True)
class Move:
    """
    一次移动请求

    Attributes:
        source: 起点
        target: 终点
        card: 被移动的牌 (自动移动扫描时填入，便于展示)
    """
    source: Location
    target: Location
    card: Optional[Card] = None

    def __str__(self) -> str:
        if self.card is not None:
            return f"{self.card} {self.source} -> {self.target}"
        return f"{self.source} -> {self.target}"
