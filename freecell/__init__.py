"""
FreeCell Core - 纯游戏逻辑 (无引擎状态)

Modules:
    cards: 牌定义、发牌与字符串转换
    locations: 位置、移动与错误分类
    rules: 规则引擎
    state: 游戏状态
"""
from .cards import (
    Card,
    Suit,
    Color,
    RANKS,
    FULL_DECK,
    DEAL_PATTERN,
    create_deck,
    shuffle_deck,
    deal,
    cards_to_str,
    str_to_cards,
)

from .locations import (
    LocationType,
    Location,
    Move,
    MoveError,
)

from .rules import RuleEngine

from .state import (
    GameState,
    IllegalMoveError,
    InconsistentStateError,
    NUM_COLUMNS,
    NUM_FREECELLS,
    NUM_FOUNDATIONS,
)

__all__ = [
    # cards
    "Card",
    "Suit",
    "Color",
    "RANKS",
    "FULL_DECK",
    "DEAL_PATTERN",
    "create_deck",
    "shuffle_deck",
    "deal",
    "cards_to_str",
    "str_to_cards",
    # locations
    "LocationType",
    "Location",
    "Move",
    "MoveError",
    # rules
    "RuleEngine",
    # state
    "GameState",
    "IllegalMoveError",
    "InconsistentStateError",
    "NUM_COLUMNS",
    "NUM_FREECELLS",
    "NUM_FOUNDATIONS",
]
