"""
牌的定义、洗牌与发牌

空当接龙使用一副 52 张的标准扑克 (不含王):
- 4 种花色: 红桃、方块、梅花、黑桃
- 每种花色 A, 2-10, J, Q, K 共 13 张
"""
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np


class Suit(IntEnum):
    """花色 (取值即基础堆槽位，也是快捷移动时的搜索顺序)"""
    HEARTS = 0
    DIAMONDS = 1
    CLUBS = 2
    SPADES = 3


class Color(Enum):
    """颜色"""
    RED = "red"
    BLACK = "black"


# 牌面 (取值 = 下标 + 1)
RANKS: Tuple[str, ...] = ('A', '2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K')

NUM_RANKS = len(RANKS)
NUM_CARDS = len(Suit) * NUM_RANKS

ACE = 1
KING = 13

RANK_TO_VALUE: Dict[str, int] = {rank: i + 1 for i, rank in enumerate(RANKS)}

SUIT_TO_SYMBOL: Dict[Suit, str] = {
    Suit.HEARTS: '♥',
    Suit.DIAMONDS: '♦',
    Suit.CLUBS: '♣',
    Suit.SPADES: '♠',
}

# 文本输入时可用的花色字符
STR_TO_SUIT: Dict[str, Suit] = {
    'h': Suit.HEARTS, '♥': Suit.HEARTS,
    'd': Suit.DIAMONDS, '♦': Suit.DIAMONDS,
    'c': Suit.CLUBS, '♣': Suit.CLUBS,
    's': Suit.SPADES, '♠': Suit.SPADES,
}

RED_SUITS: Tuple[Suit, ...] = (Suit.HEARTS, Suit.DIAMONDS)
BLACK_SUITS: Tuple[Suit, ...] = (Suit.CLUBS, Suit.SPADES)

# 发牌规则: 前 4 列各 7 张，后 4 列各 6 张
DEAL_PATTERN: Tuple[int, ...] = (7, 7, 7, 7, 6, 6, 6, 6)


def suit_color(suit: Suit) -> Color:
    return Color.RED if suit in RED_SUITS else Color.BLACK


def opposite_suits(color: Color) -> Tuple[Suit, ...]:
    """获取相反颜色的两种花色"""
    return BLACK_SUITS if color == Color.RED else RED_SUITS


@dataclass(frozen=True, slots=True)
class Card:
    """
    不可变的牌

    color 与 value 完全由 suit/rank 决定，不单独存储

    Attributes:
        suit: 花色
        rank: 牌面字符 ('A', '2' ... '10', 'J', 'Q', 'K')
    """
    suit: Suit
    rank: str

    def __post_init__(self):
        if self.rank not in RANK_TO_VALUE:
            raise ValueError(f"Unknown rank: {self.rank!r}")
        if not isinstance(self.suit, Suit):
            try:
                object.__setattr__(self, 'suit', Suit(self.suit))
            except ValueError:
                raise ValueError(f"Unknown suit: {self.suit!r}") from None

    @classmethod
    def from_value(cls, suit: Suit, value: int) -> 'Card':
        """由花色和点数 (1-13) 创建"""
        if not ACE <= value <= KING:
            raise ValueError(f"Card value out of range: {value}")
        return cls(suit=suit, rank=RANKS[value - 1])

    @classmethod
    def from_str(cls, s: str) -> 'Card':
        """
        从字符串解析

        Args:
            s: 如 "10h", "Q♠", "as"

        Returns:
            牌
        """
        s = s.strip()
        if len(s) < 2:
            raise ValueError(f"Cannot parse card: {s!r}")
        rank, suit = s[:-1].upper(), s[-1].lower()
        if suit not in STR_TO_SUIT:
            raise ValueError(f"Unknown suit in card: {s!r}")
        return cls(suit=STR_TO_SUIT[suit], rank=rank)

    @property
    def color(self) -> Color:
        return suit_color(self.suit)

    @property
    def value(self) -> int:
        return RANK_TO_VALUE[self.rank]

    @property
    def index(self) -> int:
        """0-51 的稠密编号: suit * 13 + value - 1"""
        return int(self.suit) * NUM_RANKS + self.value - 1

    @property
    def is_red(self) -> bool:
        return self.color == Color.RED

    def __str__(self) -> str:
        return f"{self.rank}{SUIT_TO_SYMBOL[self.suit]}"


def create_deck() -> List[Card]:
    """按花色顺序生成 52 张不重复的牌"""
    return [Card(suit=suit, rank=rank) for suit in Suit for rank in RANKS]


# 完整牌组 (标准顺序)
FULL_DECK: Tuple[Card, ...] = tuple(create_deck())


def shuffle_deck(
    deck: Sequence[Card],
    rng: Optional[np.random.Generator] = None,
) -> List[Card]:
    """
    Fisher-Yates 洗牌

    Args:
        deck: 牌组 (不会被修改)
        rng: numpy 随机数生成器，传入固定种子的生成器可复现洗牌结果

    Returns:
        洗好的新牌组
    """
    if rng is None:
        rng = np.random.default_rng()

    shuffled = list(deck)
    for i in range(len(shuffled) - 1, 0, -1):
        j = int(rng.integers(0, i + 1))
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


def deal(deck: Sequence[Card]) -> List[List[Card]]:
    """
    按顺序发牌到 8 列

    Args:
        deck: 52 张不重复的牌 (已洗好或预先指定)

    Returns:
        8 列牌，前 4 列 7 张，后 4 列 6 张
    """
    if len(deck) != NUM_CARDS or len(set(deck)) != NUM_CARDS:
        raise ValueError(f"Deck must hold the {NUM_CARDS} distinct cards, got {len(deck)}")

    columns: List[List[Card]] = []
    pos = 0
    for count in DEAL_PATTERN:
        columns.append(list(deck[pos:pos + count]))
        pos += count
    return columns


def cards_to_str(cards: Sequence[Card]) -> str:
    """如 "5♥ 4♣ 3♦" """
    return ' '.join(str(card) for card in cards)


def str_to_cards(s: str) -> List[Card]:
    """
    将空格分隔的字符串转换为牌列表

    Args:
        s: 如 "5h 4c 3d"

    Returns:
        牌列表 (保持输入顺序)
    """
    return [Card.from_str(token) for token in s.split()]
