"""
自动收牌策略

只把“安全”的牌送入基础堆: 送走之后不会妨碍任何将来的合法移动
"""
from typing import List, Sequence

from freecell.cards import Card, opposite_suits
from freecell.locations import Location, Move
from freecell.rules import RuleEngine
from freecell.state import GameState


def is_safe_to_auto_move(card: Card, foundations: Sequence[int]) -> bool:
    """
    判断牌是否可以安全地自动送入基础堆

    点数为 v 的牌只可能被点数 v-1 的异色牌当作落点，而那张牌
    又只能放在点数 v-2 的同色 (对本牌而言为异色) 牌上。
    只要两种异色花色的基础堆都已到达 v-2，本牌就不再被需要。

    Args:
        card: 牌
        foundations: 各基础堆顶点数

    Returns:
        是否安全
    """
    # A 和 2 永远安全
    if card.value <= 2:
        return True

    needed = card.value - 2
    return all(foundations[suit] >= needed for suit in opposite_suits(card.color))


def find_auto_moves(state: GameState) -> List[Move]:
    """
    按顺序收集当前合法且安全的收牌移动

    先扫描各列列顶 (按列序)，再扫描空当 (按槽位序)

    Args:
        state: 当前状态

    Returns:
        移动列表，第一个即贪心策略下一步要执行的移动
    """
    candidates = [Location.column(i) for i in range(len(state.columns))]
    candidates += [Location.freecell(i) for i in range(len(state.freecells))]

    moves = []
    for source in candidates:
        card = state.get_card(source)
        if card is None:
            continue
        index = RuleEngine.foundation_index(card)
        if not RuleEngine.can_move_to_foundation(card, state.foundations, index):
            continue
        if is_safe_to_auto_move(card, state.foundations):
            moves.append(Move(source=source, target=Location.foundation(index), card=card))
    return moves
