"""
空当接龙引擎

持有唯一的实时 GameState 与撤销/重做历史，供表现层调用:
- new_game / set_game_state -> 初始状态
- execute_move / execute_double_click / execute_auto_move -> MoveResult
- undo / redo -> GameState 或 None
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np

from freecell.cards import Card
from freecell.locations import Location, Move, MoveError
from freecell.rules import RuleEngine
from freecell.state import GameState, InconsistentStateError

from .autoplay import find_auto_moves
from .config import EngineConfig
from .history import History

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveResult:
    """
    移动结果

    Attributes:
        success: 是否成功
        state: 成功时的新状态
        is_won: 新状态是否已获胜
        error: 失败分类
    """
    success: bool
    state: Optional[GameState] = None
    is_won: bool = False
    error: Optional[MoveError] = None

    @classmethod
    def ok(cls, state: GameState) -> 'MoveResult':
        return cls(success=True, state=state, is_won=state.is_won)

    @classmethod
    def fail(cls, error: MoveError) -> 'MoveResult':
        return cls(success=False, error=error)

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error is not None else None


class FreeCellEngine:
    """
    空当接龙引擎

    单线程、同步执行；返回给调用方的状态均为不可变值
    """

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Args:
            config: 引擎配置
        """
        self.config = config or EngineConfig()
        # 连续的 new_game 从同一个生成器发牌，配置种子只决定整串牌局
        self._rng = np.random.default_rng(self.config.seed)
        self._history = History(max_size=self.config.max_history_size)
        self._state = GameState.empty()
        self._history.reset(self._state)

    # ------------------------------------------------------------------
    # 对局管理
    # ------------------------------------------------------------------

    def new_game(
        self,
        deck: Optional[Sequence[Card]] = None,
        seed: Optional[int] = None,
    ) -> GameState:
        """
        开始新对局

        Args:
            deck: 预先指定的牌组，None 表示随机洗牌
            seed: 随机种子，指定时只决定本局；None 时从引擎的生成器继续发牌

        Returns:
            初始状态
        """
        rng = np.random.default_rng(seed) if seed is not None else self._rng
        self._state = GameState.initial(deck=deck, rng=rng)
        self._history.reset(self._state)
        if deck is not None:
            logger.info("New game from predetermined deck")
        elif seed is not None:
            logger.info(f"New game (seed={seed})")
        else:
            logger.info(f"New game (engine rng, config seed={self.config.seed})")
        return self._state

    def set_game_state(
        self,
        columns: Sequence[Sequence[Card]],
        freecells: Sequence[Optional[Card]],
        foundations: Sequence[int],
        move_count: int = 0,
    ) -> GameState:
        """
        直接注入牌桌 (用于确定性的测试场景)，历史重置为该状态

        Returns:
            注入后的状态
        """
        self._state = GameState.from_board(columns, freecells, foundations, move_count)
        self._history.reset(self._state)
        logger.debug(f"Game state injected (move_count={move_count})")
        return self._state

    def get_game_state(self) -> GameState:
        return self._state

    @property
    def is_won(self) -> bool:
        return self._state.is_won

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    def get_card(self, location: Location) -> Optional[Card]:
        return self._state.get_card(location)

    def get_movable_sequence(self, column_index: int, start_index: int) -> List[Card]:
        if not 0 <= column_index < len(self._state.columns):
            return []
        return RuleEngine.get_movable_sequence(self._state.columns[column_index], start_index)

    def can_move_to_column(self, card: Card, column_index: int) -> bool:
        return RuleEngine.can_move_to_column(card, self._state.columns[column_index])

    def can_move_sequence(self, sequence: Sequence[Card], column_index: int) -> bool:
        return RuleEngine.can_move_sequence(self._state, sequence, column_index)

    def can_move_to_foundation(self, card: Card, foundation_index: int) -> bool:
        return RuleEngine.can_move_to_foundation(card, self._state.foundations, foundation_index)

    def is_card_in_play(self, card: Card) -> bool:
        return self._state.is_card_in_play(card)

    # ------------------------------------------------------------------
    # 移动
    # ------------------------------------------------------------------

    def execute_move(self, source: Location, target: Location) -> MoveResult:
        """
        执行一次移动 (先完整验证，再整体替换状态)

        Args:
            source: 起点
            target: 终点

        Returns:
            MoveResult，失败时状态不变

        Raises:
            InconsistentStateError: 开启 validate_states 且新状态不满足 52 张牌不变式
        """
        error = RuleEngine.check_move(self._state, source, target)
        if error is not None:
            logger.debug(f"Rejected {source} -> {target}: {error.value}")
            return MoveResult.fail(error)

        new_state = self._state.with_move(source, target)
        if self.config.validate_states and not new_state.is_consistent():
            # 不提交损坏的状态，当前状态与历史保持不变
            logger.error(f"Card invariant broken after {source} -> {target}")
            raise InconsistentStateError(f"Card invariant broken after {source} -> {target}")

        self._state = new_state
        self._history.push(new_state)
        logger.debug(f"Move {new_state.move_count}: {source} -> {target}")

        if new_state.is_won:
            logger.info(f"Game won in {new_state.move_count} moves")
        return MoveResult.ok(new_state)

    def execute_double_click(self, location: Location) -> MoveResult:
        """
        快捷移动

        优先送入基础堆；否则空当中的牌移到空列，列中的牌移到空当

        Args:
            location: 被双击的牌

        Returns:
            MoveResult
        """
        if not self._state.is_valid_location(location):
            return MoveResult.fail(MoveError.INVALID_LOCATION)

        card = self._state.get_card(location)
        if card is None:
            return MoveResult.fail(MoveError.SOURCE_EMPTY)

        if location.is_column and not RuleEngine.is_top(self._state, location):
            return MoveResult.fail(MoveError.BURIED_CARD_NOT_TOP)

        for i in range(len(self._state.foundations)):
            if RuleEngine.can_move_to_foundation(card, self._state.foundations, i):
                return self.execute_move(location, Location.foundation(i))

        if location.is_freecell:
            for i, column in enumerate(self._state.columns):
                if not column:
                    return self.execute_move(location, Location.column(i))
        elif location.is_column:
            for i, cell in enumerate(self._state.freecells):
                if cell is None:
                    return self.execute_move(location, Location.freecell(i))

        return MoveResult.fail(MoveError.NO_VALID_MOVE)

    def get_auto_moves(self) -> List[Move]:
        return find_auto_moves(self._state)

    def execute_auto_move(self) -> MoveResult:
        """执行第一个安全的收牌移动 (单步，不循环)"""
        moves = self.get_auto_moves()
        if not moves:
            return MoveResult.fail(MoveError.NO_AUTO_MOVE_AVAILABLE)

        move = moves[0]
        logger.debug(f"Auto move: {move}")
        return self.execute_move(move.source, move.target)

    # ------------------------------------------------------------------
    # 撤销 / 重做
    # ------------------------------------------------------------------

    def can_undo(self) -> bool:
        return self._history.can_undo()

    def can_redo(self) -> bool:
        return self._history.can_redo()

    def undo(self) -> Optional[GameState]:
        state = self._history.undo()
        if state is None:
            return None
        self._state = state
        logger.debug(f"Undo to move {state.move_count}")
        return state

    def redo(self) -> Optional[GameState]:
        state = self._history.redo()
        if state is None:
            return None
        self._state = state
        logger.debug(f"Redo to move {state.move_count}")
        return state


def make_engine(**kwargs) -> FreeCellEngine:
    """
    创建引擎的便捷函数

    Args:
        **kwargs: EngineConfig 字段

    Returns:
        引擎实例
    """
    return FreeCellEngine(EngineConfig.from_dict(kwargs))
