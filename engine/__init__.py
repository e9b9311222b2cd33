"""
Engine Layer - 有状态的对局引擎

Modules:
    freecell_engine: 引擎主类
    history: 撤销/重做历史
    autoplay: 自动收牌策略
    config: 引擎配置
"""
from .freecell_engine import (
    FreeCellEngine,
    MoveResult,
    make_engine,
)

from .history import History

from .autoplay import (
    is_safe_to_auto_move,
    find_auto_moves,
)

from .config import EngineConfig

__all__ = [
    # engine
    "FreeCellEngine",
    "MoveResult",
    "make_engine",
    # history
    "History",
    # autoplay
    "is_safe_to_auto_move",
    "find_auto_moves",
    # config
    "EngineConfig",
]
