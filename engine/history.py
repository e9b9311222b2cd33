"""
撤销/重做历史

快照为不可变的 GameState，可直接存储，无需深拷贝
"""
import logging
from typing import List, Optional

from freecell.state import GameState

logger = logging.getLogger(__name__)


class History:
    """
    快照栈 + 游标

    - push: 丢弃游标之后的分支，追加新快照
    - 超出容量时淘汰最旧的快照，游标同步前移
    """

    def __init__(self, max_size: int = 100):
        """
        Args:
            max_size: 最多保留的快照数
        """
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self.max_size = max_size
        self._entries: List[GameState] = []
        self._cursor = -1

    def reset(self, state: GameState):
        """清空历史，仅保留给定状态"""
        self._entries = [state]
        self._cursor = 0

    def push(self, state: GameState):
        """记录一次被接受的移动后的状态"""
        if self._cursor < len(self._entries) - 1:
            dropped = len(self._entries) - 1 - self._cursor
            del self._entries[self._cursor + 1:]
            logger.debug(f"Discarded {dropped} redo entries")

        self._entries.append(state)
        self._cursor = len(self._entries) - 1

        if len(self._entries) > self.max_size:
            self._entries.pop(0)
            self._cursor -= 1
            logger.debug(f"History full ({self.max_size}), evicted oldest snapshot")

    def can_undo(self) -> bool:
        return self._cursor > 0

    def can_redo(self) -> bool:
        return self._cursor < len(self._entries) - 1

    def undo(self) -> Optional[GameState]:
        """游标后退一步，返回该处快照；已在起点时返回 None"""
        if not self.can_undo():
            return None
        self._cursor -= 1
        return self._entries[self._cursor]

    def redo(self) -> Optional[GameState]:
        """游标前进一步，返回该处快照；已在末尾时返回 None"""
        if not self.can_redo():
            return None
        self._cursor += 1
        return self._entries[self._cursor]

    @property
    def current(self) -> Optional[GameState]:
        if self._cursor < 0:
            return None
        return self._entries[self._cursor]

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._entries)
