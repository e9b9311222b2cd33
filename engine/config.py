"""
引擎配置
"""
from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass
class EngineConfig:
    """
    引擎配置

    Attributes:
        max_history_size: 历史记录最多保留的快照数
        seed: new_game 未指定种子时使用的默认随机种子
        validate_states: 每次移动后检查 52 张牌不变式，不满足时拒绝提交并抛出 InconsistentStateError
    """
    max_history_size: int = 100
    seed: Optional[int] = None
    validate_states: bool = False

    def __post_init__(self):
        if self.max_history_size < 1:
            raise ValueError(f"max_history_size must be at least 1, got {self.max_history_size}")

    @classmethod
    def from_dict(cls, d: dict) -> 'EngineConfig':
        valid_keys = cls.__dataclass_fields__.keys()
        filtered = {k: v for k, v in d.items() if k in valid_keys}
        return cls(**filtered)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
