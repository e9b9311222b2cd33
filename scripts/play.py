#!/usr/bin/env python3
"""
终端版空当接龙

Usage:
    python scripts/play.py                 # 随机发牌
    python scripts/play.py --seed 42       # 固定种子
    python scripts/play.py --auto          # 每步之后自动收牌
    python scripts/play.py --log-file moves.log --log-level DEBUG

位置写法:
    c3      第 3 列列顶
    c3:2    第 3 列从下往上第 2 张 (从 0 开始)
    f1      第 1 个空当
    h0      第 0 个基础堆 (红桃/方块/梅花/黑桃)
"""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# 添加项目根目录到路径
ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(ROOT))

from freecell.cards import SUIT_TO_SYMBOL, Suit
from freecell.locations import Location
from freecell.state import GameState
from engine import EngineConfig, FreeCellEngine, MoveResult

logger = logging.getLogger(__name__)

LOCATION_PREFIXES = {
    "c": Location.column,
    "f": Location.freecell,
    "h": Location.foundation,
}

HELP_TEXT = """\
命令:
  <src> <dst>   移动，如 "c0 c3"、"c2:4 c5"、"c1 f0"、"f0 h2"
  d <loc>       快捷移动 (同双击)
  a             自动收一张牌
  aa            连续自动收牌
  u / r         撤销 / 重做
  n             新对局
  ?             帮助
  q             退出"""


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="FreeCell")

    parser.add_argument("--seed", type=int, default=None, help="Random seed for the deal")
    parser.add_argument(
        "--auto",
        action="store_true",
        help="Run safe auto moves after every accepted move",
    )
    parser.add_argument("--max-history", type=int, default=100, help="Undo history size")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    parser.add_argument("--log-file", type=str, default=None, help="Write the move log to a file")

    return parser.parse_args(argv)


def setup_logging(level: str, log_file: Optional[str] = None):
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=handlers,
    )


def parse_location(text: str) -> Location:
    """
    解析位置文本

    Args:
        text: 如 "c3", "c3:2", "f1", "h0"

    Returns:
        Location
    """
    text = text.strip().lower()
    if len(text) < 2 or text[0] not in LOCATION_PREFIXES:
        raise ValueError(f"Bad location: {text!r}")

    prefix, body = text[0], text[1:]
    depth = None
    if ":" in body:
        if prefix != "c":
            raise ValueError(f"Only columns take a depth: {text!r}")
        body, depth_text = body.split(":", 1)
        if not depth_text.isdigit():
            raise ValueError(f"Bad depth: {text!r}")
        depth = int(depth_text)

    if not body.isdigit():
        raise ValueError(f"Bad index: {text!r}")

    if prefix == "c":
        return Location.column(int(body), depth)
    return LOCATION_PREFIXES[prefix](int(body))


def render_state(state: GameState) -> str:
    """把牌桌渲染为文本"""
    cells = " ".join(f"[{str(card) if card else '':>3}]" for card in state.freecells)
    homes = " ".join(
        f"[{state.foundations[suit]:>2}{SUIT_TO_SYMBOL[suit]}]" for suit in Suit
    )
    lines = [f"空当 {cells}    基础堆 {homes}", ""]

    lines.append("  ".join(f"{'c' + str(i):>4}" for i in range(len(state.columns))))
    height = max((len(column) for column in state.columns), default=0)
    for row in range(height):
        cells_in_row = []
        for column in state.columns:
            cells_in_row.append(f"{str(column[row]):>4}" if row < len(column) else "    ")
        lines.append("  ".join(cells_in_row))

    lines.append("")
    lines.append(f"步数: {state.move_count}")
    return "\n".join(lines)


def run_auto_moves(engine: FreeCellEngine, limit: Optional[int] = None) -> List[MoveResult]:
    """
    连续自动收牌，直到没有安全的移动

    Args:
        engine: 引擎
        limit: 最多执行的步数

    Returns:
        成功的移动结果
    """
    results = []
    while limit is None or len(results) < limit:
        result = engine.execute_auto_move()
        if not result.success:
            break
        results.append(result)
    return results


def handle_command(engine: FreeCellEngine, line: str, auto: bool = False) -> str:
    """
    执行一行命令

    Args:
        engine: 引擎
        line: 用户输入
        auto: 成功移动后是否连续自动收牌

    Returns:
        给用户的提示
    """
    tokens = line.split()
    if not tokens:
        return ""

    command = tokens[0].lower()

    if command in ("?", "help"):
        return HELP_TEXT
    if command == "u":
        return "已撤销" if engine.undo() is not None else "无法撤销"
    if command == "r":
        return "已重做" if engine.redo() is not None else "无法重做"
    if command == "n":
        engine.new_game()
        return "新对局"
    if command == "a":
        result = engine.execute_auto_move()
        return _describe(result)
    if command == "aa":
        results = run_auto_moves(engine)
        return f"自动收牌 {len(results)} 张"

    try:
        if command == "d" and len(tokens) == 2:
            result = engine.execute_double_click(parse_location(tokens[1]))
        elif len(tokens) == 2:
            result = engine.execute_move(parse_location(tokens[0]), parse_location(tokens[1]))
        else:
            return "无法识别的命令，输入 ? 查看帮助"
    except ValueError as e:
        return str(e)

    message = _describe(result)
    if result.success and auto and not result.is_won:
        results = run_auto_moves(engine)
        if results:
            message += f" (自动收牌 {len(results)} 张)"
    return message


def _describe(result: MoveResult) -> str:
    if not result.success:
        return result.message
    if result.is_won:
        return "恭喜你赢了!"
    return "OK"


def main(argv: Optional[List[str]] = None):
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file)

    engine = FreeCellEngine(EngineConfig(max_history_size=args.max_history, seed=args.seed))
    engine.new_game()
    if args.auto:
        run_auto_moves(engine)

    print("=" * 60)
    print("FreeCell 空当接龙  (输入 ? 查看帮助)")
    print("=" * 60)

    while True:
        print()
        print(render_state(engine.get_game_state()))
        try:
            line = input("\n> ")
        except EOFError:
            break
        if line.strip().lower() == "q":
            print("退出游戏")
            break

        message = handle_command(engine, line, auto=args.auto)
        if message:
            print(message)
        if engine.is_won:
            print(render_state(engine.get_game_state()))
            break


if __name__ == "__main__":
    main()
