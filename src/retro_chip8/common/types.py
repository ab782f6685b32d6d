"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスや列挙型を定義します。
"""
from enum import Enum
from typing import Dict, List

# @intent:data_structure フレームバッファ（行のリスト、各セルは0または1）の型エイリアス。
Framebuffer = List[List[int]]

# @intent:data_structure レジスタ名と値をマッピングする辞書の型エイリアス。
RegisterMap = Dict[str, int]

# @intent:responsibility サイクルドライバの実行状態を表します。
# @intent:rationale キー待ち命令をビジーループではなく「中断中」という明示的な状態として扱うため。
class ExecutionStatus(Enum):
    RUNNING = "RUNNING"
    AWAITING_KEY = "AWAITING_KEY"
