# retro_chip8/core/snapshot.py
"""
実行状態のスナップショット

このモジュールは、1サイクル実行後のCPUとバスの状態を記録するデータ構造を定義します。
外部の実行ループ（描画・入力）への情報提供に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from retro_chip8.core.state import CpuState
from retro_chip8.common.types import ExecutionStatus
from retro_chip8.transport.bus import BusAccess

# @intent:responsibility デコードされた命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    デコードされた命令の詳細（オペコード、パターン、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode: int # 例: 0x8124
    mnemonic: str # 例: "ADD"
    operands: List[str] = field(default_factory=list) # 例: ["V1", "V2"]
    pattern: str = "" # 例: "8XY4"。実行関数の検索キー
    length: int = 2 # 命令のバイト長

    @property
    def opcode_hex(self) -> str:
        return f"{self.opcode:04X}"

    # @intent:responsibility 人間が読める形式の命令文字列を返します。
    def to_text(self) -> str:
        if self.operands:
            return f"{self.mnemonic} {', '.join(self.operands)}"
        return self.mnemonic

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True)
class Metadata:
    """
    実行に関するメタデータ（累計命令数、実行したアドレス、命令文字列）を記録するデータクラス。
    """
    cycle_count: int
    address: int = 0
    instruction_text: Optional[str] = None # 例: "0x0200: LD V0, #05"

# @intent:responsibility 1サイクル実行後のCPUとバスの状態を記録します。
@dataclass(frozen=True)
class Snapshot:
    """
    サイクルドライバが1回の呼び出しごとに返す結果。
    statusがAWAITING_KEYの場合、外部のイベント源がキー押下で再開させる必要があります。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    status: ExecutionStatus = ExecutionStatus.RUNNING
    bus_activity: List[BusAccess] = field(default_factory=list)

    # @intent:rationale stateは実行後の状態そのもの（コピーではない）です。
    #                  過去の状態を保持したい呼び出し側は自分でコピーを取る必要があります。
