# retro_chip8/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
from abc import ABC, abstractmethod
from typing import Optional

from retro_chip8.transport.bus import Bus
from retro_chip8.core.snapshot import Snapshot, Operation, Metadata
from retro_chip8.core.state import CpuState
from retro_chip8.common.types import ExecutionStatus, RegisterMap

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    CPUエミュレーションの基底となる抽象クラス。
    Busとのインターフェース、基本的な状態管理、命令サイクルの抽象化を提供します。
    """
    # @intent:pre-condition `bus`は有効なBusオブジェクトである必要があります。
    def __init__(self, bus: Bus):
        self._bus = bus
        self._state: CpuState = self._create_initial_state()
        self._cycle_count: int = 0
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility 初期状態のCpuStateオブジェクトを生成します。
    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        """
        CPUの初期状態を生成して返します。
        具体的なCPUアーキテクチャはこのメソッドを実装し、
        そのアーキテクチャに特化したCpuStateのサブクラスを返します。
        """
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._cycle_count = 0

    def get_state(self) -> CpuState:
        return self._state

    # @intent:responsibility これまでに実行した命令数を返します。
    def get_cycle_count(self) -> int:
        return self._cycle_count

    # @intent:responsibility 現在のPCから次の命令（オペコード）をフェッチします。
    @abstractmethod
    def _fetch(self) -> int:
        """
        現在のPCから命令ワードを読み出して返します。
        PCの更新は行いません（_update_pcの責務）。
        """
        pass

    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー
    #                  （ログクリア→中断判定→フェッチ→デコード→PC更新→実行→後処理→Snapshot生成）を定義します。
    #                  アーキテクチャ固有の振る舞い（キー待ち、タイマー）はフックメソッドで対応します。
    def step(self) -> Snapshot:
        self._bus.get_and_clear_activity_log()
        initial_pc = self._state.pc

        waiting_snapshot = self._handle_wait(initial_pc)
        if waiting_snapshot:
            return waiting_snapshot

        opcode = self._fetch()
        operation = self._decode(opcode)

        # 命令実行前にPCを命令長分進める。分岐命令は実行時にPCを上書きする
        self._update_pc(operation)

        self._execute(operation)
        self._post_execute(operation)

        self._cycle_count += 1
        return self._create_snapshot(initial_pc, operation)

    # @intent:responsibility 中断状態の場合の処理を行います。
    # @intent:return 中断中であればその状態のSnapshot、そうでなければNone。
    def _handle_wait(self, current_pc: int) -> Optional[Snapshot]:
        return None

    def _update_pc(self, operation: Operation) -> None:
        self._state.pc = (self._state.pc + operation.length) & 0xFFFF

    # @intent:responsibility 命令実行後の後処理（タイマー更新など）を行うフックです。
    def _post_execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility 現在の実行状態を返します。デフォルトは常に実行中です。
    def get_status(self) -> ExecutionStatus:
        return ExecutionStatus.RUNNING

    def _create_snapshot(self, initial_pc: int, operation: Operation) -> Snapshot:
        bus_activity = self._bus.get_and_clear_activity_log()
        return Snapshot(
            state=self.get_state(),
            operation=operation,
            metadata=Metadata(
                cycle_count=self._cycle_count,
                address=initial_pc,
                instruction_text=f"{initial_pc:#06x}: {operation.to_text()}",
            ),
            status=self.get_status(),
            bus_activity=bus_activity
        )

    @abstractmethod
    def get_register_map(self) -> RegisterMap:
        """
        現在のレジスタ値を辞書形式で返す。
        外部ツールがCPUの内部構造を知らなくても値を表示できるようにするために使用される。
        """
        pass
