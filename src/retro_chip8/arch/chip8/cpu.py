# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 仮想マシンのエミュレーションの中心モジュール。

Chip8Cpu.step() が外部の実行ループから1サイクルごとに呼び出される唯一の入口です。
描画タイミングの判断（draw_flag）、キー入力の配送、音声出力は呼び出し側の責務です。
"""
import logging
from typing import List, Optional

from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.snapshot import Operation, Snapshot
from retro_chip8.common.types import ExecutionStatus, Framebuffer, RegisterMap
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState, KEY_COUNT, REGISTER_COUNT
from retro_chip8.arch.chip8.fontset import FONTSET, FONT_START_ADDRESS
from retro_chip8.arch.chip8.instructions import decode_opcode, execute_instruction

logger = logging.getLogger(__name__)

# @intent:responsibility CHIP-8の具体的なエミュレーションロジック（フェッチ、デコード、実行、タイマー）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 仮想マシンをエミュレートするクラス。

    `strict_opcodes` がFalse（既定）の場合、未定義オペコードは警告ログを出して1命令分読み飛ばします。
    Trueの場合はValueErrorを送出します（互換性テスト用）。
    """
    # @intent:pre-condition busには0x000〜0xFFFの4KBメモリがマップされている必要があります。
    def __init__(self, bus: Bus, strict_opcodes: bool = False, rng_seed: Optional[int] = None):
        self.strict_opcodes = strict_opcodes
        self._rng_seed = rng_seed
        self._pending_operation: Optional[Operation] = None
        super().__init__(bus)
        self._load_fontset()

    def _create_initial_state(self) -> Chip8CpuState:
        state = Chip8CpuState()
        if self._rng_seed is not None:
            state.rng.seed(self._rng_seed)
        return state

    # @intent:responsibility 状態を初期化し、フォントテーブルをメモリへ再ロードします。
    # @intent:rationale プログラム領域(0x200以降)はリセットしても保持されます。
    def reset(self) -> None:
        super().reset()
        self._pending_operation = None
        self._load_fontset()

    def get_state(self) -> Chip8CpuState:
        return self._state

    def _load_fontset(self) -> None:
        self._bus.load_block(FONT_START_ADDRESS, FONTSET)

    # @intent:responsibility PCが指す2バイトをビッグエンディアンで合成し、16ビットのオペコードを返します。
    # @intent:pre-condition pc+1 がメモリ範囲内であること。範囲外はIndexErrorを送出します。
    # @intent:pre-condition pcが偶数であること。奇数アドレスはValueErrorを送出します。
    def _fetch(self) -> int:
        pc = self._state.pc
        if pc + 1 >= self._bus.get_address_limit():
            raise IndexError(f"Program counter {pc:#06x} ran past the end of memory.")
        if pc & 1:
            raise ValueError(f"Program counter {pc:#06x} is not aligned to an instruction boundary.")
        return (self._bus.read(pc) << 8) | self._bus.read(pc + 1)

    def _decode(self, opcode: int) -> Operation:
        return decode_opcode(opcode)

    # @intent:responsibility Operationを実行し、状態を更新します。
    # @intent:rationale 未定義命令はPCが既に1命令分進んでいるため、何もしなければ読み飛ばしになります。
    def _execute(self, operation: Operation) -> None:
        if execute_instruction(operation, self._state, self._bus):
            if self._state.awaiting_key:
                self._pending_operation = operation
            return

        address = (self._state.pc - operation.length) & 0xFFFF
        if self.strict_opcodes:
            raise ValueError(f"Invalid opcode {operation.opcode_hex} at {address:#06x}")
        logger.warning("Invalid opcode %s at %#06x, skipping", operation.opcode_hex, address)

    # @intent:responsibility キー待ち中であれば、フェッチ・実行・タイマー更新を行わずに待機状態のSnapshotを返します。
    def _handle_wait(self, current_pc: int) -> Optional[Snapshot]:
        if not self._state.awaiting_key:
            return None
        return self._create_snapshot(current_pc, self._pending_operation)

    # @intent:responsibility 命令の実行完了後に両タイマーを1ずつ減算します（0未満にはしない）。
    def _post_execute(self, operation: Operation) -> None:
        if self._state.awaiting_key:
            # 中断中のサイクルは未完了。タイマーは再開時に更新する
            return
        self._tick_timers()

    def _tick_timers(self) -> None:
        s = self._state
        if s.delay_timer > 0:
            s.delay_timer -= 1
        if s.sound_timer > 0:
            s.sound_timer -= 1

    def get_status(self) -> ExecutionStatus:
        return self._state.status

    # @intent:responsibility 最大cycles回のサイクルを実行します。キー待ちに入った時点で停止します。
    def run(self, cycles: int) -> List[Snapshot]:
        snapshots = []
        for _ in range(cycles):
            snapshot = self.step()
            snapshots.append(snapshot)
            if snapshot.status is ExecutionStatus.AWAITING_KEY:
                break
        return snapshots

    # --- キー入力 ---

    def _check_key(self, key: int) -> None:
        if not 0 <= key < KEY_COUNT:
            raise ValueError(f"Key index {key} out of range (0x0-0xF).")

    # @intent:responsibility キー押下イベントを反映します。キー待ち中であれば、そのキーで実行を再開します。
    def press_key(self, key: int) -> None:
        self._check_key(key)
        self._state.key[key] = True
        if self._state.awaiting_key:
            self.resume_with_key(key)

    def release_key(self, key: int) -> None:
        self._check_key(key)
        self._state.key[key] = False

    # @intent:responsibility 中断中のキー待ち命令を完了させます。
    # @intent:post-condition V[wait_register]にキー番号が格納され、状態はRUNNINGに戻り、タイマーが1回更新されます。
    def resume_with_key(self, key: int) -> None:
        self._check_key(key)
        s = self._state
        if not s.awaiting_key:
            raise RuntimeError("resume_with_key called while not awaiting a key press.")
        s.v[s.wait_register] = key
        s.wait_register = None
        s.status = ExecutionStatus.RUNNING
        self._pending_operation = None
        self._tick_timers()
        logger.debug("Resumed with key %X", key)

    # --- 外部インターフェース（描画・音声・観測） ---

    # @intent:responsibility 描画用にフレームバッファのコピーを返します。
    def get_framebuffer(self) -> Framebuffer:
        return [list(row) for row in self._state.gfx]

    @property
    def draw_flag(self) -> bool:
        return self._state.draw_flag

    # @intent:responsibility 描画側が画面を反映した後に呼び出し、変更フラグを下ろします。
    def clear_draw_flag(self) -> None:
        self._state.draw_flag = False

    # @intent:responsibility サウンドタイマーが0でない間、ブザーを鳴らすべきことを示します。
    def is_sound_active(self) -> bool:
        return self._state.sound_timer > 0

    def get_register_map(self) -> RegisterMap:
        s = self._state
        registers = {f"V{index:X}": s.v[index] for index in range(REGISTER_COUNT)}
        registers.update({
            "I": s.i, "PC": s.pc, "SP": s.sp, "DT": s.delay_timer, "ST": s.sound_timer
        })
        return registers

    # @intent:responsibility 指定アドレスのメモリ内容をログに残さずに読み出します。
    def peek_memory(self, address: int, length: int = 1) -> bytes:
        return bytes(self._bus.peek(address + offset) for offset in range(length))
