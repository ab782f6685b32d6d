# src/retro_chip8/arch/chip8/instructions/keypad.py
"""
キーパッド命令（キー状態によるスキップ、キー待ち）の実装。
"""
import logging

from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.common.types import ExecutionStatus
from retro_chip8.arch.chip8.state import Chip8CpuState, KEY_COUNT
from .base import decode_fields, skip_if

logger = logging.getLogger(__name__)

# @intent:utility_function Vxが示すキーの押下状態を返します。
# @intent:pre-condition Vx < 16。範囲外はValueErrorを送出します。
def _key_pressed(state: Chip8CpuState, x: int) -> bool:
    key_index = state.v[x]
    if key_index >= KEY_COUNT:
        raise ValueError(f"Key index {key_index:#04x} in V{x:X} out of range (0x0-0xF).")
    return state.key[key_index]

# --- SKP Vx (EX9E) ---
def execute_skp(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    skip_if(state, _key_pressed(state, decode_fields(op.opcode).x))

# --- SKNP Vx (EXA1) ---
def execute_sknp(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    skip_if(state, not _key_pressed(state, decode_fields(op.opcode).x))

# --- LD Vx, K (FX0A) ---
# @intent:responsibility キー押下を待つ中断状態へ移行します。
# @intent:rationale 実行ループをブロックしないため、ここではポーリングせずに状態だけを記録します。
#                  再開は外部のイベント源がChip8Cpu.resume_with_keyを呼び出すことで行われます。
def execute_wait_key(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x = decode_fields(op.opcode).x
    state.status = ExecutionStatus.AWAITING_KEY
    state.wait_register = x
    logger.debug("Waiting for key press into V%X", x)
