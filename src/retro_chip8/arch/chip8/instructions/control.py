# src/retro_chip8/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import decode_fields, push, pop, skip_if

# --- RET (00EE) ---
# @intent:responsibility サブルーチンから復帰します。CALL時に積んだ「次の命令」のアドレスへ戻ります。
def execute_ret(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.pc = pop(state)

# --- JP addr (1NNN) ---
def execute_jp(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.pc = decode_fields(op.opcode).nnn

# --- CALL addr (2NNN) ---
# @intent:responsibility 戻りアドレスをスタックに積み、サブルーチンへジャンプします。
def execute_call(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    # state.pc is already pointing to the NEXT instruction (updated in CPU.step)
    push(state, state.pc)
    state.pc = decode_fields(op.opcode).nnn

# --- JP V0, addr (BNNN) ---
def execute_jp_v0(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.pc = state.v[0] + decode_fields(op.opcode).nnn

# --- SE Vx, byte (3XKK) ---
def execute_se_imm(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    f = decode_fields(op.opcode)
    skip_if(state, state.v[f.x] == f.kk)

# --- SNE Vx, byte (4XKK) ---
def execute_sne_imm(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    f = decode_fields(op.opcode)
    skip_if(state, state.v[f.x] != f.kk)

# --- SE Vx, Vy (5XY0) ---
def execute_se_reg(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    f = decode_fields(op.opcode)
    skip_if(state, state.v[f.x] == state.v[f.y])

# --- SNE Vx, Vy (9XY0) ---
def execute_sne_reg(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    f = decode_fields(op.opcode)
    skip_if(state, state.v[f.x] != state.v[f.y])
