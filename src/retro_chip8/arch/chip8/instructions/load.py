# src/retro_chip8/arch/chip8/instructions/load.py
"""
ロード/ストア命令（レジスタ、インデックスレジスタ、タイマー、メモリ転送）の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.fontset import glyph_address
from .base import decode_fields

# --- LD Vx, byte (6XKK) ---
def execute_ld_imm(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    f = decode_fields(op.opcode)
    state.v[f.x] = f.kk

# --- LD I, addr (ANNN) ---
def execute_ld_i(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.i = decode_fields(op.opcode).nnn

# --- LD Vx, DT (FX07) ---
def execute_ld_vx_dt(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.v[decode_fields(op.opcode).x] = state.delay_timer

# --- LD DT, Vx (FX15) ---
def execute_ld_dt_vx(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.delay_timer = state.v[decode_fields(op.opcode).x]

# --- LD ST, Vx (FX18) ---
def execute_ld_st_vx(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.sound_timer = state.v[decode_fields(op.opcode).x]

# --- ADD I, Vx (FX1E) ---
# @intent:responsibility Iに加算します。16ビットで折り返し、VFは変化しません。
def execute_add_i(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.i = (state.i + state.v[decode_fields(op.opcode).x]) & 0xFFFF

# --- LD F, Vx (FX29) ---
# @intent:responsibility Vxが示す16進数字のフォントグリフのアドレスをIに設定します。
# @intent:pre-condition Vx <= 0xF。範囲外はValueErrorを送出します。
def execute_ld_f(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    state.i = glyph_address(state.v[decode_fields(op.opcode).x])

# --- LD B, Vx (FX33) ---
# @intent:responsibility Vxの値を10進数の百・十・一の位に分解し、I, I+1, I+2 に格納します。
def execute_ld_b(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    value = state.v[decode_fields(op.opcode).x]
    bus.write(state.i, value // 100)
    bus.write(state.i + 1, (value // 10) % 10)
    bus.write(state.i + 2, value % 10)

# --- LD [I], Vx (FX55) ---
# @intent:responsibility V0からVxまで（Vxを含む）をメモリのIから順に格納します。Iは変化しません。
def execute_store_regs(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x = decode_fields(op.opcode).x
    for index in range(x + 1):
        bus.write(state.i + index, state.v[index])

# --- LD Vx, [I] (FX65) ---
# @intent:responsibility メモリのIから順にV0からVxまで（Vxを含む）を読み込みます。Iは変化しません。
def execute_load_regs(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    x = decode_fields(op.opcode).x
    for index in range(x + 1):
        state.v[index] = bus.read(state.i + index)
