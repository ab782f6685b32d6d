# src/retro_chip8/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。
加算・減算・シフトはVFをフラグとして書き換えます。論理演算と即値加算はVFに触れません。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import decode_fields

# --- ADD Vx, byte (7XKK) ---
# @intent:responsibility 即値を加算します。8ビットで折り返し、フラグは変化しません。
def execute_add_imm(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    f = decode_fields(op.opcode)
    state.v[f.x] = (state.v[f.x] + f.kk) & 0xFF

# --- LD Vx, Vy (8XY0) ---
def execute_ld_reg(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    f = decode_fields(op.opcode)
    state.v[f.x] = state.v[f.y]

# --- OR Vx, Vy (8XY1) ---
def execute_or(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    f = decode_fields(op.opcode)
    state.v[f.x] |= state.v[f.y]

# --- AND Vx, Vy (8XY2) ---
def execute_and(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    f = decode_fields(op.opcode)
    state.v[f.x] &= state.v[f.y]

# --- XOR Vx, Vy (8XY3) ---
def execute_xor(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    f = decode_fields(op.opcode)
    state.v[f.x] ^= state.v[f.y]

# --- ADD Vx, Vy (8XY4) ---
# @intent:responsibility レジスタ同士を加算し、結果の下位8ビットをVxへ、キャリーをVFへ格納します。
def execute_add_reg(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    f = decode_fields(op.opcode)
    res = state.v[f.x] + state.v[f.y]
    state.v[f.x] = res & 0xFF
    state.vf = 1 if res > 0xFF else 0

# --- SUB Vx, Vy (8XY5) ---
# @intent:responsibility Vx = Vx - Vy。VFは借りが発生した場合(Vy > Vx)に0、それ以外は1。
def execute_sub(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    f = decode_fields(op.opcode)
    vx, vy = state.v[f.x], state.v[f.y]
    state.v[f.x] = (vx - vy) & 0xFF
    state.vf = 0 if vy > vx else 1

# --- SHR Vx (8XY6) ---
# @intent:responsibility シフト前のVxの最下位ビットをVFへ格納し、その後Vxを右シフトします。
def execute_shr(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    f = decode_fields(op.opcode)
    vx = state.v[f.x]
    state.vf = vx & 0x01
    state.v[f.x] = vx >> 1

# --- SUBN Vx, Vy (8XY7) ---
# @intent:responsibility Vx = Vy - Vx。借りの判定はSUBとオペランドを入れ替えて行います。
def execute_subn(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    f = decode_fields(op.opcode)
    vx, vy = state.v[f.x], state.v[f.y]
    state.v[f.x] = (vy - vx) & 0xFF
    state.vf = 0 if vx > vy else 1

# --- SHL Vx (8XYE) ---
# @intent:responsibility シフト前のVxの最上位ビットをVFへ格納し、その後Vxを左シフトします。
def execute_shl(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    f = decode_fields(op.opcode)
    vx = state.v[f.x]
    state.vf = (vx >> 7) & 0x01
    state.v[f.x] = (vx << 1) & 0xFF

# --- RND Vx, byte (CXKK) ---
def execute_rnd(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    f = decode_fields(op.opcode)
    state.v[f.x] = state.rng.randint(0, 0xFF) & f.kk
