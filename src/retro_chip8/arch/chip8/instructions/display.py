# src/retro_chip8/arch/chip8/instructions/display.py
"""
画面命令（消去、スプライト描画）の実装。
"""
from retro_chip8.core.snapshot import Operation
from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import Chip8CpuState, SCREEN_WIDTH, SCREEN_HEIGHT
from .base import decode_fields

# --- CLS (00E0) ---
def execute_cls(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    for row in state.gfx:
        row[:] = [0] * SCREEN_WIDTH
    state.draw_flag = True

# --- DRW Vx, Vy, nibble (DXYN) ---
# @intent:responsibility メモリのIから読んだnバイトのスプライトを(Vx, Vy)にXOR合成し、衝突をVFに設定します。
# @intent:rationale 画面外にはみ出したピクセルは折り返さずに切り捨てます（クリップ）。
def execute_drw(state: Chip8CpuState, bus: Bus, op: Operation) -> None:
    f = decode_fields(op.opcode)
    origin_x = state.v[f.x]
    origin_y = state.v[f.y]
    collision = 0

    for row in range(f.n):
        sprite_byte = bus.read(state.i + row)
        py = origin_y + row
        if py >= SCREEN_HEIGHT:
            continue
        for col in range(8):
            if not sprite_byte & (0x80 >> col):
                continue
            px = origin_x + col
            if px >= SCREEN_WIDTH:
                continue
            if state.gfx[py][px]:
                collision = 1
            state.gfx[py][px] ^= 1

    state.vf = collision
    state.draw_flag = True
