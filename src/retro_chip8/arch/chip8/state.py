# src/retro_chip8/arch/chip8/state.py
"""
CHIP-8 仮想マシン固有の状態定義。
"""
import random
from dataclasses import dataclass, field
from typing import List, Optional

from retro_chip8.core.state import CpuState
from retro_chip8.common.types import ExecutionStatus, Framebuffer

# @intent:constant CHIP-8のハードウェア構成を定義します。
MEMORY_SIZE = 0x1000
PROGRAM_START = 0x200
REGISTER_COUNT = 16
STACK_SIZE = 16
KEY_COUNT = 16
SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32
FLAG_REGISTER = 0xF

def _blank_framebuffer() -> Framebuffer:
    return [[0] * SCREEN_WIDTH for _ in range(SCREEN_HEIGHT)]

# @intent:responsibility CHIP-8の全てのレジスタ、スタック、画面、キーパッド、タイマーの状態を保持します。
# @intent:rationale メモリ本体はBus上のRAMデバイスが保持し、この状態オブジェクトには含めません。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8の状態を保持するデータクラス。
    VFはフラグレジスタとして命令側が暗黙的に書き換えるため、汎用のアキュムレータとして扱わないこと。
    """
    pc: int = PROGRAM_START
    i: int = 0x0000            # Index Register
    delay_timer: int = 0
    sound_timer: int = 0
    v: List[int] = field(default_factory=lambda: [0] * REGISTER_COUNT)
    stack: List[int] = field(default_factory=lambda: [0] * STACK_SIZE)
    gfx: Framebuffer = field(default_factory=_blank_framebuffer)
    key: List[bool] = field(default_factory=lambda: [False] * KEY_COUNT)
    draw_flag: bool = False    # 前回の描画以降にフレームバッファが変更されたか
    status: ExecutionStatus = ExecutionStatus.RUNNING
    wait_register: Optional[int] = None # キー待ち中に結果を格納するレジスタ番号
    rng: random.Random = field(default_factory=random.Random, repr=False, compare=False)

    @property
    def vf(self) -> int:
        return self.v[FLAG_REGISTER]

    @vf.setter
    def vf(self, value: int) -> None:
        self.v[FLAG_REGISTER] = value & 0xFF

    @property
    def awaiting_key(self) -> bool:
        return self.status is ExecutionStatus.AWAITING_KEY
