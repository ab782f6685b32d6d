from dataclasses import dataclass, field
from typing import Optional

@dataclass
class CpuInitialState:
    pc: int = 0x200
    i: int = 0x000
    registers: dict = field(default_factory=dict) # 例: {"v0": 1, "delay_timer": 10}

@dataclass
class SystemConfig:
    architecture: str = "CHIP8"
    memory_size: int = 0x1000
    strict_opcodes: bool = False # 未定義オペコードで例外を送出するかどうか
    rng_seed: Optional[int] = None
    program: Optional[str] = None # 0x200にロードするROMファイルのパス
    initial_state: CpuInitialState = field(default_factory=CpuInitialState)
