from typing import Tuple
from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.state import MEMORY_SIZE, STACK_SIZE
from retro_chip8.loader.loader import RomLoader
from .models import SystemConfig, CpuInitialState

# @intent:responsibility システム構成（Config）に基づいて、Bus、RAM、CPUを生成・接続し、初期状態を適用します。
class SystemBuilder:
    def build_system(self, config: SystemConfig) -> Tuple[Chip8Cpu, Bus]:
        if config.architecture != "CHIP8":
            raise ValueError(f"Unsupported architecture: {config.architecture}")
        if config.memory_size != MEMORY_SIZE:
            raise ValueError(f"CHIP-8 requires {MEMORY_SIZE:#06x} bytes of memory, got {config.memory_size:#06x}")

        bus = Bus()
        bus.register_device(0x000, config.memory_size - 1, RAM(config.memory_size))

        cpu = Chip8Cpu(bus, strict_opcodes=config.strict_opcodes, rng_seed=config.rng_seed)

        if config.program is not None:
            if not RomLoader().load_file(config.program, bus):
                raise ValueError(f"Failed to load program: {config.program}")

        # 初期状態の適用
        self.apply_initial_state(cpu, config.initial_state)

        return cpu, bus

    # @intent:responsibility Configで定義された初期状態をCPUに適用します。
    # @intent:rationale レジスタ名は "v0"〜"vf" を汎用レジスタ、それ以外を状態の属性名として解釈します。
    # @intent:pre-condition 各値はマシンの表現範囲内であること。範囲外はValueErrorを送出します。
    def apply_initial_state(self, cpu: Chip8Cpu, config_state: CpuInitialState) -> None:
        """
        CPUをリセットし、Configから指定された初期値を適用します。
        """
        cpu.reset()
        state = cpu.get_state()
        state.pc = self._check_range("pc", config_state.pc, MEMORY_SIZE - 1)
        state.i = self._check_range("i", config_state.i, MEMORY_SIZE - 1)

        for reg_name, value in config_state.registers.items():
            if len(reg_name) == 2 and reg_name[0] == "v" and reg_name[1] in "0123456789abcdef":
                state.v[int(reg_name[1], 16)] = self._check_range(reg_name, value, 0xFF)
            elif reg_name in ("delay_timer", "sound_timer"):
                setattr(state, reg_name, self._check_range(reg_name, value, 0xFF))
            elif reg_name == "sp":
                state.sp = self._check_range(reg_name, value, STACK_SIZE)
            else:
                raise ValueError(f"Unknown register: {reg_name}")

    def _check_range(self, name: str, value: int, maximum: int) -> int:
        if not 0 <= value <= maximum:
            raise ValueError(f"Initial value for {name} out of range 0..{maximum:#x}: {value:#x}")
        return value
