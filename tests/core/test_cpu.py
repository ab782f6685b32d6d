# tests/core/test_cpu.py
"""
retro_chip8.core.cpuモジュールの単体テスト。
"""
import pytest

from retro_chip8.core.state import CpuState
from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.snapshot import Snapshot, Operation
from retro_chip8.common.types import ExecutionStatus
from retro_chip8.transport.bus import Bus, RAM, BusAccessType

# @intent:test_suite CPUの状態管理と抽象CPUの命令サイクル（Template Method）を検証します。

class DummyCpu(AbstractCpu):
    """1バイト命令のNOPだけを持つテスト用CPU。実行時に0x0020へ0xFFを書き込みます。"""
    def __init__(self, bus: Bus, initial_pc: int = 0x0000):
        self._initial_pc = initial_pc
        self.post_execute_calls = 0
        super().__init__(bus)

    def _create_initial_state(self) -> CpuState:
        return CpuState(pc=self._initial_pc, sp=0x00F0)

    def _fetch(self) -> int:
        return self._bus.read(self._state.pc)

    def _decode(self, opcode: int) -> Operation:
        return Operation(opcode=opcode, mnemonic="NOP", pattern="00", length=1)

    def _execute(self, operation: Operation) -> None:
        self._bus.write(0x0020, 0xFF)

    def _post_execute(self, operation: Operation) -> None:
        self.post_execute_calls += 1

    def get_register_map(self):
        return {"PC": self._state.pc, "SP": self._state.sp}

class TestCpuState:
    def test_cpu_state_init_default(self):
        state = CpuState()
        assert state.pc == 0x0000
        assert state.sp == 0x0000

    def test_cpu_state_mutability(self):
        state = CpuState()
        state.pc = 0x1000
        assert state.pc == 0x1000

class TestAbstractCpu:
    @pytest.fixture
    def setup_cpu(self):
        bus = Bus()
        ram = RAM(256)
        bus.register_device(0x0000, 0x00FF, ram)
        cpu = DummyCpu(bus, initial_pc=0x0010)
        return cpu, bus, ram

    def test_abstract_cpu_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            AbstractCpu(Bus())

    def test_step_advances_pc_and_runs_hooks(self, setup_cpu):
        cpu, _, ram = setup_cpu
        snapshot = cpu.step()

        assert isinstance(snapshot, Snapshot)
        assert cpu.get_state().pc == 0x0011
        assert ram.read(0x0020) == 0xFF
        assert cpu.post_execute_calls == 1
        assert snapshot.metadata.cycle_count == 1
        assert snapshot.metadata.address == 0x0010
        assert snapshot.status is ExecutionStatus.RUNNING

    def test_snapshot_contains_only_this_cycle_activity(self, setup_cpu):
        cpu, bus, _ = setup_cpu
        bus.write(0x0050, 0x01) # 前サイクル以前のアクセスは破棄される
        snapshot = cpu.step()

        assert [a.access_type for a in snapshot.bus_activity] == [BusAccessType.READ, BusAccessType.WRITE]
        assert snapshot.bus_activity[1].address == 0x0020

    def test_reset_restores_initial_state(self, setup_cpu):
        cpu, _, _ = setup_cpu
        cpu.step()
        cpu.step()
        cpu.reset()
        assert cpu.get_state().pc == 0x0010
        assert cpu.get_cycle_count() == 0
