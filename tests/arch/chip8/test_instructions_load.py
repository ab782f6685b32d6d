# tests/arch/chip8/test_instructions_load.py
"""
ロード/ストア命令（タイマー、インデックスレジスタ、フォント、BCD、レジスタ転送）のテスト。
"""
import pytest

from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.fontset import FONTSET

@pytest.fixture
def cpu():
    bus = Bus()
    bus.register_device(0x000, 0xFFF, RAM(0x1000))
    return Chip8Cpu(bus)

def execute(cpu, opcode, current_pc=0x300):
    cpu._bus.write(current_pc, opcode >> 8)
    cpu._bus.write(current_pc + 1, opcode & 0xFF)
    cpu.get_state().pc = current_pc
    return cpu.step()

def test_ld_imm(cpu):
    execute(cpu, 0x6A42)
    assert cpu.get_state().v[0xA] == 0x42

def test_ld_i(cpu):
    execute(cpu, 0xA123)
    assert cpu.get_state().i == 0x123

def test_delay_timer_roundtrip(cpu):
    state = cpu.get_state()
    state.v[2] = 10
    execute(cpu, 0xF215) # LD DT, V2 -> その後のタイマー更新で9になる
    assert state.delay_timer == 9
    execute(cpu, 0xF307) # LD V3, DT
    assert state.v[3] == 9
    assert state.delay_timer == 8

def test_ld_st(cpu):
    state = cpu.get_state()
    state.v[2] = 3
    execute(cpu, 0xF218)
    assert state.sound_timer == 2
    assert cpu.is_sound_active()

def test_add_i_wraps_16bit_without_flag(cpu):
    state = cpu.get_state()
    state.i = 0xFFFF
    state.v[1] = 0x02
    state.vf = 0x33
    execute(cpu, 0xF11E)
    assert state.i == 0x0001
    assert state.vf == 0x33

def test_ld_f_points_at_glyph(cpu):
    state = cpu.get_state()
    state.v[4] = 0xA
    execute(cpu, 0xF429)
    assert state.i == 0xA * 5
    assert cpu.peek_memory(state.i, 5) == FONTSET[50:55]

def test_ld_f_out_of_range_raises(cpu):
    cpu.get_state().v[4] = 0x10
    with pytest.raises(ValueError):
        execute(cpu, 0xF429)

@pytest.mark.parametrize("value, digits", [
    (137, b"\x01\x03\x07"),
    (5, b"\x00\x00\x05"),
    (255, b"\x02\x05\x05"),
    (0, b"\x00\x00\x00"),
])
def test_ld_b(cpu, value, digits):
    state = cpu.get_state()
    state.v[7] = value
    state.i = 0x400
    execute(cpu, 0xF733)
    assert cpu.peek_memory(0x400, 3) == digits
    assert state.i == 0x400

def test_store_regs_is_inclusive(cpu):
    state = cpu.get_state()
    state.v[:] = list(range(1, 17))
    state.i = 0x500
    execute(cpu, 0xF355) # V0..V3
    assert cpu.peek_memory(0x500, 5) == b"\x01\x02\x03\x04\x00"
    assert state.i == 0x500

def test_load_regs_is_inclusive(cpu):
    state = cpu.get_state()
    cpu._bus.load_block(0x500, b"\x0A\x0B\x0C\x0D")
    state.i = 0x500
    execute(cpu, 0xF265) # V0..V2
    assert state.v[:4] == [0x0A, 0x0B, 0x0C, 0]
    assert state.i == 0x500

def test_store_regs_past_memory_raises(cpu):
    cpu.get_state().i = 0xFFE
    with pytest.raises(IndexError):
        execute(cpu, 0xF355)
