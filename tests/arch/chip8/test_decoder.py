# tests/arch/chip8/test_decoder.py
"""
CHIP-8命令デコーダ（フィールド抽出と2段階ディスパッチ）の単体テスト。
"""
import pytest

from retro_chip8.arch.chip8.instructions import decode_opcode, UNKNOWN_PATTERN
from retro_chip8.arch.chip8.instructions.base import decode_fields
from retro_chip8.arch.chip8.instructions.maps import EXECUTE_MAP

def test_decode_fields():
    f = decode_fields(0xD12F)
    assert f.nnn == 0x12F
    assert f.x == 0x1
    assert f.y == 0x2
    assert f.kk == 0x2F
    assert f.n == 0xF

@pytest.mark.parametrize("opcode, pattern, text", [
    (0x00E0, "00E0", "CLS"),
    (0x00EE, "00EE", "RET"),
    (0x1234, "1NNN", "JP $234"),
    (0x2ABC, "2NNN", "CALL $ABC"),
    (0x3A05, "3XKK", "SE VA, #05"),
    (0x4A05, "4XKK", "SNE VA, #05"),
    (0x5120, "5XY0", "SE V1, V2"),
    (0x6F10, "6XKK", "LD VF, #10"),
    (0x7001, "7XKK", "ADD V0, #01"),
    (0x8120, "8XY0", "LD V1, V2"),
    (0x8124, "8XY4", "ADD V1, V2"),
    (0x8126, "8XY6", "SHR V1"),
    (0x812E, "8XYE", "SHL V1"),
    (0x9120, "9XY0", "SNE V1, V2"),
    (0xA300, "ANNN", "LD I, $300"),
    (0xB300, "BNNN", "JP V0, $300"),
    (0xC1FF, "CXKK", "RND V1, #FF"),
    (0xD125, "DXYN", "DRW V1, V2, 5"),
    (0xE39E, "EX9E", "SKP V3"),
    (0xE3A1, "EXA1", "SKNP V3"),
    (0xF307, "FX07", "LD V3, DT"),
    (0xF30A, "FX0A", "LD V3, K"),
    (0xF315, "FX15", "LD DT, V3"),
    (0xF318, "FX18", "LD ST, V3"),
    (0xF31E, "FX1E", "ADD I, V3"),
    (0xF329, "FX29", "LD F, V3"),
    (0xF333, "FX33", "LD B, V3"),
    (0xF355, "FX55", "LD [I], V3"),
    (0xF365, "FX65", "LD V3, [I]"),
])
def test_decode_known_opcodes(opcode, pattern, text):
    op = decode_opcode(opcode)
    assert op.pattern == pattern
    assert op.to_text() == text
    assert op.length == 2
    assert pattern in EXECUTE_MAP

@pytest.mark.parametrize("opcode", [0x0000, 0x0123, 0x800F, 0x8128, 0xE000, 0xE19F, 0xF0FF, 0xF066])
def test_decode_unknown_opcodes(opcode):
    op = decode_opcode(opcode)
    assert op.pattern == UNKNOWN_PATTERN
    assert op.mnemonic == "UNKNOWN"
    assert op.operands == [f"${opcode:04X}"]

def test_outer_families_ignore_low_nibble():
    # 5XY_ / 9XY_ は上位ニブルのみでディスパッチする
    assert decode_opcode(0x5121).pattern == "5XY0"
    assert decode_opcode(0x912F).pattern == "9XY0"

def test_opcode_hex():
    assert decode_opcode(0x00E0).opcode_hex == "00E0"
