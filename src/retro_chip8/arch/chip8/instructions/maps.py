# src/retro_chip8/arch/chip8/instructions/maps.py
"""
オペコードと命令実装のマッピング定義。

デコードは2段階で行います。
1. 完全一致するオペコード（00E0, 00EE）
2. 上位ニブルによる外側テーブル。0x8, 0xE, 0xF 系は下位ニブル/下位バイトによる内側テーブルを持ちます。
"""
from typing import Callable, Dict, List, NamedTuple, Tuple

from . import alu
from . import control
from . import display
from . import keypad
from . import load
from .base import OpcodeFields, reg, imm8, addr12

# @intent:data_structure デコードテーブルの1エントリ（パターン、ニーモニック、オペランド整形関数）。
class OpcodeEntry(NamedTuple):
    pattern: str
    mnemonic: str
    format_operands: Callable[[OpcodeFields], List[str]]

def _none(f: OpcodeFields) -> List[str]:
    return []

def _nnn(f: OpcodeFields) -> List[str]:
    return [addr12(f.nnn)]

def _x(f: OpcodeFields) -> List[str]:
    return [reg(f.x)]

def _x_kk(f: OpcodeFields) -> List[str]:
    return [reg(f.x), imm8(f.kk)]

def _x_y(f: OpcodeFields) -> List[str]:
    return [reg(f.x), reg(f.y)]

def _x_y_n(f: OpcodeFields) -> List[str]:
    return [reg(f.x), reg(f.y), f"{f.n:X}"]

def _with(prefix: str = "", suffix: str = "") -> Callable[[OpcodeFields], List[str]]:
    """Vxの前後に固定オペランド（I, DT, [I] など）を付与する整形関数を返します。"""
    def formatter(f: OpcodeFields) -> List[str]:
        return [s for s in (prefix, reg(f.x), suffix) if s]
    return formatter

# @intent:map 完全一致で判定するオペコード。
FIXED_DECODE_MAP: Dict[int, OpcodeEntry] = {
    0x00E0: OpcodeEntry("00E0", "CLS", _none),
    0x00EE: OpcodeEntry("00EE", "RET", _none),
}

# @intent:map 上位ニブルからデコードエントリへの外側テーブル。
DECODE_MAP: Dict[int, OpcodeEntry] = {
    0x1: OpcodeEntry("1NNN", "JP", _nnn),
    0x2: OpcodeEntry("2NNN", "CALL", _nnn),
    0x3: OpcodeEntry("3XKK", "SE", _x_kk),
    0x4: OpcodeEntry("4XKK", "SNE", _x_kk),
    0x5: OpcodeEntry("5XY0", "SE", _x_y),
    0x6: OpcodeEntry("6XKK", "LD", _x_kk),
    0x7: OpcodeEntry("7XKK", "ADD", _x_kk),
    0x9: OpcodeEntry("9XY0", "SNE", _x_y),
    0xA: OpcodeEntry("ANNN", "LD", lambda f: ["I", addr12(f.nnn)]),
    0xB: OpcodeEntry("BNNN", "JP", lambda f: ["V0", addr12(f.nnn)]),
    0xC: OpcodeEntry("CXKK", "RND", _x_kk),
    0xD: OpcodeEntry("DXYN", "DRW", _x_y_n),
}

# @intent:map 二次オペレーションコードを持つ命令ファミリの内側テーブル。
#            値は (二次コードを取り出すマスク, 二次コード -> エントリ) の組です。
FAMILY_DECODE_MAP: Dict[int, Tuple[int, Dict[int, OpcodeEntry]]] = {
    0x8: (0x000F, {
        0x0: OpcodeEntry("8XY0", "LD", _x_y),
        0x1: OpcodeEntry("8XY1", "OR", _x_y),
        0x2: OpcodeEntry("8XY2", "AND", _x_y),
        0x3: OpcodeEntry("8XY3", "XOR", _x_y),
        0x4: OpcodeEntry("8XY4", "ADD", _x_y),
        0x5: OpcodeEntry("8XY5", "SUB", _x_y),
        0x6: OpcodeEntry("8XY6", "SHR", _x),
        0x7: OpcodeEntry("8XY7", "SUBN", _x_y),
        0xE: OpcodeEntry("8XYE", "SHL", _x),
    }),
    0xE: (0x00FF, {
        0x9E: OpcodeEntry("EX9E", "SKP", _x),
        0xA1: OpcodeEntry("EXA1", "SKNP", _x),
    }),
    0xF: (0x00FF, {
        0x07: OpcodeEntry("FX07", "LD", _with(suffix="DT")),
        0x0A: OpcodeEntry("FX0A", "LD", _with(suffix="K")),
        0x15: OpcodeEntry("FX15", "LD", _with(prefix="DT")),
        0x18: OpcodeEntry("FX18", "LD", _with(prefix="ST")),
        0x1E: OpcodeEntry("FX1E", "ADD", _with(prefix="I")),
        0x29: OpcodeEntry("FX29", "LD", _with(prefix="F")),
        0x33: OpcodeEntry("FX33", "LD", _with(prefix="B")),
        0x55: OpcodeEntry("FX55", "LD", _with(prefix="[I]")),
        0x65: OpcodeEntry("FX65", "LD", _with(suffix="[I]")),
    }),
}

# @intent:map パターンから実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Display
    "00E0": display.execute_cls,
    "DXYN": display.execute_drw,

    # Control
    "00EE": control.execute_ret,
    "1NNN": control.execute_jp,
    "2NNN": control.execute_call,
    "BNNN": control.execute_jp_v0,
    "3XKK": control.execute_se_imm,
    "4XKK": control.execute_sne_imm,
    "5XY0": control.execute_se_reg,
    "9XY0": control.execute_sne_reg,

    # Load/Store
    "6XKK": load.execute_ld_imm,
    "ANNN": load.execute_ld_i,
    "FX07": load.execute_ld_vx_dt,
    "FX15": load.execute_ld_dt_vx,
    "FX18": load.execute_ld_st_vx,
    "FX1E": load.execute_add_i,
    "FX29": load.execute_ld_f,
    "FX33": load.execute_ld_b,
    "FX55": load.execute_store_regs,
    "FX65": load.execute_load_regs,

    # ALU
    "7XKK": alu.execute_add_imm,
    "8XY0": alu.execute_ld_reg,
    "8XY1": alu.execute_or,
    "8XY2": alu.execute_and,
    "8XY3": alu.execute_xor,
    "8XY4": alu.execute_add_reg,
    "8XY5": alu.execute_sub,
    "8XY6": alu.execute_shr,
    "8XY7": alu.execute_subn,
    "8XYE": alu.execute_shl,
    "CXKK": alu.execute_rnd,

    # Keypad
    "EX9E": keypad.execute_skp,
    "EXA1": keypad.execute_sknp,
    "FX0A": keypad.execute_wait_key,
}
