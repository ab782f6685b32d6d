# src/retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8命令実装用の共通ユーティリティ。
オペランドフィールドの抽出と、スタック操作などの共通処理を提供します。
"""
from typing import List, NamedTuple

from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState, STACK_SIZE

# @intent:constant 1命令のバイト長。スキップ命令はこの幅だけ追加でPCを進めます。
INSTRUCTION_WIDTH = 2

# @intent:data_structure 16ビットオペコードから抽出したオペランドフィールド。
class OpcodeFields(NamedTuple):
    nnn: int  # 12bit アドレス
    x: int    # 4bit レジスタ番号 (bits 8-11)
    y: int    # 4bit レジスタ番号 (bits 4-7)
    kk: int   # 8bit 即値
    n: int    # 4bit 即値

# @intent:utility_function オペコードから全オペランドフィールドを抽出します。
def decode_fields(opcode: int) -> OpcodeFields:
    return OpcodeFields(
        nnn=opcode & 0x0FFF,
        x=(opcode >> 8) & 0xF,
        y=(opcode >> 4) & 0xF,
        kk=opcode & 0xFF,
        n=opcode & 0xF,
    )

# @intent:utility_function デコード結果のOperationを生成します。
def make_operation(opcode: int, pattern: str, mnemonic: str, operands: List[str]) -> Operation:
    return Operation(opcode=opcode, mnemonic=mnemonic, operands=operands, pattern=pattern, length=INSTRUCTION_WIDTH)

def reg(index: int) -> str:
    return f"V{index:X}"

def imm8(value: int) -> str:
    return f"#{value:02X}"

def addr12(value: int) -> str:
    return f"${value:03X}"

# @intent:utility_function 戻りアドレスをスタックに積みます。
# @intent:pre-condition sp < 16。満杯のスタックへのpushはプログラム側の不正としてIndexErrorを送出します。
def push(state: Chip8CpuState, address: int) -> None:
    if state.sp >= STACK_SIZE:
        raise IndexError(f"Stack overflow: cannot push {address:#05x} (sp={state.sp}).")
    state.stack[state.sp] = address & 0xFFFF
    state.sp += 1

# @intent:utility_function スタックから戻りアドレスを取り出します。
# @intent:pre-condition sp > 0。空のスタックからのpopはIndexErrorを送出します。
def pop(state: Chip8CpuState) -> int:
    if state.sp <= 0:
        raise IndexError("Stack underflow: pop on empty stack.")
    state.sp -= 1
    return state.stack[state.sp]

# @intent:utility_function 次の命令を読み飛ばします。
# @intent:rationale PCはCPU.stepで既に1命令分進められているため、ここでは1命令分だけ追加します。
def skip_next(state: Chip8CpuState) -> None:
    state.pc = (state.pc + INSTRUCTION_WIDTH) & 0xFFFF

def skip_if(state: Chip8CpuState, condition: bool) -> None:
    if condition:
        skip_next(state)
