# src/retro_chip8/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from typing import Optional

from retro_chip8.transport.bus import Bus
from retro_chip8.core.snapshot import Operation
from retro_chip8.arch.chip8.state import Chip8CpuState
from .base import decode_fields, make_operation
from .maps import DECODE_MAP, EXECUTE_MAP, FAMILY_DECODE_MAP, FIXED_DECODE_MAP, OpcodeEntry

# @intent:constant どのパターンにも一致しないオペコードに付与するパターン名。
UNKNOWN_PATTERN = "UNKNOWN"

def _lookup(opcode: int) -> Optional[OpcodeEntry]:
    entry = FIXED_DECODE_MAP.get(opcode)
    if entry:
        return entry

    family = (opcode >> 12) & 0xF
    if family in FAMILY_DECODE_MAP:
        mask, inner = FAMILY_DECODE_MAP[family]
        return inner.get(opcode & mask)
    return DECODE_MAP.get(family)

# @intent:responsibility 16ビットオペコードをデコードし、Operationを返します。
def decode_opcode(opcode: int) -> Operation:
    """
    CHIP-8のオペコードをデコードし、Operationオブジェクトを返します。
    未定義のオペコードはパターン"UNKNOWN"のOperationになります。
    """
    entry = _lookup(opcode)
    if entry is None:
        return make_operation(opcode, UNKNOWN_PATTERN, "UNKNOWN", [f"${opcode:04X}"])
    return make_operation(opcode, entry.pattern, entry.mnemonic, entry.format_operands(decode_fields(opcode)))

# @intent:responsibility デコードされたCHIP-8命令を実行します。
# @intent:return 実行関数が見つかった場合True、未定義命令の場合False。
def execute_instruction(operation: Operation, state: Chip8CpuState, bus: Bus) -> bool:
    executor = EXECUTE_MAP.get(operation.pattern)
    if executor is None:
        return False
    executor(state, bus, operation)
    return True
