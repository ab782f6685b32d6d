# retro_chip8/loader/loader.py
"""
ROMローダーモジュール。
CHIP-8のプログラムイメージ（生のバイナリ）を0x200からメモリへロードします。
"""
import logging
from pathlib import Path
from typing import Union

from retro_chip8.transport.bus import Bus
from retro_chip8.arch.chip8.state import MEMORY_SIZE, PROGRAM_START

logger = logging.getLogger(__name__)

# @intent:constant ロード可能なプログラムの最大サイズ（0x200〜0xFFFに収まるバイト数）。
MAX_PROGRAM_SIZE = MEMORY_SIZE - PROGRAM_START

class RomLoader:
    """
    生バイナリ形式のCHIP-8プログラムをバスにロードするローダー。
    失敗はブール値で報告し、その場合メモリは一切変更しません。
    """
    # @intent:responsibility バイト列を0x200からロードします。
    # @intent:return 成功した場合True。サイズ超過の場合はFalse（部分的なロードは行わない）。
    def load_bytes(self, data: bytes, bus: Bus) -> bool:
        if len(data) > MAX_PROGRAM_SIZE:
            logger.warning(
                "Program of %d bytes exceeds the %d bytes available at %#05x",
                len(data), MAX_PROGRAM_SIZE, PROGRAM_START
            )
            return False
        bus.load_block(PROGRAM_START, data)
        logger.info("Loaded %d bytes at %#05x", len(data), PROGRAM_START)
        return True

    # @intent:responsibility ファイルからプログラムを読み込み、0x200からロードします。
    # @intent:return 成功した場合True。ファイルが存在しない・読めない・大きすぎる場合はFalse。
    def load_file(self, file_path: Union[str, Path], bus: Bus) -> bool:
        path = Path(file_path)
        if not path.is_file():
            logger.warning("Program file %s does not exist", path)
            return False
        try:
            data = path.read_bytes()
        except OSError as e:
            logger.warning("Failed to read program file %s: %s", path, e)
            return False
        return self.load_bytes(data, bus)
