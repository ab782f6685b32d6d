# src/retro_chip8/arch/chip8/fontset.py
"""
CHIP-8 組み込みフォント（16進数字 0〜F）のグリフデータ。
"""

# @intent:constant 各グリフは5バイト（8x5ピクセル、上位4ビットのみ使用）で構成されます。
GLYPH_SIZE = 5

# @intent:constant フォントテーブルを配置するメモリ上の先頭アドレス。
FONT_START_ADDRESS = 0x000

FONTSET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])

# @intent:utility_function 指定した数字のグリフ先頭アドレスを返します。
def glyph_address(digit: int) -> int:
    if not 0 <= digit <= 0xF:
        raise ValueError(f"Font digit {digit:#x} out of range (0x0-0xF).")
    return FONT_START_ADDRESS + digit * GLYPH_SIZE
