# tests/transport/test_bus.py
"""
retro_chip8.transport.busモジュールの単体テスト。
"""
import pytest

from retro_chip8.transport.bus import Bus, RAM, BusAccess, BusAccessType

# @intent:test_suite バスのデバイス登録、読み書き、アクティビティログを検証します。

@pytest.fixture
def bus():
    bus = Bus()
    bus.register_device(0x000, 0xFFF, RAM(0x1000))
    return bus

def test_read_write_roundtrip(bus):
    bus.write(0x200, 0xAB)
    assert bus.read(0x200) == 0xAB

def test_activity_log_records_reads_and_writes(bus):
    bus.write(0x300, 0x12)
    bus.read(0x300)
    log = bus.get_and_clear_activity_log()
    assert log == [
        BusAccess(0x300, 0x12, BusAccessType.WRITE),
        BusAccess(0x300, 0x12, BusAccessType.READ),
    ]
    assert bus.get_and_clear_activity_log() == []

def test_peek_does_not_log(bus):
    bus.write(0x10, 0x55)
    bus.get_and_clear_activity_log()
    assert bus.peek(0x10) == 0x55
    assert bus.get_and_clear_activity_log() == []

def test_load_block_writes_without_logging(bus):
    bus.load_block(0x200, b"\x01\x02\x03")
    assert [bus.peek(0x200 + i) for i in range(3)] == [1, 2, 3]
    assert bus.get_and_clear_activity_log() == []

def test_load_block_past_end_raises(bus):
    with pytest.raises(IndexError):
        bus.load_block(0xFFE, b"\x01\x02\x03")

def test_address_limit(bus):
    assert bus.get_address_limit() == 0x1000
    assert Bus().get_address_limit() == 0
