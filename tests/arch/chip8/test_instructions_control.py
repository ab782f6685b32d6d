import unittest
from retro_chip8.transport.bus import Bus, RAM
from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.arch.chip8.instructions.base import push, pop

class TestChip8ControlInstructions(unittest.TestCase):
    def setUp(self):
        self.bus = Bus()
        self.bus.register_device(0x000, 0xFFF, RAM(0x1000))
        self.cpu = Chip8Cpu(self.bus)
        self.state = self.cpu.get_state()

    def _execute(self, opcode, current_pc=0x300):
        self.bus.write(current_pc, opcode >> 8)
        self.bus.write(current_pc + 1, opcode & 0xFF)
        self.state.pc = current_pc
        self.cpu.step()

    def test_jp(self):
        self._execute(0x1ABC)
        self.assertEqual(self.state.pc, 0xABC)

    def test_call_pushes_return_address(self):
        self._execute(0x2ABC, current_pc=0x300)
        self.assertEqual(self.state.pc, 0xABC)
        self.assertEqual(self.state.sp, 1)
        # 戻りアドレスはCALLの次の命令
        self.assertEqual(self.state.stack[0], 0x302)

    def test_call_ret(self):
        self._execute(0x2400, current_pc=0x300)
        self._execute(0x00EE, current_pc=0x400)
        self.assertEqual(self.state.pc, 0x302)
        self.assertEqual(self.state.sp, 0)

    def test_ret_on_empty_stack_raises(self):
        with self.assertRaises(IndexError):
            self._execute(0x00EE)

    def test_call_overflow_raises(self):
        self.state.sp = 16
        with self.assertRaises(IndexError):
            self._execute(0x2400)

    def test_jp_v0(self):
        self.state.v[0] = 0x10
        self._execute(0xB300)
        self.assertEqual(self.state.pc, 0x310)

    def test_jp_v0_to_odd_address_fails_on_next_fetch(self):
        self.state.v[0] = 0x01
        self._execute(0xB300)
        self.assertEqual(self.state.pc, 0x301)
        with self.assertRaises(ValueError):
            self.cpu.step()

    def test_se_imm(self):
        self.state.v[1] = 0x42
        self._execute(0x3142)
        self.assertEqual(self.state.pc, 0x304)
        self._execute(0x3143)
        self.assertEqual(self.state.pc, 0x302)

    def test_sne_imm_is_negation_of_se(self):
        for value in (0x41, 0x42):
            self.state.v[1] = value
            self._execute(0x3142)
            se_pc = self.state.pc
            self._execute(0x4142)
            sne_pc = self.state.pc
            self.assertEqual({se_pc, sne_pc}, {0x302, 0x304})

    def test_se_reg(self):
        self.state.v[1], self.state.v[2] = 5, 5
        self._execute(0x5120)
        self.assertEqual(self.state.pc, 0x304)
        self.state.v[2] = 6
        self._execute(0x5120)
        self.assertEqual(self.state.pc, 0x302)

    def test_sne_reg(self):
        self.state.v[1], self.state.v[2] = 5, 6
        self._execute(0x9120)
        self.assertEqual(self.state.pc, 0x304)
        self.state.v[2] = 5
        self._execute(0x9120)
        self.assertEqual(self.state.pc, 0x302)

class TestChip8Stack(unittest.TestCase):
    def setUp(self):
        bus = Bus()
        bus.register_device(0x000, 0xFFF, RAM(0x1000))
        self.state = Chip8Cpu(bus).get_state()

    def test_pop_returns_reverse_push_order(self):
        values = [0x200 + i * 2 for i in range(16)]
        for value in values:
            push(self.state, value)
        self.assertEqual(self.state.sp, 16)
        popped = [pop(self.state) for _ in values]
        self.assertEqual(popped, list(reversed(values)))
        self.assertEqual(self.state.sp, 0)

    def test_push_on_full_stack_raises(self):
        for i in range(16):
            push(self.state, i)
        with self.assertRaises(IndexError):
            push(self.state, 0x123)
        self.assertEqual(self.state.sp, 16)

    def test_pop_on_empty_stack_raises(self):
        with self.assertRaises(IndexError):
            pop(self.state)
        self.assertEqual(self.state.sp, 0)

if __name__ == '__main__':
    unittest.main()
