"""Tests for ALU operations (8xxx)."""

import pytest
from chip8vm import execute


def with_registers(state, **registers):
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


class TestBasicALU:
    """Test basic ALU operations."""

    def test_alu_set_basic(self, fresh_state):
        """8XY0 - Set VX = VY."""
        state = with_registers(fresh_state, V1=0x42, V2=0x99)

        state = execute(state, 0x8120)  # V1 = V2

        assert state.V[1] == 0x99
        assert state.V[2] == 0x99

    def test_alu_or_basic(self, fresh_state):
        """8XY1 - OR operation."""
        state = with_registers(fresh_state, V1=0xF0, V2=0x0F)

        state = execute(state, 0x8121)  # V1 |= V2

        assert state.V[1] == 0xFF

    def test_alu_and_basic(self, fresh_state):
        """8XY2 - AND operation."""
        state = with_registers(fresh_state, V1=0xF0, V2=0xF1)

        state = execute(state, 0x8122)  # V1 &= V2

        assert state.V[1] == 0xF0

    def test_alu_xor_basic(self, fresh_state):
        """8XY3 - XOR operation."""
        state = with_registers(fresh_state, V1=0xFF, V2=0xF0)

        state = execute(state, 0x8123)  # V1 ^= V2

        assert state.V[1] == 0x0F

    def test_logic_ops_leave_flag_alone(self, fresh_state):
        """8XY0-8XY3 do not touch VF."""
        for opcode in [0x8120, 0x8121, 0x8122, 0x8123]:
            state = with_registers(fresh_state, V1=0xAA, V2=0x55, VF=0x07)
            state = execute(state, opcode)
            assert state.V[15] == 0x07, f"{opcode:04X} changed VF"


class TestALUArithmetic:
    """Test arithmetic ALU operations."""

    def test_alu_add_no_carry(self, fresh_state):
        """8XY4 - Add without carry."""
        state = with_registers(fresh_state, V1=0x10, V2=0x20)

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == 0x30
        assert state.V[15] == 0

    def test_alu_add_with_carry(self, fresh_state):
        """8XY4 - 200 + 100 wraps to 44 with carry."""
        state = with_registers(fresh_state, V1=200, V2=100)

        state = execute(state, 0x8124)  # V1 += V2

        assert state.V[1] == 44  # 300 mod 256
        assert state.V[15] == 1

    def test_alu_add_exactly_255(self, fresh_state):
        """8XY4 - A sum of 255 does not carry."""
        state = with_registers(fresh_state, V1=0xF0, V2=0x0F, VF=1)

        state = execute(state, 0x8124)

        assert state.V[1] == 0xFF
        assert state.V[15] == 0

    def test_alu_sub_xy_no_borrow(self, fresh_state):
        """8XY5 - Subtract VX - VY, no borrow."""
        state = with_registers(fresh_state, V1=0x30, V2=0x10)

        state = execute(state, 0x8125)  # V1 -= V2

        assert state.V[1] == 0x20
        assert state.V[15] == 1  # No borrow (VX >= VY)

    def test_alu_sub_xy_with_borrow(self, fresh_state):
        """8XY5 - Subtract a larger value from a smaller one."""
        state = with_registers(fresh_state, V3=0x10, V4=0x30)

        state = execute(state, 0x8345)  # V3 -= V4

        assert state.V[3] == 0xE0  # 16 - 48 = -32 → 224
        assert state.V[15] == 0  # Borrow (VX < VY)

    def test_alu_sub_xy_equal(self, fresh_state):
        """8XY5 - Equal operands do not borrow."""
        state = with_registers(fresh_state, V1=0x56)

        state = execute(state, 0x8115)  # V1 -= V1

        assert state.V[1] == 0
        assert state.V[15] == 1

    def test_alu_sub_yx_no_borrow(self, fresh_state):
        """8XY7 - Subtract VY - VX, no borrow."""
        state = with_registers(fresh_state, V1=0x10, V2=0x30)

        state = execute(state, 0x8127)  # V1 = V2 - V1

        assert state.V[1] == 0x20  # 48 - 16 = 32
        assert state.V[15] == 1  # No borrow (VY >= VX)

    def test_alu_sub_yx_with_borrow(self, fresh_state):
        """8XY7 - Borrow when VY < VX."""
        state = with_registers(fresh_state, V1=0x30, V2=0x10)

        state = execute(state, 0x8127)  # V1 = V2 - V1

        assert state.V[1] == 0xE0
        assert state.V[15] == 0


class TestALUShifts:
    """Test shift operations."""

    def test_shift_right_even(self, fresh_state):
        """8XY6 - Shift right, even number."""
        state = with_registers(fresh_state, V1=0x04, V2=0xFF)  # V2 ignored

        state = execute(state, 0x8126)  # V1 >>= 1

        assert state.V[1] == 0x02
        assert state.V[15] == 0  # LSB was 0

    def test_shift_right_odd(self, fresh_state):
        """8XY6 - Shift right, odd number."""
        state = with_registers(fresh_state, V3=0x05, V4=0xFF)

        state = execute(state, 0x8346)  # V3 >>= 1

        assert state.V[3] == 0x02
        assert state.V[15] == 1  # LSB was 1

    def test_shift_left_overflow(self, fresh_state):
        """8XYE - Shift left wraps and reports bit 7."""
        state = with_registers(fresh_state, V3=0x81, V4=0xFF)  # 10000001

        state = execute(state, 0x834E)  # V3 <<= 1

        assert state.V[3] == 0x02  # 129 << 1 = 258 → 2
        assert state.V[15] == 1  # MSB was 1

    def test_shift_left_no_overflow(self, fresh_state):
        """8XYE - Shift left without bit 7."""
        state = with_registers(fresh_state, V1=0x55)

        state = execute(state, 0x810E)

        assert state.V[1] == 0xAA
        assert state.V[15] == 0

    def test_repeated_shifts(self, load_instructions):
        """Shifts through a program, like a register walking off the edge."""
        from chip8vm import step
        from chip8vm.decode import SetImmediate, ShiftLeft, ShiftRight

        state = load_instructions(
            SetImmediate(1, 0x55), ShiftLeft(1), ShiftLeft(1),
            SetImmediate(1, 0x55), ShiftRight(1), ShiftRight(1),
        )
        state = step(state, now=0.0)
        state = step(state, now=0.0)
        assert state.V[1] == 0xAA and state.V[15] == 0
        state = step(state, now=0.0)
        assert state.V[1] == 0x54 and state.V[15] == 1
        state = step(state, now=0.0)
        state = step(state, now=0.0)
        assert state.V[1] == 0x2A and state.V[15] == 1
        state = step(state, now=0.0)
        assert state.V[1] == 0x15 and state.V[15] == 0
        assert state.pc == 0x20C


class TestALUEdgeCases:
    """Test edge cases and comprehensive scenarios."""

    @pytest.mark.parametrize("op", [0x8, 0x9, 0xA, 0xB, 0xC, 0xD, 0xF])
    def test_alu_undefined_operations(self, fresh_state, op):
        """Undefined 8XYN operations are invalid opcodes."""
        from chip8vm import InvalidOpcode

        with pytest.raises(InvalidOpcode):
            execute(fresh_state, 0x8120 | op)

    def test_alu_self_operations(self, fresh_state):
        """Test operations where VX and VY are the same register."""
        state = with_registers(fresh_state, V5=0xAA)

        state = execute(state, 0x8553)  # V5 ^= V5
        assert state.V[5] == 0x00, "Self XOR should result in 0"

        state = state.replace(V=state.V.at[5].set(0x80))
        state = execute(state, 0x8554)  # V5 += V5
        assert state.V[5] == 0x00, "Self ADD should wrap on overflow"
        assert state.V[15] == 1, "Self ADD should set carry flag"

    def test_vf_register_operations(self, fresh_state):
        """Test that operations on VF work correctly."""
        state = with_registers(fresh_state, VF=0x42, V1=0x10)

        state = execute(state, 0x81F4)  # V1 += VF
        assert state.V[1] == 0x52, "Addition with VF as source failed"
        assert state.V[15] == 0, "VF should be overwritten by operation result"

    def test_flag_wins_when_destination_is_vf(self, fresh_state):
        """When VF is the destination, the flag overwrites the result."""
        state = with_registers(fresh_state, VF=0xFF, V1=0x01)

        state = execute(state, 0x8F14)  # VF += V1

        assert state.V[15] == 1
