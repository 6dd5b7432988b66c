"""Tests for miscellaneous instructions (Fxxx)."""

import pytest
from chip8vm import execute, FONT_START


class TestTimers:
    """Test timer-related instructions."""

    def test_misc_timer_instructions(self, fresh_state):
        """Test timer set and get operations."""
        state = fresh_state

        # Test FX15: Set delay timer
        state = execute(state, 0x6030)  # V0 = 48
        state = execute(state, 0xF015)  # Set delay timer to V0
        assert state.delay_timer == 48

        # Test FX18: Set sound timer
        state = execute(state, 0x6120)  # V1 = 32
        state = execute(state, 0xF118)  # Set sound timer to V1
        assert state.sound_timer == 32

        # Test FX07: Get delay timer
        state = execute(state, 0xF207)  # V2 = delay timer
        assert state.V[2] == 48


class TestBCD:
    """Test BCD conversion."""

    @pytest.mark.parametrize("value,digits", [
        (156, (1, 5, 6)),
        (0, (0, 0, 0)),
        (7, (0, 0, 7)),
        (40, (0, 4, 0)),
        (255, (2, 5, 5)),
    ])
    def test_misc_bcd_conversion(self, fresh_state, value, digits):
        state = execute(fresh_state, 0x6000 | value)  # V0 = value
        state = execute(state, 0xA300)  # I = 0x300
        state = execute(state, 0xF033)

        assert tuple(int(d) for d in state.memory[0x300:0x303]) == digits
        assert state.I == 0x300

    def test_bcd_wraps_at_end_of_memory(self, fresh_state):
        state = execute(fresh_state, 0x60FF)
        state = execute(state, 0xAFFE)
        state = execute(state, 0xF033)

        assert state.memory[0xFFE] == 2
        assert state.memory[0xFFF] == 5
        assert state.memory[0x000] == 5


class TestFont:
    """Test font character addressing."""

    def test_misc_font_character(self, fresh_state):
        """Test font character addressing."""
        state = execute(fresh_state, 0x600A)  # V0 = 0xA
        state = execute(state, 0xF029)  # I = font address for A

        assert state.I == FONT_START + 0xA * 5

    def test_font_all_characters(self, fresh_state):
        """Test font addressing for all hex digits."""
        state = fresh_state

        for digit in range(16):
            state = execute(state, 0x6000 | digit)  # V0 = digit
            state = execute(state, 0xF029)  # I = font address

            expected = FONT_START + digit * 5
            assert state.I == expected, f"Font address wrong for digit {digit:X}"

    def test_font_uses_low_nibble(self, fresh_state):
        state = execute(fresh_state, 0x601A)  # V0 = 0x1A
        state = execute(state, 0xF029)
        assert state.I == FONT_START + 0xA * 5

    def test_font_data_installed(self, fresh_state):
        glyph_zero = [int(b) for b in fresh_state.memory[FONT_START:FONT_START + 5]]
        assert glyph_zero == [0xF0, 0x90, 0x90, 0x90, 0xF0]


class TestMemoryOperations:
    """Test store/load register operations."""

    def test_store_load_registers(self, fresh_state):
        """FX55 / FX65 leave I unchanged."""
        state = fresh_state

        state = execute(state, 0x6001)  # V0 = 1
        state = execute(state, 0x6102)  # V1 = 2
        state = execute(state, 0x6203)  # V2 = 3
        state = execute(state, 0x6309)  # V3 = 9, not stored
        state = execute(state, 0xA300)  # I = 0x300

        state = execute(state, 0xF255)  # Store V0-V2
        assert state.I == 0x300
        assert [int(b) for b in state.memory[0x300:0x304]] == [1, 2, 3, 0]

        # Clear registers
        state = execute(state, 0x6000)
        state = execute(state, 0x6100)
        state = execute(state, 0x6200)
        state = execute(state, 0x6300)

        state = execute(state, 0xF265)  # Load V0-V2
        assert state.V[0] == 1
        assert state.V[1] == 2
        assert state.V[2] == 3
        assert state.V[3] == 0
        assert state.I == 0x300

    def test_store_single_register(self, fresh_state):
        state = execute(fresh_state, 0x6042)
        state = execute(state, 0x6143)
        state = execute(state, 0xA400)
        state = execute(state, 0xF055)

        assert state.memory[0x400] == 0x42
        assert state.memory[0x401] == 0

    def test_store_all_registers(self, fresh_state):
        state = fresh_state.replace(V=fresh_state.V.at[15].set(0x77))
        state = execute(state, 0xA500)
        state = execute(state, 0xFF55)
        assert state.memory[0x50F] == 0x77


class TestWaitForKey:
    """FX0A."""

    def test_wait_for_key_blocking(self, fresh_state):
        """Without a key the program counter moves back one instruction."""
        initial_pc = fresh_state.pc

        state = execute(fresh_state, 0xF00A)

        assert state.pc == initial_pc - 2
        assert state.V[0] == 0

    def test_wait_for_key_pressed(self, fresh_state):
        state = fresh_state.replace(keypad=fresh_state.keypad.at[7].set(True))
        initial_pc = state.pc

        state = execute(state, 0xF30A)

        assert state.V[3] == 7
        assert state.pc == initial_pc

    def test_wait_for_key_lowest_pressed_wins(self, fresh_state):
        state = fresh_state.replace(keypad=fresh_state.keypad.at[0xC].set(True).at[4].set(True))
        state = execute(state, 0xF00A)
        assert state.V[0] == 4


class TestAddToIndex:
    """FX1E."""

    def test_add_to_index(self, fresh_state):
        state = execute(fresh_state, 0x6010)  # V0 = 0x10
        state = execute(state, 0xA300)  # I = 0x300
        state = execute(state, 0xF01E)  # I += V0

        assert state.I == 0x310
        assert state.V[15] == 0

    def test_add_to_index_past_memory_leaves_flag(self, fresh_state):
        """I is not limited to 12 bits and VF is never written."""
        state = execute(fresh_state, 0x60FF)  # V0 = 0xFF
        state = execute(state, 0x6F05)  # VF = 5
        state = execute(state, 0xAF80)  # I = 0xF80
        state = execute(state, 0xF01E)

        assert state.I == 0x107F
        assert state.V[15] == 5

    def test_add_to_index_wraps_at_16_bits(self, fresh_state):
        state = fresh_state.replace(I=fresh_state.I + 0xFFFF)
        state = execute(state, 0x6002)
        state = execute(state, 0xF01E)
        assert state.I == 1
