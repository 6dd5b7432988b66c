"""CHIP-8 machine constants."""

import enum

import jax.numpy as jnp

MEMORY_SIZE = 4096
PROGRAM_START = 0x200
PROGRAM_CAPACITY = MEMORY_SIZE - PROGRAM_START
FONT_START = 0x000
STACK_SIZE = 16
NUM_REGISTERS = 16
NUM_KEYS = 16
FLAG_REGISTER = 0xF

ADDRESS_MASK = 0x0FFF
INDEX_MASK = 0xFFFF

TIMER_FREQUENCY = 60
TIMER_TICK = 1.0 / TIMER_FREQUENCY

# Legacy interpreter conventions
LEGACY_CLEAR_SCREEN_ADDRESS = 0x230
HIRES_JUMP_ADDRESS = 0x260
HIRES_TRIGGER_PC = 0x202
HIRES_ENTRY_POINT = 0x2C0


class DisplayMode(enum.Enum):
    """Supported display resolutions as (width, height)."""
    BASIC_64x32 = (64, 32)
    ETI_64x48 = (64, 48)
    ETI_64x64 = (64, 64)
    HP_128x64 = (128, 64)

    @property
    def width(self) -> int:
        return self.value[0]

    @property
    def height(self) -> int:
        return self.value[1]


SCREEN_WIDTH, SCREEN_HEIGHT = DisplayMode.BASIC_64x32.value

FONT_DATA = jnp.array([
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
], dtype=jnp.uint8)

FONT_GLYPH_SIZE = 5
