"""CHIP-8 virtual machine package."""

from chip8vm.state import EmulatorState, StackState, create_state, reset
from chip8vm.emulator import execute, apply, step, run, fetch, peek, update_timers, load_program, load_rom
from chip8vm.decode import Instruction, decode, disassemble
from chip8vm.encode import encode, encode_opcode, assemble
from chip8vm.errors import (
    Chip8Error, InvalidOpcode, InvalidInstruction, UnhandledInstruction,
    StackUnderflow, StackOverflow, ProgramTooLarge,
)
from chip8vm.constants import *
from chip8vm.rendering import chip8_display_to_rgb, chip8_display_to_text, create_color_scheme

__all__ = [
    "EmulatorState",
    "StackState",
    "create_state",
    "reset",
    "fetch",
    "peek",
    "execute",
    "apply",
    "step",
    "run",
    "update_timers",
    "load_program",
    "load_rom",
    "Instruction",
    "decode",
    "disassemble",
    "encode",
    "encode_opcode",
    "assemble",
    "Chip8Error",
    "InvalidOpcode",
    "InvalidInstruction",
    "UnhandledInstruction",
    "StackUnderflow",
    "StackOverflow",
    "ProgramTooLarge",
    "DisplayMode",
    "PROGRAM_START",
    "FONT_START",
    "MEMORY_SIZE",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "chip8_display_to_rgb",
    "chip8_display_to_text",
    "create_color_scheme",
]
