"""CHIP-8 instruction set and opcode decoding.

Every opcode decodes to one of 35 frozen instruction variants. Operand names
follow the usual CHIP-8 notation: ``x``/``y`` are register indices (second and
third nibble), ``value`` is the low byte, ``address`` the low 12 bits.
"""

import dataclasses

from chex import dataclass

from chip8vm.errors import InvalidOpcode


class Instruction:
    """Base class of all decoded instructions."""


def instruction(cls):
    return dataclass(frozen=True, mappable_dataclass=False)(cls)


# System and control flow

@instruction
class Sys(Instruction):
    """0NNN - Machine code routine (ignored)."""
    address: int


@instruction
class ClearScreen(Instruction):
    """00E0 - Clear display."""


@instruction
class Return(Instruction):
    """00EE - Return from subroutine."""


@instruction
class Jump(Instruction):
    """1NNN - Jump to address NNN."""
    address: int


@instruction
class Call(Instruction):
    """2NNN - Call subroutine at NNN."""
    address: int


@instruction
class SkipIfEqualImmediate(Instruction):
    """3XNN - Skip if VX == NN."""
    x: int
    value: int


@instruction
class SkipIfNotEqualImmediate(Instruction):
    """4XNN - Skip if VX != NN."""
    x: int
    value: int


@instruction
class SkipIfEqualRegister(Instruction):
    """5XY0 - Skip if VX == VY."""
    x: int
    y: int


@instruction
class SkipIfNotEqualRegister(Instruction):
    """9XY0 - Skip if VX != VY."""
    x: int
    y: int


@instruction
class JumpWithOffset(Instruction):
    """BNNN - Jump to address NNN + V0."""
    address: int


# Registers and memory

@instruction
class SetImmediate(Instruction):
    """6XNN - Set VX = NN."""
    x: int
    value: int


@instruction
class AddImmediate(Instruction):
    """7XNN - Add NN to VX (no carry)."""
    x: int
    value: int


@instruction
class SetIndex(Instruction):
    """ANNN - Set I = NNN."""
    address: int


@instruction
class Random(Instruction):
    """CXNN - Set VX = random & NN."""
    x: int
    mask: int


# ALU (8XYN)

@instruction
class SetRegister(Instruction):
    """8XY0 - Set VX = VY."""
    x: int
    y: int


@instruction
class Or(Instruction):
    """8XY1 - VX |= VY."""
    x: int
    y: int


@instruction
class And(Instruction):
    """8XY2 - VX &= VY."""
    x: int
    y: int


@instruction
class Xor(Instruction):
    """8XY3 - VX ^= VY."""
    x: int
    y: int


@instruction
class Add(Instruction):
    """8XY4 - VX += VY, VF = carry."""
    x: int
    y: int


@instruction
class Subtract(Instruction):
    """8XY5 - VX -= VY, VF = not borrow."""
    x: int
    y: int


@instruction
class ShiftRight(Instruction):
    """8XY6 - VX >>= 1, VF = shifted out bit."""
    x: int


@instruction
class SubtractReversed(Instruction):
    """8XY7 - VX = VY - VX, VF = not borrow."""
    x: int
    y: int


@instruction
class ShiftLeft(Instruction):
    """8XYE - VX <<= 1, VF = shifted out bit."""
    x: int


# Display

@instruction
class Draw(Instruction):
    """DXYN - Draw sprite at (VX, VY) with height N."""
    x: int
    y: int
    height: int


# Keypad

@instruction
class SkipIfKeyPressed(Instruction):
    """EX9E - Skip if key VX is pressed."""
    x: int


@instruction
class SkipIfKeyNotPressed(Instruction):
    """EXA1 - Skip if key VX is not pressed."""
    x: int


@instruction
class WaitForKey(Instruction):
    """FX0A - Wait for key press, store it in VX."""
    x: int


# Timers, index and memory blocks (FXNN)

@instruction
class GetDelayTimer(Instruction):
    """FX07 - Set VX to delay timer value."""
    x: int


@instruction
class SetDelayTimer(Instruction):
    """FX15 - Set delay timer to VX."""
    x: int


@instruction
class SetSoundTimer(Instruction):
    """FX18 - Set sound timer to VX."""
    x: int


@instruction
class AddToIndex(Instruction):
    """FX1E - Add VX to I."""
    x: int


@instruction
class FontCharacter(Instruction):
    """FX29 - Set I to location of font glyph for digit VX."""
    x: int


@instruction
class BinaryCodedDecimal(Instruction):
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    x: int


@instruction
class StoreRegisters(Instruction):
    """FX55 - Store V0 through VX in memory starting at I."""
    x: int


@instruction
class LoadRegisters(Instruction):
    """FX65 - Load V0 through VX from memory starting at I."""
    x: int


INSTRUCTION_TYPES = (
    Sys, ClearScreen, Return, Jump, Call,
    SkipIfEqualImmediate, SkipIfNotEqualImmediate, SkipIfEqualRegister,
    SetImmediate, AddImmediate,
    SetRegister, Or, And, Xor, Add, Subtract, ShiftRight, SubtractReversed, ShiftLeft,
    SkipIfNotEqualRegister, SetIndex, JumpWithOffset, Random, Draw,
    SkipIfKeyPressed, SkipIfKeyNotPressed,
    GetDelayTimer, WaitForKey, SetDelayTimer, SetSoundTimer,
    AddToIndex, FontCharacter, BinaryCodedDecimal, StoreRegisters, LoadRegisters,
)


def _x(opcode: int) -> int:
    return (opcode & 0x0F00) >> 8


def _y(opcode: int) -> int:
    return (opcode & 0x00F0) >> 4


def _n(opcode: int) -> int:
    return opcode & 0x000F


def _nn(opcode: int) -> int:
    return opcode & 0x00FF


def _nnn(opcode: int) -> int:
    return opcode & 0x0FFF


def _decode_system(opcode: int) -> Instruction:
    if opcode == 0x00E0:
        return ClearScreen()
    if opcode == 0x00EE:
        return Return()
    return Sys(_nnn(opcode))


def _decode_register_pair(variant):
    def decode_group(opcode: int) -> Instruction:
        if _n(opcode) != 0:
            raise InvalidOpcode(opcode)
        return variant(_x(opcode), _y(opcode))
    return decode_group


_ALU_OPERATIONS = {
    0x0: SetRegister,
    0x1: Or,
    0x2: And,
    0x3: Xor,
    0x4: Add,
    0x5: Subtract,
    0x7: SubtractReversed,
}


def _decode_alu(opcode: int) -> Instruction:
    n = _n(opcode)
    if n == 0x6:
        return ShiftRight(_x(opcode))
    if n == 0xE:
        return ShiftLeft(_x(opcode))
    if n not in _ALU_OPERATIONS:
        raise InvalidOpcode(opcode)
    return _ALU_OPERATIONS[n](_x(opcode), _y(opcode))


_KEY_OPERATIONS = {
    0x9E: SkipIfKeyPressed,
    0xA1: SkipIfKeyNotPressed,
}

_MISC_OPERATIONS = {
    0x07: GetDelayTimer,
    0x0A: WaitForKey,
    0x15: SetDelayTimer,
    0x18: SetSoundTimer,
    0x1E: AddToIndex,
    0x29: FontCharacter,
    0x33: BinaryCodedDecimal,
    0x55: StoreRegisters,
    0x65: LoadRegisters,
}


def _decode_by_low_byte(operations: dict):
    def decode_group(opcode: int) -> Instruction:
        variant = operations.get(_nn(opcode))
        if variant is None:
            raise InvalidOpcode(opcode)
        return variant(_x(opcode))
    return decode_group


_GROUP_DECODERS = [
    _decode_system,
    lambda opcode: Jump(_nnn(opcode)),
    lambda opcode: Call(_nnn(opcode)),
    lambda opcode: SkipIfEqualImmediate(_x(opcode), _nn(opcode)),
    lambda opcode: SkipIfNotEqualImmediate(_x(opcode), _nn(opcode)),
    _decode_register_pair(SkipIfEqualRegister),
    lambda opcode: SetImmediate(_x(opcode), _nn(opcode)),
    lambda opcode: AddImmediate(_x(opcode), _nn(opcode)),
    _decode_alu,
    _decode_register_pair(SkipIfNotEqualRegister),
    lambda opcode: SetIndex(_nnn(opcode)),
    lambda opcode: JumpWithOffset(_nnn(opcode)),
    lambda opcode: Random(_x(opcode), _nn(opcode)),
    lambda opcode: Draw(_x(opcode), _y(opcode), _n(opcode)),
    _decode_by_low_byte(_KEY_OPERATIONS),
    _decode_by_low_byte(_MISC_OPERATIONS),
]


def decode(opcode: int) -> Instruction:
    """Decode a 16-bit opcode into its instruction.

    Raises:
        InvalidOpcode: if the word is not a defined CHIP-8 instruction.
    """
    opcode = int(opcode)
    if not 0 <= opcode <= 0xFFFF:
        raise InvalidOpcode(opcode)
    return _GROUP_DECODERS[opcode >> 12](opcode)


def disassemble(opcode: int) -> str:
    """Readable form of an opcode, for traces."""
    try:
        decoded = decode(opcode)
    except InvalidOpcode:
        return f"{int(opcode):04X}  ???"
    operands = ", ".join(
        f"{field.name}={getattr(decoded, field.name):X}" for field in dataclasses.fields(decoded)
    )
    return f"{int(opcode):04X}  {type(decoded).__name__}({operands})"
