"""CHIP-8 instruction encoding (instruction -> opcode bytes)."""

from typing import Iterable

from chip8vm.decode import (
    Instruction, Sys, ClearScreen, Return, Jump, Call,
    SkipIfEqualImmediate, SkipIfNotEqualImmediate, SkipIfEqualRegister, SkipIfNotEqualRegister,
    JumpWithOffset, SetImmediate, AddImmediate, SetIndex, Random,
    SetRegister, Or, And, Xor, Add, Subtract, ShiftRight, SubtractReversed, ShiftLeft,
    Draw, SkipIfKeyPressed, SkipIfKeyNotPressed, WaitForKey,
    GetDelayTimer, SetDelayTimer, SetSoundTimer, AddToIndex, FontCharacter,
    BinaryCodedDecimal, StoreRegisters, LoadRegisters,
)


def _check(name: str, value: int, limit: int) -> int:
    if not 0 <= value <= limit:
        raise ValueError(f"{name} out of range: {value:#x} (max {limit:#x})")
    return value


def _address(prefix: int, address: int) -> int:
    return (prefix << 12) | _check("address", address, 0xFFF)


def _register_byte(prefix: int, x: int, value: int) -> int:
    return (prefix << 12) | (_check("register", x, 0xF) << 8) | _check("byte", value, 0xFF)


def _register_pair(prefix: int, x: int, y: int, suffix: int) -> int:
    return (
        (prefix << 12)
        | (_check("register", x, 0xF) << 8)
        | (_check("register", y, 0xF) << 4)
        | _check("nibble", suffix, 0xF)
    )


def encode_opcode(instruction: Instruction) -> int:
    """Encode an instruction as a 16-bit opcode."""
    match instruction:
        case ClearScreen():
            return 0x00E0
        case Return():
            return 0x00EE
        case Sys(address=address):
            if address in (0x0E0, 0x0EE):
                raise ValueError(f"Sys({address:#05x}) collides with a reserved opcode")
            return _address(0x0, address)
        case Jump(address=address):
            return _address(0x1, address)
        case Call(address=address):
            return _address(0x2, address)
        case SkipIfEqualImmediate(x=x, value=value):
            return _register_byte(0x3, x, value)
        case SkipIfNotEqualImmediate(x=x, value=value):
            return _register_byte(0x4, x, value)
        case SkipIfEqualRegister(x=x, y=y):
            return _register_pair(0x5, x, y, 0x0)
        case SetImmediate(x=x, value=value):
            return _register_byte(0x6, x, value)
        case AddImmediate(x=x, value=value):
            return _register_byte(0x7, x, value)
        case SetRegister(x=x, y=y):
            return _register_pair(0x8, x, y, 0x0)
        case Or(x=x, y=y):
            return _register_pair(0x8, x, y, 0x1)
        case And(x=x, y=y):
            return _register_pair(0x8, x, y, 0x2)
        case Xor(x=x, y=y):
            return _register_pair(0x8, x, y, 0x3)
        case Add(x=x, y=y):
            return _register_pair(0x8, x, y, 0x4)
        case Subtract(x=x, y=y):
            return _register_pair(0x8, x, y, 0x5)
        case ShiftRight(x=x):
            return _register_pair(0x8, x, 0x0, 0x6)
        case SubtractReversed(x=x, y=y):
            return _register_pair(0x8, x, y, 0x7)
        case ShiftLeft(x=x):
            return _register_pair(0x8, x, 0x0, 0xE)
        case SkipIfNotEqualRegister(x=x, y=y):
            return _register_pair(0x9, x, y, 0x0)
        case SetIndex(address=address):
            return _address(0xA, address)
        case JumpWithOffset(address=address):
            return _address(0xB, address)
        case Random(x=x, mask=mask):
            return _register_byte(0xC, x, mask)
        case Draw(x=x, y=y, height=height):
            return _register_pair(0xD, x, y, height)
        case SkipIfKeyPressed(x=x):
            return _register_byte(0xE, x, 0x9E)
        case SkipIfKeyNotPressed(x=x):
            return _register_byte(0xE, x, 0xA1)
        case GetDelayTimer(x=x):
            return _register_byte(0xF, x, 0x07)
        case WaitForKey(x=x):
            return _register_byte(0xF, x, 0x0A)
        case SetDelayTimer(x=x):
            return _register_byte(0xF, x, 0x15)
        case SetSoundTimer(x=x):
            return _register_byte(0xF, x, 0x18)
        case AddToIndex(x=x):
            return _register_byte(0xF, x, 0x1E)
        case FontCharacter(x=x):
            return _register_byte(0xF, x, 0x29)
        case BinaryCodedDecimal(x=x):
            return _register_byte(0xF, x, 0x33)
        case StoreRegisters(x=x):
            return _register_byte(0xF, x, 0x55)
        case LoadRegisters(x=x):
            return _register_byte(0xF, x, 0x65)
        case _:
            raise TypeError(f"Cannot encode {instruction!r}")


def encode(instruction: Instruction) -> bytes:
    """Encode an instruction as two big-endian bytes."""
    return encode_opcode(instruction).to_bytes(2, "big")


def assemble(instructions: Iterable[Instruction]) -> bytes:
    """Encode a sequence of instructions into a program image."""
    return b"".join(encode(instruction) for instruction in instructions)
