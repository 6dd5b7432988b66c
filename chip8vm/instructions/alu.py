"""CHIP-8 ALU operations (8xxx)."""

from typing import Optional

from chip8vm.state import EmulatorState
from chip8vm.constants import FLAG_REGISTER
from chip8vm.decode import (
    Instruction, SetRegister, Or, And, Xor, Add, Subtract, ShiftRight, SubtractReversed, ShiftLeft
)


def alu_set(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> tuple[int, Optional[int]]:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> tuple[int, int]:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    carry = int(result > 0xFF)
    return result & 0xFF, carry


def alu_sub_xy(vx: int, vy: int) -> tuple[int, int]:
    """8XY5 - Subtract: VX -= VY, set borrow flag."""
    borrow_flag = int(vx >= vy)
    return (vx - vy) & 0xFF, borrow_flag


def alu_shift_right(vx: int, vy: int) -> tuple[int, int]:
    """8XY6 - Shift right: VX >>= 1."""
    return vx >> 1, vx & 1


def alu_sub_yx(vx: int, vy: int) -> tuple[int, int]:
    """8XY7 - Subtract: VX = VY - VX, set borrow flag."""
    borrow_flag = int(vy >= vx)
    return (vy - vx) & 0xFF, borrow_flag


def alu_shift_left(vx: int, vy: int) -> tuple[int, int]:
    """8XYE - Shift left: VX <<= 1."""
    return (vx << 1) & 0xFF, (vx & 0x80) >> 7


def execute_alu_operation(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """8XYN - ALU operations dispatcher."""
    match instruction:
        case SetRegister():
            operation = alu_set
        case Or():
            operation = alu_or
        case And():
            operation = alu_and
        case Xor():
            operation = alu_xor
        case Add():
            operation = alu_add
        case Subtract():
            operation = alu_sub_xy
        case ShiftRight():
            operation = alu_shift_right
        case SubtractReversed():
            operation = alu_sub_yx
        case ShiftLeft():
            operation = alu_shift_left
        case _:
            raise TypeError(f"Not an ALU instruction: {instruction!r}")

    vx = int(state.V[instruction.x])
    # Shifts only carry X
    vy = int(state.V[getattr(instruction, "y", instruction.x)])
    result, vf = operation(vx, vy)

    # VF is written last so it wins when X is the flag register
    new_V = state.V.at[instruction.x].set(result)
    if vf is not None:
        new_V = new_V.at[FLAG_REGISTER].set(vf)
    return state.replace(V=new_V)
