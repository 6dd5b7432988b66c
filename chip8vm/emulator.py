"""Main CHIP-8 emulator execution engine."""

import time
from typing import Optional, Union

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import (
    Instruction, decode, Sys, ClearScreen, Return, Jump, Call,
    SkipIfEqualImmediate, SkipIfNotEqualImmediate, SkipIfEqualRegister, SkipIfNotEqualRegister,
    JumpWithOffset, SetImmediate, AddImmediate, SetIndex, Random,
    SetRegister, Or, And, Xor, Add, Subtract, ShiftRight, SubtractReversed, ShiftLeft,
    Draw, SkipIfKeyPressed, SkipIfKeyNotPressed, WaitForKey,
    GetDelayTimer, SetDelayTimer, SetSoundTimer, AddToIndex, FontCharacter,
    BinaryCodedDecimal, StoreRegisters, LoadRegisters,
)
from chip8vm.constants import (
    MEMORY_SIZE, PROGRAM_START, PROGRAM_CAPACITY, TIMER_TICK,
    LEGACY_CLEAR_SCREEN_ADDRESS, HIRES_JUMP_ADDRESS, HIRES_TRIGGER_PC,
)
from chip8vm.errors import ProgramTooLarge, UnhandledInstruction
from chip8vm.instructions.system import no_op, execute_clear_screen, execute_return, execute_hires
from chip8vm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key_pressed, execute_skip_if_key_not_pressed,
)
from chip8vm.instructions.alu import execute_alu_operation
from chip8vm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from chip8vm.instructions.display import execute_display
from chip8vm.instructions.misc import (
    execute_get_delay_timer, execute_set_delay_timer, execute_set_sound_timer,
    execute_add_to_index, execute_wait_for_key, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers,
)


def apply(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """Apply a decoded instruction to the state.

    ``state.pc`` is expected to already point past the instruction.
    """
    match instruction:
        case Sys(address=address) if address == LEGACY_CLEAR_SCREEN_ADDRESS:
            return execute_clear_screen(state, instruction)
        case Jump(address=address) if address == HIRES_JUMP_ADDRESS and int(state.pc) == HIRES_TRIGGER_PC:
            return execute_hires(state, instruction)
        case Sys():
            return no_op(state, instruction)
        case ClearScreen():
            return execute_clear_screen(state, instruction)
        case Return():
            return execute_return(state, instruction)
        case Jump():
            return execute_jump(state, instruction)
        case Call():
            return execute_call(state, instruction)
        case SkipIfEqualImmediate():
            return execute_skip_if_equal_immediate(state, instruction)
        case SkipIfNotEqualImmediate():
            return execute_skip_if_not_equal_immediate(state, instruction)
        case SkipIfEqualRegister():
            return execute_skip_if_equal_register(state, instruction)
        case SetImmediate():
            return execute_set(state, instruction)
        case AddImmediate():
            return execute_add(state, instruction)
        case SetRegister() | Or() | And() | Xor() | Add() | Subtract() | ShiftRight() | SubtractReversed() | ShiftLeft():
            return execute_alu_operation(state, instruction)
        case SkipIfNotEqualRegister():
            return execute_skip_if_not_equal_register(state, instruction)
        case SetIndex():
            return execute_set_index(state, instruction)
        case JumpWithOffset():
            return execute_jump_with_offset(state, instruction)
        case Random():
            return execute_random(state, instruction)
        case Draw():
            return execute_display(state, instruction)
        case SkipIfKeyPressed():
            return execute_skip_if_key_pressed(state, instruction)
        case SkipIfKeyNotPressed():
            return execute_skip_if_key_not_pressed(state, instruction)
        case GetDelayTimer():
            return execute_get_delay_timer(state, instruction)
        case WaitForKey():
            return execute_wait_for_key(state, instruction)
        case SetDelayTimer():
            return execute_set_delay_timer(state, instruction)
        case SetSoundTimer():
            return execute_set_sound_timer(state, instruction)
        case AddToIndex():
            return execute_add_to_index(state, instruction)
        case FontCharacter():
            return execute_font_character(state, instruction)
        case BinaryCodedDecimal():
            return execute_bcd_conversion(state, instruction)
        case StoreRegisters():
            return execute_store_registers(state, instruction)
        case LoadRegisters():
            return execute_load_registers(state, instruction)
        case _:
            raise UnhandledInstruction(instruction)


def execute(state: EmulatorState, instruction: Union[int, Instruction]) -> EmulatorState:
    """Execute single CHIP-8 instruction, given as opcode or decoded."""
    if not isinstance(instruction, Instruction):
        instruction = decode(int(instruction))
    return apply(state, instruction)


def _pack_u16(high: jnp.uint8, low: jnp.uint8) -> int:
    """Pack two bytes into uint16."""
    return (int(high) << 8) | int(low)


def peek(state: EmulatorState) -> int:
    """Read the opcode at the program counter without advancing it."""
    pc = int(state.pc)
    return _pack_u16(state.memory[pc % MEMORY_SIZE], state.memory[(pc + 1) % MEMORY_SIZE])


def fetch(state: EmulatorState) -> tuple[EmulatorState, int]:
    """Fetch next instruction from memory."""
    instruction = peek(state)
    return state.replace(pc=jnp.astype((int(state.pc) + 2) & 0xFFFF, jnp.uint16)), instruction


def update_timers(state: EmulatorState, now: float) -> EmulatorState:
    """Decrement the delay and sound timers once per elapsed 1/60 s tick.

    Partial ticks carry over to the next update.
    """
    ticks = int((now - state.last_timer_update) // TIMER_TICK)
    if ticks <= 0:
        return state
    delay_timer = max(int(state.delay_timer) - ticks, 0)
    sound_timer = max(int(state.sound_timer) - ticks, 0)
    return state.replace(
        delay_timer=jnp.astype(delay_timer, jnp.uint8),
        sound_timer=jnp.astype(sound_timer, jnp.uint8),
        last_timer_update=state.last_timer_update + ticks * TIMER_TICK,
    )


def step(state: EmulatorState, now: Optional[float] = None) -> EmulatorState:
    """Run one fetch/decode/execute cycle.

    Args:
        state: Current emulator state
        now: Clock reading in seconds, defaults to ``time.monotonic()``

    Returns:
        State after the instruction
    """
    state, opcode = fetch(state)
    state = update_timers(state, time.monotonic() if now is None else now)
    return apply(state, decode(opcode))


def run(state: EmulatorState, num_steps: int, callback=None) -> EmulatorState:
    """Run ``num_steps`` cycles, calling ``callback(state)`` after each one."""
    for _ in range(num_steps):
        state = step(state)
        if callback is not None:
            callback(state)
    return state


def load_program(state: EmulatorState, program: bytes) -> EmulatorState:
    """Copy program bytes into memory starting at 0x200.

    Raises:
        ProgramTooLarge: if the program does not fit below the end of memory.
    """
    program = bytes(program)
    if len(program) > PROGRAM_CAPACITY:
        raise ProgramTooLarge(len(program), PROGRAM_CAPACITY)
    if not program:
        return state
    rom_array = jnp.array(list(program), dtype=jnp.uint8)
    new_memory = state.memory.at[PROGRAM_START:PROGRAM_START + len(program)].set(rom_array)
    return state.replace(memory=new_memory)


def load_rom(state: EmulatorState, filename: str) -> EmulatorState:
    """Load ROM data into CHIP-8 memory starting at 0x200."""
    with open(filename, 'rb') as f:
        rom_data = f.read()
    return load_program(state, rom_data)
