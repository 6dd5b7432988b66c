"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import (
    GetDelayTimer, SetDelayTimer, SetSoundTimer, AddToIndex, WaitForKey,
    FontCharacter, BinaryCodedDecimal, StoreRegisters, LoadRegisters,
)
from chip8vm.constants import FONT_START, FONT_GLYPH_SIZE, INDEX_MASK, MEMORY_SIZE


def _indexed_addresses(state: EmulatorState, count: int) -> jnp.ndarray:
    """Addresses I .. I+count-1, wrapping at the end of memory."""
    return (state.I.astype(jnp.int32) + jnp.arange(count)) % MEMORY_SIZE


def execute_get_delay_timer(state: EmulatorState, instruction: GetDelayTimer) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return state.replace(V=state.V.at[instruction.x].set(state.delay_timer))


def execute_set_delay_timer(state: EmulatorState, instruction: SetDelayTimer) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return state.replace(delay_timer=state.V[instruction.x])


def execute_set_sound_timer(state: EmulatorState, instruction: SetSoundTimer) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return state.replace(sound_timer=state.V[instruction.x])


def execute_add_to_index(state: EmulatorState, instruction: AddToIndex) -> EmulatorState:
    """FX1E - Add VX to I register. VF is left alone."""
    new_i = (int(state.I) + int(state.V[instruction.x])) & INDEX_MASK
    return state.replace(I=jnp.astype(new_i, jnp.uint16))


def execute_wait_for_key(state: EmulatorState, instruction: WaitForKey) -> EmulatorState:
    """FX0A - Wait for key press.

    Without a pressed key the program counter is moved back so the same
    instruction runs again on the next step.
    """
    if not jnp.any(state.keypad):
        return state.replace(pc=jnp.astype(state.pc - 2, jnp.uint16))
    pressed_key = jnp.argmax(state.keypad)
    return state.replace(V=state.V.at[instruction.x].set(pressed_key.astype(jnp.uint8)))


def execute_font_character(state: EmulatorState, instruction: FontCharacter) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    font_address = FONT_START + (int(state.V[instruction.x]) & 0xF) * FONT_GLYPH_SIZE
    return state.replace(I=jnp.astype(font_address, jnp.uint16))


def execute_bcd_conversion(state: EmulatorState, instruction: BinaryCodedDecimal) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = int(state.V[instruction.x])
    digits = jnp.array([value // 100, (value // 10) % 10, value % 10], dtype=jnp.uint8)
    new_memory = state.memory.at[_indexed_addresses(state, 3)].set(digits)
    return state.replace(memory=new_memory)


def execute_store_registers(state: EmulatorState, instruction: StoreRegisters) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = instruction.x + 1
    new_memory = state.memory.at[_indexed_addresses(state, count)].set(state.V[:count])
    return state.replace(memory=new_memory)


def execute_load_registers(state: EmulatorState, instruction: LoadRegisters) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.x + 1
    new_V = state.V.at[:count].set(state.memory[_indexed_addresses(state, count)])
    return state.replace(V=new_V)
