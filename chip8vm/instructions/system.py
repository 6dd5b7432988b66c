"""CHIP-8 system instructions (0x0xxx)."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState, blank_display
from chip8vm.decode import Instruction, Return
from chip8vm.constants import DisplayMode, HIRES_ENTRY_POINT
from chip8vm.stack import pop


def no_op(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """No operation."""
    return state


def execute_clear_screen(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=jnp.zeros_like(state.display), redraw=jnp.array(True))


def execute_return(state: EmulatorState, instruction: Return) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack, int(state.pc))
    return state.replace(stack=stack, pc=jnp.astype(address, jnp.uint16))


def execute_hires(state: EmulatorState, instruction: Instruction) -> EmulatorState:
    """Switch to the 64x64 display and continue at the hires entry point."""
    return state.replace(
        display_mode=DisplayMode.ETI_64x64,
        display=blank_display(DisplayMode.ETI_64x64),
        redraw=jnp.array(True),
        pc=jnp.astype(HIRES_ENTRY_POINT, jnp.uint16),
    )
