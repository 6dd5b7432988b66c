"""CHIP-8 control flow instructions."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import Jump, Call, JumpWithOffset, SkipIfKeyPressed, SkipIfKeyNotPressed
from chip8vm.stack import push


def _skip(state: EmulatorState) -> EmulatorState:
    return state.replace(pc=jnp.astype(state.pc + 2, jnp.uint16))


def execute_jump(state: EmulatorState, instruction: Jump) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return state.replace(pc=jnp.astype(instruction.address, jnp.uint16))


def execute_call(state: EmulatorState, instruction: Call) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, state.pc))
    return execute_jump(state, instruction)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction) -> EmulatorState:
        if condition_fn(state, instruction):
            return _skip(state)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == inst.value
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != inst.value
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) == int(state.V[inst.y])
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: int(state.V[inst.x]) != int(state.V[inst.y])
)


def execute_jump_with_offset(state: EmulatorState, instruction: JumpWithOffset) -> EmulatorState:
    """BNNN - Jump to address NNN + V0."""
    jump_address = (instruction.address + int(state.V[0])) & 0xFFFF
    return state.replace(pc=jnp.astype(jump_address, jnp.uint16))


def _key_pressed(state: EmulatorState, x: int) -> bool:
    return bool(state.keypad[int(state.V[x]) & 0xF])


execute_skip_if_key_pressed = make_skip_instruction(
    lambda state, inst: _key_pressed(state, inst.x)
)

execute_skip_if_key_not_pressed = make_skip_instruction(
    lambda state, inst: not _key_pressed(state, inst.x)
)
