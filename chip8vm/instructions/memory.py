"""CHIP-8 memory and register operations."""

import jax
import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import SetImmediate, AddImmediate, SetIndex, Random


def execute_set(state: EmulatorState, instruction: SetImmediate) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return state.replace(V=state.V.at[instruction.x].set(instruction.value))


def execute_add(state: EmulatorState, instruction: AddImmediate) -> EmulatorState:
    """7XNN - Add NN to VX."""
    result = (int(state.V[instruction.x]) + instruction.value) & 0xFF
    return state.replace(V=state.V.at[instruction.x].set(result))


def execute_set_index(state: EmulatorState, instruction: SetIndex) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return state.replace(I=jnp.astype(instruction.address, jnp.uint16))


def execute_random(state: EmulatorState, instruction: Random) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    key, subkey = jax.random.split(state.rng)
    random_value = jax.random.randint(subkey, shape=(), minval=0, maxval=256, dtype=jnp.int32)
    return state.replace(V=state.V.at[instruction.x].set(int(random_value) & instruction.mask), rng=key)
