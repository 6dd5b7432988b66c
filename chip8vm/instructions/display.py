"""CHIP-8 display operations."""

import jax.numpy as jnp
from chip8vm.state import EmulatorState
from chip8vm.decode import Draw
from chip8vm.constants import FLAG_REGISTER, MEMORY_SIZE

# Column offsets within a sprite row, most significant bit first
SPRITE_COLUMNS = jnp.arange(8)


def execute_display(state: EmulatorState, instruction: Draw) -> EmulatorState:
    """DXYN - Draw sprite at (VX, VY) with height N.

    Every coordinate wraps around the screen edges. VF is set when a lit
    pixel is switched off.
    """
    width, height = state.display.shape
    sprite_x = int(state.V[instruction.x])
    sprite_y = int(state.V[instruction.y])

    rows = jnp.arange(instruction.height)
    sprite_bytes = state.memory[(state.I.astype(jnp.int32) + rows) % MEMORY_SIZE]
    sprite_bits = ((sprite_bytes[:, None] >> (7 - SPRITE_COLUMNS)[None, :]) & 1).astype(jnp.bool_)

    xs = (sprite_x + SPRITE_COLUMNS) % width
    ys = (sprite_y + rows) % height
    sprite = jnp.zeros_like(state.display).at[xs[None, :], ys[:, None]].set(sprite_bits)

    collision = jnp.any(state.display & sprite)
    return state.replace(
        display=state.display ^ sprite,
        V=state.V.at[FLAG_REGISTER].set(collision.astype(jnp.uint8)),
        redraw=jnp.array(True),
    )
