"""CHIP-8 emulator state structures."""

import time
from typing import Optional

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from chip8vm.constants import (
    PROGRAM_START, FONT_START, FONT_DATA, MEMORY_SIZE, NUM_KEYS, NUM_REGISTERS, STACK_SIZE, DisplayMode
)


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = field(default_factory=lambda: jnp.zeros(STACK_SIZE, dtype=jnp.uint16))
    pointer: int = 0


def blank_display(display_mode: DisplayMode) -> jnp.ndarray:
    """All-off display indexed as display[x, y]."""
    return jnp.zeros((display_mode.width, display_mode.height), dtype=jnp.bool_)


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state."""
    rng: jax.random.PRNGKey
    memory: jnp.ndarray = field(default_factory=lambda: jnp.zeros(MEMORY_SIZE, dtype=jnp.uint8))
    pc: jnp.ndarray = field(default_factory=lambda: jnp.astype(PROGRAM_START, jnp.uint16))
    display: jnp.ndarray = field(default_factory=lambda: blank_display(DisplayMode.BASIC_64x32))
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    sound_timer: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint8))
    keypad: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_KEYS, dtype=jnp.bool_))
    V: jnp.ndarray = field(default_factory=lambda: jnp.zeros(NUM_REGISTERS, dtype=jnp.uint8))
    I: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.uint16))
    redraw: jnp.ndarray = field(default_factory=lambda: jnp.zeros((), dtype=jnp.bool_))
    display_mode: DisplayMode = field(pytree_node=False, default=DisplayMode.BASIC_64x32)
    last_timer_update: float = field(pytree_node=False, default=0.0)

    @property
    def resolution(self) -> tuple[int, int]:
        return self.display_mode.value


def _install_font(memory: jnp.ndarray) -> jnp.ndarray:
    return memory.at[FONT_START:FONT_START + len(FONT_DATA)].set(FONT_DATA)


def create_state(
    rng: jax.random.PRNGKey = jax.random.PRNGKey(0),
    display_mode: DisplayMode = DisplayMode.BASIC_64x32,
    now: Optional[float] = None,
) -> EmulatorState:
    """Create initial emulator state with font data loaded."""
    state = EmulatorState(
        rng,
        display=blank_display(display_mode),
        display_mode=display_mode,
        last_timer_update=time.monotonic() if now is None else now,
    )
    return state.replace(memory=_install_font(state.memory))


def reset(state: EmulatorState, now: Optional[float] = None) -> EmulatorState:
    """Restore power-on state, keeping the display mode and rng key.

    Memory is wiped, so the program has to be loaded again afterwards.
    """
    return create_state(state.rng, state.display_mode, now)
