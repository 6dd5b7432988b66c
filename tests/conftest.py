"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from chip8vm import create_state, load_program, assemble


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state(now=0.0)


@pytest.fixture
def load_instructions(fresh_state):
    """Provide a loader for a fresh state running the given instructions."""
    def _load(*instructions):
        return load_program(fresh_state, assemble(instructions))
    return _load


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def lit_pixels(state):
    """Set of (x, y) coordinates that are on."""
    xs, ys = jnp.nonzero(state.display)
    return {(int(x), int(y)) for x, y in zip(xs, ys)}
