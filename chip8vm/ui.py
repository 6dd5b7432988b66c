"""Frontend interface for presentation layers.

A frontend owns an emulator state, drives it with :func:`chip8vm.emulator.step`
from its own loop and only touches the keypad and the display/redraw flag.
"""

import abc
import sys
import time
from typing import Iterable, Optional, TextIO

import jax.numpy as jnp
from tqdm import tqdm

from chip8vm.constants import NUM_KEYS
from chip8vm.emulator import peek, step
from chip8vm.errors import Chip8Error
from chip8vm.logging import EmulatorLogger
from chip8vm.rendering import chip8_display_to_text
from chip8vm.state import EmulatorState


def _check_key(key: int) -> int:
    if not 0 <= key < NUM_KEYS:
        raise ValueError(f"Key out of range: {key}")
    return key


def press_key(state: EmulatorState, key: int) -> EmulatorState:
    """Mark key 0x0-0xF as held down."""
    return state.replace(keypad=state.keypad.at[_check_key(key)].set(True))


def release_key(state: EmulatorState, key: int) -> EmulatorState:
    """Mark key 0x0-0xF as released."""
    return state.replace(keypad=state.keypad.at[_check_key(key)].set(False))


def set_keys(state: EmulatorState, keys: Iterable[bool]) -> EmulatorState:
    """Replace the whole keypad with 16 booleans."""
    keypad = jnp.array(list(keys), dtype=jnp.bool_)
    if keypad.shape != (NUM_KEYS,):
        raise ValueError(f"Expected {NUM_KEYS} key states, got {keypad.shape}")
    return state.replace(keypad=keypad)


def consume_frame(state: EmulatorState) -> tuple[EmulatorState, Optional[jnp.ndarray]]:
    """Return the display if it changed since the last call, clearing the flag."""
    if not bool(state.redraw):
        return state, None
    return state.replace(redraw=jnp.array(False)), state.display


class Screen(abc.ABC):
    """A presentation layer constructed from a loaded machine."""

    def __init__(self, state: EmulatorState, logger: Optional[EmulatorLogger] = None):
        self.state = state
        self.logger = logger or EmulatorLogger()
        self.error: Optional[Chip8Error] = None

    def cycle(self) -> bool:
        """Execute one instruction. Returns False once the machine has halted."""
        pc = int(self.state.pc)
        self.logger.log_instruction(pc, peek(self.state))
        try:
            self.state = step(self.state)
        except Chip8Error as e:
            self.error = e
            self.logger.log_error(e, self.state)
            self.logger.log_state(self.state)
            return False
        return True

    @abc.abstractmethod
    def run(self):
        """Drive the machine until the user or the program stops it."""


class TerminalScreen(Screen):
    """Draws the display to a terminal after each dirty frame."""

    def __init__(
        self,
        state: EmulatorState,
        logger: Optional[EmulatorLogger] = None,
        out: Optional[TextIO] = None,
        max_steps: Optional[int] = None,
    ):
        super().__init__(state, logger)
        self.out = out if out is not None else sys.stdout
        self.max_steps = max_steps

    def draw(self, display: jnp.ndarray):
        # Move cursor home so frames overwrite each other
        self.out.write("\x1B[1;1H")
        self.out.write(chip8_display_to_text(display) + "\n")
        self.out.flush()

    def run(self):
        start = time.time()
        steps = 0
        while self.max_steps is None or steps < self.max_steps:
            if not self.cycle():
                break
            steps += 1
            self.state, display = consume_frame(self.state)
            if display is not None:
                self.draw(display)
        self.logger.log_run_summary(time.time() - start)


class HeadlessScreen(Screen):
    """Runs a fixed number of instructions without drawing, with a progress bar."""

    def __init__(self, state: EmulatorState, num_steps: int, logger: Optional[EmulatorLogger] = None):
        super().__init__(state, logger)
        self.num_steps = num_steps
        self.frames = 0

    def run(self):
        start = time.time()
        with tqdm(total=self.num_steps, desc="chip8vm", unit="instr") as progress:
            for _ in range(self.num_steps):
                if not self.cycle():
                    break
                self.state, display = consume_frame(self.state)
                if display is not None:
                    self.frames += 1
                progress.update(1)
        self.logger.log_run_summary(time.time() - start)
        self.logger.info(f"{self.frames} frames drawn")
