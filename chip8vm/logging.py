"""Console logging for emulator runs.

Messages go to stderr so they never mix with the terminal frontend's frames
on stdout. ``EmulatorLogger`` adds the reports the frontends make: program
loads, instruction traces, register dumps and fatal errors.
"""

import sys
import time
from typing import Optional

from chip8vm.decode import disassemble
from chip8vm.state import EmulatorState

LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# ANSI colour per level
LEVEL_COLORS = {
    "DEBUG": "\033[36m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[35m",
}
RESET = "\033[0m"


class ConsoleLogger:
    """Levelled stderr logger with optional colours and run-relative timestamps."""

    def __init__(
        self,
        name: str = "chip8vm",
        log_level: str = "INFO",
        use_colors: bool = True,
        show_timestamps: bool = True,
    ):
        self.name = name
        self.log_level = log_level.upper()
        if self.log_level not in LEVELS:
            raise ValueError(f"Unknown log level '{log_level}'. Available: {list(LEVELS)}")
        self.use_colors = use_colors and sys.stderr.isatty()
        self.show_timestamps = show_timestamps
        self.start_time = time.time()

    def enabled(self, level: str) -> bool:
        return LEVELS.index(level) >= LEVELS.index(self.log_level)

    def log(self, level: str, message: str):
        if not self.enabled(level):
            return
        tag = f"[{level:>8s}]"
        if self.use_colors:
            tag = f"{LEVEL_COLORS[level]}{tag}{RESET}"
        elapsed = f"[{time.time() - self.start_time:8.2f}s]" if self.show_timestamps else ""
        print(f"{elapsed}{tag}[{self.name}] {message}", file=sys.stderr, flush=True)

    def debug(self, message: str):
        self.log("DEBUG", message)

    def info(self, message: str):
        self.log("INFO", message)

    def warning(self, message: str):
        self.log("WARNING", message)

    def error(self, message: str):
        self.log("ERROR", message)

    def critical(self, message: str):
        self.log("CRITICAL", message)


class EmulatorLogger(ConsoleLogger):
    """Logger for emulator runs with instruction tracing."""

    def __init__(self, name: str = "chip8vm", **kwargs):
        super().__init__(name, **kwargs)
        self.instruction_count = 0

    @property
    def tracing(self) -> bool:
        return self.enabled("DEBUG")

    def log_load(self, source: str, size: int):
        self.info(f"Loaded {source} ({size} bytes)")

    def log_instruction(self, pc: int, opcode: int):
        """Trace one instruction. Only formatted when DEBUG is enabled."""
        self.instruction_count += 1
        if self.tracing:
            self.debug(f"{pc:03X}: {disassemble(opcode)}")

    def log_state(self, state: EmulatorState):
        registers = " ".join(f"V{i:X}={int(v):02X}" for i, v in enumerate(state.V))
        self.debug(
            f"PC={int(state.pc):03X} I={int(state.I):03X} SP={state.stack.pointer} "
            f"DT={int(state.delay_timer)} ST={int(state.sound_timer)} {registers}"
        )

    def log_error(self, error: Exception, state: Optional[EmulatorState] = None):
        self.error(f"{type(error).__name__}: {error}")
        if state is not None:
            self.error(f"Halted at pc=0x{int(state.pc):03X} after {self.instruction_count} instructions")

    def log_run_summary(self, elapsed: float):
        rate = self.instruction_count / elapsed if elapsed > 0 else 0.0
        self.info(
            f"Executed {self.instruction_count} instructions in {elapsed:.2f}s ({rate:.0f} Hz)"
        )
