"""Fatal conditions raised by the CHIP-8 core."""


class Chip8Error(Exception):
    """Base class for all emulator errors."""


class InvalidOpcode(Chip8Error, ValueError):
    """Raised when a 16-bit word does not decode to a defined instruction."""

    def __init__(self, opcode: int):
        self.opcode = opcode
        super().__init__(f"Invalid opcode 0x{opcode:04X}")


InvalidInstruction = InvalidOpcode


class UnhandledInstruction(Chip8Error, RuntimeError):
    """Raised when the executor receives a value it has no case for."""

    def __init__(self, instruction):
        self.instruction = instruction
        super().__init__(f"Unhandled instruction {instruction!r}")


class StackUnderflow(Chip8Error, RuntimeError):
    """Return executed with no pending call."""

    def __init__(self, pc: int):
        self.pc = pc
        super().__init__(f"Return with empty call stack (pc=0x{pc:03X})")


class StackOverflow(Chip8Error, RuntimeError):
    """Call executed with all stack slots in use."""

    def __init__(self, pc: int, depth: int):
        self.pc = pc
        self.depth = depth
        super().__init__(f"Call stack overflow at depth {depth} (pc=0x{pc:03X})")


class ProgramTooLarge(Chip8Error, ValueError):
    """Program does not fit in memory above the program start address."""

    def __init__(self, size: int, capacity: int):
        self.size = size
        self.capacity = capacity
        super().__init__(f"Program of {size} bytes exceeds capacity of {capacity} bytes")
