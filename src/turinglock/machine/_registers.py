"""Register file and runtime error types.

Registers live in a fixed-size list indexed by ``Register`` position;
every write goes through the configured overflow policy.
"""

from __future__ import annotations

from turinglock.model.registers import MachineConfig, OverflowPolicy, Register


class MachineError(Exception):
    """Runtime error raised while executing a program."""


class RegisterOverflowError(MachineError, OverflowError):
    """A write exceeded the word width under ``OverflowPolicy.CHECKED``."""

    def __init__(self, register: Register, value: int, word_bits: int):
        self.register = register
        self.value = value
        self.word_bits = word_bits
        super().__init__(
            f"register {register.value} overflow: {value} does not fit in {word_bits} bits"
        )


_REGISTER_INDEX: dict[Register, int] = {r: i for i, r in enumerate(Register)}


def resolve_register(register: Register | str) -> Register:
    """Accept a ``Register`` or its name (``"a"``)."""
    if isinstance(register, Register):
        return register
    try:
        return Register(register)
    except ValueError:
        raise KeyError(
            f"Unknown register {register!r}. "
            f"Available: {[r.value for r in Register]}"
        ) from None


class RegisterFile:
    """Register values for one machine, starting at zero."""

    def __init__(self, config: MachineConfig) -> None:
        self._config = config
        self._values: list[int] = [0] * len(Register)

    def read(self, register: Register) -> int:
        return self._values[_REGISTER_INDEX[register]]

    def resolve(self, register: Register, value: int) -> int:
        """Return the value that a write of *value* would store.

        Raises ``RegisterOverflowError`` under the checked policy; never
        mutates the register file.
        """
        limit = self._config.max_value
        if limit is None or value <= limit:
            return value

        policy = self._config.overflow
        if policy == OverflowPolicy.WRAP:
            return value & limit
        if policy == OverflowPolicy.SATURATE:
            return limit
        raise RegisterOverflowError(register, value, self._config.word_bits)

    def write(self, register: Register, value: int) -> None:
        self._values[_REGISTER_INDEX[register]] = self.resolve(register, value)

    def preset(self, register: Register, value: int) -> None:
        """Set a register directly, rejecting values the width cannot hold."""
        if value < 0:
            raise ValueError(f"register {register.value} must be non-negative, got {value}")
        limit = self._config.max_value
        if limit is not None and value > limit:
            raise ValueError(
                f"register {register.value} value {value} does not fit "
                f"in {self._config.word_bits} bits"
            )
        self._values[_REGISTER_INDEX[register]] = value

    def snapshot(self) -> dict[str, int]:
        return {r.value: self._values[i] for r, i in _REGISTER_INDEX.items()}
