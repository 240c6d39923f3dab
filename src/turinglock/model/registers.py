"""Register identifiers and machine configuration."""

from __future__ import annotations

from enum import Enum
from typing import Self

from pydantic import BaseModel, Field, model_validator


class Register(str, Enum):
    A = "a"
    B = "b"


class OverflowPolicy(str, Enum):
    """What a register write does when the value exceeds the word width.

    UNBOUNDED ignores the width entirely (Python int arithmetic).
    """

    UNBOUNDED = "unbounded"
    WRAP = "wrap"
    SATURATE = "saturate"
    CHECKED = "checked"


class MachineConfig(BaseModel):
    """Startup configuration for an execution engine.

    *registers* holds preset values applied after the register file is
    zeroed; registers not listed start at 0.
    """

    registers: dict[Register, int] = {}
    overflow: OverflowPolicy = OverflowPolicy.UNBOUNDED
    word_bits: int = Field(default=64, ge=1)

    @property
    def max_value(self) -> int | None:
        """Largest storable value, or None when unbounded."""
        if self.overflow == OverflowPolicy.UNBOUNDED:
            return None
        return (1 << self.word_bits) - 1

    @model_validator(mode="after")
    def _presets_in_range(self) -> Self:
        limit = self.max_value
        for register, value in self.registers.items():
            if value < 0:
                raise ValueError(
                    f"register {register.value} preset must be non-negative, got {value}"
                )
            if limit is not None and value > limit:
                raise ValueError(
                    f"register {register.value} preset {value} does not fit "
                    f"in {self.word_bits} bits"
                )
        return self
