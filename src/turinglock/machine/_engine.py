"""Execution engine: fetch-decode-execute loop for the two-register machine.

The ``ExecutionEngine`` owns the only mutable machine state (register
file and program counter).  Each ``step()`` fetches the line at pc from
the ``Program``, decodes it, and applies it.  The machine halts when a
fetch finds pc outside the program; that is the normal way a run ends.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from turinglock.model.instructions import (
    Half,
    Increment,
    Instruction,
    Jump,
    JumpIfEven,
    JumpIfOne,
    Triple,
)
from turinglock.model.program import Program
from turinglock.model.registers import MachineConfig, Register

from ._decoder import decode
from ._registers import RegisterFile, resolve_register

logger = logging.getLogger(__name__)


class ExecutionEngine:
    """Interpreter for one program run.

    Parameters
    ----------
    program : Program
        The loaded program. Never mutated.
    config : MachineConfig, optional
        Register presets and overflow policy. Defaults to all registers
        at zero with unbounded arithmetic.
    """

    def __init__(self, program: Program, config: MachineConfig | None = None) -> None:
        self.program = program
        self.config = config or MachineConfig()
        self._registers = RegisterFile(self.config)
        for register, value in self.config.registers.items():
            self._registers.preset(register, value)
        self._pc = 0
        self._halted = False
        self._steps = 0

    # -----------------------------------------------------------------------
    # Public API
    # -----------------------------------------------------------------------

    def step(self) -> bool:
        """Execute one fetch-decode-apply cycle.

        Returns True if an instruction was executed, False once the
        machine is halted (pc outside the program).  A ``DecodeError``
        or ``RegisterOverflowError`` propagates with registers and pc
        left as they were before the step.
        """
        if self._halted:
            return False

        line = self.program.get(self._pc)
        if line is None:
            self._halted = True
            logger.debug("halt: pc=%d outside program of %d lines", self._pc, len(self.program))
            return False

        instr = decode(line, self._pc)
        pc_before = self._pc
        self._exec(instr)
        self._steps += 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "pc=%d %s -> pc=%d %s",
                pc_before, instr.kind, self._pc, self._registers.snapshot(),
            )
        return True

    def run_to_completion(self) -> dict[str, int]:
        """Step until halted and return the final register values by name."""
        while self.step():
            pass
        return self.registers

    def register_value(self, register: Register | str) -> int:
        return self._registers.read(resolve_register(register))

    def set_register(self, register: Register | str, value: int) -> None:
        """Overwrite a register, e.g. to preset it before running."""
        self._registers.preset(resolve_register(register), value)

    def current_instruction(self) -> Instruction | None:
        """Decode the instruction at pc without executing it.

        Returns None when pc is outside the program.
        """
        line = self.program.get(self._pc)
        if line is None:
            return None
        return decode(line, self._pc)

    @property
    def pc(self) -> int:
        return self._pc

    @property
    def halted(self) -> bool:
        return self._halted

    @property
    def steps(self) -> int:
        """Number of instructions executed so far."""
        return self._steps

    @property
    def registers(self) -> dict[str, int]:
        return self._registers.snapshot()

    # -----------------------------------------------------------------------
    # Instruction dispatch
    # -----------------------------------------------------------------------

    def _exec(self, instr: Instruction) -> None:
        handler = self._DISPATCH[instr.kind]
        handler(self, instr)

    def _exec_half(self, instr: Half) -> None:
        value = self._registers.read(instr.reg)
        self._registers.write(instr.reg, value // 2)
        self._pc += 1

    def _exec_triple(self, instr: Triple) -> None:
        value = self._registers.read(instr.reg)
        self._registers.write(instr.reg, value * 3)
        self._pc += 1

    def _exec_increment(self, instr: Increment) -> None:
        value = self._registers.read(instr.reg)
        self._registers.write(instr.reg, value + 1)
        self._pc += 1

    def _exec_jump(self, instr: Jump) -> None:
        # Bounds are checked by the next fetch, not here.
        self._pc += instr.offset

    def _exec_jump_if_even(self, instr: JumpIfEven) -> None:
        if self._registers.read(instr.reg) % 2 == 0:
            self._pc += instr.offset
        else:
            self._pc += 1

    def _exec_jump_if_one(self, instr: JumpIfOne) -> None:
        if self._registers.read(instr.reg) == 1:
            self._pc += instr.offset
        else:
            self._pc += 1

    _DISPATCH: dict[str, Callable[[ExecutionEngine, Instruction], None]] = {
        "hlf": _exec_half,
        "tpl": _exec_triple,
        "inc": _exec_increment,
        "jmp": _exec_jump,
        "jie": _exec_jump_if_even,
        "jio": _exec_jump_if_one,
    }
