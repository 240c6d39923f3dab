"""Shared test helpers for the turinglock test suite."""

from turinglock.machine import ExecutionEngine
from turinglock.model.program import Program
from turinglock.model.registers import MachineConfig


def make_engine(lines, **config_kwargs):
    """Build an engine over *lines* with an optional MachineConfig."""
    config = MachineConfig(**config_kwargs) if config_kwargs else None
    return ExecutionEngine(Program.from_lines(lines), config)


def run_lines(lines, **config_kwargs):
    """Run *lines* to completion and return the engine."""
    engine = make_engine(lines, **config_kwargs)
    engine.run_to_completion()
    return engine
