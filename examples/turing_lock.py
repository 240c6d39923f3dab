"""Turing lock puzzle: run the same program from two starting states.

The program walks the Collatz sequence of a value it builds in
register a, counting steps in register b.  Part two starts with a = 1,
which selects the other branch at the top of the program.
"""

from turinglock.machine import load
from turinglock.model.registers import MachineConfig

PROGRAM = [
    "jio a, +16",
    "inc a",
    "inc a",
    "tpl a",
    "tpl a",
    "tpl a",
    "inc a",
    "inc a",
    "tpl a",
    "inc a",
    "inc a",
    "tpl a",
    "tpl a",
    "tpl a",
    "inc a",
    "jmp +8",
    "tpl a",
    "inc a",
    "tpl a",
    "inc a",
    "inc a",
    "tpl a",
    "inc a",
    "tpl a",
    "jio a, +8",
    "inc b",
    "jie a, +4",
    "tpl a",
    "inc a",
    "jmp +2",
    "hlf a",
    "jmp -7",
]


if __name__ == "__main__":
    for label, config in (
        ("part one", MachineConfig()),
        ("part two", MachineConfig(registers={"a": 1})),
    ):
        engine = load(PROGRAM, config=config)
        registers = engine.run_to_completion()
        print(f"{label}: b={registers['b']} after {engine.steps} instructions")
