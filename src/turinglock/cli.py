"""Command-line runner: load a program file, run it, print the registers."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from turinglock.export import to_assembly
from turinglock.loader import read_program
from turinglock.machine import MachineError, decode_program, run
from turinglock.model.instructions import Instruction
from turinglock.model.registers import MachineConfig, OverflowPolicy, Register


def _parse_preset(text: str) -> tuple[str, int]:
    name, sep, value = text.partition("=")
    if not sep or name not in {r.value for r in Register}:
        raise argparse.ArgumentTypeError(
            f"expected REG=VALUE with REG in {[r.value for r in Register]}, got {text!r}"
        )
    try:
        return name, int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"register value must be an integer, got {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="turinglock",
        description="Run a two-register machine program and print the final registers.",
    )
    parser.add_argument("program", type=Path, help="program file, one instruction per line")
    parser.add_argument(
        "--set", dest="presets", action="append", default=[], type=_parse_preset,
        metavar="REG=VALUE", help="preset a register before running (repeatable)",
    )
    parser.add_argument(
        "--overflow", choices=[p.value for p in OverflowPolicy], default=None,
        help="register overflow policy (default: unbounded)",
    )
    parser.add_argument("--word-bits", type=int, default=None, help="register width in bits (default: 64)")
    parser.add_argument("--config", type=Path, default=None, help="JSON MachineConfig file")
    parser.add_argument(
        "--max-steps", type=int, default=None,
        help="give up after this many executed instructions",
    )
    parser.add_argument("--trace", action="store_true", help="print each executed instruction")
    parser.add_argument("--list", action="store_true", help="print the decoded program and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def _build_config(args: argparse.Namespace) -> MachineConfig:
    """Merge the JSON config file with flag overrides, then validate once."""
    data: dict = {}
    if args.config is not None:
        data = json.loads(args.config.read_text(encoding="utf-8"))
        if not isinstance(data, dict):
            raise ValueError(f"{args.config}: expected a JSON object")
    if args.overflow is not None:
        data["overflow"] = args.overflow
    if args.word_bits is not None:
        data["word_bits"] = args.word_bits
    if args.presets:
        registers = dict(data.get("registers", {}))
        registers.update(dict(args.presets))
        data["registers"] = registers
    return MachineConfig.model_validate(data)


def _print_step(pc: int, instr: Instruction) -> None:
    print(f"{pc:>4}  {to_assembly(instr)}")


def _run(args: argparse.Namespace) -> None:
    config = _build_config(args)

    if args.list:
        for index, instr in enumerate(decode_program(read_program(args.program))):
            print(f"{index}: {to_assembly(instr)}")
        return

    registers = run(
        args.program,
        config=config,
        max_steps=args.max_steps,
        on_step=_print_step if args.trace else None,
    )
    for name, value in registers.items():
        print(f"{name}={value}")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        _run(args)
    except (MachineError, ValueError, OSError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
