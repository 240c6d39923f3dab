"""Tests for register overflow policies and MachineConfig validation."""

import pytest
from pydantic import ValidationError

from conftest import make_engine

from turinglock.machine import MachineError, RegisterOverflowError
from turinglock.model.registers import MachineConfig, OverflowPolicy, Register


# ===========================================================================
# Overflow policies
# ===========================================================================


class TestOverflowPolicies:
    def test_wrap(self):
        engine = make_engine(["tpl a"], registers={"a": 100}, overflow="wrap", word_bits=8)
        engine.run_to_completion()
        assert engine.register_value("a") == 300 % 256

    def test_wrap_increment_at_max(self):
        engine = make_engine(["inc b"], registers={"b": 255}, overflow="wrap", word_bits=8)
        engine.run_to_completion()
        assert engine.register_value("b") == 0

    def test_saturate(self):
        engine = make_engine(["tpl a"], registers={"a": 100}, overflow="saturate", word_bits=8)
        engine.run_to_completion()
        assert engine.register_value("a") == 255

    def test_saturate_then_half(self):
        engine = make_engine(
            ["tpl a", "hlf a"], registers={"a": 100}, overflow="saturate", word_bits=8,
        )
        engine.run_to_completion()
        assert engine.register_value("a") == 127

    def test_checked_raises(self):
        engine = make_engine(["tpl a"], registers={"a": 100}, overflow="checked", word_bits=8)
        with pytest.raises(RegisterOverflowError, match="register a overflow: 300") as excinfo:
            engine.step()
        err = excinfo.value
        assert err.register == Register.A
        assert err.value == 300
        assert err.word_bits == 8
        assert isinstance(err, OverflowError)
        assert isinstance(err, MachineError)

    def test_checked_leaves_state_unchanged(self):
        engine = make_engine(["tpl a"], registers={"a": 100}, overflow="checked", word_bits=8)
        with pytest.raises(RegisterOverflowError):
            engine.run_to_completion()
        assert engine.register_value("a") == 100
        assert engine.pc == 0
        assert engine.steps == 0

    def test_checked_at_limit_is_fine(self):
        engine = make_engine(["inc a"], registers={"a": 254}, overflow="checked", word_bits=8)
        engine.run_to_completion()
        assert engine.register_value("a") == 255

    def test_default_word_is_64_bits(self):
        engine = make_engine(["inc a"], registers={"a": 2**64 - 1}, overflow="wrap")
        engine.run_to_completion()
        assert engine.register_value("a") == 0

    def test_unbounded_ignores_width(self):
        engine = make_engine(["tpl a"], registers={"a": 100}, word_bits=8)
        engine.run_to_completion()
        assert engine.register_value("a") == 300

    def test_set_register_rejects_too_wide(self):
        engine = make_engine([], overflow="wrap", word_bits=8)
        with pytest.raises(ValueError, match="does not fit in 8 bits"):
            engine.set_register("a", 256)


# ===========================================================================
# MachineConfig validators
# ===========================================================================


class TestMachineConfig:
    def test_defaults(self):
        cfg = MachineConfig()
        assert cfg.registers == {}
        assert cfg.overflow == OverflowPolicy.UNBOUNDED
        assert cfg.word_bits == 64
        assert cfg.max_value is None

    def test_max_value(self):
        assert MachineConfig(overflow="wrap", word_bits=8).max_value == 255

    def test_register_keys_from_names(self):
        cfg = MachineConfig(registers={"a": 1})
        assert cfg.registers == {Register.A: 1}

    def test_unknown_register_key(self):
        with pytest.raises(ValidationError):
            MachineConfig(registers={"c": 1})

    def test_negative_preset(self):
        with pytest.raises(ValidationError, match="must be non-negative"):
            MachineConfig(registers={"a": -1})

    def test_preset_too_wide(self):
        with pytest.raises(ValidationError, match="does not fit in 4 bits"):
            MachineConfig(registers={"b": 16}, overflow="checked", word_bits=4)

    def test_zero_width(self):
        with pytest.raises(ValidationError):
            MachineConfig(word_bits=0)

    def test_unknown_policy(self):
        with pytest.raises(ValidationError):
            MachineConfig(overflow="explode")

    def test_from_json(self):
        cfg = MachineConfig.model_validate_json(
            '{"registers": {"a": 1}, "overflow": "saturate", "word_bits": 16}'
        )
        assert cfg.registers == {Register.A: 1}
        assert cfg.overflow == OverflowPolicy.SATURATE
        assert cfg.max_value == 65535
