# tests/components/test_component_registry.py

"""
Tests for the component subsystem: registration contracts, capability
discovery, port shapes and construction-time validation.
"""

import pytest

from logictest_core.components import (
    COMPONENT_REGISTRY,
    Adder,
    ComponentError,
    ComponentKind,
    Constant,
    NotGate,
    Pin,
    PinDirection,
    Register,
)
from logictest_core.components.base import ComponentBase, register_component
from logictest_core.components.capabilities import (
    ICombinationalLogic,
    IHarnessTerminal,
    ISequentialElement,
    provides,
)
from logictest_core.graph import PortDirection, PortSpec


class TestComponentRegistration:

    def test_builtin_types_are_registered(self):
        for type_str in ("Pin", "Constant", "Register", "AndGate", "OrGate", "XorGate", "NotGate", "Adder"):
            assert type_str in COMPONENT_REGISTRY
        assert COMPONENT_REGISTRY["Register"] is Register

    def test_register_component_rejects_invalid_ports(self):
        with pytest.raises(TypeError, match="must return a list of non-empty strings"):
            @register_component("BadPortsEmpty")
            class BadComponent1(ComponentBase):
                @classmethod
                def declare_parameters(cls): return {}
                @classmethod
                def declare_ports(cls): return ["a", ""]

        with pytest.raises(TypeError, match="must return a list of unique strings"):
            @register_component("BadPortsDuplicate")
            class BadComponent2(ComponentBase):
                @classmethod
                def declare_parameters(cls): return {}
                @classmethod
                def declare_ports(cls): return ["a", "a"]

        assert "BadPortsEmpty" not in COMPONENT_REGISTRY
        assert "BadPortsDuplicate" not in COMPONENT_REGISTRY

    def test_register_component_rejects_unknown_parameter_types(self):
        with pytest.raises(TypeError, match="declare_parameters\\(\\) must return"):
            @register_component("BadParams")
            class BadComponent(ComponentBase):
                @classmethod
                def declare_parameters(cls): return {"bits": "float"}
                @classmethod
                def declare_ports(cls): return ["a"]

    def test_register_component_requires_component_base(self):
        with pytest.raises(TypeError, match="must inherit from ComponentBase"):
            @register_component("NotAComponent")
            class Plain:
                pass


class TestCapabilities:

    def test_capabilities_are_discovered_and_cached(self):
        reg = Register("reg", bits=4)
        sequential = reg.get_capability(ISequentialElement)
        assert sequential is not None
        assert reg.get_capability(ISequentialElement) is sequential
        assert reg.get_capability(ICombinationalLogic) is None

    def test_capabilities_are_inherited(self):
        class Doubler(Adder):
            pass

        adder = Doubler("dbl", bits=4)
        logic = adder.get_capability(ICombinationalLogic)
        assert logic.propagate(adder, {"a": 9, "b": 9}) == {"out": 2}

    def test_subclass_capability_shadows_parent(self):
        class Echo(Pin):
            @provides(IHarnessTerminal)
            class Terminal:
                def driven_port(self, component):
                    return "echo"

        assert Echo("e").get_capability(IHarnessTerminal).driven_port(None) == "echo"


class TestElements:

    def test_pin_shape_follows_direction(self):
        source = Pin("in", bits=8, is_input=True)
        sink = Pin("out", bits=8, is_input=False)
        assert source.kind is ComponentKind.INPUT_PIN
        assert sink.kind is ComponentKind.OUTPUT_PIN
        assert source.direction is PinDirection.INPUT
        assert source.get_port_specs() == {"pin": PortSpec("pin", PortDirection.SOURCE, 8)}
        assert sink.get_port_specs() == {"pin": PortSpec("pin", PortDirection.SINK, 8)}
        assert source.get_capability(IHarnessTerminal).driven_port(source) == "pin"
        assert sink.get_capability(IHarnessTerminal).driven_port(sink) is None

    def test_register_ports(self):
        reg = Register("reg", bits=16)
        specs = reg.get_port_specs()
        assert list(specs) == Register.declare_ports()
        assert specs["q"] == PortSpec("q", PortDirection.SOURCE, 16)
        assert specs["d"].bits == 16
        assert all(specs[name].bits == 1 for name in ("en", "clk", "rst"))
        assert reg.kind is ComponentKind.REGISTER

    def test_register_next_state(self):
        reg = Register("reg", bits=4)
        seq = reg.get_capability(ISequentialElement)
        rising = ({"clk": 1, "d": 7, "en": None, "rst": 0}, {"clk": 0})
        assert seq.next_state(reg, 2, *rising) == 7
        assert seq.next_state(reg, 2, {"clk": 1, "d": 7, "en": 0}, {"clk": 0}) == 2
        assert seq.next_state(reg, 2, {"clk": 1, "d": 7}, {"clk": 1}) == 2
        assert seq.next_state(reg, 2, {"clk": 1, "d": None}, {"clk": 0}) == 2
        assert seq.next_state(reg, 2, {"clk": 0, "rst": 1}, {"clk": 0}) == 0

    def test_gates_mask_and_propagate_undefined(self):
        inv = NotGate("inv", bits=3)
        logic = inv.get_capability(ICombinationalLogic)
        assert logic.propagate(inv, {"in": 0b101}) == {"out": 0b010}
        assert logic.propagate(inv, {"in": None}) == {"out": None}
        adder = Adder("add", bits=3)
        assert adder.get_capability(ICombinationalLogic).propagate(adder, {"a": 7, "b": None}) == {"out": None}

    @pytest.mark.parametrize("bits", [0, 33, True, 1.5])
    def test_bit_width_is_validated(self, bits):
        with pytest.raises(ComponentError, match="Bit size must be"):
            Register("reg", bits=bits)

    def test_constant_value_must_fit(self):
        assert Constant("k", bits=4, value=15).value == 15
        with pytest.raises(ComponentError, match="does not fit in 4 unsigned bits"):
            Constant("k", bits=4, value=16)

    def test_components_start_unplaced(self):
        pin = Pin("p", label="P")
        assert pin.component_id is None
        assert pin.fqn == "p"
        assert repr(pin) == "Pin(fqn='p', label='P')"
