# src/logictest_core/components/elements.py
"""
This module provides the combinational building blocks: bitwise gates and an
adder. Every operation works on unsigned values masked to the component width,
and any undefined input makes the output undefined.
"""

import logging
import operator
from typing import Callable, ClassVar, Dict, List, Optional, Tuple

from ..graph.handles import PortDirection, PortSpec
from .base import ComponentBase, bit_mask, check_bit_width, register_component
from .capabilities import ICombinationalLogic, Values, provides

logger = logging.getLogger(__name__)


class BinaryLogicElement(ComponentBase):
    """
    Shared shape of the two-input elements: `a` and `b` in, `out` out, all
    `bits` wide. Subclasses only choose the operation.
    """
    PORT_A = "a"
    PORT_B = "b"
    PORT_OUT = "out"

    operation: ClassVar[Callable[[int, int], int]]

    @provides(ICombinationalLogic)
    class Logic:
        def propagate(self, component: "BinaryLogicElement", inputs: Values) -> Values:
            a = inputs.get(BinaryLogicElement.PORT_A)
            b = inputs.get(BinaryLogicElement.PORT_B)
            if a is None or b is None:
                return {BinaryLogicElement.PORT_OUT: None}
            result = type(component).operation(a, b) & bit_mask(component.bits)
            return {BinaryLogicElement.PORT_OUT: result}

    def __init__(
        self,
        instance_id: str,
        label: Optional[str] = None,
        position: Optional[Tuple[int, int]] = None,
        bits: int = 1,
    ):
        super().__init__(instance_id, type(self).component_type_str, label=label, position=position)
        self.bits: int = check_bit_width(bits, instance_id)

    def get_port_specs(self) -> Dict[str, PortSpec]:
        return {
            self.PORT_A: PortSpec(self.PORT_A, PortDirection.SINK, self.bits),
            self.PORT_B: PortSpec(self.PORT_B, PortDirection.SINK, self.bits),
            self.PORT_OUT: PortSpec(self.PORT_OUT, PortDirection.SOURCE, self.bits),
        }

    @classmethod
    def declare_parameters(cls) -> Dict[str, str]:
        return {"bits": "int"}

    @classmethod
    def declare_ports(cls) -> List[str]:
        return [cls.PORT_A, cls.PORT_B, cls.PORT_OUT]


@register_component("AndGate")
class AndGate(BinaryLogicElement):
    """Bitwise AND."""
    operation = staticmethod(operator.and_)


@register_component("OrGate")
class OrGate(BinaryLogicElement):
    """Bitwise OR."""
    operation = staticmethod(operator.or_)


@register_component("XorGate")
class XorGate(BinaryLogicElement):
    """Bitwise XOR."""
    operation = staticmethod(operator.xor)


@register_component("Adder")
class Adder(BinaryLogicElement):
    """Unsigned addition; the carry out of the top bit is dropped."""
    operation = staticmethod(operator.add)


@register_component("NotGate")
class NotGate(ComponentBase):
    """Bitwise inversion of `in`."""
    PORT_IN = "in"
    PORT_OUT = "out"

    @provides(ICombinationalLogic)
    class Logic:
        def propagate(self, component: "NotGate", inputs: Values) -> Values:
            value = inputs.get(NotGate.PORT_IN)
            if value is None:
                return {NotGate.PORT_OUT: None}
            return {NotGate.PORT_OUT: ~value & bit_mask(component.bits)}

    def __init__(
        self,
        instance_id: str,
        label: Optional[str] = None,
        position: Optional[Tuple[int, int]] = None,
        bits: int = 1,
    ):
        super().__init__(instance_id, "NotGate", label=label, position=position)
        self.bits: int = check_bit_width(bits, instance_id)

    def get_port_specs(self) -> Dict[str, PortSpec]:
        return {
            self.PORT_IN: PortSpec(self.PORT_IN, PortDirection.SINK, self.bits),
            self.PORT_OUT: PortSpec(self.PORT_OUT, PortDirection.SOURCE, self.bits),
        }

    @classmethod
    def declare_parameters(cls) -> Dict[str, str]:
        return {"bits": "int"}

    @classmethod
    def declare_ports(cls) -> List[str]:
        return [cls.PORT_IN, cls.PORT_OUT]
