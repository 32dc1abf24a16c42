# src/logictest_core/components/wiring.py
"""
Pins and constants: the components that move values across the boundary of a
subcircuit or inject fixed values into it.
"""

import logging
from typing import Dict, List, Optional, Tuple

from ..graph.handles import PortDirection, PortSpec
from .base import ComponentBase, bit_mask, check_bit_width, register_component
from .base_enums import ComponentKind, PinDirection
from .capabilities import ICombinationalLogic, IHarnessTerminal, Values, provides
from .exceptions import ComponentError

logger = logging.getLogger(__name__)


@register_component("Pin")
class Pin(ComponentBase):
    """
    An input or output pin of a subcircuit.

    An input pin drives its single port (the port is a SOURCE on the wire); an
    output pin reads it (SINK). These are also the probes that replace the
    ports of a mocked register.
    """
    PORT = "pin"

    @provides(IHarnessTerminal)
    class HarnessTerminal:
        def driven_port(self, component: "Pin") -> Optional[str]:
            return Pin.PORT if component.is_input else None

    def __init__(
        self,
        instance_id: str,
        label: Optional[str] = None,
        position: Optional[Tuple[int, int]] = None,
        bits: int = 1,
        is_input: bool = True,
    ):
        super().__init__(instance_id, "Pin", label=label, position=position)
        self.bits: int = check_bit_width(bits, instance_id)
        self.is_input: bool = bool(is_input)

    @property
    def direction(self) -> PinDirection:
        return PinDirection.INPUT if self.is_input else PinDirection.OUTPUT

    @property
    def kind(self) -> ComponentKind:
        return ComponentKind.INPUT_PIN if self.is_input else ComponentKind.OUTPUT_PIN

    def get_port_specs(self) -> Dict[str, PortSpec]:
        direction = PortDirection.SOURCE if self.is_input else PortDirection.SINK
        return {self.PORT: PortSpec(self.PORT, direction, self.bits)}

    @classmethod
    def declare_parameters(cls) -> Dict[str, str]:
        return {"bits": "int", "is_input": "bool"}

    @classmethod
    def declare_ports(cls) -> List[str]:
        return [cls.PORT]


@register_component("Constant")
class Constant(ComponentBase):
    """Drives a fixed value onto its output."""
    PORT_OUT = "out"

    @provides(ICombinationalLogic)
    class Logic:
        def propagate(self, component: "Constant", inputs: Values) -> Values:
            return {Constant.PORT_OUT: component.value}

    def __init__(
        self,
        instance_id: str,
        label: Optional[str] = None,
        position: Optional[Tuple[int, int]] = None,
        bits: int = 1,
        value: int = 0,
    ):
        super().__init__(instance_id, "Constant", label=label, position=position)
        self.bits: int = check_bit_width(bits, instance_id)
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= bit_mask(self.bits):
            raise ComponentError(
                component_fqn=instance_id,
                details=f"Constant value {value!r} does not fit in {self.bits} unsigned bits."
            )
        self.value: int = value

    def get_port_specs(self) -> Dict[str, PortSpec]:
        return {self.PORT_OUT: PortSpec(self.PORT_OUT, PortDirection.SOURCE, self.bits)}

    @classmethod
    def declare_parameters(cls) -> Dict[str, str]:
        return {"bits": "int", "value": "int"}

    @classmethod
    def declare_ports(cls) -> List[str]:
        return [cls.PORT_OUT]
