# src/logictest_core/components/memory.py

import logging
from typing import Dict, List, Optional, Tuple

from ..graph.handles import PortDirection, PortSpec
from .base import ComponentBase, bit_mask, check_bit_width, register_component
from .base_enums import ComponentKind
from .capabilities import ISequentialElement, Values, provides

logger = logging.getLogger(__name__)


@register_component("Register")
class Register(ComponentBase):
    """
    An edge-triggered register.

    On a rising clock edge with enable not low, the register stores `d`.
    A high `rst` clears it to zero regardless of the clock. An unconnected
    enable counts as enabled. The stored value appears on `q`.
    """
    component_kind = ComponentKind.REGISTER

    PORT_IN = "d"
    PORT_OUT = "q"
    PORT_ENABLE = "en"
    PORT_CLK = "clk"
    PORT_ZERO = "rst"

    @provides(ISequentialElement)
    class Sequential:
        def initial_state(self, component: "Register") -> int:
            return 0

        def outputs(self, component: "Register", state: int) -> Values:
            return {Register.PORT_OUT: state}

        def next_state(self, component: "Register", state: int, inputs: Values, previous_inputs: Values) -> int:
            if inputs.get(Register.PORT_ZERO) == 1:
                return 0
            rising_edge = previous_inputs.get(Register.PORT_CLK) == 0 and inputs.get(Register.PORT_CLK) == 1
            if not rising_edge or inputs.get(Register.PORT_ENABLE) == 0:
                return state
            d = inputs.get(Register.PORT_IN)
            # A clocked-in undefined value leaves the stored state alone.
            return state if d is None else d & bit_mask(component.bits)

    def __init__(
        self,
        instance_id: str,
        label: Optional[str] = None,
        position: Optional[Tuple[int, int]] = None,
        bits: int = 1,
    ):
        super().__init__(instance_id, "Register", label=label, position=position)
        self.bits: int = check_bit_width(bits, instance_id)

    def get_port_specs(self) -> Dict[str, PortSpec]:
        return {
            self.PORT_IN: PortSpec(self.PORT_IN, PortDirection.SINK, self.bits),
            self.PORT_OUT: PortSpec(self.PORT_OUT, PortDirection.SOURCE, self.bits),
            self.PORT_ENABLE: PortSpec(self.PORT_ENABLE, PortDirection.SINK, 1),
            self.PORT_CLK: PortSpec(self.PORT_CLK, PortDirection.SINK, 1),
            self.PORT_ZERO: PortSpec(self.PORT_ZERO, PortDirection.SINK, 1),
        }

    @classmethod
    def declare_parameters(cls) -> Dict[str, str]:
        return {"bits": "int"}

    @classmethod
    def declare_ports(cls) -> List[str]:
        return [cls.PORT_IN, cls.PORT_OUT, cls.PORT_ENABLE, cls.PORT_CLK, cls.PORT_ZERO]
