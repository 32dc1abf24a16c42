# src/logictest_core/components/capabilities.py
"""
Defines the capability protocols through which a simulation engine talks to
components without knowing their concrete classes.

A component class declares what it can do by nesting an implementation class
decorated with `@provides(<Protocol>)`. The engine asks an instance for a
capability with `component.get_capability(<Protocol>)` and receives either an
implementation object or `None`.

- ICombinationalLogic: outputs are a pure function of the current inputs.
- ISequentialElement: outputs come from stored state; the state advances when
  the engine clocks the element.
- IHarnessTerminal: the component is a pin the test harness writes or reads.

Values are unsigned integers masked to the port width, or `None` when the
value is undefined (unconnected input, nothing evaluated yet).
"""

import logging
from typing import (
    Dict,
    Optional,
    Protocol,
    Type,
    TypeVar,
    TYPE_CHECKING,
    runtime_checkable,
)

if TYPE_CHECKING:
    from .base import ComponentBase

logger = logging.getLogger(__name__)

Values = Dict[str, Optional[int]]


@runtime_checkable
class ComponentCapability(Protocol):
    """A marker protocol for all component capabilities."""

    pass


TCapability = TypeVar("TCapability", bound=ComponentCapability)


@runtime_checkable
class ICombinationalLogic(ComponentCapability, Protocol):
    """
    The capability of a component to compute its source ports from its sink ports.
    """

    def propagate(self, component: "ComponentBase", inputs: Values) -> Values:
        """
        Args:
            component: The component instance, providing its parameters.
            inputs: The current value of every sink port, keyed by port name.

        Returns:
            The value of every source port, keyed by port name.
        """
        ...


@runtime_checkable
class ISequentialElement(ComponentCapability, Protocol):
    """
    The capability of a component to hold state between evaluations.

    The engine reads `outputs` during a combinational pass and calls
    `next_state` afterwards with the inputs seen in this pass and the inputs
    seen in the previous one, so edge-triggered behaviour can be expressed.
    """

    def initial_state(self, component: "ComponentBase") -> int:
        ...

    def outputs(self, component: "ComponentBase", state: int) -> Values:
        ...

    def next_state(
        self,
        component: "ComponentBase",
        state: int,
        inputs: Values,
        previous_inputs: Values,
    ) -> int:
        ...


@runtime_checkable
class IHarnessTerminal(ComponentCapability, Protocol):
    """The capability of a component to be driven or observed by the test harness."""

    def driven_port(self, component: "ComponentBase") -> Optional[str]:
        """The name of the port the harness writes, or `None` if the harness only reads."""
        ...


def provides(capability_protocol: Type[ComponentCapability]):
    """
    A class decorator registering the decorated class as the implementation of
    `capability_protocol`. `ComponentBase.declare_capabilities` discovers it
    through the `_implements_capability` attribute.
    """

    def decorator(cls: Type) -> Type:
        if not issubclass(capability_protocol, ComponentCapability):
            raise TypeError(
                f"Decorator argument for @provides must be a ComponentCapability "
                f"Protocol, but got {capability_protocol}."
            )
        cls._implements_capability = capability_protocol
        logger.debug(
            f"Class '{cls.__name__}' registered as providing capability '{capability_protocol.__name__}'."
        )
        return cls

    return decorator
