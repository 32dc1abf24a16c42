# src/logictest_core/components/__init__.py
import logging
logger = logging.getLogger(__name__)

# Import base first to define registry and decorator
from .base import ComponentBase, COMPONENT_REGISTRY, register_component
from .base_enums import ComponentKind, PinDirection
from .exceptions import ComponentError
# Import concrete elements to trigger registration
from .wiring import Pin, Constant
from .memory import Register
from .elements import AndGate, OrGate, XorGate, NotGate, Adder

logger.debug(f"Available component types: {list(COMPONENT_REGISTRY.keys())}")

__all__ = [
    "ComponentBase",
    "COMPONENT_REGISTRY",
    "register_component",
    "ComponentKind",
    "PinDirection",
    "ComponentError",
    "Pin",
    "Constant",
    "Register",
    "AndGate",
    "OrGate",
    "XorGate",
    "NotGate",
    "Adder",
]
