# src/logictest_core/components/base.py

import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Type

from ..constants import MAX_BITS
from ..graph.handles import PortSpec
from .base_enums import ComponentKind
from .capabilities import ComponentCapability, TCapability
from .exceptions import ComponentError

logger = logging.getLogger(__name__)

#: Python types accepted for each parameter type name used by `declare_parameters`.
PARAMETER_TYPES: Dict[str, Tuple[type, ...]] = {
    "int": (int,),
    "bool": (bool,),
}


class ComponentBase(ABC):
    """
    The abstract base class for every placeable netlist element.

    A component knows its identity (instance id, optional free-text label,
    position) and the shape of its ports. It does not know what it is wired
    to; connectivity is owned by the `Board` the component is placed on, which
    also assigns `component_id` and `board_name`.
    """
    component_type_str: ClassVar[str] = "BaseComponent"
    component_kind: ClassVar[ComponentKind] = ComponentKind.OTHER

    def __init__(
        self,
        instance_id: str,
        component_type_str: str,
        label: Optional[str] = None,
        position: Optional[Tuple[int, int]] = None,
    ):
        """
        Args:
            instance_id: The design-level id of this instance (e.g., 'reg1').
            component_type_str: The registered type string (e.g., 'Register').
            label: The user-visible label, or None if the component has none.
            position: Grid location on the board; None lets the board choose.
        """
        self.instance_id: str = instance_id
        self.component_type: str = component_type_str
        self.label: Optional[str] = label
        self.position: Optional[Tuple[int, int]] = tuple(position) if position is not None else None

        # Assigned by Board.add_component and cleared by Board.remove_component.
        self.component_id: Optional[int] = None
        self.board_name: Optional[str] = None

        self._capability_cache: Dict[Type[ComponentCapability], ComponentCapability] = {}
        logger.debug(f"Initialized {type(self).__name__} '{self.instance_id}'")

    @property
    def fqn(self) -> str:
        """The instance id qualified by the board this component is placed on."""
        if self.board_name is None:
            return self.instance_id
        return f"{self.board_name}.{self.instance_id}"

    @property
    def kind(self) -> ComponentKind:
        return type(self).component_kind

    @abstractmethod
    def get_port_specs(self) -> Dict[str, PortSpec]:
        """
        The direction and width of every port of this instance, keyed by port
        name, in the order given by `declare_ports()`.
        """
        pass

    @classmethod
    def declare_capabilities(cls) -> Dict[Type[ComponentCapability], Type]:
        """
        Discovers the nested `@provides` classes across the MRO. A capability
        declared on a subclass shadows the one inherited from a parent.
        """
        discovered_capabilities = {}
        for base_class in cls.__mro__:
            for member_obj in vars(base_class).values():
                if hasattr(member_obj, '_implements_capability'):
                    protocol = member_obj._implements_capability
                    if protocol not in discovered_capabilities:
                        discovered_capabilities[protocol] = member_obj
        return discovered_capabilities

    def get_capability(self, capability_type: Type[TCapability]) -> Optional[TCapability]:
        """
        Returns this instance's implementation of `capability_type`, or None if
        the component does not provide it. Implementations are created lazily
        and cached per instance.
        """
        if capability_type in self._capability_cache:
            return self._capability_cache[capability_type]

        impl_class = type(self).declare_capabilities().get(capability_type)
        if impl_class:
            instance = impl_class()
            self._capability_cache[capability_type] = instance
            return instance

        return None

    @classmethod
    @abstractmethod
    def declare_parameters(cls) -> Dict[str, str]:
        """Declare the design-file parameters of this type and their type names ('int' or 'bool')."""
        pass

    @classmethod
    @abstractmethod
    def declare_ports(cls) -> List[str]:
        """Declare the names of this type's ports, in their canonical order."""
        pass

    def __str__(self) -> str:
        return f"{type(self).__name__}('{self.fqn}')"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(fqn='{self.fqn}', label={self.label!r})"


def check_bit_width(bits: Any, component_id: str) -> int:
    """Validates a bit-width parameter, raising `ComponentError` when out of range."""
    if isinstance(bits, bool) or not isinstance(bits, int):
        raise ComponentError(component_fqn=component_id, details=f"Bit size must be an integer, got {bits!r}.")
    if not 1 <= bits <= MAX_BITS:
        raise ComponentError(
            component_fqn=component_id,
            details=f"Bit size must be between 1 and {MAX_BITS}, got {bits}."
        )
    return bits


def bit_mask(bits: int) -> int:
    return (1 << bits) - 1


# --- Global Component Registry and Decorator ---

COMPONENT_REGISTRY: Dict[str, type[ComponentBase]] = {}


def register_component(type_str: str):
    """
    A class decorator to register a component class under `type_str`, making it
    available to the design builder.
    """
    def decorator(cls: type[ComponentBase]):
        if not issubclass(cls, ComponentBase):
            raise TypeError(f"Class {cls.__name__} must inherit from ComponentBase.")

        try:
            ports = cls.declare_ports()
            if not isinstance(ports, list) or not all(isinstance(p, str) and p for p in ports):
                raise TypeError(
                    f"Component class '{cls.__name__}' violates API contract. "
                    f"declare_ports() must return a list of non-empty strings, but returned: {ports}."
                )
            if len(set(ports)) != len(ports):
                raise TypeError(
                    f"Component class '{cls.__name__}' violates API contract. "
                    f"declare_ports() must return a list of unique strings, but found duplicates in: {ports}."
                )
        except Exception as e:
            raise TypeError(
                f"A failure occurred while attempting to validate the API contract of "
                f"component class '{cls.__name__}'. Error during call to declare_ports(): {e}"
            ) from e

        try:
            params = cls.declare_parameters()
            if not isinstance(params, dict) or not all(
                isinstance(k, str) and v in PARAMETER_TYPES for k, v in params.items()
            ):
                raise TypeError(
                    f"Component class '{cls.__name__}' violates API contract. "
                    f"declare_parameters() must return a Dict[str, str] with type names in "
                    f"{sorted(PARAMETER_TYPES)}, but returned: {params!r}."
                )
        except Exception as e:
            raise TypeError(
                f"A failure occurred while attempting to validate the API contract of "
                f"component class '{cls.__name__}'. Error during call to declare_parameters(): {e}"
            ) from e

        if type_str in COMPONENT_REGISTRY:
            logger.warning(f"Component type '{type_str}' is being redefined/overwritten.")
        cls.component_type_str = type_str
        COMPONENT_REGISTRY[type_str] = cls
        logger.debug(f"Registered component type '{type_str}' -> {cls.__name__}")
        return cls
    return decorator
