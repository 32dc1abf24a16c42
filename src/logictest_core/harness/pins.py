# src/logictest_core/harness/pins.py
"""
The handles tests use to drive and observe a board.

A `PinHandle` is either a WRITER (it stands for an input pin, the test sets
its value) or a READER (an output pin, the test observes it). The role is
fixed when the handle is created; calling the operation of the other role is
an error. Handles hold no values themselves: `set` and `get` go straight to
the session's simulator.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Optional

from ..components.base import bit_mask
from ..components.base_enums import PinDirection
from ..components.wiring import Pin
from ..graph.exceptions import NetlistStructureError
from ..graph.handles import PortRef
from ..resolution.exceptions import DirectionMismatchError
from .exceptions import OutOfRangeError

if TYPE_CHECKING:
    from .session import SimulationSession

logger = logging.getLogger(__name__)


class PinRole(Enum):
    WRITER = "writer"
    READER = "reader"

    @property
    def pin_direction(self) -> PinDirection:
        return PinDirection.INPUT if self is PinRole.WRITER else PinDirection.OUTPUT


@dataclass(frozen=True)
class PinHandle:
    port: PortRef
    role: PinRole
    bits: int
    label: str
    session: SimulationSession = field(compare=False, repr=False)

    @classmethod
    def for_port(cls, session: SimulationSession, port: PortRef, role: PinRole, label: Optional[str] = None) -> PinHandle:
        """
        Wraps `port`, checking once that it belongs to a pin whose direction
        matches `role`.
        """
        board = session.board
        owner = board.owner_of(port)
        if not isinstance(owner, Pin):
            raise NetlistStructureError(
                board_name=board.name,
                details=f"'{board.describe_port(port)}' is not the port of a pin and cannot be wrapped."
            )
        label = label or owner.label or owner.instance_id
        if owner.direction is not role.pin_direction:
            raise DirectionMismatchError(
                board_name=board.name,
                label=label,
                expected=role.pin_direction,
                actual=owner.direction,
            )
        return cls(port=port, role=role, bits=owner.bits, label=label, session=session)

    @property
    def is_writer(self) -> bool:
        return self.role is PinRole.WRITER

    def set(self, value: int):
        """Drives `value` onto the pin. Takes effect on the next evaluation."""
        self._require_role(PinRole.WRITER)
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= bit_mask(self.bits):
            raise OutOfRangeError(label=self.label, value=value, bits=self.bits)
        self.session.simulator.write(self.port, value)

    def get(self) -> Optional[int]:
        """The pin's value as of the last evaluation, or None before the first one."""
        self._require_role(PinRole.READER)
        return self.session.simulator.read(self.port)

    def _require_role(self, role: PinRole):
        self.session.ensure_active()
        if self.role is not role:
            raise DirectionMismatchError(
                board_name=self.session.board.name,
                label=self.label,
                expected=role.pin_direction,
                actual=self.role.pin_direction,
            )

    def __str__(self) -> str:
        return f"{self.role.value} `{self.label}' ({self.bits} bits)"
