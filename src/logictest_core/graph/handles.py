# src/logictest_core/graph/handles.py
"""
Handle types for addressing the elements of a Board.

Ports are never passed around as live objects. A `PortRef` names a port by the
integer id its component received from the Board plus the port's declared name,
so a captured set of peers stays valid while the graph around it is edited.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Set


class PortDirection(Enum):
    """Direction of a port relative to the component that owns it."""
    SOURCE = "source"  # The component drives a value onto the link.
    SINK = "sink"      # The component reads a value from the link.

    def __str__(self):
        return self.value


@dataclass(frozen=True, order=True)
class PortRef:
    """Handle to one port of one placed component."""
    component_id: int
    port_name: str

    def __str__(self) -> str:
        return f"#{self.component_id}.{self.port_name}"


@dataclass(frozen=True)
class PortSpec:
    """The declared shape of a port: its name, direction and bit-width."""
    name: str
    direction: PortDirection
    bits: int


@dataclass(eq=False)
class Link:
    """
    An equipotential set of ports (a net). All members share `bits`.

    Links are created and dissolved exclusively by the owning Board.
    """
    link_id: int
    bits: int
    _members: Set[PortRef] = field(default_factory=set, repr=False)

    @property
    def members(self) -> FrozenSet[PortRef]:
        return frozenset(self._members)

    def __contains__(self, port: object) -> bool:
        return port in self._members

    def __len__(self) -> int:
        return len(self._members)

    def __repr__(self) -> str:
        members = ", ".join(str(p) for p in sorted(self._members))
        return f"Link(id={self.link_id}, bits={self.bits}, members=[{members}])"
