# src/logictest_core/graph/board.py
"""
Defines the `Board`, the arena that owns the components of one subcircuit and
the links among their ports.

The Board is the only object allowed to edit connectivity. Components are
stored by the integer id assigned on insertion, ports are addressed through
`PortRef` handles, and links are kept in two maps (link id -> Link, port ->
link id). Every edit keeps both maps consistent, so no port can ever refer to
a discarded link and no link can hold a removed port.

None of these operations triggers a simulation step.
"""
from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING, AbstractSet, Dict, FrozenSet, List, Optional, Tuple

from ..constants import PROBE_PLACEMENT_STEP
from .exceptions import GraphMutationFailure, NetlistStructureError, WidthMismatchError
from .handles import Link, PortRef, PortSpec

if TYPE_CHECKING:
    from ..components.base import ComponentBase

logger = logging.getLogger(__name__)

Position = Tuple[int, int]


class Board:
    """A named subcircuit: an ordered collection of components plus their links."""

    def __init__(self, name: str):
        self.name: str = name
        self._components: Dict[int, ComponentBase] = {}
        self._links: Dict[int, Link] = {}
        self._port_links: Dict[PortRef, int] = {}
        self._component_ids = itertools.count(1)
        self._link_ids = itertools.count(1)
        self._revision: int = 0
        # The session currently holding this board, if any.
        self.owner: Optional[object] = None

    # --- Queries ---

    @property
    def components(self) -> List[ComponentBase]:
        """All components, in insertion order."""
        return list(self._components.values())

    @property
    def links(self) -> List[Link]:
        return list(self._links.values())

    @property
    def revision(self) -> int:
        """Counter bumped by every successful mutation of this board."""
        return self._revision

    def get_component(self, component_id: int) -> ComponentBase:
        try:
            return self._components[component_id]
        except KeyError:
            raise NetlistStructureError(
                board_name=self.name,
                details=f"No component with id {component_id} is placed on this subcircuit."
            ) from None

    def contains(self, component: ComponentBase) -> bool:
        return component.component_id is not None and self._components.get(component.component_id) is component

    def owner_of(self, port: PortRef) -> ComponentBase:
        return self.get_component(port.component_id)

    def ports_of(self, component: ComponentBase) -> List[PortRef]:
        """Handles to every port of `component`, in the component's declared order."""
        if not self.contains(component):
            raise NetlistStructureError(
                board_name=self.name,
                details=f"Component '{component.instance_id}' is not placed on this subcircuit."
            )
        return [PortRef(component.component_id, name) for name in component.get_port_specs()]

    def port_spec(self, port: PortRef) -> PortSpec:
        specs = self.owner_of(port).get_port_specs()
        try:
            return specs[port.port_name]
        except KeyError:
            owner = self._components[port.component_id]
            raise NetlistStructureError(
                board_name=self.name,
                details=(
                    f"Component '{owner.instance_id}' ({owner.component_type}) has no port "
                    f"'{port.port_name}'. Declared ports are: {list(specs)}."
                )
            ) from None

    def link_of(self, port: PortRef) -> Optional[Link]:
        self.port_spec(port)
        link_id = self._port_links.get(port)
        return self._links[link_id] if link_id is not None else None

    def peers_of(self, port: PortRef) -> FrozenSet[PortRef]:
        """Every port linked to `port`, excluding `port` itself."""
        link = self.link_of(port)
        if link is None:
            return frozenset()
        return link.members - {port}

    def describe_port(self, port: PortRef) -> str:
        owner = self.owner_of(port)
        return f"{owner.instance_id}.{port.port_name}"

    # --- Placement ---

    def is_valid_location(self, position: Position) -> bool:
        """A location is valid when no placed component already occupies it."""
        return all(c.position != position for c in self._components.values())

    def find_free_location(
        self,
        start: Position = (0, 0),
        step: int = PROBE_PLACEMENT_STEP,
        reserved: AbstractSet[Position] = frozenset(),
    ) -> Position:
        """
        Walks diagonally from `start` until a location is found that is neither
        occupied nor in `reserved`.
        """
        x, y = start
        while (x, y) in reserved or not self.is_valid_location((x, y)):
            x += step
            y += step
        return (x, y)

    # --- Mutations ---

    def add_component(self, component: ComponentBase) -> ComponentBase:
        """
        Places `component` on this board and assigns its id. A component without
        a position is dropped at the first free location.
        """
        if component.component_id is not None:
            raise GraphMutationFailure(
                board_name=self.name,
                details=f"Component '{component.instance_id}' is already placed on subcircuit `{component.board_name}'."
            )
        if component.position is None:
            component.position = self.find_free_location()
        elif not self.is_valid_location(component.position):
            raise GraphMutationFailure(
                board_name=self.name,
                details=f"Cannot place '{component.instance_id}' at {component.position}: the location is occupied."
            )

        component_id = next(self._component_ids)
        component.component_id = component_id
        component.board_name = self.name
        self._components[component_id] = component
        self._revision += 1
        logger.debug(f"Placed {component!r} on '{self.name}' as #{component_id} at {component.position}.")
        return component

    def remove_component(self, component: ComponentBase):
        """Detaches every port of `component` and removes it from the board."""
        for port in self.ports_of(component):
            self.isolate(port)
        del self._components[component.component_id]
        logger.debug(f"Removed {component!r} (#{component.component_id}) from '{self.name}'.")
        component.component_id = None
        component.board_name = None
        self._revision += 1

    def connect(self, port: PortRef, peer: PortRef):
        """
        Links `port` and `peer`. If both already sit in different links, the two
        links are merged into one net.
        """
        if port == peer:
            raise NetlistStructureError(
                board_name=self.name,
                details=f"Cannot connect port '{self.describe_port(port)}' to itself."
            )
        port_spec = self.port_spec(port)
        peer_spec = self.port_spec(peer)
        if port_spec.bits != peer_spec.bits:
            raise WidthMismatchError(
                board_name=self.name,
                subject=f"a wire from '{self.describe_port(port)}' to '{self.describe_port(peer)}'",
                expected_bits=port_spec.bits,
                actual_bits=peer_spec.bits,
            )

        port_link = self.link_of(port)
        peer_link = self.link_of(peer)
        if port_link is not None and port_link is peer_link:
            return

        if port_link is None and peer_link is None:
            link = Link(link_id=next(self._link_ids), bits=port_spec.bits)
            self._links[link.link_id] = link
            self._attach(link, port)
            self._attach(link, peer)
        elif port_link is None:
            self._attach(peer_link, port)
        elif peer_link is None:
            self._attach(port_link, peer)
        else:
            keep, absorb = (port_link, peer_link) if len(port_link) >= len(peer_link) else (peer_link, port_link)
            for member in absorb.members:
                self._attach(keep, member)
            del self._links[absorb.link_id]

        self._revision += 1
        logger.debug(f"Connected '{self.describe_port(port)}' <-> '{self.describe_port(peer)}' on '{self.name}'.")

    def disconnect(self, port: PortRef, peer: PortRef):
        """
        Removes `peer` from the link it shares with `port`. A link left with fewer
        than two members is discarded.
        """
        link = self.link_of(port)
        if link is None or peer not in link or peer == port:
            raise NetlistStructureError(
                board_name=self.name,
                details=f"Ports '{self.describe_port(port)}' and '{self.describe_port(peer)}' are not connected."
            )
        self._detach(link, peer)
        if len(link) < 2:
            for leftover in link.members:
                self._detach(link, leftover)
            del self._links[link.link_id]

        self._revision += 1
        logger.debug(f"Disconnected '{self.describe_port(peer)}' from '{self.describe_port(port)}' on '{self.name}'.")

    def isolate(self, port: PortRef) -> List[PortRef]:
        """
        Takes `port` out of its link and returns its former peers, sorted. The
        peers stay linked to one another.

        The peers are captured before the port is detached, since detaching is
        what erases the record of which ports shared the link.
        """
        peers = sorted(self.peers_of(port))
        if peers:
            self.disconnect(peers[0], port)
        return peers

    # --- Internal bookkeeping ---

    def _attach(self, link: Link, port: PortRef):
        link._members.add(port)
        self._port_links[port] = link.link_id

    def _detach(self, link: Link, port: PortRef):
        link._members.discard(port)
        self._port_links.pop(port, None)

    def __repr__(self) -> str:
        return f"Board(name={self.name!r}, components={len(self._components)}, links={len(self._links)})"
