# src/logictest_core/surgery/substitution.py

"""
Replaces a component of a board with probe pins, one per port, while keeping
every wire that ended at the component.

The substitution runs as a three-phase transaction over `PortRef` handles:

1.  **Validate and plan.** Locate the target, check it, and work out the width
    and direction of each probe. Nothing is modified, so every lookup or
    validation error leaves the board exactly as it was.

2.  **Detach and capture.** Isolate each port of the target, recording the
    peers it was linked to before the edges are removed, then remove the
    target from the board.

3.  **Attach and reconnect.** Place one probe per planned port, strip any
    connection the board made on insertion, and link the probe to exactly the
    captured peers. A peer that was itself a port of the target is replaced by
    that port's probe.

Any failure in phases 2 and 3 is raised as `GraphMutationFailure`. The board
may then be partially edited; no rollback is attempted.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from ..components.base import ComponentBase
from ..components.base_enums import ComponentKind
from ..components.memory import Register
from ..components.wiring import Pin
from ..graph.board import Board
from ..graph.exceptions import GraphMutationFailure, NetlistStructureError, WidthMismatchError
from ..graph.handles import PortDirection, PortRef, PortSpec
from ..resolution.resolver import find_only_component

logger = logging.getLogger(__name__)

#: Order in which the ports of a register are substituted and reported:
#: data-out, data-in, enable, clock, reset.
REGISTER_PORT_ORDER: Tuple[str, ...] = (
    Register.PORT_OUT,
    Register.PORT_IN,
    Register.PORT_ENABLE,
    Register.PORT_CLK,
    Register.PORT_ZERO,
)


@dataclass(frozen=True)
class PlannedPort:
    """One port of the target, as decided during the validation phase."""
    port: PortRef
    spec: PortSpec
    probe_is_input: bool


@dataclass(frozen=True)
class RegisterProbes:
    """The probe ports that replaced a register, by role."""
    q: PortRef
    d: PortRef
    en: PortRef
    clk: PortRef
    rst: PortRef

    @property
    def ports(self) -> Tuple[PortRef, ...]:
        return (self.q, self.d, self.en, self.clk, self.rst)


class GraphSubstituter:
    """Performs probe substitution on one board."""

    def __init__(self, board: Board):
        self.board = board

    def locate_only(self, kind: ComponentKind, element_kind: str) -> ComponentBase:
        return find_only_component(self.board, kind, element_kind)

    def plan(self, target: ComponentBase, port_order: Sequence[str]) -> List[PlannedPort]:
        """
        Validation phase. A port the target drives becomes an input probe the
        harness writes; a port the target reads becomes an output probe the
        harness observes.
        """
        if not self.board.contains(target):
            raise NetlistStructureError(
                board_name=self.board.name,
                details=f"Cannot substitute '{target.instance_id}': it is not placed on this subcircuit."
            )
        specs = target.get_port_specs()
        if len(set(port_order)) != len(port_order) or set(port_order) != set(specs):
            raise NetlistStructureError(
                board_name=self.board.name,
                details=(
                    f"Substitution order {list(port_order)} must name each port of "
                    f"'{target.instance_id}' exactly once. Declared ports are: {list(specs)}."
                )
            )
        return [
            PlannedPort(
                port=PortRef(target.component_id, name),
                spec=specs[name],
                probe_is_input=specs[name].direction is PortDirection.SOURCE,
            )
            for name in port_order
        ]

    def substitute(self, target: ComponentBase, port_order: Sequence[str]) -> List[PortRef]:
        """
        Replaces `target` with one probe pin per port and returns the probe
        ports in `port_order`.
        """
        plan = self.plan(target, port_order)
        target_fqn = target.fqn

        try:
            captured = self._detach_and_capture(target, plan)
            return self._attach_and_reconnect(target, plan, captured)
        except GraphMutationFailure:
            logger.critical(f"Substitution of '{target_fqn}' aborted mid-edit; the subcircuit is no longer usable.")
            raise
        except Exception as e:
            logger.critical(f"Substitution of '{target_fqn}' aborted mid-edit; the subcircuit is no longer usable.")
            raise GraphMutationFailure(
                board_name=self.board.name,
                details=f"Substituting '{target_fqn}' failed after the graph was modified: {e}"
            ) from e

    def _detach_and_capture(self, target: ComponentBase, plan: List[PlannedPort]) -> List[List[PortRef]]:
        captured = [self.board.isolate(planned.port) for planned in plan]
        self.board.remove_component(target)
        return captured

    def _attach_and_reconnect(
        self,
        target: ComponentBase,
        plan: List[PlannedPort],
        captured: List[List[PortRef]],
    ) -> List[PortRef]:
        probe_for: Dict[PortRef, PortRef] = {}
        for planned in plan:
            probe_for[planned.port] = self._insert_probe(target, planned)

        for planned, peers in zip(plan, captured):
            probe_port = probe_for[planned.port]
            for peer in peers:
                # Wires between two ports of the target now run between their probes.
                self.board.connect(probe_port, probe_for.get(peer, peer))

        return [probe_for[planned.port] for planned in plan]

    def _insert_probe(self, target: ComponentBase, planned: PlannedPort) -> PortRef:
        probe = Pin(
            instance_id=f"{target.instance_id}__{planned.spec.name}",
            position=self.board.find_free_location(),
            bits=planned.spec.bits,
            is_input=planned.probe_is_input,
        )
        self.board.add_component(probe)
        probe_port = self.board.ports_of(probe)[0]

        incidental = self.board.isolate(probe_port)
        if incidental:
            logger.warning(
                f"Board '{self.board.name}' wired new probe '{probe.instance_id}' to "
                f"{[self.board.describe_port(p) for p in incidental]} on insertion; disconnected."
            )
        return probe_port


def mock_only_register(board: Board, want_bits: int) -> RegisterProbes:
    """
    Replaces the only register on `board` with five probe pins.

    Raises:
        NotFoundError / AmbiguousError: if the board does not hold exactly one register.
        WidthMismatchError: if the register is not `want_bits` wide.
        GraphMutationFailure: if the board rejects an edit once substitution has started.
    """
    substituter = GraphSubstituter(board)
    register: Register = substituter.locate_only(ComponentKind.REGISTER, "registers")
    if register.bits != want_bits:
        raise WidthMismatchError(
            board_name=board.name,
            subject="register",
            expected_bits=want_bits,
            actual_bits=register.bits,
        )

    probes = RegisterProbes(*substituter.substitute(register, REGISTER_PORT_ORDER))
    logger.info(f"Mocked register '{register.instance_id}' ({want_bits} bits) on subcircuit '{board.name}'.")
    return probes
