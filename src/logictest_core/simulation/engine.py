# src/logictest_core/simulation/engine.py
"""
The reference simulator that evaluates a `Board`.

The engine never keeps pointers into the board's graph. Driven inputs, port
values and sequential state are all keyed by `PortRef` or component id, and
the evaluation order is rebuilt whenever `Board.revision` changes. This makes
it safe to substitute components between two evaluations.

One call to `evaluate()`:

1.  Orders the components with a dependency graph (`networkx.DiGraph`). An
    edge runs from a driving component to a reading component, except that
    edges into sequential elements are dropped: registers break feedback.
    A remaining cycle is a combinational loop.
2.  Runs a combinational pass in that order.
3.  Clocks every sequential element with the inputs of this pass and those of
    the previous pass. If any state changed, the pass is repeated, up to
    `max_settle_iterations` times.

Values are unsigned integers masked to the port width, or `None` when
undefined. Reading anything before the first evaluation yields `None`.
"""
import logging
from typing import Dict, List, Optional, Tuple

import networkx as nx

from ..components.base import ComponentBase, bit_mask
from ..components.capabilities import (
    ICombinationalLogic,
    IHarnessTerminal,
    ISequentialElement,
    Values,
)
from ..errors import FrameworkLogicError
from ..graph.board import Board
from ..graph.handles import Link, PortDirection, PortRef
from .config import SimulationConfig
from .exceptions import (
    BusContentionError,
    CombinationalLoopError,
    OscillationError,
    SimulationInputError,
)

logger = logging.getLogger(__name__)


class Simulator:
    """Evaluates one board and holds its simulated state."""

    def __init__(self, board: Board, config: Optional[SimulationConfig] = None):
        self.board = board
        self.config = config or SimulationConfig()

        self._driven: Dict[PortRef, int] = {}
        self._values: Dict[PortRef, Optional[int]] = {}
        self._states: Dict[int, int] = {}
        self._previous_inputs: Dict[int, Values] = {}
        self._order_cache: Optional[Tuple[int, List[int]]] = None
        self.evaluation_count: int = 0

    # --- Harness-facing API ---

    def write(self, port: PortRef, value: int):
        """Stores `value` as the input driven onto `port`. Takes effect on the next `evaluate()`."""
        owner = self.board.owner_of(port)
        terminal = owner.get_capability(IHarnessTerminal)
        if terminal is None or terminal.driven_port(owner) != port.port_name:
            raise SimulationInputError(
                board_name=self.board.name,
                details=f"'{self.board.describe_port(port)}' is not an input pin."
            )
        bits = self.board.port_spec(port).bits
        if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= bit_mask(bits):
            raise SimulationInputError(
                board_name=self.board.name,
                details=f"Value {value!r} does not fit the {bits}-bit port '{self.board.describe_port(port)}'."
            )
        self._driven[port] = value

    def read(self, port: PortRef) -> Optional[int]:
        """
        The value last computed for `port`. For a source port that is what its
        component drives; for a sink port it is the value of its link.
        """
        if self.board.port_spec(port).direction is PortDirection.SOURCE:
            return self._values.get(port)
        return self._link_value(self.board.link_of(port))

    def evaluate(self):
        order = self._evaluation_order()
        self._prune_removed_components()

        for _ in range(self.config.max_settle_iterations):
            self._combinational_pass(order)
            if not self._clock_sequential_elements():
                self.evaluation_count += 1
                logger.debug(f"Board '{self.board.name}' settled (evaluation #{self.evaluation_count}).")
                return
        raise OscillationError(board_name=self.board.name, iterations=self.config.max_settle_iterations)

    def reset(self):
        """Clears every driven input, computed value and stored state."""
        self._driven.clear()
        self._values.clear()
        self._states.clear()
        self._previous_inputs.clear()
        logger.debug(f"Simulator state of board '{self.board.name}' reset.")

    # --- Ordering ---

    def _evaluation_order(self) -> List[int]:
        if self._order_cache is not None and self._order_cache[0] == self.board.revision:
            return self._order_cache[1]

        graph = nx.DiGraph()
        graph.add_nodes_from(c.component_id for c in self.board.components)
        for link in self.board.links:
            drivers, readers = self._split_link(link)
            for reader in readers:
                if self.board.owner_of(reader).get_capability(ISequentialElement) is not None:
                    continue
                for driver in drivers:
                    graph.add_edge(driver.component_id, reader.component_id)

        try:
            order = list(nx.lexicographical_topological_sort(graph))
        except nx.NetworkXUnfeasible:
            cycle = nx.find_cycle(graph)
            loop = [self.board.get_component(u).instance_id for u, _ in cycle]
            raise CombinationalLoopError(board_name=self.board.name, loop=loop) from None

        self._order_cache = (self.board.revision, order)
        logger.debug(f"Evaluation order for board '{self.board.name}' rebuilt at revision {self.board.revision}.")
        return order

    def _split_link(self, link: Link) -> Tuple[List[PortRef], List[PortRef]]:
        drivers, readers = [], []
        for member in sorted(link.members):
            if self.board.port_spec(member).direction is PortDirection.SOURCE:
                drivers.append(member)
            else:
                readers.append(member)
        return drivers, readers

    def _prune_removed_components(self):
        live = {c.component_id for c in self.board.components}
        for component_id in [cid for cid in self._states if cid not in live]:
            del self._states[component_id]
            self._previous_inputs.pop(component_id, None)
        for port in [p for p in self._driven if p.component_id not in live]:
            del self._driven[port]

    # --- Evaluation ---

    def _combinational_pass(self, order: List[int]):
        self._values = {}
        for component_id in order:
            component = self.board.get_component(component_id)
            for name, value in self._compute_outputs(component).items():
                self._values[PortRef(component_id, name)] = value
        # Links read only by the harness are checked here too.
        for link in self.board.links:
            self._link_value(link)

    def _compute_outputs(self, component: ComponentBase) -> Values:
        terminal = component.get_capability(IHarnessTerminal)
        if terminal is not None:
            driven = terminal.driven_port(component)
            if driven is None:
                return {}
            return {driven: self._driven.get(PortRef(component.component_id, driven))}

        sequential = component.get_capability(ISequentialElement)
        if sequential is not None:
            state = self._states.setdefault(component.component_id, sequential.initial_state(component))
            return sequential.outputs(component, state)

        logic = component.get_capability(ICombinationalLogic)
        if logic is not None:
            return logic.propagate(component, self._gather_inputs(component))

        raise FrameworkLogicError(
            f"Component '{component.fqn}' ({component.component_type}) provides no simulation capability. "
            f"It must provide ICombinationalLogic, ISequentialElement or IHarnessTerminal."
        )

    def _gather_inputs(self, component: ComponentBase) -> Values:
        inputs: Values = {}
        for name, spec in component.get_port_specs().items():
            if spec.direction is PortDirection.SINK:
                port = PortRef(component.component_id, name)
                inputs[name] = self._link_value(self.board.link_of(port))
        return inputs

    def _link_value(self, link: Optional[Link]) -> Optional[int]:
        if link is None:
            return None
        drivers, _ = self._split_link(link)
        known = sorted({self._values.get(d) for d in drivers} - {None})
        if len(known) > 1:
            net = ", ".join(self.board.describe_port(p) for p in sorted(link.members))
            raise BusContentionError(board_name=self.board.name, net=f"[{net}]", values=known)
        return known[0] if known else None

    def _clock_sequential_elements(self) -> bool:
        changed = False
        for component in self.board.components:
            sequential = component.get_capability(ISequentialElement)
            if sequential is None:
                continue
            component_id = component.component_id
            inputs = self._gather_inputs(component)
            state = self._states.setdefault(component_id, sequential.initial_state(component))
            new_state = sequential.next_state(component, state, inputs, self._previous_inputs.get(component_id, {}))
            self._previous_inputs[component_id] = inputs
            if new_state != state:
                self._states[component_id] = new_state
                changed = True
        return changed
