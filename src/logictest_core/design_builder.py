# src/logictest_core/design_builder.py

"""
Defines the DesignBuilder, which turns a parsed design (the parser's IR) into
one `Board` per subcircuit, ready for a simulation session.

For every subcircuit the builder:

1.  **Instantiates components** from `COMPONENT_REGISTRY`, checking the type
    name and every parameter against the class's `declare_parameters()`.
2.  **Places them** on a fresh `Board`, at their declared position or at the
    first free location that no declared position claims.
3.  **Wires them**, turning each `component.port` endpoint list into one link.

It is also the top-level error handler of the loading stage: any
`DiagnosableError` from the parser, the components or the board is re-raised
as a single `DesignBuildError` whose message is the diagnostic report.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Mapping, Set, Union

from .components.base import COMPONENT_REGISTRY, PARAMETER_TYPES, ComponentBase
from .errors import DesignBuildError, DiagnosableError, format_diagnostic_report
from .graph.board import Board, Position
from .graph.exceptions import NetlistStructureError
from .graph.handles import PortRef
from .parser.parser import NetlistParser
from .parser.raw_data import ParsedBoardNode, ParsedComponentData, ParsedDesign
from .simulation.config import ConfigParsingError, SimulationConfig, parse_simulation_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuiltDesign:
    """The boards of one design file, keyed by subcircuit name, plus its simulator settings."""
    name: str
    boards: Dict[str, Board]
    config: SimulationConfig
    source_yaml_path: Path


class DesignBuilder:
    """Synthesizes the boards of a design from its parsed IR."""

    def build_design(self, parsed_design: ParsedDesign) -> BuiltDesign:
        """
        The main build-time entry point.

        Raises:
            DesignBuildError: for any failure, with a diagnostic report as its message.
        """
        logger.info(f"--- Building design '{parsed_design.design_name}' ---")
        try:
            config = parse_simulation_config(parsed_design.raw_simulation_config)
            boards: Dict[str, Board] = {}
            for board_node in parsed_design.boards:
                boards[board_node.board_name] = self._build_board(board_node)

            logger.info(f"--- Design '{parsed_design.design_name}' built with {len(boards)} subcircuit(s). ---")
            return BuiltDesign(
                name=parsed_design.design_name,
                boards=boards,
                config=config,
                source_yaml_path=parsed_design.source_yaml_path,
            )

        except DiagnosableError as e:
            raise DesignBuildError(e.get_diagnostic_report()) from e

        except ConfigParsingError as e:
            report = format_diagnostic_report(
                error_type="Invalid Simulation Settings",
                details=str(e),
                suggestion="Fix the 'simulation' section of the design file.",
                context={'source_file': parsed_design.source_yaml_path}
            )
            raise DesignBuildError(report) from e

        except Exception as e:
            report = format_diagnostic_report(
                error_type=f"An Unexpected Error Occurred ({type(e).__name__})",
                details=f"The design builder encountered an unexpected internal error: {str(e)}",
                suggestion="This may indicate a bug in LogicTest Core. Please review the traceback.",
                context={'source_file': parsed_design.source_yaml_path}
            )
            raise DesignBuildError(report) from e

    def load_design(self, yaml_path: Union[str, Path]) -> BuiltDesign:
        """Parses and builds a design file, reporting parser errors as `DesignBuildError` too."""
        try:
            parsed_design = NetlistParser().parse(yaml_path)
        except DiagnosableError as e:
            raise DesignBuildError(e.get_diagnostic_report()) from e
        return self.build_design(parsed_design)

    def build_boards(self, parsed_design: ParsedDesign) -> Dict[str, Board]:
        """Shorthand for `build_design(...).boards`."""
        return self.build_design(parsed_design).boards

    def _build_board(self, board_node: ParsedBoardNode) -> Board:
        board = Board(board_node.board_name)
        declared = self._declared_positions(board_node)
        instances: Dict[str, ComponentBase] = {}
        for comp_ir in board_node.components:
            component = self._instantiate(comp_ir, board.name)
            # Auto-placed components keep clear of every declared position, even later ones.
            if component.position is None:
                component.position = board.find_free_location(reserved=declared)
            board.add_component(component)
            instances[comp_ir.instance_id] = component

        for wire in board_node.wires:
            self._wire(board, instances, wire)

        logger.debug(f"Built {board!r}.")
        return board

    def _declared_positions(self, board_node: ParsedBoardNode) -> Set[Position]:
        placed_by: Dict[Position, str] = {}
        for comp_ir in board_node.components:
            if comp_ir.position is None:
                continue
            position = tuple(comp_ir.position)
            if position in placed_by:
                raise NetlistStructureError(
                    board_name=board_node.board_name,
                    details=(
                        f"Components '{placed_by[position]}' and '{comp_ir.instance_id}' are both "
                        f"placed at {position}."
                    )
                )
            placed_by[position] = comp_ir.instance_id
        return set(placed_by)

    def _instantiate(self, comp_ir: ParsedComponentData, board_name: str) -> ComponentBase:
        component_class = COMPONENT_REGISTRY.get(comp_ir.component_type)
        if component_class is None:
            raise NetlistStructureError(
                board_name=board_name,
                details=(
                    f"Component '{comp_ir.instance_id}' has unknown type '{comp_ir.component_type}'. "
                    f"Available types are: {sorted(COMPONENT_REGISTRY)}."
                )
            )

        declared = component_class.declare_parameters()
        for name, value in comp_ir.raw_parameters_dict.items():
            if name not in declared:
                raise NetlistStructureError(
                    board_name=board_name,
                    details=(
                        f"Component '{comp_ir.instance_id}' ({comp_ir.component_type}) has no parameter "
                        f"'{name}'. Declared parameters are: {sorted(declared)}."
                    )
                )
            type_name = declared[name]
            # YAML booleans are ints to Python; keep the two parameter types apart.
            if not isinstance(value, PARAMETER_TYPES[type_name]) or (type_name == "int" and isinstance(value, bool)):
                raise NetlistStructureError(
                    board_name=board_name,
                    details=(
                        f"Parameter '{name}' of component '{comp_ir.instance_id}' must be of type "
                        f"'{type_name}', got {value!r}."
                    )
                )

        return component_class(
            instance_id=comp_ir.instance_id,
            label=comp_ir.label,
            position=comp_ir.position,
            **comp_ir.raw_parameters_dict,
        )

    def _wire(self, board: Board, instances: Mapping[str, ComponentBase], endpoints: List[str]):
        ports = [self._resolve_endpoint(board, instances, endpoint) for endpoint in endpoints]
        first = ports[0]
        for port in ports[1:]:
            board.connect(first, port)

    def _resolve_endpoint(self, board: Board, instances: Mapping[str, ComponentBase], endpoint: str) -> PortRef:
        instance_id, port_name = endpoint.split(".", 1)
        component = instances.get(instance_id)
        if component is None:
            raise NetlistStructureError(
                board_name=board.name,
                details=f"Wire endpoint '{endpoint}' refers to unknown component '{instance_id}'."
            )
        port = PortRef(component.component_id, port_name)
        board.port_spec(port)
        return port
