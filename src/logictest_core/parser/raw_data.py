# src/logictest_core/parser/raw_data.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

# The classes in this module are the intermediate representation handed from
# the NetlistParser to the DesignBuilder. They carry validated but unbuilt data.

@dataclass(frozen=True)
class ParsedComponentData:
    """IR for one component instance of a subcircuit."""
    instance_id: str
    component_type: str
    label: Optional[str]
    position: Optional[Tuple[int, int]]
    raw_parameters_dict: Dict[str, Any]
    source_yaml_path: Path


@dataclass(frozen=True)
class ParsedBoardNode:
    """
    IR for one subcircuit of a design file. Each wire is the list of
    `component.port` endpoints that form one link.
    """
    board_name: str
    source_yaml_path: Path
    components: List[ParsedComponentData] = field(default_factory=list)
    wires: List[List[str]] = field(default_factory=list)


@dataclass(frozen=True)
class ParsedDesign:
    """Top-level IR node representing a single parsed design file."""
    design_name: str
    source_yaml_path: Path
    boards: List[ParsedBoardNode]
    raw_simulation_config: Optional[Dict[str, Any]] = None
