# tests/test_integration/test_design_build.py
"""
End-to-end tests of loading: design file -> NetlistParser -> DesignBuilder -> boards.
"""
import pytest
from pathlib import Path

from logictest_core import DesignBuildError, DesignBuilder, NetlistParser
from logictest_core.components import Pin, Register
from logictest_core.graph import PortRef
from logictest_core.simulation import SimulationConfig


def build(path: Path):
    return DesignBuilder().build_design(NetlistParser().parse(path))


def write_single_circuit(tmp_path: Path, components: str, wires: str = "") -> Path:
    path = tmp_path / "design.yaml"
    text = "circuits:\n  - name: C\n    components:\n" + components
    if wires:
        text += "    wires:\n" + wires
    path.write_text(text)
    return path


def test_builds_one_board_per_circuit(counter_design_file):
    design = build(counter_design_file)

    assert design.name == "lab3"
    assert design.config == SimulationConfig(max_settle_iterations=16)
    assert set(design.boards) == {"2-bit Counter", "Inverter"}

    counter = design.boards["2-bit Counter"]
    assert [c.instance_id for c in counter.components] == ["reg", "one", "inc", "clk", "count"]
    reg = counter.components[0]
    assert isinstance(reg, Register) and reg.bits == 2
    clk = counter.components[3]
    assert isinstance(clk, Pin) and clk.is_input and clk.label == "CLK"

    q_peers = {counter.describe_port(p) for p in counter.peers_of(PortRef(reg.component_id, "q"))}
    assert q_peers == {"inc.a", "count.pin"}
    assert len(counter.links) == 4


def test_build_boards_shorthand(counter_design_file):
    boards = DesignBuilder().build_boards(NetlistParser().parse(counter_design_file))
    assert boards["Inverter"].name == "Inverter"


def test_declared_positions_are_kept(counter_design_file):
    inverter = build(counter_design_file).boards["Inverter"]
    assert [c.position for c in inverter.components] == [(0, 0), (10, 0), (20, 0)]


@pytest.mark.parametrize("components, wires, fragment", [
    ("      - {id: x, type: Flux}\n", "", "unknown type 'Flux'"),
    ("      - {id: r, type: Register, parameters: {width: 4}}\n", "", "has no parameter 'width'"),
    ("      - {id: p, type: Pin, parameters: {is_input: 1}}\n", "", "must be of type 'bool'"),
    ("      - {id: p, type: Pin, parameters: {bits: true}}\n", "", "must be of type 'int'"),
    ("      - {id: r, type: Register, parameters: {bits: 64}}\n", "", "Bit size must be between 1 and 32"),
    ("      - {id: k, type: Constant, parameters: {bits: 2, value: 4}}\n", "", "does not fit"),
    (
        "      - {id: p, type: Pin}\n",
        "      - [p.pin, ghost.pin]\n",
        "unknown component 'ghost'",
    ),
    (
        "      - {id: p, type: Pin}\n      - {id: q, type: Pin, parameters: {is_input: false}}\n",
        "      - [p.pin, q.out]\n",
        "has no port 'out'",
    ),
    (
        "      - {id: p, type: Pin, position: [1, 1]}\n      - {id: q, type: Pin, position: [1, 1]}\n",
        "",
        "are both placed at \(1, 1\)",
    ),
])
def test_build_errors_become_design_build_errors(tmp_path, components, wires, fragment):
    path = write_single_circuit(tmp_path, components, wires)
    with pytest.raises(DesignBuildError, match=fragment) as exc_info:
        build(path)
    assert "Actionable Diagnostic Report" in str(exc_info.value)
    assert exc_info.value.__cause__ is not None


def test_schema_errors_become_design_build_errors_via_session(tmp_path):
    from logictest_core import SimulationSession

    path = write_single_circuit(tmp_path, "      - {id: bad-id, type: Pin}\n")
    with pytest.raises(DesignBuildError, match="YAML Schema Validation Error"):
        SimulationSession.from_path(path, "C")


def test_auto_placement_avoids_positions_declared_later(tmp_path):
    path = write_single_circuit(
        tmp_path,
        "      - {id: a, type: Pin}\n"
        "      - {id: y, type: Pin, position: [0, 0], parameters: {is_input: false}}\n",
    )
    board = build(path).boards["C"]

    a, y = board.components
    assert y.position == (0, 0)
    assert a.position == (32, 32)
    assert [c.instance_id for c in board.components] == ["a", "y"]


def test_clashing_declared_positions_are_a_structure_error(tmp_path):
    path = write_single_circuit(
        tmp_path,
        "      - {id: p, type: Pin, position: [4, 4]}\n"
        "      - {id: q, type: Pin, position: [4, 4]}\n",
    )
    with pytest.raises(DesignBuildError, match="Netlist Structure Error") as exc_info:
        build(path)
    assert "Graph Mutation Failure" not in str(exc_info.value)
    assert "Components 'p' and 'q' are both placed at (4, 4)." in str(exc_info.value)
