# tests/conftest.py
import pytest

from logictest_core.components import Adder, Constant, NotGate, Pin, Register
from logictest_core.graph import Board, PortRef
from logictest_core.harness import SimulationSession


def port(board: Board, instance_id: str, port_name: str) -> PortRef:
    """Looks up a port by the instance id of its component."""
    for component in board.components:
        if component.instance_id == instance_id:
            return PortRef(component.component_id, port_name)
    raise KeyError(instance_id)


def wire(board: Board, *endpoints: str):
    """Connects `id.port` endpoints into one link, like a `wires:` entry of a design file."""
    refs = [port(board, *endpoint.split(".")) for endpoint in endpoints]
    for ref in refs[1:]:
        board.connect(refs[0], ref)


def build_counter_board(name: str = "2-bit Counter", bits: int = 2) -> Board:
    """
    A register whose output is incremented and fed back to its input:

        reg.q -> inc.a, Count      one.out -> inc.b
        inc.out -> reg.d           CLK -> reg.clk
    """
    board = Board(name)
    board.add_component(Register("reg", bits=bits))
    board.add_component(Constant("one", bits=bits, value=1))
    board.add_component(Adder("inc", bits=bits))
    board.add_component(Pin("clk", label="CLK", bits=1, is_input=True))
    board.add_component(Pin("count", label="Count", bits=bits, is_input=False))
    wire(board, "reg.q", "inc.a", "count.pin")
    wire(board, "one.out", "inc.b")
    wire(board, "inc.out", "reg.d")
    wire(board, "clk.pin", "reg.clk")
    return board


def build_inverter_board(name: str = "Inverter") -> Board:
    board = Board(name)
    board.add_component(Pin("a", label="A", bits=4, is_input=True))
    board.add_component(NotGate("inv", bits=4))
    board.add_component(Pin("y", label="Y", bits=4, is_input=False))
    wire(board, "a.pin", "inv.in")
    wire(board, "inv.out", "y.pin")
    return board


@pytest.fixture
def counter_board() -> Board:
    return build_counter_board()


@pytest.fixture
def inverter_board() -> Board:
    return build_inverter_board()


@pytest.fixture
def counter_session(counter_board) -> SimulationSession:
    session = SimulationSession.create([counter_board], "2 bit counter")
    yield session
    session.dispose()


@pytest.fixture
def counter_design_file(tmp_path):
    """A design file holding the counter and an inverter as two subcircuits."""
    path = tmp_path / "lab3.yaml"
    path.write_text("""
design_name: lab3
simulation:
  max_settle_iterations: 16
circuits:
  - name: "2-bit Counter"
    components:
      - {id: reg, type: Register, parameters: {bits: 2}}
      - {id: one, type: Constant, parameters: {bits: 2, value: 1}}
      - {id: inc, type: Adder, parameters: {bits: 2}}
      - {id: clk, type: Pin, label: CLK, parameters: {bits: 1, is_input: true}}
      - {id: count, type: Pin, label: Count, parameters: {bits: 2, is_input: false}}
    wires:
      - [reg.q, inc.a, count.pin]
      - [one.out, inc.b]
      - [inc.out, reg.d]
      - [clk.pin, reg.clk]
  - name: Inverter
    components:
      - {id: a, type: Pin, label: A, position: [0, 0], parameters: {bits: 4, is_input: true}}
      - {id: inv, type: NotGate, position: [10, 0], parameters: {bits: 4}}
      - {id: y, type: Pin, label: Y, position: [20, 0], parameters: {bits: 4, is_input: false}}
    wires:
      - [a.pin, inv.in]
      - [inv.out, y.pin]
""")
    return path
