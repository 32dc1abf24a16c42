# tests/test_session.py
import logging

import pytest

from logictest_core import DesignBuildError, SessionState, SimulationSession
from logictest_core.components import Pin, Register
from logictest_core.graph import Board, GraphMutationFailure, WidthMismatchError
from logictest_core.harness import MockRegister, PinRole, SessionStateError
from logictest_core.resolution import NotFoundError


def test_mocked_register_increments_through_the_adder(counter_design_file):
    with SimulationSession.from_path(counter_design_file, "2-bit counter") as session:
        mock = session.mock_only_register(2)
        mock.q.set(0b01)
        session.evaluate()
        assert mock.d.get() == 0b10


def test_mock_register_roles(counter_session):
    mock = counter_session.mock_only_register(2)
    assert isinstance(mock, MockRegister)
    assert mock.pins == (mock.q, mock.d, mock.en, mock.clk, mock.rst)
    assert mock.q.role is PinRole.WRITER
    assert all(p.role is PinRole.READER for p in mock.pins[1:])
    assert [p.bits for p in mock.pins] == [2, 2, 1, 1, 1]
    assert mock.q.label == "reg__q"


def test_mock_register_observes_surrounding_logic(counter_session):
    mock = counter_session.mock_only_register(2)
    clk = counter_session.lookup_pin("CLK", True, 1)
    count = counter_session.lookup_pin("Count", False, 2)

    mock.q.set(3)
    clk.set(1)
    counter_session.evaluate()
    assert mock.d.get() == 0
    assert mock.clk.get() == 1
    assert count.get() == 3
    # The register's enable and reset were never wired.
    assert mock.en.get() is None
    assert mock.rst.get() is None


def test_reset_simulation_keeps_the_probes(counter_session):
    mock = counter_session.mock_only_register(2)
    mock.q.set(2)
    counter_session.evaluate()
    assert mock.d.get() == 3

    counter_session.reset_simulation()
    assert mock.d.get() is None
    mock.q.set(0)
    counter_session.evaluate()
    assert mock.d.get() == 1


def test_lookup_errors_leave_the_session_active(counter_session):
    with pytest.raises(NotFoundError):
        counter_session.lookup_pin("Reset", True, 1)
    with pytest.raises(WidthMismatchError):
        counter_session.mock_only_register(8)
    assert counter_session.state is SessionState.ACTIVE
    assert counter_session.is_active


def test_create_resolves_the_board_by_canonical_name(counter_board):
    session = SimulationSession.create({counter_board.name: counter_board}, "2BITCOUNTER")
    assert session.board is counter_board
    with pytest.raises(NotFoundError, match="No subcircuits match the name `ALU'"):
        SimulationSession.create([counter_board], "ALU")


def test_dispose_is_final(counter_session, caplog):
    with caplog.at_level(logging.INFO):
        counter_session.dispose()
        counter_session.dispose()
    assert counter_session.state is SessionState.DISPOSED
    assert caplog.text.count("disposed") == 1
    for call in (
        counter_session.evaluate,
        counter_session.reset_simulation,
        lambda: counter_session.lookup_pin("CLK", True, 1),
        lambda: counter_session.mock_only_register(2),
    ):
        with pytest.raises(SessionStateError, match="has been disposed"):
            call()


class RejectingBoard(Board):
    def add_component(self, component):
        if isinstance(component, Pin):
            raise RuntimeError("editor is read-only")
        return super().add_component(component)


def test_failed_substitution_fails_the_session():
    board = RejectingBoard("Locked")
    board.add_component(Register("reg", bits=1))
    session = SimulationSession.create([board], "locked")

    with pytest.raises(GraphMutationFailure):
        session.mock_only_register(1)
    assert session.state is SessionState.FAILED
    with pytest.raises(SessionStateError, match="failed during register substitution"):
        session.evaluate()


def test_from_path_reports_build_errors(tmp_path):
    path = tmp_path / "broken.yaml"
    path.write_text("""
circuits:
  - name: Broken
    components:
      - {id: a, type: Pin, parameters: {bits: 1}}
      - {id: b, type: Pin, parameters: {bits: 2, is_input: false}}
    wires:
      - [a.pin, b.pin]
""")
    with pytest.raises(DesignBuildError, match="Bit-Width Mismatch"):
        SimulationSession.from_path(path, "broken")


def test_from_path_uses_the_design_settings(counter_design_file):
    with SimulationSession.from_path(counter_design_file, "inverter") as session:
        assert session.simulator.config.max_settle_iterations == 16
        a = session.lookup_pin("a", True, 4)
        y = session.lookup_pin("y", False, 4)
        a.set(0b0011)
        session.evaluate()
        assert y.get() == 0b1100
    assert session.state is SessionState.DISPOSED


def test_a_board_is_held_by_one_session_at_a_time(counter_session, counter_board):
    assert counter_board.owner is counter_session
    with pytest.raises(SessionStateError, match="already held by SimulationSession"):
        SimulationSession.create([counter_board], "2-bit counter")

    # The second attempt left the first session's board untouched.
    counter_session.mock_only_register(2)
    assert counter_board.owner is counter_session


def test_dispose_releases_the_board(counter_session, counter_board):
    counter_session.dispose()
    assert counter_board.owner is None
    with SimulationSession.create([counter_board], "2-bit counter") as session:
        assert session.board is counter_board
        assert counter_board.owner is session
    assert counter_board.owner is None
