# tests/test_pins.py
import pytest

from logictest_core.components import PinDirection
from logictest_core.harness import OutOfRangeError, PinHandle, PinRole, SessionStateError
from logictest_core.resolution import DirectionMismatchError

from conftest import port


@pytest.fixture
def clk(counter_session):
    return counter_session.lookup_pin("clk", want_input=True, want_bits=1)


@pytest.fixture
def count(counter_session):
    return counter_session.lookup_pin("COUNT", want_input=False, want_bits=2)


def test_lookup_pin_returns_role_tagged_handles(clk, count):
    assert clk.role is PinRole.WRITER
    assert clk.is_writer
    assert clk.label == "CLK"
    assert clk.bits == 1
    assert count.role is PinRole.READER
    assert count.label == "Count"


def test_reader_sees_nothing_before_evaluation(count):
    assert count.get() is None


@pytest.mark.parametrize("value", [-1, 2, True, False, 0.0, "1", None])
def test_set_rejects_values_outside_the_pin(clk, value):
    with pytest.raises(OutOfRangeError):
        clk.set(value)


def test_out_of_range_message(counter_session):
    with pytest.raises(OutOfRangeError, match="between 0 and 1 \\(1 bits\\)"):
        counter_session.lookup_pin("CLK", True, 1).set(2)


def test_calling_the_other_roles_operation_is_a_direction_mismatch(clk, count):
    with pytest.raises(DirectionMismatchError) as exc_info:
        clk.get()
    assert exc_info.value.expected is PinDirection.OUTPUT
    with pytest.raises(DirectionMismatchError):
        count.set(1)


def test_handles_drive_the_simulator(counter_session, clk, count):
    for level in (0, 1, 0, 1):
        clk.set(level)
        counter_session.evaluate()
    assert count.get() == 2


def test_for_port_checks_role_against_pin_direction(counter_session):
    board = counter_session.board
    with pytest.raises(DirectionMismatchError, match="has output pin labelled `Count'"):
        PinHandle.for_port(counter_session, port(board, "count", "pin"), PinRole.WRITER)


def test_handles_are_values(counter_session, clk):
    again = counter_session.lookup_pin("clk", True, 1)
    assert again == clk
    assert hash(again) == hash(clk)


def test_handles_stop_working_after_dispose(counter_session, clk, count):
    counter_session.dispose()
    with pytest.raises(SessionStateError, match="disposed"):
        clk.set(1)
    with pytest.raises(SessionStateError):
        count.get()
