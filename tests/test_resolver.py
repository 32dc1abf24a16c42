# tests/test_resolver.py
import pytest

from logictest_core.components import Pin, PinDirection, Register
from logictest_core.graph import Board, WidthMismatchError
from logictest_core.resolution import (
    AmbiguousError,
    DirectionMismatchError,
    NotFoundError,
    resolve_board,
    resolve_pin,
    select_unique,
)


def test_select_unique():
    assert select_unique(["only"], element_kind="things") == "only"
    with pytest.raises(NotFoundError):
        select_unique([], element_kind="things", name="x")
    with pytest.raises(AmbiguousError) as exc_info:
        select_unique(["a", "b"], element_kind="things", name="x")
    assert exc_info.value.match_count == 2


def test_resolve_board_by_canonical_name(counter_board, inverter_board):
    boards = {b.name: b for b in (counter_board, inverter_board)}
    assert resolve_board(boards, "2 BIT counter") is counter_board
    assert resolve_board([counter_board, inverter_board], "inverter!") is inverter_board


def test_resolve_board_not_found(counter_board):
    with pytest.raises(NotFoundError, match="No subcircuits match the name `ALU'"):
        resolve_board([counter_board], "ALU")


def test_resolve_board_ambiguous():
    boards = [Board("Adder"), Board("adder!")]
    with pytest.raises(AmbiguousError, match="More than one subcircuit has the name `ADDER'. Can't continue deterministically."):
        resolve_board(boards, "ADDER")


def test_resolve_pin_matches_label_equivalents(counter_board):
    for spelling in ("CLK", "clk", "c-l-k", " Clk "):
        port = resolve_pin(counter_board, spelling, PinDirection.INPUT, 1)
        assert counter_board.owner_of(port).instance_id == "clk"


def test_resolve_pin_ignores_unlabelled_pins():
    board = Board("B")
    board.add_component(Pin("unnamed", label=None))
    with pytest.raises(NotFoundError, match="contains no input/output pins labelled `'"):
        resolve_pin(board, "", PinDirection.INPUT, 1)


def test_resolve_pin_ignores_non_pin_components():
    board = Board("B")
    board.add_component(Register("reg", label="Count", bits=2))
    with pytest.raises(NotFoundError, match="Subcircuit `B' contains no input/output pins labelled `count'!"):
        resolve_pin(board, "Count", PinDirection.OUTPUT, 2)


def test_resolve_pin_ambiguous():
    board = Board("B")
    board.add_component(Pin("p1", label="Sum"))
    board.add_component(Pin("p2", label="SUM!", is_input=False))
    with pytest.raises(AmbiguousError, match="contains 2 input/output pins labelled `sum', expected 1"):
        resolve_pin(board, "sum", PinDirection.INPUT, 1)


def test_resolve_pin_checks_direction_before_width(counter_board):
    # Both the direction and the width are wrong; the direction is reported.
    with pytest.raises(DirectionMismatchError) as exc_info:
        resolve_pin(counter_board, "clk", PinDirection.OUTPUT, 8)
    error = exc_info.value
    assert error.label == "CLK"
    assert error.expected is PinDirection.OUTPUT
    assert error.actual is PinDirection.INPUT
    assert "has input pin labelled `CLK', but expected it to be an output pin instead" in str(error)


def test_resolve_pin_width_mismatch(counter_board):
    with pytest.raises(WidthMismatchError, match="pin labelled `Count' with 2 bits, but expected 3 bits"):
        resolve_pin(counter_board, "count", PinDirection.OUTPUT, 3)


def test_lookup_errors_produce_diagnostic_reports(counter_board):
    with pytest.raises(NotFoundError) as exc_info:
        resolve_pin(counter_board, "nope", PinDirection.INPUT, 1)
    report = exc_info.value.get_diagnostic_report()
    assert "Element Not Found" in report
    assert "Subcircuit:     2-bit Counter" in report
