# src/logictest_core/resolution/resolver.py
"""
Resolves human-entered names to unique elements of a design.

Every lookup is a filter over an explicit list of candidates followed by
`select_unique`, which refuses to pick when the filter keeps zero or several
candidates. Names are compared through `canonical_name`.
"""

import logging
from typing import Iterable, Mapping, Optional, Sequence, TypeVar, Union

from ..components.base_enums import ComponentKind, PinDirection
from ..components.wiring import Pin
from ..graph.board import Board
from ..graph.exceptions import WidthMismatchError
from ..graph.handles import PortRef
from .exceptions import AmbiguousError, DirectionMismatchError, NotFoundError
from .naming import canonical_name

logger = logging.getLogger(__name__)

T = TypeVar("T")

PIN_KINDS = (ComponentKind.INPUT_PIN, ComponentKind.OUTPUT_PIN)


def select_unique(
    matches: Sequence[T],
    element_kind: str,
    scope: Optional[str] = None,
    name: Optional[str] = None,
) -> T:
    """
    Returns the only element of `matches`.

    Raises:
        AmbiguousError: if there is more than one match.
        NotFoundError: if there is none.
    """
    if len(matches) > 1:
        raise AmbiguousError(
            element_kind=element_kind,
            match_count=len(matches),
            scope=scope,
            name=name,
            candidates=[repr(m) for m in matches],
        )
    if not matches:
        raise NotFoundError(element_kind=element_kind, scope=scope, name=name)
    return matches[0]


def resolve_board(boards: Union[Mapping[str, Board], Iterable[Board]], board_name: str) -> Board:
    """
    Finds the one board whose name is canonically equal to `board_name`.

    `boards` may be the name-to-board mapping produced by the design builder or
    any iterable of boards.
    """
    candidates = list(boards.values()) if isinstance(boards, Mapping) else list(boards)
    wanted = canonical_name(board_name)
    matching = [b for b in candidates if canonical_name(b.name) == wanted]
    board = select_unique(matching, element_kind="subcircuits", name=board_name)
    logger.debug(f"Resolved subcircuit name '{board_name}' to '{board.name}'.")
    return board


def resolve_pin(board: Board, pin_label: str, want_direction: PinDirection, want_bits: int) -> PortRef:
    """
    Finds the one pin on `board` whose label is canonically equal to `pin_label`
    and checks it against the caller's expectations.

    Pins without a label never match. Uniqueness is checked first, then the
    direction, then the width, so the most specific error is reported.

    Returns:
        The handle of the pin's port. `SimulationSession.lookup_pin` wraps it in a `PinHandle`.
    """
    wanted = canonical_name(pin_label)
    matching = [
        c for c in board.components
        if c.kind in PIN_KINDS and c.label is not None and canonical_name(c.label) == wanted
    ]
    pin: Pin = select_unique(matching, element_kind="input/output pins", scope=board.name, name=wanted)

    # Use the circuit's own spelling of the label from here on.
    their_label = pin.label
    if pin.direction is not want_direction:
        raise DirectionMismatchError(
            board_name=board.name,
            label=their_label,
            expected=want_direction,
            actual=pin.direction,
        )
    if pin.bits != want_bits:
        raise WidthMismatchError(
            board_name=board.name,
            subject=f"pin labelled `{their_label}'",
            expected_bits=want_bits,
            actual_bits=pin.bits,
        )

    port = board.ports_of(pin)[0]
    logger.debug(f"Resolved pin label '{pin_label}' to {pin!r} on '{board.name}'.")
    return port


def find_only_component(board: Board, kind: ComponentKind, element_kind: str):
    """Returns the only component of `kind` on `board`, by the same uniqueness rule."""
    matching = [c for c in board.components if c.kind is kind]
    return select_unique(matching, element_kind=element_kind, scope=board.name)
