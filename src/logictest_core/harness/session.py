# src/logictest_core/harness/session.py
"""
Provides `SimulationSession`, the object a test holds for the lifetime of one
test case.

A session owns exactly one board and the simulator evaluating it. It is the
entry point for everything a test does: resolving pins by label, mocking the
board's register, evaluating, and resetting. Handles returned by the session
go through it for every read and write, so they stop working once the session
is disposed or has failed.

No two sessions share a board: a session claims its board on creation and
releases it on `dispose()`. A failed session keeps its board until disposed.

Lifecycle:

    ACTIVE  --dispose()-------------------------> DISPOSED
    ACTIVE  --GraphMutationFailure--------------> FAILED

A session only fails when register substitution is interrupted after the
board was modified. Lookup and validation errors leave it ACTIVE.
"""
from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable, Mapping, Optional, Union

from ..components.base_enums import PinDirection
from ..design_builder import DesignBuilder
from ..graph.board import Board
from ..graph.exceptions import GraphMutationFailure
from ..resolution.resolver import resolve_board, resolve_pin
from ..simulation.config import SimulationConfig
from ..simulation.engine import Simulator
from ..surgery import substitution
from .exceptions import SessionStateError
from .mock_register import MockRegister
from .pins import PinHandle, PinRole

logger = logging.getLogger(__name__)


class SessionState(Enum):
    ACTIVE = "active"
    FAILED = "failed"
    DISPOSED = "disposed"


class SimulationSession:
    """Binds one board to its simulator for the duration of a test."""

    def __init__(self, board: Board, simulator: Simulator):
        if board.owner is not None:
            raise SessionStateError(
                f"Subcircuit `{board.name}' is already held by {board.owner!r}. "
                f"Dispose that session before starting another one on the same subcircuit."
            )
        self.board = board
        self.simulator = simulator
        self.state = SessionState.ACTIVE
        board.owner = self

    @classmethod
    def create(
        cls,
        boards: Union[Mapping[str, Board], Iterable[Board]],
        board_name: str,
        config: Optional[SimulationConfig] = None,
    ) -> SimulationSession:
        """Resolves `board_name` among `boards` and starts a fresh simulator for it."""
        board = resolve_board(boards, board_name)
        session = cls(board, Simulator(board, config))
        logger.info(f"Simulation session created for subcircuit '{board.name}'.")
        return session

    @classmethod
    def from_path(cls, path: Union[str, Path], board_name: str) -> SimulationSession:
        """
        Loads a YAML design file and creates a session for one of its subcircuits.

        Raises:
            DesignBuildError: if the file cannot be parsed or built.
        """
        design = DesignBuilder().load_design(path)
        return cls.create(design.boards, board_name, config=design.config)

    # --- Lifecycle ---

    @property
    def is_active(self) -> bool:
        return self.state is SessionState.ACTIVE

    def ensure_active(self):
        if self.state is SessionState.DISPOSED:
            raise SessionStateError(f"The session for subcircuit `{self.board.name}' has been disposed.")
        if self.state is SessionState.FAILED:
            raise SessionStateError(
                f"The session for subcircuit `{self.board.name}' failed during register substitution "
                f"and can no longer be used."
            )

    def dispose(self):
        """Ends the session. Disposing twice is allowed."""
        if self.state is SessionState.DISPOSED:
            return
        self.simulator.reset()
        self.state = SessionState.DISPOSED
        self.board.owner = None
        logger.info(f"Simulation session for subcircuit '{self.board.name}' disposed.")

    def __enter__(self) -> SimulationSession:
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.dispose()
        return False

    # --- Test operations ---

    def lookup_pin(self, label: str, want_input: bool, want_bits: int) -> PinHandle:
        """
        Finds the pin labelled `label` and wraps it as a WRITER (input pin) or
        READER (output pin).
        """
        self.ensure_active()
        want_direction = PinDirection.INPUT if want_input else PinDirection.OUTPUT
        port = resolve_pin(self.board, label, want_direction, want_bits)
        role = PinRole.WRITER if want_input else PinRole.READER
        return PinHandle.for_port(self, port, role, label=self.board.owner_of(port).label)

    def mock_only_register(self, want_bits: int) -> MockRegister:
        """Replaces the board's only register with probes and returns handles to them."""
        self.ensure_active()
        try:
            probes = substitution.mock_only_register(self.board, want_bits)
        except GraphMutationFailure:
            self.state = SessionState.FAILED
            raise
        return MockRegister.from_probes(self, probes)

    def evaluate(self):
        """Propagates every written value through the board."""
        self.ensure_active()
        self.simulator.evaluate()

    def reset_simulation(self):
        """Clears all simulated state. The board's wiring, probes included, is kept."""
        self.ensure_active()
        self.simulator.reset()
        logger.debug(f"Simulation of subcircuit '{self.board.name}' reset.")

    def __repr__(self) -> str:
        return f"SimulationSession(board={self.board.name!r}, state={self.state.value})"
