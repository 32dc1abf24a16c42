# src/logictest_core/harness/mock_register.py
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

from ..surgery.substitution import RegisterProbes
from .pins import PinHandle, PinRole

if TYPE_CHECKING:
    from .session import SimulationSession


@dataclass(frozen=True)
class MockRegister:
    """
    The probes that replaced a register. The test writes `q` in place of the
    register's stored value, and reads what the circuit feeds back on `d`,
    `en`, `clk` and `rst`.
    """
    q: PinHandle
    d: PinHandle
    en: PinHandle
    clk: PinHandle
    rst: PinHandle

    @property
    def pins(self) -> Tuple[PinHandle, ...]:
        return (self.q, self.d, self.en, self.clk, self.rst)

    @classmethod
    def from_probes(cls, session: SimulationSession, probes: RegisterProbes) -> MockRegister:
        def wrap(port, role):
            probe = session.board.owner_of(port)
            return PinHandle.for_port(session, port, role, label=probe.instance_id)

        return cls(
            q=wrap(probes.q, PinRole.WRITER),
            d=wrap(probes.d, PinRole.READER),
            en=wrap(probes.en, PinRole.READER),
            clk=wrap(probes.clk, PinRole.READER),
            rst=wrap(probes.rst, PinRole.READER),
        )
