"""Decide whether a palette edit extends the open undo command or starts a new one."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from ...domain.collaborators import ICommandHandle
from ...events.signal import Signal

_LOGGER = logging.getLogger(__name__)


class TickScheduler(Protocol):
    """Periodic timer that calls :meth:`EditCoalescer.tick` while running."""

    def start(self) -> None: ...

    def stop(self) -> None: ...

    def is_running(self) -> bool: ...


class TickPhase(Enum):
    IDLE = "idle"
    AWAITING_FIRST_TICK = "awaiting_first_tick"
    AWAITING_FINALIZE_TICK = "awaiting_finalize_tick"


class CoalesceDecision(Enum):
    IMPLANT = "implant"
    NEW = "new"


@dataclass
class EditSession:
    operation_label: str
    open_since_tick: int
    last_command: Optional[ICommandHandle] = None
    edit_count: int = 1


class EditCoalescer:
    """Two-phase tick state machine around one open :class:`EditSession`.

    The first tick after an edit only asks for the current view to redraw.
    A second consecutive tick without an intervening edit closes the session
    and emits :attr:`finalized`, which hosts use for the expensive full
    broadcast.
    """

    def __init__(self, scheduler: TickScheduler) -> None:
        self._scheduler = scheduler
        self._session: Optional[EditSession] = None
        self._phase = TickPhase.IDLE
        self._tick_count = 0

        self.view_redraw_requested = Signal()
        """Emitted on the first tick after an edit."""

        self.finalized = Signal()
        """Emitted with the closed :class:`EditSession`."""

    # ------------------------------------------------------------------
    # Accessors
    @property
    def phase(self) -> TickPhase:
        return self._phase

    @property
    def session(self) -> Optional[EditSession]:
        return self._session

    @property
    def tick_count(self) -> int:
        return self._tick_count

    def is_open(self) -> bool:
        return self._session is not None

    # ------------------------------------------------------------------
    def decide(self, label: str, last_command: Optional[ICommandHandle]) -> CoalesceDecision:
        """Return :attr:`CoalesceDecision.IMPLANT` when *label* can join the open command."""

        session = self._session
        if (
            session is not None
            and last_command is not None
            and session.operation_label == label
            and last_command.label() == label
        ):
            return CoalesceDecision.IMPLANT
        return CoalesceDecision.NEW

    def record_edit(self, label: str, last_command: Optional[ICommandHandle]) -> EditSession:
        """Open or extend the session after an edit was recorded and arm the tick."""

        session = self._session
        if session is not None and session.operation_label != label:
            # A different operation closes the previous one before it opens.
            self.finalize()
            session = None
        if session is None:
            session = EditSession(
                operation_label=label,
                open_since_tick=self._tick_count,
                last_command=last_command,
            )
            self._session = session
            _LOGGER.info("Opened palette edit session %r at tick %d", label, self._tick_count)
        else:
            session.last_command = last_command
            session.edit_count += 1

        self._phase = TickPhase.AWAITING_FIRST_TICK
        if not self._scheduler.is_running():
            self._scheduler.start()
        return session

    def tick(self) -> None:
        """Advance the two-phase redraw cycle by one timer firing."""

        self._tick_count += 1
        if self._phase is TickPhase.AWAITING_FIRST_TICK:
            self._phase = TickPhase.AWAITING_FINALIZE_TICK
            self.view_redraw_requested.emit()
        elif self._phase is TickPhase.AWAITING_FINALIZE_TICK:
            self.finalize()
        else:
            # Stray firing after an external finalize.
            self._scheduler.stop()

    def finalize(self) -> bool:
        """Close the open session.  Returns ``False`` when already idle."""

        if self._session is None and self._phase is TickPhase.IDLE:
            return False

        session = self._session
        self._session = None
        self._phase = TickPhase.IDLE
        self._scheduler.stop()
        if session is not None:
            _LOGGER.info(
                "Finalized palette edit session %r after %d edit(s)",
                session.operation_label,
                session.edit_count,
            )
            self.finalized.emit(session)
        return True
