from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Iterable, Optional

from ..core.enums import SessionState, SessionType
from ..core.exceptions import DuplicateActionError, NoCheckInYetError, ValidationError
from .model import AttendanceSession

_TRANSITIONS: dict[tuple[SessionState, SessionType], SessionState] = {
    (SessionState.NOT_STARTED, SessionType.CHECK_IN): SessionState.CHECKED_IN,
    (SessionState.CHECKED_OUT, SessionType.CHECK_IN): SessionState.CHECKED_IN,
    (SessionState.CHECKED_IN, SessionType.CHECK_OUT): SessionState.CHECKED_OUT,
}


@dataclass(frozen=True)
class AttendanceDay:
    """One user's business day as an explicit state machine.

    NOT_STARTED -> CHECKED_IN -> CHECKED_OUT -> CHECKED_IN -> ...
    The state comes from the last accepted session, not from list parity.
    """

    user_id: int
    work_date: date
    sessions: tuple[AttendanceSession, ...] = ()

    @classmethod
    def from_sessions(cls, user_id: int, work_date: date, sessions: Iterable[AttendanceSession]) -> "AttendanceDay":
        return cls(user_id=user_id, work_date=work_date, sessions=tuple(sessions))

    @property
    def state(self) -> SessionState:
        last = self.last_session
        if last is None:
            return SessionState.NOT_STARTED
        if last.session_type == SessionType.CHECK_IN:
            return SessionState.CHECKED_IN
        return SessionState.CHECKED_OUT

    @property
    def last_session(self) -> Optional[AttendanceSession]:
        return self.sessions[-1] if self.sessions else None

    @property
    def first_check_in(self) -> Optional[AttendanceSession]:
        return next((s for s in self.sessions if s.session_type == SessionType.CHECK_IN), None)

    def ensure_can_record(self, session_type: SessionType) -> SessionState:
        """Validate the transition and return the state it leads to."""
        current = self.state
        target = _TRANSITIONS.get((current, session_type))
        if target is not None:
            return target

        if current == SessionState.NOT_STARTED:
            raise NoCheckInYetError("Cannot check out without checking in first")
        if current == SessionState.CHECKED_IN:
            raise DuplicateActionError("Already checked in. Please check out first.")
        raise DuplicateActionError("Already checked out. Please check in first.")

    def with_session(self, session: AttendanceSession) -> "AttendanceDay":
        self.ensure_can_record(session.session_type)
        last = self.last_session
        if last is not None and session.occurred_at <= last.occurred_at:
            raise ValidationError("Session time must be after the previous session of the day")
        return AttendanceDay(user_id=self.user_id, work_date=self.work_date, sessions=self.sessions + (session,))
