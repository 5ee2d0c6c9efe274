"""
Step machine for the booking sheet.

The booking sheet walks the client through four screens. Every move is an
explicit transition; anything else is rejected with the list of moves
allowed from the current step.

Usage:
    flow = BookingFlow()
    flow.transition(FlowTrigger.NEXT)
    assert flow.current_step == BookingStep.DURATION
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

logger = logging.getLogger(__name__)


class BookingStep(str, Enum):
    HOW_IT_WORKS = "how_it_works"
    DURATION = "duration"
    DATE_TIME = "date_time"
    CONFIRMATION = "confirmation"


class FlowTrigger(str, Enum):
    NEXT = "next"
    BACK = "back"
    BOOKING_CREATED = "booking_created"


@dataclass
class Transition:
    from_step: BookingStep
    to_step: BookingStep
    trigger: FlowTrigger


@dataclass
class StepEntry:
    step: BookingStep
    entered_at: datetime
    trigger: Optional[FlowTrigger] = None


class InvalidTransitionError(Exception):
    """Raised when a move is not valid from the current step."""


class BookingFlow:
    """Deterministic navigation between booking screens.

    Leaving DATE_TIME forward only happens through BOOKING_CREATED, after
    the submission succeeded; NEXT from DATE_TIME is the caller's cue to
    submit rather than a transition.
    """

    TRANSITIONS: list[Transition] = [
        Transition(BookingStep.HOW_IT_WORKS, BookingStep.DURATION, FlowTrigger.NEXT),
        Transition(BookingStep.DURATION, BookingStep.DATE_TIME, FlowTrigger.NEXT),
        Transition(BookingStep.DATE_TIME, BookingStep.CONFIRMATION, FlowTrigger.BOOKING_CREATED),
        Transition(BookingStep.DURATION, BookingStep.HOW_IT_WORKS, FlowTrigger.BACK),
        Transition(BookingStep.DATE_TIME, BookingStep.DURATION, FlowTrigger.BACK),
        Transition(BookingStep.CONFIRMATION, BookingStep.DATE_TIME, FlowTrigger.BACK),
    ]

    def __init__(self, skip_intro: bool = False) -> None:
        self._initial = BookingStep.DURATION if skip_intro else BookingStep.HOW_IT_WORKS
        self._current_step = self._initial
        self._history: list[StepEntry] = [
            StepEntry(step=self._initial, entered_at=datetime.now(timezone.utc))
        ]

    @property
    def current_step(self) -> BookingStep:
        return self._current_step

    @property
    def wants_submission(self) -> bool:
        """True when NEXT on this step means 'create the booking'."""
        return self._current_step == BookingStep.DATE_TIME

    def transition(self, trigger: FlowTrigger) -> BookingStep:
        for t in self.TRANSITIONS:
            if t.from_step == self._current_step and t.trigger == trigger:
                old_step = self._current_step
                self._current_step = t.to_step
                self._history.append(StepEntry(
                    step=self._current_step,
                    entered_at=datetime.now(timezone.utc),
                    trigger=trigger,
                ))
                logger.debug(
                    "Booking step: %s -> %s (trigger: %s)",
                    old_step.value, self._current_step.value, trigger.value,
                )
                return self._current_step

        valid = [t.value for t in self.get_valid_triggers()]
        raise InvalidTransitionError(
            f"No valid transition from '{self._current_step.value}' "
            f"with trigger '{trigger.value}'. Valid triggers: {valid}"
        )

    def get_valid_triggers(self) -> list[FlowTrigger]:
        return [t.trigger for t in self.TRANSITIONS if t.from_step == self._current_step]

    def get_step_trace(self) -> list[str]:
        return [entry.step.value for entry in self._history]

    def reset(self) -> None:
        self._current_step = self._initial
        self._history = [StepEntry(step=self._initial, entered_at=datetime.now(timezone.utc))]
