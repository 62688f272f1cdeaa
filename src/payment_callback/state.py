from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from payment_callback.enums import ProcessingPhase
from payment_callback.exceptions import InvalidTransition
from payment_callback.schemas import ProcessingView


@dataclass
class ProcessingState:
    """
    Mutable processing state of one callback instance.

    Only the orchestrator writes to it; everything else reads ``view()``.
    """

    phase: ProcessingPhase = ProcessingPhase.PENDING
    processing: bool = True
    order_ref: Optional[str] = None
    message: Optional[str] = None
    redirect_to: Optional[str] = None
    redirect_delay: Optional[float] = None
    disposed: bool = False

    def transition(self, phase: ProcessingPhase) -> None:
        if self.phase.is_terminal:
            raise InvalidTransition(f"Cannot move from terminal phase {self.phase.value} to {phase.value}")
        if not phase.is_terminal:
            raise InvalidTransition(f"{phase.value} is not a terminal phase")
        self.phase = phase

    def view(self) -> ProcessingView:
        return ProcessingView(
            phase=self.phase,
            processing=self.processing,
            order_ref=self.order_ref,
            message=self.message,
            redirect_to=self.redirect_to,
            redirect_delay=self.redirect_delay,
        )
