from rentals.services.status_switch import (
    TRANSITIONS,
    Transition,
    TransitionError,
    transition_booking,
)

__all__ = ["TRANSITIONS", "Transition", "TransitionError", "transition_booking"]
