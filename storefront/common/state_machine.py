"""Checkout state machine transitions enforced by the orchestrator."""

START = "START"
BASKET_LOADED = "BASKET_LOADED"
ORDER_CREATED = "ORDER_CREATED"
NOTIFIED = "NOTIFIED"
BASKET_CLEARED = "BASKET_CLEARED"
DONE = "DONE"
EMPTY_BASKET_REDIRECT = "EMPTY_BASKET_REDIRECT"

ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    START: {BASKET_LOADED},
    BASKET_LOADED: {ORDER_CREATED, EMPTY_BASKET_REDIRECT},
    ORDER_CREATED: {NOTIFIED},
    NOTIFIED: {BASKET_CLEARED},
    BASKET_CLEARED: {DONE},
    DONE: set(),
    EMPTY_BASKET_REDIRECT: set(),
}

TERMINAL_STATES = frozenset(state for state, targets in ALLOWED_TRANSITIONS.items() if not targets)


def validate_transition(current: str, new: str) -> None:
    """Raise when a transition is not allowed by the state machine."""

    if new not in ALLOWED_TRANSITIONS.get(current, set()):
        raise ValueError(f"Invalid transition: {current} -> {new}")
