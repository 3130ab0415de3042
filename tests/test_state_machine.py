"""Unit tests for checkout state-machine guardrails."""

import pytest

from storefront.common import state_machine as states
from storefront.common.state_machine import TERMINAL_STATES, validate_transition


def test_valid_transition():
    """Sanity check: a legal transition should pass."""

    validate_transition(states.START, states.BASKET_LOADED)


def test_invalid_transition():
    """Skipping order creation must raise to protect checkout ordering."""

    with pytest.raises(ValueError):
        validate_transition(states.BASKET_LOADED, states.NOTIFIED)


def test_empty_basket_branch_only_from_loaded_basket():
    validate_transition(states.BASKET_LOADED, states.EMPTY_BASKET_REDIRECT)
    with pytest.raises(ValueError):
        validate_transition(states.ORDER_CREATED, states.EMPTY_BASKET_REDIRECT)


def test_terminal_states():
    assert TERMINAL_STATES == {states.DONE, states.EMPTY_BASKET_REDIRECT}
    for terminal in TERMINAL_STATES:
        with pytest.raises(ValueError):
            validate_transition(terminal, states.START)


def test_happy_path_is_a_single_chain():
    path = [
        states.START,
        states.BASKET_LOADED,
        states.ORDER_CREATED,
        states.NOTIFIED,
        states.BASKET_CLEARED,
        states.DONE,
    ]
    for current, new in zip(path, path[1:]):
        validate_transition(current, new)
