"""
Tests for TickerState.

Tests the service cycle, visibility toggling and listener notification.
"""

import pytest
from unittest.mock import Mock

from newsticker.models import SERVICE_CYCLE
from newsticker.ticker.state import Activation, TickerEvent, TickerState
from conftest import make_headlines


class TestServiceCycle:
    """Test the five-state service selector."""

    def test_initial_service_is_sports(self):
        state = TickerState()
        assert state.current_service == 'sports'
        assert state.current_service_index == 0

    def test_cycle_order(self):
        state = TickerState()
        seen = [state.current_service]
        for _ in range(4):
            state.activate()
            seen.append(state.current_service)
        assert seen == ['sports', 'local', 'news', 'weather', 'tweets']

    @pytest.mark.parametrize("start", range(5))
    def test_five_activations_return_to_start(self, start):
        """Five activations on visible content bring the service back to where it was."""
        state = TickerState(current_service_index=start)
        for _ in range(5):
            assert state.activate() == Activation.SERVICE_ADVANCED
        assert state.current_service_index == start
        assert state.current_service == SERVICE_CYCLE[start].service

    def test_tweets_wraps_to_sports(self):
        state = TickerState(current_service_index=4)
        state.activate()
        assert state.current_service == 'sports'


class TestVisibility:
    """Test the visibility toggle and its interaction with activation."""

    def test_toggle_flips_exactly_one_bit(self):
        state = TickerState(headlines=make_headlines(2), current_position=-12.0)
        assert state.toggle_visibility() is True
        assert state.visibility_hidden is True
        assert state.current_service_index == 0
        assert len(state.headlines) == 2
        assert state.current_position == -12.0

        assert state.toggle_visibility() is False
        assert state.visibility_hidden is False

    def test_activate_while_hidden_only_shows_content(self):
        state = TickerState(current_service_index=2, visibility_hidden=True)
        result = state.activate()
        assert result == Activation.VISIBILITY_TOGGLED
        assert state.visibility_hidden is False
        assert state.current_service_index == 2

    @pytest.mark.parametrize("hidden", [False, True])
    def test_double_activate_never_changes_service(self, hidden):
        state = TickerState(current_service_index=3, visibility_hidden=hidden)
        assert state.double_activate() == Activation.VISIBILITY_TOGGLED
        assert state.visibility_hidden is (not hidden)
        assert state.current_service_index == 3


class TestHeadlinesAndListeners:
    """Test headline replacement and the listener mechanism."""

    def test_replace_headlines_truncates_in_order(self):
        state = TickerState()
        headlines = make_headlines(60)
        state.replace_headlines(headlines, max_headlines=50)
        assert state.headlines == headlines[:50]

    def test_listeners_receive_events(self):
        state = TickerState()
        listener = Mock()
        state.subscribe(listener)

        state.activate()
        state.set_paused(True)
        state.set_paused(True)

        events = [call.args[1] for call in listener.call_args_list]
        assert events == [TickerEvent.SERVICE_CHANGED, TickerEvent.PAUSE_CHANGED]

    def test_unsubscribe_stops_notifications(self):
        state = TickerState()
        listener = Mock()
        unsubscribe = state.subscribe(listener)
        unsubscribe()
        state.toggle_visibility()
        listener.assert_not_called()

    def test_failing_listener_does_not_break_others(self):
        state = TickerState()
        state.subscribe(Mock(side_effect=RuntimeError("boom")))
        good = Mock()
        state.subscribe(good)

        state.set_offline(True)

        good.assert_called_once_with(state, TickerEvent.OFFLINE_CHANGED)
        assert state.offline_mode is True
