import os
import sys
import unittest
from unittest.mock import Mock

root_path = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(root_path)

from NavigableHistory import NavigableHistory, OutOfRangeNavigation, PopFromEmpty
from ObservableHistory import ObservableHistory
from ObserverNotifier import ObserverNotifier


class TestObservableHistory(unittest.TestCase):
    def setUp(self):
        self.history = ObservableHistory()

    def tearDown(self):
        self.history.unsubscribe_all()

    def test_notified_of_push(self):
        listener = Mock()
        self.history.subscribe(listener)
        self.assertEqual(self.history.push(1), 1)
        listener.assert_called_once_with(1)

    def test_notified_after_go_back(self):
        for state in [1, 2, 3]:
            self.history.push(state)
        listener = Mock()
        self.history.subscribe(listener)
        self.assertEqual(self.history.go_prev(), 2)
        listener.assert_called_once_with(2)

    def test_every_navigation_notifies(self):
        for state in [0, 1, 2, 3]:
            self.history.push(state)
        states = []
        self.history.subscribe(states.append)
        self.history.go(-3)
        self.history.go_next()
        self.history.go(1)
        self.history.go_prev()
        self.history.go_last()
        self.assertEqual(states, [0, 1, 2, 1, 3])

    def test_observer_sees_updated_history(self):
        for state in ['a', 'b']:
            self.history.push(state)
        seen = []
        self.history.subscribe(lambda state: seen.append((state, self.history.num_prev, self.history.num_next)))
        self.history.go_prev()
        self.history.push('c')
        self.assertEqual(seen, [('a', 0, 1), ('c', 1, 0)])

    def test_quiet_operations(self):
        for state in [1, 2, 3]:
            self.history.push(state)
        listener = Mock()
        self.history.subscribe(listener)
        self.assertEqual(self.history.go(0), 3)
        for i in range(-4, 5):
            self.history.get(i)
        self.history.clear()
        listener.assert_not_called()
        self.assertEqual(self.history.num_prev, 0)

    def test_unsubscribe(self):
        num_calls = []
        listener = lambda state: num_calls.append(state)
        self.history.subscribe(listener)
        self.history.push(1)
        self.history.push(2)
        self.history.unsubscribe(listener)
        self.history.push(3)
        self.history.push(4)
        self.assertEqual(len(num_calls), 2)

    def test_unsubscribe_all(self):
        listener1 = Mock()
        listener2 = Mock()
        self.history.subscribe(listener1)
        self.history.subscribe(listener2)
        self.history.push(1)
        self.history.push(2)
        self.history.unsubscribe_all()
        self.history.push(3)
        self.history.push(4)
        self.assertEqual(listener1.call_count, 2)
        self.assertEqual(listener2.call_count, 2)

    def test_unsubscribe_unknown_does_nothing(self):
        self.history.unsubscribe(lambda state: None)

    def test_absent_present_is_notified_as_none(self):
        listener = Mock()
        self.history.subscribe(listener)
        self.assertIsNone(self.history.go_prev())
        listener.assert_called_once_with(None)

    def test_strict_refusal_does_not_notify(self):
        history = ObservableHistory(strict=True)
        history.push('only')
        listener = Mock()
        history.subscribe(listener)
        with self.assertRaises(PopFromEmpty):
            history.go_prev()
        with self.assertRaises(OutOfRangeNavigation):
            history.go(3)
        listener.assert_not_called()
        self.assertEqual(history.get(0), 'only')

    def test_failing_observer_aborts_remaining(self):
        failing = Mock(side_effect=RuntimeError('boom'))
        after = Mock()
        self.history.subscribe(failing)
        self.history.subscribe(after)
        with self.assertRaises(RuntimeError):
            self.history.push(1)
        after.assert_not_called()
        # The history itself was already updated
        self.assertEqual(self.history.get(0), 1)

    def test_isolated_observer_errors(self):
        errors = []
        history = ObservableHistory(notifier=ObserverNotifier(lambda e, callback, state: errors.append(state)))
        after = Mock()
        history.subscribe(Mock(side_effect=RuntimeError('boom')))
        history.subscribe(after)
        history.push(1)
        after.assert_called_once_with(1)
        self.assertEqual(errors, [1])

    def test_reentrant_mutation(self):
        states = []

        def redirect(state):
            states.append(('redirect', state))
            if state == 'bad':
                self.history.go_prev()

        self.history.push('good')
        self.history.subscribe(redirect)
        self.history.subscribe(lambda state: states.append(('tail', state)))
        self.history.push('bad')

        self.assertEqual(states, [('redirect', 'bad'),
                                  ('redirect', 'good'), ('tail', 'good'),
                                  ('tail', 'bad')])
        self.assertEqual(self.history.get(0), 'good')
        self.assertEqual(self.history.num_next, 1)


class TestObservableHistoryDelegation(unittest.TestCase):
    def test_wraps_existing_history(self):
        core = NavigableHistory(capacity=3)
        for state in [1, 2]:
            core.push(state)
        history = ObservableHistory(core)
        self.assertIs(history.history, core)
        self.assertEqual(history.get(0), 2)
        self.assertEqual(len(history), 2)
        self.assertTrue(history.has_present)

    def test_options_applied_to_wrapped_history(self):
        core = NavigableHistory()
        history = ObservableHistory(core, capacity=3, strict=True)
        self.assertEqual(core.capacity, 3)
        self.assertTrue(core.strict)
        with self.assertRaises(PopFromEmpty):
            history.go_prev()

    def test_wrapped_history_keeps_own_settings(self):
        core = NavigableHistory(capacity=7, strict=True)
        ObservableHistory(core)
        self.assertEqual(core.capacity, 7)
        self.assertTrue(core.strict)

    def test_invalid_capacity_for_wrapped_history(self):
        with self.assertRaises(ValueError):
            ObservableHistory(NavigableHistory(), capacity=0)

    def test_capacity(self):
        history = ObservableHistory(capacity=3)
        self.assertEqual(history.max_length, 3)
        for state in [1, 2, 3, 4, 5]:
            history.push(state)
        self.assertEqual(history.num_prev, 3)
        self.assertEqual(history.get(-3), 2)

        history.max_length = 1
        self.assertEqual(history.history.capacity, 1)
        history.push(6)
        self.assertEqual(history.snapshot(), ([5], 6, []))

    def test_read_only_helpers(self):
        history = ObservableHistory()
        history.push('a')
        history.push('b')
        history.go_prev()
        self.assertTrue(history.can_go_next)
        self.assertFalse(history.can_go_prev)
        self.assertFalse(history.strict)
        self.assertEqual(history.notifier.observer_count, 0)
        self.assertIn('observers=0', repr(history))


if __name__ == '__main__':
    unittest.main()
