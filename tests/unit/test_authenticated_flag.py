"""Tests for AuthenticatedFlag."""

from unittest.mock import MagicMock

from docassist_session.application.services import AuthenticatedFlag


class TestAuthenticatedFlag:
    """Test change notification."""

    def test_starts_unknown(self):
        flag = AuthenticatedFlag()
        assert flag.value is None
        assert not flag

    def test_notifies_on_change_only(self):
        flag = AuthenticatedFlag()
        listener = MagicMock()
        flag.subscribe(listener)

        assert flag.set(True) is True
        assert flag.set(True) is False
        flag.set(False)

        assert [c.args[0] for c in listener.call_args_list] == [True, False]

    def test_unsubscribe(self):
        flag = AuthenticatedFlag()
        listener = MagicMock()
        unsubscribe = flag.subscribe(listener)

        unsubscribe()
        flag.set(True)

        listener.assert_not_called()
        assert flag

    def test_failing_listener_does_not_block_others(self):
        flag = AuthenticatedFlag(initial=False)
        after = MagicMock()
        flag.subscribe(MagicMock(side_effect=RuntimeError("boom")))
        flag.subscribe(after)

        flag.set(True)

        after.assert_called_once_with(True)
