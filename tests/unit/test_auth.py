"""
Unit tests for AdminGate.
"""
from types import SimpleNamespace

from lobby.auth import AdminGate


def fake_request(headers=None):
    return SimpleNamespace(headers=headers or {})


class TestAdminGate:

    def test_open_without_key(self):
        """No configured key leaves admin routes open."""
        gate = AdminGate(None)

        assert gate.is_open is True
        assert gate.is_authorized(fake_request()) is True

    def test_empty_key_is_open(self):
        assert AdminGate('').is_open is True

    def test_correct_key(self):
        gate = AdminGate('s3cret')
        assert gate.is_authorized(fake_request({'X-Admin-Key': 's3cret'})) is True

    def test_wrong_key(self):
        gate = AdminGate('s3cret')
        assert gate.is_authorized(fake_request({'X-Admin-Key': 'guess'})) is False

    def test_missing_key(self):
        gate = AdminGate('s3cret')
        assert gate.is_authorized(fake_request()) is False
