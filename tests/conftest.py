import os
import sys
import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from summitbook.services import bookings


class DummyConn:
    """Records statements instead of talking to Postgres."""

    def __init__(self):
        self.executed = []

    async def execute(self, query, *args):
        self.executed.append((query, args))
        return None

    async def close(self):
        pass

    def statements(self, keyword):
        return [args for query, args in self.executed if keyword in query]


@pytest.fixture
def dummy_conn():
    return DummyConn()


@pytest.fixture(autouse=True)
def sent_confirmations(monkeypatch):
    sent = []
    monkeypatch.setattr(bookings, "dispatch_confirmation", lambda booking: sent.append(booking))
    return sent


@pytest.fixture
def checkout_body():
    return {
        "amount": 50,
        "currency": "USD",
        "mountainId": "mt-everest",
        "mountainName": "Mount Everest",
        "date": "2025-05-14",
        "participants": 2,
        "customerInfo": {
            "name": "Asha Raman",
            "email": "asha@example.com",
            "phone": "+91 98765 43210",
        },
    }
