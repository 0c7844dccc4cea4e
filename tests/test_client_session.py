# tests/test_client_session.py
"""PlayerSession notifications and the requests-based API client."""

from unittest.mock import MagicMock
import pytest
from app.client import ApiError, CyberTaxiClient, PlayerSession


def fake_response(status_code, payload):
    resp = MagicMock()
    resp.status_code = status_code
    resp.json.return_value = payload
    resp.text = str(payload)
    return resp


class TestPlayerSession:
    def test_subscribers_notified_on_update_and_clear(self):
        session = PlayerSession()
        seen = []
        session.subscribe(lambda s: seen.append(s.player_id))

        session.update("tok", "rider", 5)
        session.clear()

        assert seen == [5, None]
        assert not session.is_authenticated

    def test_unsubscribe(self):
        session = PlayerSession()
        seen = []
        unsubscribe = session.subscribe(lambda s: seen.append(s.username))
        unsubscribe()
        session.update("tok", "rider", 5)
        assert seen == []

    def test_failing_subscriber_does_not_block_others(self):
        session = PlayerSession()
        seen = []
        session.subscribe(lambda s: 1 / 0)
        session.subscribe(lambda s: seen.append(s.token))
        session.update("tok", "rider", 5)
        assert seen == ["tok"]


class TestCyberTaxiClient:
    def test_login_updates_session_and_sends_bearer(self):
        http = MagicMock()
        http.request.side_effect = [
            fake_response(200, {"token": "abc", "player_id": 3, "username": "rider"}),
            fake_response(200, {"player_id": 3, "bank_balance": 10000.0}),
        ]
        session = PlayerSession()
        client = CyberTaxiClient(session, base_url="http://api/api", http=http)

        client.login("rider", "secret1")
        balance = client.balance()

        assert session.token == "abc" and session.player_id == 3
        assert balance == 10000.0
        method, url = http.request.call_args[0]
        assert (method, url) == ("GET", "http://api/api/player/3/balance")
        assert http.request.call_args[1]["headers"]["Authorization"] == "Bearer abc"

    def test_purchase_error_raises_api_error(self):
        http = MagicMock()
        http.request.return_value = fake_response(400, {"detail": "Insufficient funds"})
        session = PlayerSession()
        session.update("abc", "rider", 3)
        client = CyberTaxiClient(session, http=http)

        with pytest.raises(ApiError) as exc:
            client.purchase_vehicle("RoboCab", 35000, (30.2672, -97.7431))

        assert exc.value.status_code == 400
        assert exc.value.detail == "Insufficient funds"
        assert http.request.call_args[1]["json"]["player_id"] == 3

    def test_invalid_token_clears_session(self):
        http = MagicMock()
        http.request.return_value = fake_response(403, {"detail": "Invalid token"})
        session = PlayerSession()
        session.update("stale", "rider", 3)
        client = CyberTaxiClient(session, http=http)

        with pytest.raises(ApiError):
            client.slots()

        assert session.token is None
