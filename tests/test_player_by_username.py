# tests/test_player_by_username.py
"""Balance, slots and fleet looked up by username instead of player id."""

from conftest import auth_headers


class TestBalanceByUsername:
    def test_returns_balance(self, client, make_player):
        pid = make_player("rider", balance="1234.50")

        resp = client.get("/api/player/by-username/rider/balance", headers=auth_headers(pid))

        assert resp.status_code == 200
        assert resp.json() == {"player_id": pid, "bank_balance": 1234.5}

    def test_unknown_name_is_404_even_for_other_caller(self, client, make_player):
        pid = make_player("rider")
        resp = client.get("/api/player/by-username/ghost/balance", headers=auth_headers(pid))
        assert resp.status_code == 404
        assert resp.json()["detail"] == "Player not found"

    def test_someone_elses_name_is_403(self, client, make_player):
        make_player("rider")
        other = make_player("rival")
        resp = client.get("/api/player/by-username/rider/balance", headers=auth_headers(other, "rival"))
        assert resp.status_code == 403

    def test_requires_token(self, client, make_player):
        make_player("rider")
        resp = client.get("/api/player/by-username/rider/balance")
        assert resp.status_code == 401


class TestSlotsByUsername:
    def test_summary(self, client, make_player, add_garage, add_vehicle):
        pid = make_player("rider")
        add_garage(pid, capacity=2)
        add_vehicle(pid)

        resp = client.get("/api/player/by-username/rider/slots", headers=auth_headers(pid))

        assert resp.status_code == 200
        assert resp.json() == {"total_slots": 2, "used_slots": 1, "available_slots": 1}

    def test_someone_elses_name_is_403(self, client, make_player):
        make_player("rider")
        other = make_player("rival")
        resp = client.get("/api/player/by-username/rider/slots", headers=auth_headers(other, "rival"))
        assert resp.status_code == 403


class TestVehiclesByUsername:
    def test_lists_own_fleet_with_status_filter(self, client, make_player, add_vehicle):
        pid = make_player("rider")
        add_vehicle(pid, status="active")
        add_vehicle(pid, status="garage")

        resp = client.get("/api/player/by-username/rider/vehicles?status=garage",
                          headers=auth_headers(pid))

        assert resp.status_code == 200
        assert [v["status"] for v in resp.json()] == ["garage"]
        assert resp.json()[0]["player_id"] == pid

    def test_unknown_name_is_404(self, client, make_player):
        pid = make_player("rider")
        resp = client.get("/api/player/by-username/ghost/vehicles", headers=auth_headers(pid))
        assert resp.status_code == 404
