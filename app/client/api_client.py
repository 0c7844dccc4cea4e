# app/client/api_client.py
"""
Thin requests-based client for the CyberTaxi API.
Takes a PlayerSession explicitly; never reads tokens from anywhere else.
"""

import requests
from app.client.session import PlayerSession

DEFAULT_BASE_URL = "http://localhost:3000/api"


class ApiError(Exception):
    def __init__(self, status_code: int, detail: str):
        super().__init__(f"HTTP {status_code}: {detail}")
        self.status_code = status_code
        self.detail = detail


class CyberTaxiClient:
    def __init__(self, session: PlayerSession, base_url: str = DEFAULT_BASE_URL,
                 http: requests.Session = None, timeout: float = 10):
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.http = http or requests.Session()
        self.timeout = timeout

    # ── Plumbing ─────────────────────────────────────────────────────────────
    def _request(self, method: str, path: str, auth: bool = True, **kwargs):
        headers = kwargs.pop("headers", {})
        if auth and self.session.token:
            headers["Authorization"] = f"Bearer {self.session.token}"
        resp = self.http.request(method, f"{self.base_url}{path}", headers=headers,
                                 timeout=self.timeout, **kwargs)
        if resp.status_code >= 400:
            try:
                detail = resp.json().get("detail", resp.text)
            except ValueError:
                detail = resp.text
            if resp.status_code == 403 and detail == "Invalid token":
                self.session.clear()
            raise ApiError(resp.status_code, detail)
        return resp.json()

    def _start_session(self, data: dict) -> dict:
        self.session.update(data["token"], data["username"], data["player_id"])
        return data

    # ── Auth ─────────────────────────────────────────────────────────────────
    def signup(self, username: str, password: str, email: str = None) -> dict:
        body = {"username": username, "password": password, "email": email}
        return self._start_session(self._request("POST", "/auth/signup", auth=False, json=body))

    def login(self, username: str, password: str) -> dict:
        body = {"username": username, "password": password}
        return self._start_session(self._request("POST", "/auth/login", auth=False, json=body))

    def logout(self):
        self.session.clear()

    # ── Economy ──────────────────────────────────────────────────────────────
    def balance(self) -> float:
        return self._request("GET", f"/player/{self.session.player_id}/balance")["bank_balance"]

    def slots(self) -> dict:
        return self._request("GET", f"/slots/{self.session.player_id}")

    def catalog(self) -> list:
        return self._request("GET", "/vehicles/catalog", auth=False)

    def purchase_vehicle(self, vehicle_type: str, cost: float, coords, status: str = "active", **extra) -> int:
        body = {"player_id": self.session.player_id, "type": vehicle_type, "cost": cost,
                "status": status, "coords": list(coords), **extra}
        return self._request("POST", "/purchase-vehicle", json=body)["vehicle_id"]

    def purchase_garage(self, name: str, coords, capacity: int, kind: str, cost_monthly: float,
                        services=None) -> int:
        body = {"player_id": self.session.player_id, "name": name, "coords": list(coords),
                "capacity": capacity, "type": kind, "cost_monthly": cost_monthly,
                "services": services}
        return self._request("POST", "/purchase-garage", json=body)["garage_id"]

    def vehicles(self, status: str = None) -> list:
        params = {"status": status} if status else None
        return self._request("GET", f"/vehicles/{self.session.player_id}", params=params)

    def garages(self) -> list:
        return self._request("GET", f"/garages/{self.session.player_id}")
