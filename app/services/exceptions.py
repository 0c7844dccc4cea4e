# app/services/exceptions.py
"""
Exceptions raised by the accounting and player services.
Each carries the HTTP status the API maps it to (see app/main.py).
"""


class CyberTaxiError(RuntimeError):
    """Base class for service-level failures."""

    status_code = 500

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class ValidationFailed(CyberTaxiError):
    """Missing or malformed input."""

    status_code = 400


class InsufficientFunds(CyberTaxiError):
    """Balance cannot cover the requested purchase or fee."""

    status_code = 400

    def __init__(self, balance, cost) -> None:
        super().__init__("Insufficient funds")
        self.balance = balance
        self.cost = cost


class NoSlotsAvailable(CyberTaxiError):
    """Every parking slot the player owns is already occupied."""

    status_code = 400

    def __init__(self, total_slots: int) -> None:
        super().__init__(f"No available slots ({total_slots}/{total_slots} in use)")
        self.total_slots = total_slots


class NotAuthorized(CyberTaxiError):
    """Caller identity does not own the requested resource."""

    status_code = 403


class PlayerNotFound(CyberTaxiError):
    status_code = 404

    def __init__(self, player_ref) -> None:
        super().__init__("Player not found")
        self.player_ref = player_ref


class StorageFailure(CyberTaxiError):
    """Unexpected database error; `error` keeps the driver message for diagnostics."""

    status_code = 500

    def __init__(self, detail: str, error: str) -> None:
        super().__init__(detail)
        self.error = error


class UpstreamFailure(CyberTaxiError):
    """A pass-through dependency (tile server) failed or was unreachable."""

    status_code = 502
