from app.client.session import PlayerSession            # noqa
from app.client.api_client import ApiError, CyberTaxiClient   # noqa
