# CyberTaxi - Database Models
# Import all models here for SQLAlchemy discovery

from app.models.player import Player     # noqa
from app.models.vehicle import Vehicle   # noqa
from app.models.garage import Garage     # noqa
