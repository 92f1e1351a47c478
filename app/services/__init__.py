"""Business logic services."""

from app.services.flussonic_client import FlussonicClient
from app.services.playout import SchedulerService

__all__ = [
    "FlussonicClient",
    "SchedulerService",
]
