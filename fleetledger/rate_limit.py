"""Limiteur de requetes / Request rate limiter.

Applique sur l'inscription et la connexion, par adresse IP.
Applied to sign-up and login, per client IP.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from fleetledger.config import settings

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)
