"""
Utility functions for the application.
"""
import math
import secrets
import string

EARTH_RADIUS_KM = 6371.0

_ID_ALPHABET = string.ascii_letters + string.digits
DOCUMENT_ID_LENGTH = 20


def new_document_id() -> str:
    """Random 20-character alphanumeric id for a new document."""
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(DOCUMENT_ID_LENGTH))


def haversine_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Great-circle distance between two points in kilometres."""
    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    d_phi = math.radians(lat2 - lat1)
    d_lambda = math.radians(lng2 - lng1)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    return 2 * EARTH_RADIUS_KM * math.asin(math.sqrt(a))
