"""
Rate limiting con slowapi para los endpoints que escriben en la base de datos.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from ..config import get_settings

settings = get_settings()

# Uso en un endpoint (necesita un parámetro `request: Request`):
#   @limiter.limit(WRITE_LIMIT)
# En los tests se desactiva con `limiter.enabled = False`.
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)

WRITE_LIMIT = settings.write_rate_limit
