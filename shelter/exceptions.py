"""
Errores del proveedor de mascotas.

Todos heredan de ValueError: son rechazos síncronos de la operación pedida,
no fallos del almacenamiento.
"""


class ProviderError(ValueError):
    """Base de los rechazos del proveedor."""


class UnknownUriError(ProviderError):
    """La URI no corresponde a ninguna ruta registrada."""


class PetValidationError(ProviderError):
    """Los valores de la mascota no cumplen los invariantes."""


class InvalidQueryError(ProviderError):
    """Proyección, filtro u orden mal formados."""


class DatabaseVersionError(ProviderError):
    """La base de datos en disco es de una versión más nueva que la soportada."""
