"""
Validación de los valores de una mascota antes de insertar o actualizar.

Son comprobaciones puras: devuelven los valores aceptados o lanzan
PetValidationError, sin tocar la base de datos.
"""
from typing import Any, Dict, Mapping

from .contract import SQLITE_MAX_INTEGER, PetEntry
from .exceptions import PetValidationError

# Columnas que el cliente puede escribir; _id lo asigna la base de datos
WRITABLE_COLUMNS = (
    PetEntry.COLUMN_PET_NAME,
    PetEntry.COLUMN_PET_BREED,
    PetEntry.COLUMN_PET_GENDER,
    PetEntry.COLUMN_PET_WEIGHT,
)


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _check_columns(values: Mapping[str, Any]) -> None:
    for key in values:
        if key == PetEntry._ID:
            raise PetValidationError("Pet id is assigned by the database and can't be set")
        if key not in WRITABLE_COLUMNS:
            raise PetValidationError(f"Unknown column {key!r}")


def _check_name(name: Any) -> None:
    if not isinstance(name, str) or not name.strip():
        raise PetValidationError("Pet requires a name")


def _check_breed(breed: Any) -> None:
    if breed is not None and not isinstance(breed, str):
        raise PetValidationError("Pet breed must be text")


def _check_gender(gender: Any) -> None:
    if not _is_int(gender) or not PetEntry.is_valid_gender(gender):
        raise PetValidationError("Pet requires valid gender")


def _check_weight(weight: Any) -> None:
    if not _is_int(weight) or weight < 0 or weight > SQLITE_MAX_INTEGER:
        raise PetValidationError("Pet requires valid weight")


_CHECKS = {
    PetEntry.COLUMN_PET_NAME: _check_name,
    PetEntry.COLUMN_PET_BREED: _check_breed,
    PetEntry.COLUMN_PET_GENDER: _check_gender,
    PetEntry.COLUMN_PET_WEIGHT: _check_weight,
}


def validate_insert(values: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Valida una mascota nueva.
    Nombre y género son obligatorios; si falta el peso se usa el 0 de la tabla.
    """
    _check_columns(values)
    if PetEntry.COLUMN_PET_NAME not in values:
        raise PetValidationError("Pet requires a name")
    if PetEntry.COLUMN_PET_GENDER not in values:
        raise PetValidationError("Pet requires valid gender")
    for key, value in values.items():
        _CHECKS[key](value)
    return dict(values)


def validate_update(values: Mapping[str, Any]) -> Dict[str, Any]:
    """Valida solo las columnas presentes; las que faltan no se tocan."""
    _check_columns(values)
    for key, value in values.items():
        _CHECKS[key](value)
    return dict(values)
