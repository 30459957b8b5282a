"""
Contrato del proveedor de mascotas: autoridad, rutas, columnas y URIs.

Una URI de contenido tiene la forma ``content://<autoridad>/<ruta>``.
Por ejemplo ``content://com.example.android.pets/pets`` es la colección y
``content://com.example.android.pets/pets/3`` la mascota con id 3.
"""
from typing import List, Optional, Tuple
from urllib.parse import urlsplit

SCHEME = "content"
CONTENT_AUTHORITY = "com.example.android.pets"
BASE_CONTENT_URI = f"{SCHEME}://{CONTENT_AUTHORITY}"
PATH_PETS = "pets"

# Mayor entero que cabe en una columna INTEGER de SQLite
SQLITE_MAX_INTEGER = 2**63 - 1

# Prefijos MIME para colecciones y registros sueltos
CURSOR_DIR_BASE_TYPE = "vnd.android.cursor.dir"
CURSOR_ITEM_BASE_TYPE = "vnd.android.cursor.item"


class PetEntry:
    """Constantes de la tabla de mascotas. Cada fila es una mascota."""

    CONTENT_URI = f"{BASE_CONTENT_URI}/{PATH_PETS}"

    CONTENT_LIST_TYPE = f"{CURSOR_DIR_BASE_TYPE}/{CONTENT_AUTHORITY}/{PATH_PETS}"
    CONTENT_ITEM_TYPE = f"{CURSOR_ITEM_BASE_TYPE}/{CONTENT_AUTHORITY}/{PATH_PETS}"

    TABLE_NAME = "pets"

    _ID = "_id"
    COLUMN_PET_NAME = "name"
    COLUMN_PET_BREED = "breed"
    COLUMN_PET_GENDER = "gender"
    COLUMN_PET_WEIGHT = "weight"

    GENDER_UNKNOWN = 0
    GENDER_MALE = 1
    GENDER_FEMALE = 2

    @staticmethod
    def is_valid_gender(gender) -> bool:
        return gender in (PetEntry.GENDER_UNKNOWN, PetEntry.GENDER_MALE, PetEntry.GENDER_FEMALE)


# ==================== URIs ====================

def _split(uri: str) -> Tuple[str, str, List[str]]:
    parts = urlsplit(uri)
    segments = [s for s in parts.path.split("/") if s]
    return parts.scheme, parts.netloc, segments


def with_appended_id(uri: str, row_id: int) -> str:
    return f"{uri.rstrip('/')}/{row_id}"


def parse_id(uri: str) -> int:
    """
    Devuelve el último segmento de la ruta como entero, o -1 si no hay ruta.
    Lanza ValueError si el segmento no es numérico.
    """
    _, _, segments = _split(uri)
    if not segments:
        return -1
    return int(segments[-1])


# ==================== UriMatcher ====================

NO_MATCH = -1

# Códigos del matcher
PETS = 100
PET_ID = 101


class UriMatcher:
    """
    Asocia patrones ``autoridad/ruta`` con códigos enteros.
    En la ruta, ``#`` casa con un segmento numérico y ``*`` con cualquiera.
    """

    def __init__(self, default: int = NO_MATCH):
        self.default = default
        self._routes: List[Tuple[str, List[str], int]] = []

    def add_uri(self, authority: str, path: Optional[str], code: int) -> None:
        segments = [s for s in (path or "").split("/") if s]
        self._routes.append((authority, segments, code))

    def match(self, uri: str) -> int:
        try:
            scheme, authority, segments = _split(uri)
        except ValueError:
            return self.default
        if scheme != SCHEME:
            return self.default
        for route_authority, pattern, code in self._routes:
            if route_authority == authority and _segments_match(pattern, segments):
                return code
        return self.default


def _segments_match(pattern: List[str], segments: List[str]) -> bool:
    if len(pattern) != len(segments):
        return False
    for expected, actual in zip(pattern, segments):
        if expected == "#":
            if not (actual.isascii() and actual.isdigit()):
                return False
        elif expected != "*" and expected != actual:
            return False
    return True


uri_matcher = UriMatcher(NO_MATCH)
uri_matcher.add_uri(CONTENT_AUTHORITY, PATH_PETS, PETS)
uri_matcher.add_uri(CONTENT_AUTHORITY, f"{PATH_PETS}/#", PET_ID)
