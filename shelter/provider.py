"""
Proveedor de contenido para las mascotas.

Recibe una URI de contenido, decide con el UriMatcher si se refiere a la
colección (PETS) o a una mascota concreta (PET_ID) y ejecuta una única
sentencia SQL sobre la tabla. Cualquier otra URI se rechaza.
"""
import logging
import threading
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from sqlalchemy import delete as sql_delete
from sqlalchemy import insert as sql_insert
from sqlalchemy import select, text
from sqlalchemy import update as sql_update
from sqlalchemy.exc import SQLAlchemyError

from .config import get_settings
from .contract import (
    PET_ID,
    PETS,
    SQLITE_MAX_INTEGER,
    PetEntry,
    parse_id,
    uri_matcher,
    with_appended_id,
)
from .db import PetDbHelper, pets_table
from .exceptions import InvalidQueryError, UnknownUriError
from .validation import validate_insert, validate_update

logger = logging.getLogger(__name__)

SelectionArgs = Optional[Sequence[Any]]


class PetProvider:
    def __init__(self, db_helper: PetDbHelper):
        self._db = db_helper

    # -------------------- query --------------------

    def query(
        self,
        uri: str,
        projection: Optional[Sequence[str]] = None,
        selection: Optional[str] = None,
        selection_args: SelectionArgs = None,
        sort_order: Optional[str] = None,
    ) -> List[Dict[str, Any]]:
        """
        Devuelve las filas que casan con la URI como lista de dicts.
        Sin orden explícito las filas salen en orden de inserción.
        """
        match = uri_matcher.match(uri)
        if match == PETS:
            pass
        elif match == PET_ID:
            # Para una mascota concreta el filtro es siempre su _id
            selection, selection_args = _id_selection(uri)
        else:
            raise UnknownUriError(f"Cannot query unknown URI {uri}")

        stmt = select(*_columns(projection))
        where = _where(selection, selection_args)
        if where is not None:
            stmt = stmt.where(where)
        stmt = stmt.order_by(*_order_by(sort_order))

        with self._db.engine.connect() as conn:
            rows = conn.execute(stmt).mappings().all()
        return [dict(r) for r in rows]

    # -------------------- insert --------------------

    def insert(self, uri: str, values: Mapping[str, Any]) -> str:
        """Inserta una mascota y devuelve la URI de la nueva fila."""
        match = uri_matcher.match(uri)
        if match == PETS:
            return self._insert_pet(uri, values)
        raise UnknownUriError(f"Insertion is not supported for {uri}")

    def _insert_pet(self, uri: str, values: Mapping[str, Any]) -> str:
        values = validate_insert(values)
        try:
            with self._db.engine.begin() as conn:
                result = conn.execute(sql_insert(pets_table).values(**values))
                new_id = result.inserted_primary_key[0]
        except SQLAlchemyError:
            logger.error("Failed to insert row for %s", uri)
            raise
        new_uri = with_appended_id(uri, new_id)
        logger.info("Inserted pet %s", new_uri)
        return new_uri

    # -------------------- update --------------------

    def update(
        self,
        uri: str,
        values: Mapping[str, Any],
        selection: Optional[str] = None,
        selection_args: SelectionArgs = None,
    ) -> int:
        """Actualiza las filas que casan y devuelve cuántas se modificaron."""
        match = uri_matcher.match(uri)
        if match == PETS:
            return self._update_pet(uri, values, selection, selection_args)
        if match == PET_ID:
            selection, selection_args = _id_selection(uri)
            return self._update_pet(uri, values, selection, selection_args)
        raise UnknownUriError(f"Update is not supported for {uri}")

    def _update_pet(self, uri, values, selection, selection_args) -> int:
        values = validate_update(values)
        # Sin valores no hay nada que actualizar
        if not values:
            return 0

        stmt = sql_update(pets_table).values(**values)
        where = _where(selection, selection_args)
        if where is not None:
            stmt = stmt.where(where)
        with self._db.engine.begin() as conn:
            rows_updated = conn.execute(stmt).rowcount
        logger.info("Updated %s row(s) for %s", rows_updated, uri)
        return rows_updated

    # -------------------- delete --------------------

    def delete(
        self,
        uri: str,
        selection: Optional[str] = None,
        selection_args: SelectionArgs = None,
    ) -> int:
        """
        Borra las filas que casan y devuelve cuántas se borraron.
        En la colección y sin filtro se borran todas.
        """
        match = uri_matcher.match(uri)
        if match == PETS:
            pass
        elif match == PET_ID:
            selection, selection_args = _id_selection(uri)
        else:
            raise UnknownUriError(f"Deletion is not supported for {uri}")

        stmt = sql_delete(pets_table)
        where = _where(selection, selection_args)
        if where is not None:
            stmt = stmt.where(where)
        with self._db.engine.begin() as conn:
            rows_deleted = conn.execute(stmt).rowcount
        logger.info("Deleted %s row(s) for %s", rows_deleted, uri)
        return rows_deleted

    # -------------------- type --------------------

    def get_type(self, uri: str) -> str:
        match = uri_matcher.match(uri)
        if match == PETS:
            return PetEntry.CONTENT_LIST_TYPE
        if match == PET_ID:
            return PetEntry.CONTENT_ITEM_TYPE
        raise UnknownUriError(f"Unknown URI {uri} with match {match}")


# ==================== helpers ====================

def _id_selection(uri: str) -> Tuple[str, List[Any]]:
    pet_id = parse_id(uri)
    # un id fuera de rango no puede existir en la tabla
    if pet_id > SQLITE_MAX_INTEGER:
        raise UnknownUriError(f"Pet id out of range in {uri}")
    return f"{PetEntry._ID} = ?", [pet_id]


def _column(name: str):
    try:
        return pets_table.c[name.strip()]
    except KeyError:
        raise InvalidQueryError(f"Unknown column {name!r}")


def _columns(projection: Optional[Sequence[str]]):
    if not projection:
        return list(pets_table.c)
    return [_column(name) for name in projection]


def _order_by(sort_order: Optional[str]):
    if not sort_order or not sort_order.strip():
        return [pets_table.c[PetEntry._ID].asc()]

    clauses = []
    for term in sort_order.split(","):
        parts = term.split()
        if not parts or len(parts) > 2:
            raise InvalidQueryError(f"Invalid sort order {sort_order!r}")
        column = _column(parts[0])
        direction = parts[1].upper() if len(parts) == 2 else "ASC"
        if direction == "ASC":
            clauses.append(column.asc())
        elif direction == "DESC":
            clauses.append(column.desc())
        else:
            raise InvalidQueryError(f"Invalid sort direction {parts[1]!r}")
    return clauses


def _qmark_to_named(selection: str) -> Tuple[str, int]:
    """
    Cambia cada ``?`` fuera de comillas por ``:argN`` y escapa los ``:``
    del texto para que text() no los lea como parámetros.
    """
    out: List[str] = []
    count = 0
    quote: Optional[str] = None
    for ch in selection:
        if ch == ":":
            out.append("\\:")
        elif quote:
            if ch == quote:
                quote = None
            out.append(ch)
        elif ch in ("'", '"'):
            quote = ch
            out.append(ch)
        elif ch == "?":
            out.append(f":arg{count}")
            count += 1
        else:
            out.append(ch)
    return "".join(out), count


def _where(selection: Optional[str], selection_args: SelectionArgs):
    args = list(selection_args or [])
    if not selection or not selection.strip():
        if args:
            raise InvalidQueryError("Selection arguments given without a selection")
        return None

    sql, placeholders = _qmark_to_named(selection)
    if placeholders != len(args):
        raise InvalidQueryError(
            f"Cannot bind {len(args)} argument(s) to {placeholders} placeholder(s)"
        )
    clause = text(sql)
    if args:
        clause = clause.bindparams(**{f"arg{i}": v for i, v in enumerate(args)})
    return clause


# ==================== dependencia FastAPI ====================

_provider: Optional[PetProvider] = None
_provider_lock = threading.Lock()

def get_provider() -> PetProvider:
    global _provider
    # los endpoints síncronos corren en el threadpool de FastAPI
    with _provider_lock:
        if _provider is None:
            _provider = PetProvider(PetDbHelper(get_settings().database_path))
    return _provider
