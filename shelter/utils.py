# shelter/utils.py
from typing import Any, Dict, List, Optional, Tuple

from .contract import PetEntry

def to_id(row: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Convierte _id -> id para las respuestas de la API.
    Si row es None, devuelve {}.
    """
    if row is None:
        return {}
    d = dict(row)
    if PetEntry._ID in d:
        d["id"] = d.pop(PetEntry._ID)
    return d

# ==================== Filtros de la API ====================

def build_selection(filters: Dict[str, Any]) -> Tuple[Optional[str], List[Any]]:
    """
    Convierte filtros de igualdad {columna: valor} en (selection, selection_args).
    Los valores None se ignoran.
    """
    clauses: List[str] = []
    args: List[Any] = []
    for column, value in filters.items():
        if value is None:
            continue
        clauses.append(f"{column} = ?")
        args.append(value)
    if not clauses:
        return None, []
    return " AND ".join(clauses), args

def _api_column(name: str) -> str:
    # la API expone "id"; la tabla usa "_id"
    return PetEntry._ID if name == "id" else name

def parse_sort(sort: Optional[str]) -> Optional[str]:
    """
    "name,-weight" -> "name ASC, weight DESC".
    """
    if not sort:
        return None
    terms = []
    for raw in sort.split(","):
        raw = raw.strip()
        if not raw:
            continue
        if raw.startswith("-"):
            terms.append(f"{_api_column(raw[1:])} DESC")
        else:
            terms.append(f"{_api_column(raw)} ASC")
    return ", ".join(terms) or None

def parse_fields(fields: Optional[str]) -> Optional[List[str]]:
    """
    "name,breed" -> ["_id", "name", "breed"]. El id se incluye siempre.
    """
    if not fields:
        return None
    names = [_api_column(f.strip()) for f in fields.split(",") if f.strip()]
    if not names:
        return None
    if PetEntry._ID not in names:
        names.insert(0, PetEntry._ID)
    return names

