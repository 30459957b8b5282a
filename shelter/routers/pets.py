from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from typing import Optional, List, Dict, Any
from ..contract import SQLITE_MAX_INTEGER, PetEntry, parse_id, with_appended_id
from ..middleware.rate_limit import limiter, WRITE_LIMIT
from ..provider import PetProvider, get_provider
from ..schemas.pet import PetCreate, PetUpdate, PetOut
from ..utils import to_id, build_selection, parse_sort, parse_fields

router = APIRouter()

def _pet_uri(pet_id: int) -> str:
    # ids negativos o fuera del rango de SQLite no existen
    if not 1 <= pet_id <= SQLITE_MAX_INTEGER:
        raise HTTPException(status_code=404, detail="Mascota no encontrada")
    return with_appended_id(PetEntry.CONTENT_URI, pet_id)

def _get_or_404(provider: PetProvider, pet_id: int) -> dict:
    rows = provider.query(_pet_uri(pet_id))
    if not rows:
        raise HTTPException(status_code=404, detail="Mascota no encontrada")
    return to_id(rows[0])

# GET /pets?gender=1&sort=-weight&fields=name,breed
@router.get("", response_model=List[Dict[str, Any]])
def list_pets(
    name: Optional[str] = None,
    breed: Optional[str] = None,
    gender: Optional[int] = Query(None, ge=0, le=2),
    sort: Optional[str] = Query(None, description="columnas separadas por comas, '-' para descendente"),
    fields: Optional[str] = Query(None, description="columnas a devolver, separadas por comas"),
    provider: PetProvider = Depends(get_provider),
):
    selection, args = build_selection({
        PetEntry.COLUMN_PET_NAME: name,
        PetEntry.COLUMN_PET_BREED: breed,
        PetEntry.COLUMN_PET_GENDER: gender,
    })
    rows = provider.query(
        PetEntry.CONTENT_URI,
        projection=parse_fields(fields),
        selection=selection,
        selection_args=args,
        sort_order=parse_sort(sort),
    )
    return [to_id(r) for r in rows]

@router.get("/{pet_id}", response_model=PetOut)
def get_pet(pet_id: int, provider: PetProvider = Depends(get_provider)):
    return _get_or_404(provider, pet_id)

@router.post("", response_model=PetOut, status_code=status.HTTP_201_CREATED)
@limiter.limit(WRITE_LIMIT)
def create_pet(
    request: Request,
    payload: PetCreate,
    provider: PetProvider = Depends(get_provider),
):
    new_uri = provider.insert(PetEntry.CONTENT_URI, payload.model_dump())
    return _get_or_404(provider, parse_id(new_uri))

@router.patch("/{pet_id}", response_model=PetOut)
@limiter.limit(WRITE_LIMIT)
def patch_pet(
    request: Request,
    pet_id: int,
    payload: PetUpdate,
    provider: PetProvider = Depends(get_provider),
):
    # solo los campos enviados; el resto no se toca
    values = payload.model_dump(exclude_unset=True)
    if not values:
        return _get_or_404(provider, pet_id)

    updated = provider.update(_pet_uri(pet_id), values)
    if updated == 0:
        raise HTTPException(status_code=404, detail="Mascota no encontrada")
    return _get_or_404(provider, pet_id)

@router.delete("/{pet_id}", status_code=status.HTTP_204_NO_CONTENT)
@limiter.limit(WRITE_LIMIT)
def delete_pet(
    request: Request,
    pet_id: int,
    provider: PetProvider = Depends(get_provider),
):
    deleted = provider.delete(_pet_uri(pet_id))
    if deleted == 0:
        raise HTTPException(status_code=404, detail="Mascota no encontrada")
    return None

# DELETE /pets  (borra todas las entradas)
@router.delete("")
@limiter.limit(WRITE_LIMIT)
def delete_all_pets(request: Request, provider: PetProvider = Depends(get_provider)):
    deleted = provider.delete(PetEntry.CONTENT_URI)
    return {"deleted": deleted}
