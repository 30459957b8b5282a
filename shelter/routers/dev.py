# shelter/routers/dev.py
# Endpoint de desarrollo para crear datos de prueba
import logging
from fastapi import APIRouter, Depends
from ..contract import PetEntry, parse_id
from ..provider import PetProvider, get_provider

router = APIRouter()
logger = logging.getLogger(__name__)

DUMMY_PET = {
    PetEntry.COLUMN_PET_NAME: "Toto",
    PetEntry.COLUMN_PET_BREED: "Terrier",
    PetEntry.COLUMN_PET_GENDER: PetEntry.GENDER_MALE,
    PetEntry.COLUMN_PET_WEIGHT: 7,
}

@router.post("/seed-data")
def seed_data(provider: PetProvider = Depends(get_provider)):
    """
    Inserta una mascota de prueba (Toto).
    Solo para desarrollo.
    """
    new_uri = provider.insert(PetEntry.CONTENT_URI, DUMMY_PET)
    logger.debug("New row: %s", new_uri)
    return {"id": parse_id(new_uri), "uri": new_uri}
