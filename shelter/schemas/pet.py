from pydantic import BaseModel, Field
from typing import Optional, Literal
from ..contract import SQLITE_MAX_INTEGER

# 0 = desconocido, 1 = macho, 2 = hembra
Gender = Literal[0, 1, 2]

class PetCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=80)
    breed: Optional[str] = Field(None, max_length=80)
    gender: Gender = 0
    weight: int = Field(0, ge=0, le=SQLITE_MAX_INTEGER)

class PetUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=80)
    breed: Optional[str] = Field(None, max_length=80)
    gender: Optional[Gender] = None
    weight: Optional[int] = Field(None, ge=0, le=SQLITE_MAX_INTEGER)

class PetOut(PetCreate):
    id: int
