"""
Configuración de pytest para tests
"""
import os

# Antes de importar la app: entorno dev y sin rate limiting
os.environ.setdefault("APP_ENV", "dev")
os.environ["RATE_LIMIT_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient

from shelter.contract import PetEntry
from shelter.db import PetDbHelper
from shelter.middleware.rate_limit import limiter
from shelter.provider import PetProvider, get_provider


@pytest.fixture(scope="session", autouse=True)
def disable_rate_limiting():
    """Deshabilita rate limiting para todos los tests"""
    limiter.enabled = False
    yield


@pytest.fixture
def db_helper(tmp_path):
    """Base de datos nueva en un fichero temporal para cada test"""
    helper = PetDbHelper(str(tmp_path / "shelter_test.db"))
    yield helper
    helper.close()


@pytest.fixture
def provider(db_helper):
    return PetProvider(db_helper)


@pytest.fixture
def app(provider):
    from shelter.main import app
    app.dependency_overrides[get_provider] = lambda: provider
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app):
    """Fixture para cliente de test de FastAPI"""
    return TestClient(app)


@pytest.fixture
def toto():
    """Datos de mascota de prueba"""
    return {
        PetEntry.COLUMN_PET_NAME: "Toto",
        PetEntry.COLUMN_PET_BREED: "Terrier",
        PetEntry.COLUMN_PET_GENDER: PetEntry.GENDER_MALE,
        PetEntry.COLUMN_PET_WEIGHT: 7,
    }
