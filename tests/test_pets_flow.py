# tests/test_pets_flow.py
import pytest
from httpx import AsyncClient, ASGITransport

@pytest.mark.asyncio
async def test_create_edit_and_delete_flow(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        # Crear mascota
        r = await ac.post("/pets", json={"name": "Luna", "breed": "Beagle", "gender": 2, "weight": 10})
        assert r.status_code == 201
        pet_id = r.json()["id"]

        # Editar
        r = await ac.patch(f"/pets/{pet_id}", json={"breed": None, "weight": 11})
        assert r.status_code == 200
        assert r.json()["breed"] is None and r.json()["weight"] == 11

        # Listar
        r = await ac.get("/pets")
        assert any(p["id"] == pet_id for p in r.json())

        # Borrar
        r = await ac.delete(f"/pets/{pet_id}")
        assert r.status_code == 204
        r = await ac.get(f"/pets/{pet_id}")
        assert r.status_code == 404
