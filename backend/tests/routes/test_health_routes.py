"""Health probes — liveness always up, readiness reflects the database."""

import devconnector.infrastructure.database as db_module


async def test_liveness(client):
    res = await client.get("/api/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_without_database(client, monkeypatch):
    monkeypatch.setattr(db_module, "db_manager", None)
    res = await client.get("/api/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_readiness_with_database(client, monkeypatch):
    manager = db_module.DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    monkeypatch.setattr(db_module, "db_manager", manager)
    res = await client.get("/api/health/ready")
    await manager.dispose()
    assert res.status_code == 200
    assert res.json()["checks"] == {"database": "healthy"}
