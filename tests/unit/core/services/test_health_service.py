"""Unit tests for HealthService."""

import src.noteshare.core.services.health_service as hs
from src.noteshare.core.services.health_service import HealthService


class FakeRedisConn:
    def __init__(self, fail=False):
        self.fail = fail

    async def ping(self):
        if self.fail:
            raise ConnectionError("down")
        return True


class FakeRedisClient:
    def __init__(self, redis=None):
        self.redis = redis

    @property
    def is_connected(self):
        return self.redis is not None


class BrokenSession:
    async def execute(self, stmt):
        raise RuntimeError("db down")


async def test_healthy(monkeypatch, test_session):
    monkeypatch.setattr(hs, "get_redis_client", lambda: FakeRedisClient(FakeRedisConn()))
    status = await HealthService(test_session).get_health_status()
    assert status.status == "healthy"
    assert status.checks["database"]["connected"] is True
    assert status.checks["redis"]["connected"] is True


async def test_degraded_without_redis(monkeypatch, test_session):
    monkeypatch.setattr(hs, "get_redis_client", lambda: FakeRedisClient())
    status = await HealthService(test_session).get_health_status()
    assert status.status == "degraded"
    assert status.checks["redis"]["status"] == "unavailable"


async def test_redis_ping_failure(monkeypatch, test_session):
    monkeypatch.setattr(hs, "get_redis_client", lambda: FakeRedisClient(FakeRedisConn(fail=True)))
    check = await HealthService(test_session).check_redis_health()
    assert check["connected"] is False
    assert check["status"] == "unhealthy"
    assert "down" in check["error"]


async def test_unhealthy_without_database(monkeypatch):
    monkeypatch.setattr(hs, "get_redis_client", lambda: FakeRedisClient(FakeRedisConn()))
    status = await HealthService(BrokenSession()).get_health_status()
    assert status.status == "unhealthy"
    assert status.checks["database"]["error"] == "db down"
