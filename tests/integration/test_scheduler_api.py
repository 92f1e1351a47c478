"""Integration tests for the scheduler control API."""

from uuid import uuid4

import httpx
import pytest

from app.api.deps import get_db
from app.main import create_app
from app.models import ScheduleStatus
from app.services.playout import SchedulerService


@pytest.fixture
async def api(session_maker, mock_playout_client, clock):
    """HTTP client against an app whose scheduler uses the test database."""
    app = create_app()
    scheduler = SchedulerService(
        session_maker, mock_playout_client, interval_seconds=3600, clock=clock
    )
    app.state.scheduler = scheduler

    async def override_get_db():
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    await scheduler.stop()


class TestSchedulerAPI:
    """Tests for /api/v1/scheduler."""

    @pytest.mark.asyncio
    async def test_status_before_start(self, api):
        """Test status of an idle scheduler."""
        response = await api.get("/api/v1/scheduler")

        assert response.status_code == 200
        assert response.json() == {"isRunning": False, "lastCheck": None}

    @pytest.mark.asyncio
    async def test_start_and_stop(self, api, clock):
        """Test start and stop actions toggle the status."""
        response = await api.post("/api/v1/scheduler", json={"action": "start"})
        assert response.status_code == 200
        assert response.json()["message"] == "Scheduler started successfully"

        status = (await api.get("/api/v1/scheduler")).json()
        assert status["isRunning"] is True
        assert status["lastCheck"] is not None

        response = await api.post("/api/v1/scheduler", json={"action": "stop"})
        assert response.status_code == 200
        assert (await api.get("/api/v1/scheduler")).json()["isRunning"] is False

    @pytest.mark.asyncio
    async def test_invalid_action(self, api):
        """Test an unknown action is rejected."""
        response = await api.post("/api/v1/scheduler", json={"action": "pause"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Invalid action"

    @pytest.mark.asyncio
    async def test_execute_requires_schedule_id(self, api):
        """Test execute without scheduleId is rejected."""
        response = await api.post("/api/v1/scheduler", json={"action": "execute"})

        assert response.status_code == 400
        assert response.json()["detail"] == "Schedule ID is required"

    @pytest.mark.asyncio
    async def test_execute_unknown_schedule(self, api):
        """Test execute on a missing schedule returns 404."""
        response = await api.post(
            "/api/v1/scheduler", json={"action": "execute", "scheduleId": str(uuid4())}
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_execute_schedule(self, api, make_schedule, fetch_items):
        """Test execute runs the schedule and the run shows up in the logs."""
        schedule = await make_schedule()

        response = await api.post(
            "/api/v1/scheduler", json={"action": "execute", "scheduleId": str(schedule.id)}
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Schedule executed successfully",
        }
        assert {i.status for i in await fetch_items(schedule.id)} == {ScheduleStatus.COMPLETED}

        logs = (await api.get("/api/v1/logs", params={"level": "INFO"})).json()
        assert logs["total"] == 3
        messages = {item["message"] for item in logs["items"]}
        assert "Schedule Morning Show executed successfully" in messages
        assert all(item["level"] == "INFO" for item in logs["items"])
