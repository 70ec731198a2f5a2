"""
Test the session assignment API with self-contained test data.
"""
import pytest
from fastapi.testclient import TestClient
from main import app
from service.collaborators import InMemoryScheduleStore


client = TestClient(app)


# Test data fixtures
def get_minimal_request():
    """Return minimal valid batch: one teacher, one classroom, one request."""
    return {
        "teachers": [
            {
                "id": "t1",
                "name": "Jane Doe",
                "subject": "Math",
                "available_days": ["MONDAY", "WEDNESDAY"],
                "available_start_time": "08:00",
                "available_end_time": "17:00"
            }
        ],
        "classrooms": [
            {"id": "r1", "name": "Room 101", "room_type": "Lecture Room", "capacity": 40}
        ],
        "existing_schedules": [],
        "requests": [
            {
                "subject": "Math",
                "room_type": "Lecture Room",
                "required_capacity": 30,
                "day_of_week": "MONDAY",
                "start_time": "08:00",
                "end_time": "09:00",
                "date": "2024-09-02",
                "notes": "Algebra",
                "is_recurring": True
            }
        ]
    }


def get_existing_schedule(start_time, end_time, teacher_id="t1", classroom_id="r2"):
    """Return a previously committed schedule for Monday."""
    return {
        "id": "existing-1",
        "day_of_week": "MONDAY",
        "start_time": start_time,
        "end_time": end_time,
        "teacher": {
            "id": teacher_id,
            "name": "Jane Doe",
            "subject": "Math",
            "available_days": ["MONDAY"],
            "available_start_time": "08:00",
            "available_end_time": "17:00"
        },
        "classroom": {"id": classroom_id, "name": "Room 202", "room_type": "Lecture Room", "capacity": 40},
        "subject": "Math",
        "status": "scheduled"
    }


def test_root_endpoint():
    """Test root endpoint is accessible."""
    response = client.get("/")
    assert response.status_code == 200
    data = response.json()
    assert "service" in data
    assert data["status"] == "healthy"


def test_health_endpoint():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


def test_generate_minimal():
    """Single request with one eligible teacher and classroom is scheduled."""
    response = client.post("/api/v1/schedules/generate", json=get_minimal_request())

    assert response.status_code == 200
    data = response.json()

    assert data["summary"] == {
        "total_requests": 1,
        "successful": 1,
        "failed": 0,
        "success_rate": "100%"
    }
    assert data["failed_requests"] == []

    schedule = data["schedules"][0]
    assert schedule["id"]
    assert schedule["status"] == "scheduled"
    assert schedule["start_time"] == "08:00"
    assert schedule["end_time"] == "09:00"
    assert schedule["date"] == "2024-09-02"
    assert schedule["teacher"]["id"] == "t1"
    assert schedule["teacher"]["available_start_time"] == "08:00"
    assert schedule["classroom"]["id"] == "r1"
    assert schedule["notes"] == "Algebra"
    assert schedule["is_recurring"] is True

    assert data["statistics"]["teacher_utilization"] == {"Jane Doe": 1}


def test_generate_duplicate_requests():
    """Second identical request fails with filter-stage counts."""
    request_data = get_minimal_request()
    request_data["requests"].append(dict(request_data["requests"][0]))

    response = client.post("/api/v1/schedules/generate", json=request_data)

    assert response.status_code == 200
    data = response.json()
    assert len(data["schedules"]) == 1
    assert data["summary"]["success_rate"] == "50%"

    failure = data["failed_requests"][0]
    assert failure["reason"] == "No available teacher-classroom combination found without conflicts"
    assert failure["eligible_teachers"] == 1
    assert failure["eligible_classrooms"] == 1
    assert failure["request"]["start_time"] == "08:00"


def test_generate_empty_batch():
    request_data = get_minimal_request()
    request_data["requests"] = []

    response = client.post("/api/v1/schedules/generate", json=request_data)

    assert response.status_code == 200
    summary = response.json()["summary"]
    assert summary["total_requests"] == 0
    assert summary["success_rate"] == "0%"


def test_existing_schedule_touching_boundary_allowed():
    """Existing 09:00-10:00 for the same teacher does not block 08:00-09:00."""
    request_data = get_minimal_request()
    request_data["existing_schedules"] = [get_existing_schedule("09:00", "10:00")]

    response = client.post("/api/v1/schedules/generate", json=request_data)

    assert response.status_code == 200
    assert response.json()["summary"]["successful"] == 1


def test_existing_schedule_overlap_blocks_teacher():
    """Existing 08:30-09:30 for the same teacher blocks 08:00-09:00."""
    request_data = get_minimal_request()
    request_data["existing_schedules"] = [get_existing_schedule("08:30", "09:30")]

    response = client.post("/api/v1/schedules/generate", json=request_data)

    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["failed"] == 1
    assert data["failed_requests"][0]["eligible_teachers"] == 1


def test_existing_schedule_overlap_blocks_classroom():
    request_data = get_minimal_request()
    request_data["existing_schedules"] = [
        get_existing_schedule("08:30", "09:30", teacher_id="t9", classroom_id="r1")
    ]

    response = client.post("/api/v1/schedules/generate", json=request_data)

    assert response.json()["summary"]["failed"] == 1


def test_lowercase_day_is_normalized():
    request_data = get_minimal_request()
    request_data["requests"][0]["day_of_week"] = "monday"

    response = client.post("/api/v1/schedules/generate", json=request_data)

    assert response.status_code == 200
    assert response.json()["schedules"][0]["day_of_week"] == "MONDAY"


def test_missing_subject_warning():
    request_data = get_minimal_request()
    request_data["requests"][0]["subject"] = "Physics"

    response = client.post("/api/v1/schedules/generate", json=request_data)

    assert response.status_code == 200
    data = response.json()
    assert data["summary"]["failed"] == 1
    assert data["messages"][0]["title"] == "Missing Teacher"
    assert "Physics" in data["messages"][0]["message"]


def test_generate_weekly():
    """Requests are dated within the week and placed Monday first."""
    request_data = get_minimal_request()
    wednesday = dict(request_data["requests"][0], day_of_week="WEDNESDAY", notes="Geometry")
    request_data["requests"].insert(0, wednesday)
    request_data["week_start"] = "2024-09-09"

    response = client.post("/api/v1/schedules/generate-weekly", json=request_data)

    assert response.status_code == 200
    schedules = response.json()["schedules"]
    assert [(s["day_of_week"], s["date"]) for s in schedules] == [
        ("MONDAY", "2024-09-09"),
        ("WEDNESDAY", "2024-09-11"),
    ]


def test_generate_weekly_rejects_non_monday():
    request_data = get_minimal_request()
    request_data["week_start"] = "2024-09-10"

    response = client.post("/api/v1/schedules/generate-weekly", json=request_data)

    assert response.status_code == 422
    assert "errors" in response.json()


def test_validation_error_format():
    """Invalid day and time values produce human-friendly errors."""
    request_data = get_minimal_request()
    request_data["requests"][0]["day_of_week"] = "FUNDAY"
    request_data["requests"][0]["start_time"] = "8am"

    response = client.post("/api/v1/schedules/generate", json=request_data)

    assert response.status_code == 422
    errors = response.json()["errors"]
    assert "Requests -> 0 -> Day Of Week" in errors
    assert "Requests -> 0 -> Start Time" in errors
    assert "HH:MM" in errors["Requests -> 0 -> Start Time"][0]


def test_start_after_end_rejected():
    request_data = get_minimal_request()
    request_data["requests"][0]["start_time"] = "10:00"
    request_data["requests"][0]["end_time"] = "09:00"

    response = client.post("/api/v1/schedules/generate", json=request_data)

    assert response.status_code == 422
    messages = [m for field in response.json()["errors"].values() for m in field]
    assert any("must be before end time" in m for m in messages)


def test_negative_capacity_rejected():
    request_data = get_minimal_request()
    request_data["requests"][0]["required_capacity"] = -1

    response = client.post("/api/v1/schedules/generate", json=request_data)

    assert response.status_code == 422


def test_store_failure_returns_partial_result(monkeypatch):
    """An infrastructure failure aborts the batch and reports what was done."""
    async def broken_create(self, schedule):
        raise ConnectionError("store unreachable")

    monkeypatch.setattr(InMemoryScheduleStore, "create_schedule", broken_create)

    response = client.post("/api/v1/schedules/generate", json=get_minimal_request())

    assert response.status_code == 503
    data = response.json()
    assert "store unreachable" in data["error"]
    assert data["partial"]["schedules"] == []
    assert data["partial"]["summary"]["total_requests"] == 0
