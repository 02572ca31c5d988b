from datetime import datetime, timedelta, timezone

import pytest

from fitlog.core.security import create_token


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


async def _create_session(client, headers, **fields):
    res = await client.post("/workouts/sessions", json=fields, headers=headers)
    assert res.status_code == 201, res.text
    return res.json()["data"]["session"]


async def _add_exercise(client, headers, **fields):
    res = await client.post("/workouts/exercises", json=fields, headers=headers)
    assert res.status_code in (200, 201), res.text
    return res.json()["data"]["exercise"]


@pytest.mark.asyncio
async def test_health_needs_no_auth(client):
    res = await client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"ok": True}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "method, url, body",
    [
        ("POST", "/workouts/sessions", {"title": "Push Day"}),
        ("PATCH", "/workouts/sessions/some-id", {"title": "Pull Day"}),
        ("DELETE", "/workouts/sessions/some-id", None),
        ("GET", "/workouts/sessions", None),
        ("GET", "/workouts/sessions/some-id", None),
        ("POST", "/workouts/exercises", {"sessionId": "some-id", "name": "Bench Press"}),
        ("DELETE", "/workouts/exercises/some-id", None),
    ],
)
async def test_missing_token_is_unauthorized(client, method, url, body):
    res = await client.request(method, url, json=body)

    assert res.status_code == 401
    assert res.json() == {
        "success": False,
        "error": {"code": "UNAUTHORIZED", "message": "You must be signed in to perform this action."},
    }


@pytest.mark.asyncio
async def test_bad_token_is_unauthorized(client):
    res = await client.get("/workouts/sessions", headers={"Authorization": "Bearer not-a-jwt"})

    assert res.status_code == 401
    assert res.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_expired_token_is_unauthorized(client):
    token = create_token(user_id="user-alice", expires_delta=timedelta(minutes=-5))
    res = await client.get("/workouts/sessions", headers={"Authorization": f"Bearer {token}"})

    assert res.status_code == 401


@pytest.mark.asyncio
async def test_push_day_flow(client, alice):
    session = await _create_session(client, alice, title="Push Day")

    assert session["id"]
    assert session["userId"] == "user-alice"
    assert session["title"] == "Push Day"
    assert session["workoutDate"] == session["createdAt"]
    assert session["totalCalories"] is None

    exercise = await _add_exercise(
        client, alice, sessionId=session["id"], name="Bench Press", sets=3, repsPerSet=8, weightPerRep=60
    )
    assert exercise["id"]
    assert exercise["sessionId"] == session["id"]
    assert (exercise["sets"], exercise["repsPerSet"], exercise["weightPerRep"]) == (3, 8, 60.0)

    res = await client.get(f"/workouts/sessions/{session['id']}", headers=alice)
    assert res.status_code == 200
    assert [e["id"] for e in res.json()["data"]["exercises"]] == [exercise["id"]]

    res = await client.delete(f"/workouts/sessions/{session['id']}", headers=alice)
    assert res.status_code == 200
    assert res.json() == {"success": True, "data": {"id": session["id"]}}

    res = await client.get(f"/workouts/sessions/{session['id']}", headers=alice)
    assert res.status_code == 404
    assert res.json()["error"] == {"code": "NOT_FOUND", "message": "Workout session not found."}


@pytest.mark.asyncio
async def test_create_accepts_dates_and_ignores_user_id(client, alice):
    session = await _create_session(
        client,
        alice,
        userId="user-bob",
        workoutDate="2026-01-05T09:30:00+02:00",
        startTime="2026-01-05T07:30:00Z",
        endTime="2026-01-05T08:15:00Z",
        workoutType="cardio",
        totalDurationMinutes=45,
        totalCalories=0,
    )

    assert session["userId"] == "user-alice"
    assert _parse(session["workoutDate"]) == datetime(2026, 1, 5, 7, 30, tzinfo=timezone.utc)
    assert _parse(session["endTime"]) == datetime(2026, 1, 5, 8, 15, tzinfo=timezone.utc)
    assert session["totalDurationMinutes"] == 45
    assert session["totalCalories"] == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"totalDurationMinutes": 0},
        {"totalCalories": -1},
        {"title": ""},
        {"workoutType": ""},
        {"title": None},
        {"workoutDate": "not a date"},
        {"totalCalories": "12"},
        {"totalDurationMinutes": True},
        {"totalDurationMinutes": 1.5},
    ],
)
async def test_create_rejects_invalid_input(client, alice, body):
    res = await client.post("/workouts/sessions", json=body, headers=alice)

    assert res.status_code == 400
    payload = res.json()
    assert payload["success"] is False
    assert payload["error"]["code"] == "BAD_REQUEST"


@pytest.mark.asyncio
async def test_invalid_input_is_reported_before_ownership(client, alice, bob):
    session = await _create_session(client, alice, title="Mine")

    res = await client.patch(f"/workouts/sessions/{session['id']}", json={"totalCalories": -5}, headers=bob)

    assert res.status_code == 400


@pytest.mark.asyncio
async def test_update_partial_fields(client, alice):
    session = await _create_session(client, alice, title="Legs", notes="heavy")

    res = await client.patch(f"/workouts/sessions/{session['id']}", json={"notes": "light"}, headers=alice)

    assert res.status_code == 200
    updated = res.json()["data"]["session"]
    assert updated["notes"] == "light"
    assert updated["title"] == "Legs"
    assert updated["createdAt"] == session["createdAt"]


@pytest.mark.asyncio
async def test_foreign_session_looks_missing(client, alice, bob):
    session = await _create_session(client, alice, title="Mine")

    for method, url, body in [
        ("PATCH", f"/workouts/sessions/{session['id']}", {"title": "Stolen"}),
        ("DELETE", f"/workouts/sessions/{session['id']}", None),
        ("GET", f"/workouts/sessions/{session['id']}", None),
    ]:
        res = await client.request(method, url, json=body, headers=bob)
        assert res.status_code == 404
        assert res.json()["error"]["code"] == "NOT_FOUND"

    res = await client.get(f"/workouts/sessions/{session['id']}", headers=alice)
    assert res.json()["data"]["session"]["title"] == "Mine"


@pytest.mark.asyncio
async def test_list_sessions_page_echo_and_page_total(client, alice, bob):
    for day in (1, 2, 3):
        await _create_session(client, alice, title=f"day {day}", workoutDate=f"2026-02-0{day}T06:00:00Z")
    await _create_session(client, bob, title="bob's")

    res = await client.get("/workouts/sessions", params={"page": 2, "pageSize": 1}, headers=alice)
    assert res.status_code == 200
    data = res.json()["data"]
    assert [s["title"] for s in data["items"]] == ["day 2"]
    assert data["page"] == 2
    assert data["pageSize"] == 1
    # total counts the returned page, not every matching row
    assert data["total"] == 1

    res = await client.get("/workouts/sessions", headers=alice)
    data = res.json()["data"]
    assert (data["page"], data["pageSize"], data["total"]) == (1, 20, 3)
    assert [s["title"] for s in data["items"]] == ["day 3", "day 2", "day 1"]


@pytest.mark.asyncio
@pytest.mark.parametrize("params", [{"page": 0}, {"pageSize": 0}, {"pageSize": 101}])
async def test_list_sessions_rejects_out_of_range_paging(client, alice, params):
    res = await client.get("/workouts/sessions", params=params, headers=alice)

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "BAD_REQUEST"


@pytest.mark.asyncio
async def test_upsert_creates_then_updates(client, alice):
    session = await _create_session(client, alice, title="Run Club")

    res = await client.post(
        "/workouts/exercises",
        json={"sessionId": session["id"], "name": "Running", "distanceKm": 5.2, "durationMinutes": 27.5},
        headers=alice,
    )
    assert res.status_code == 201
    created = res.json()["data"]["exercise"]

    res = await client.post(
        "/workouts/exercises",
        json={"id": created["id"], "sessionId": session["id"], "name": "Tempo Run", "caloriesBurned": 410},
        headers=alice,
    )
    assert res.status_code == 200
    updated = res.json()["data"]["exercise"]
    assert updated["id"] == created["id"]
    assert updated["name"] == "Tempo Run"
    assert updated["distanceKm"] == 5.2
    assert updated["caloriesBurned"] == 410
    assert updated["createdAt"] == created["createdAt"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "extra",
    [
        {"name": ""},
        {"sets": 0},
        {"repsPerSet": -2},
        {"weightPerRep": 0},
        {"distanceKm": -1},
        {"caloriesBurned": -0.5},
        {"sets": True},
        {"repsPerSet": "8"},
        {"weightPerRep": "60"},
        {"distanceKm": False},
    ],
)
async def test_upsert_rejects_invalid_input(client, alice, extra):
    session = await _create_session(client, alice)
    body = {"sessionId": session["id"], "name": "Bench Press", **extra}

    res = await client.post("/workouts/exercises", json=body, headers=alice)

    assert res.status_code == 400
    assert res.json()["error"]["code"] == "BAD_REQUEST"


@pytest.mark.asyncio
async def test_upsert_requires_session_id(client, alice):
    res = await client.post("/workouts/exercises", json={"name": "Bench Press"}, headers=alice)

    assert res.status_code == 400
    assert "sessionId" in res.json()["error"]["message"]


@pytest.mark.asyncio
async def test_upsert_foreign_exercise_is_not_found(client, alice, bob):
    alices = await _create_session(client, alice)
    exercise = await _add_exercise(client, alice, sessionId=alices["id"], name="Deadlift")
    bobs = await _create_session(client, bob)

    res = await client.post(
        "/workouts/exercises",
        json={"id": exercise["id"], "sessionId": bobs["id"], "name": "Mine now"},
        headers=bob,
    )
    assert res.status_code == 404
    assert res.json()["error"] == {"code": "NOT_FOUND", "message": "Workout exercise not found."}


@pytest.mark.asyncio
async def test_upsert_into_foreign_session_is_not_found(client, alice, bob):
    alices = await _create_session(client, alice)

    res = await client.post("/workouts/exercises", json={"sessionId": alices["id"], "name": "Curl"}, headers=bob)

    assert res.status_code == 404
    assert res.json()["error"]["message"] == "Workout session not found."


@pytest.mark.asyncio
async def test_delete_exercise(client, alice, bob):
    session = await _create_session(client, alice)
    exercise = await _add_exercise(client, alice, sessionId=session["id"], name="Plank")

    res = await client.delete(f"/workouts/exercises/{exercise['id']}", headers=bob)
    assert res.status_code == 404

    res = await client.delete(f"/workouts/exercises/{exercise['id']}", headers=alice)
    assert res.status_code == 200
    assert res.json() == {"success": True, "data": {"id": exercise["id"]}}

    res = await client.get(f"/workouts/sessions/{session['id']}", headers=alice)
    assert res.json()["data"]["exercises"] == []


@pytest.mark.asyncio
async def test_timestamps_are_returned_in_utc(client, alice):
    session = await _create_session(client, alice, title="Push Day")
    exercise = await _add_exercise(client, alice, sessionId=session["id"], name="Bench Press")

    for value in (session["workoutDate"], session["createdAt"], session["updatedAt"], exercise["createdAt"]):
        assert _parse(value).utcoffset() == timedelta(0)


@pytest.mark.asyncio
async def test_upsert_accepts_whole_numbers_for_decimal_fields(client, alice):
    session = await _create_session(client, alice)

    exercise = await _add_exercise(
        client, alice, sessionId=session["id"], name="Row", distanceKm=2, durationMinutes=10, caloriesBurned=0
    )

    assert (exercise["distanceKm"], exercise["durationMinutes"], exercise["caloriesBurned"]) == (2.0, 10.0, 0.0)


@pytest.mark.asyncio
async def test_upsert_with_empty_id_inserts(client, alice):
    session = await _create_session(client, alice)
    first = await _add_exercise(client, alice, sessionId=session["id"], name="Squat")

    res = await client.post(
        "/workouts/exercises", json={"id": "", "sessionId": session["id"], "name": "Squat"}, headers=alice
    )

    assert res.status_code == 201
    assert res.json()["data"]["exercise"]["id"] not in ("", first["id"])
