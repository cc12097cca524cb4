"""
E2E tests for player sessions and lecture progress endpoints.
"""

import pytest
from httpx import AsyncClient

from tests.utils.factories import create_progress_factory
from tests.utils.helpers import assert_error_response


async def _open_player(client: AsyncClient, token: str, course, lecture) -> dict:
    response = await client.post(
        "/api/v1/progress/players",
        json={"course_id": str(course.id), "lecture_id": str(lecture.id)},
        cookies={"access_token": token},
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.asyncio
async def test_open_player(test_client: AsyncClient, test_user_token, test_course, test_lecture):
    data = await _open_player(test_client, test_user_token, test_course, test_lecture)

    assert data["player_id"]
    assert data["lecture_id"] == str(test_lecture.id)
    assert data["last_position_seconds"] == 0.0
    assert data["completed"] is False
    assert data["completion_threshold"] == 80


@pytest.mark.asyncio
async def test_open_player_resumes_position(
    test_client: AsyncClient,
    db_session,
    test_user,
    test_user_token,
    test_course,
    test_lecture,
):
    progress = create_progress_factory(
        db_session, test_user, test_lecture, test_course, watch_percentage=40
    )
    progress.last_position_seconds = 120.0
    db_session.commit()

    data = await _open_player(test_client, test_user_token, test_course, test_lecture)

    assert data["last_position_seconds"] == 120.0
    assert data["watch_percentage"] == 40


@pytest.mark.asyncio
async def test_open_player_for_lecture_of_another_course(
    test_client: AsyncClient, test_user_token, other_course, test_lecture
):
    response = await test_client.post(
        "/api/v1/progress/players",
        json={"course_id": str(other_course.id), "lecture_id": str(test_lecture.id)},
        cookies={"access_token": test_user_token},
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_samples_complete_lecture_and_throttle(
    test_client: AsyncClient, test_user_token, test_course, test_lecture
):
    player = await _open_player(test_client, test_user_token, test_course, test_lecture)
    url = f"/api/v1/progress/players/{player['player_id']}/samples"

    response = await test_client.post(
        url,
        json={"current_time_seconds": 40, "total_duration_seconds": 50},
        cookies={"access_token": test_user_token},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["persisted"] is True
    assert data["watch_percentage"] == 80
    assert data["completed"] is True
    assert data["just_completed"] is True
    assert data["watch_count"] == 1

    response = await test_client.post(
        url,
        json={"current_time_seconds": 45, "total_duration_seconds": 50},
        cookies={"access_token": test_user_token},
    )

    data = response.json()
    assert data["persisted"] is False
    assert data["throttled"] is True

    response = await test_client.get(
        f"/api/v1/progress/courses/{test_course.id}/lectures/{test_lecture.id}",
        cookies={"access_token": test_user_token},
    )
    assert response.status_code == 200
    assert response.json()["watch_percentage"] == 80
    assert response.json()["completed"] is True


@pytest.mark.asyncio
async def test_negative_time_rejected(
    test_client: AsyncClient, test_user_token, test_course, test_lecture
):
    player = await _open_player(test_client, test_user_token, test_course, test_lecture)

    response = await test_client.post(
        f"/api/v1/progress/players/{player['player_id']}/samples",
        json={"current_time_seconds": -1, "total_duration_seconds": 50},
        cookies={"access_token": test_user_token},
    )

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_player_of_another_user(
    test_client: AsyncClient, test_user_token, other_user_token, test_course, test_lecture
):
    player = await _open_player(test_client, test_user_token, test_course, test_lecture)

    response = await test_client.post(
        f"/api/v1/progress/players/{player['player_id']}/samples",
        json={"current_time_seconds": 10, "total_duration_seconds": 50},
        cookies={"access_token": other_user_token},
    )

    assert response.status_code == 404
    assert_error_response(response.json(), "NOT_FOUND")


@pytest.mark.asyncio
async def test_close_player(test_client: AsyncClient, test_user_token, test_course, test_lecture):
    player = await _open_player(test_client, test_user_token, test_course, test_lecture)

    response = await test_client.delete(
        f"/api/v1/progress/players/{player['player_id']}",
        cookies={"access_token": test_user_token},
    )
    assert response.status_code == 204

    response = await test_client.post(
        f"/api/v1/progress/players/{player['player_id']}/samples",
        json={"current_time_seconds": 10, "total_duration_seconds": 50},
        cookies={"access_token": test_user_token},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_lecture_progress_not_found(
    test_client: AsyncClient, test_user_token, test_course, test_lecture
):
    response = await test_client.get(
        f"/api/v1/progress/courses/{test_course.id}/lectures/{test_lecture.id}",
        cookies={"access_token": test_user_token},
    )

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_mark_complete_below_threshold(
    test_client: AsyncClient,
    db_session,
    test_user,
    test_user_token,
    test_course,
    test_lecture,
):
    create_progress_factory(db_session, test_user, test_lecture, test_course, watch_percentage=50)

    response = await test_client.post(
        f"/api/v1/progress/courses/{test_course.id}/lectures/{test_lecture.id}/complete",
        cookies={"access_token": test_user_token},
    )

    assert response.status_code == 400
    assert_error_response(response.json(), "VALIDATION_ERROR")


@pytest.mark.asyncio
async def test_mark_text_lecture_complete(
    test_client: AsyncClient, test_user_token, test_course, text_lecture
):
    response = await test_client.post(
        f"/api/v1/progress/courses/{test_course.id}/lectures/{text_lecture.id}/complete",
        cookies={"access_token": test_user_token},
    )

    assert response.status_code == 200
    assert response.json()["completed"] is True


@pytest.mark.asyncio
async def test_reset_lecture_progress(
    test_client: AsyncClient,
    db_session,
    test_user,
    test_user_token,
    test_course,
    test_lecture,
):
    create_progress_factory(
        db_session, test_user, test_lecture, test_course, watch_percentage=100, completed=True
    )

    response = await test_client.post(
        f"/api/v1/progress/courses/{test_course.id}/lectures/{test_lecture.id}/reset",
        cookies={"access_token": test_user_token},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["completed"] is False
    assert data["watch_percentage"] == 0
    assert data["watch_count"] == 1


@pytest.mark.asyncio
async def test_course_progress_summary(
    test_client: AsyncClient,
    db_session,
    test_user,
    test_user_token,
    test_course,
    intro_lectures,
):
    create_progress_factory(
        db_session, test_user, intro_lectures[2], test_course, watch_percentage=100, completed=True
    )

    response = await test_client.get(
        f"/api/v1/progress/courses/{test_course.id}",
        cookies={"access_token": test_user_token},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total_lectures"] == 3
    assert data["completed_lectures"] == 1
    assert data["completed"][str(intro_lectures[2].id)] is True
    assert data["completed"][str(intro_lectures[0].id)] is False
