"""
Tests for sequential lecture gating.
"""

import uuid

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import settings
from app.courses.models import HomeworkStatus
from app.courses.repositories import SectionRepository
from app.courses.services.access_service import AccessService, AccessStatus
from tests.utils.factories import (
    create_homework_factory,
    create_lecture_factory,
    create_progress_factory,
    create_section_factory,
)


@pytest.fixture
def homework_section(db_session, test_course):
    """A section whose first lecture carries homework that gates the next one."""
    section = create_section_factory(db_session, test_course, position=1, title="Practice")
    exercise = create_lecture_factory(
        db_session,
        section,
        position=0,
        title="Exercise",
        has_homework=True,
        requires_homework_completion=True,
    )
    follow_up = create_lecture_factory(db_session, section, position=1, title="Follow-up")
    return section, exercise, follow_up


def _can_access(db, user, course, section, index):
    return AccessService.can_access_lecture(user.id, course.id, section.id, index, db)


def test_intro_section_gating(db_session, test_user, test_course, intro_section, intro_lectures):
    assert _can_access(db_session, test_user, test_course, intro_section, 0) is True
    assert _can_access(db_session, test_user, test_course, intro_section, 1) is True
    assert _can_access(db_session, test_user, test_course, intro_section, 2) is False

    create_progress_factory(
        db_session, test_user, intro_lectures[1], test_course, watch_percentage=100, completed=True
    )

    assert _can_access(db_session, test_user, test_course, intro_section, 2) is True


def test_locked_reports_blocking_lecture(
    db_session, test_user, test_course, intro_section, intro_lectures
):
    access = AccessService.check_lecture_access(
        test_user.id, test_course.id, intro_section.id, 2, db_session
    )

    assert access.status == AccessStatus.LOCKED
    assert access.lecture_id == intro_lectures[2].id
    assert access.locked_by == intro_lectures[1].id


def test_incomplete_progress_does_not_unlock(
    db_session, test_user, test_course, intro_section, intro_lectures
):
    create_progress_factory(
        db_session, test_user, intro_lectures[1], test_course, watch_percentage=70
    )

    assert _can_access(db_session, test_user, test_course, intro_section, 2) is False


def test_only_immediate_predecessor_is_checked(db_session, test_user, test_course):
    section = create_section_factory(db_session, test_course, position=2, title="Chain")
    create_lecture_factory(db_session, section, position=0, requires_homework_completion=True)
    second = create_lecture_factory(
        db_session, section, position=1, requires_homework_completion=True
    )
    create_lecture_factory(db_session, section, position=2)

    create_progress_factory(db_session, test_user, second, test_course, completed=True)

    assert _can_access(db_session, test_user, test_course, section, 1) is False
    assert _can_access(db_session, test_user, test_course, section, 2) is True


def test_first_lecture_always_allowed(db_session, test_user, test_course):
    assert AccessService.can_access_lecture(
        test_user.id, test_course.id, uuid.uuid4(), 0, db_session
    )


@pytest.mark.parametrize("index", [-1, 3, 50])
def test_out_of_range_index_not_found(
    db_session, test_user, test_course, intro_section, intro_lectures, index
):
    access = AccessService.check_lecture_access(
        test_user.id, test_course.id, intro_section.id, index, db_session
    )

    assert access.status == AccessStatus.NOT_FOUND
    assert access.allowed is False


def test_unknown_section_not_found(db_session, test_user, test_course):
    access = AccessService.check_lecture_access(
        test_user.id, test_course.id, uuid.uuid4(), 1, db_session
    )

    assert access.status == AccessStatus.NOT_FOUND


def test_section_of_another_course_not_found(
    db_session, test_user, other_course, intro_section, intro_lectures
):
    access = AccessService.check_lecture_access(
        test_user.id, other_course.id, intro_section.id, 1, db_session
    )

    assert access.status == AccessStatus.NOT_FOUND


def test_submitted_homework_unlocks(db_session, test_user, test_course, homework_section):
    section, exercise, _ = homework_section

    assert _can_access(db_session, test_user, test_course, section, 1) is False

    create_homework_factory(db_session, test_user, exercise, test_course)

    assert _can_access(db_session, test_user, test_course, section, 1) is True


def test_rejected_homework_does_not_unlock(db_session, test_user, test_course, homework_section):
    section, exercise, _ = homework_section
    create_homework_factory(
        db_session, test_user, exercise, test_course, status=HomeworkStatus.REJECTED
    )

    assert _can_access(db_session, test_user, test_course, section, 1) is False


def test_approval_required_for_homework(
    db_session, test_user, test_course, homework_section, monkeypatch
):
    monkeypatch.setattr(settings, "HOMEWORK_REQUIRES_APPROVAL", True)
    section, exercise, _ = homework_section
    submission = create_homework_factory(db_session, test_user, exercise, test_course)

    assert _can_access(db_session, test_user, test_course, section, 1) is False

    submission.status = HomeworkStatus.APPROVED
    db_session.commit()

    assert _can_access(db_session, test_user, test_course, section, 1) is True


def test_store_failure_denies_access(
    db_session, test_user, test_course, intro_section, intro_lectures, monkeypatch
):
    def failing_get_by_id(self, entity_id):
        raise SQLAlchemyError("server closed the connection")

    monkeypatch.setattr(SectionRepository, "get_by_id", failing_get_by_id)

    access = AccessService.check_lecture_access(
        test_user.id, test_course.id, intro_section.id, 1, db_session
    )

    assert access.status == AccessStatus.NOT_FOUND


@pytest.mark.asyncio
async def test_access_endpoint(
    test_client: AsyncClient,
    test_user_token,
    test_course,
    intro_section,
    intro_lectures,
):
    response = await test_client.get(
        f"/api/v1/courses/{test_course.id}/sections/{intro_section.id}/lectures/2/access",
        cookies={"access_token": test_user_token},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "locked"
    assert data["allowed"] is False
    assert data["lecture_id"] == str(intro_lectures[2].id)
    assert data["locked_by"] == str(intro_lectures[1].id)


@pytest.mark.asyncio
async def test_access_endpoint_first_lecture(
    test_client: AsyncClient, test_user_token, test_course, intro_section
):
    response = await test_client.get(
        f"/api/v1/courses/{test_course.id}/sections/{intro_section.id}/lectures/0/access",
        cookies={"access_token": test_user_token},
    )

    assert response.status_code == 200
    assert response.json()["allowed"] is True


@pytest.mark.asyncio
async def test_access_endpoint_requires_authentication(
    test_client: AsyncClient, test_course, intro_section
):
    response = await test_client.get(
        f"/api/v1/courses/{test_course.id}/sections/{intro_section.id}/lectures/1/access",
    )

    assert response.status_code == 403
