"""
Test fixtures for curriculum tests.
"""

import pytest
from sqlalchemy.orm import Session

from tests.utils.factories import (
    create_course_factory,
    create_lecture_factory,
    create_section_factory,
)


@pytest.fixture
def test_course(db_session: Session):
    """Create a test course."""
    return create_course_factory(db_session, title="Test Course")


@pytest.fixture
def intro_section(db_session: Session, test_course):
    """Create the "Intro" section."""
    return create_section_factory(db_session, test_course, position=0, title="Intro")


@pytest.fixture
def intro_lectures(db_session: Session, intro_section):
    """Three lectures; only the middle one must be completed before moving on."""
    return [
        create_lecture_factory(db_session, intro_section, position=0, title="L1"),
        create_lecture_factory(
            db_session,
            intro_section,
            position=1,
            title="L2",
            requires_homework_completion=True,
        ),
        create_lecture_factory(db_session, intro_section, position=2, title="L3"),
    ]


@pytest.fixture
def test_lecture(intro_lectures):
    """A video lecture of the test course."""
    return intro_lectures[0]


@pytest.fixture
def text_lecture(db_session: Session, intro_section):
    """A lecture without a video."""
    return create_lecture_factory(
        db_session, intro_section, position=3, title="Reading", video_url=None, duration=None
    )


@pytest.fixture
def other_course(db_session: Session):
    return create_course_factory(db_session, title="Other Course")
