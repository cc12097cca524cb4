"""
Quick verification script for demo course.

Prints the outline and checks that sibling positions are dense and the
stored lecture count matches the outline.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from app.courses.models import Course
from app.courses.services.outline_service import OutlineService
from app.courses.services.positions import positions_are_dense, sort_by_position
from app.db.session import get_db
from app.scripts.seed_demo_course import DEMO_COURSE_TITLE


def main():
    db = next(get_db())
    try:
        course = db.query(Course).filter(Course.title == DEMO_COURSE_TITLE).first()
        if not course:
            print("❌ Demo course not found")
            return

        sections = sort_by_position(OutlineService.get_outline(course.id, db))
        lecture_total = sum(len(section.lectures) for section in sections)

        print("✅ Demo Course Verification:")
        print(f"   Title: {course.title}")
        print(f"   Sections: {len(sections)}")
        print(f"   Lectures: {lecture_total} (stored count: {course.lecture_count})")
        print()
        for section in sections:
            print(f"   📖 {section.position}. {section.title}: {len(section.lectures)} lectures")
            for lecture in sort_by_position(section.lectures):
                gate = " (GATES NEXT)" if lecture.requires_homework_completion else ""
                print(f"      - {lecture.position}. {lecture.title}{gate}")

        problems = []
        if not positions_are_dense(s.position for s in sections):
            problems.append("section positions are not 0..n-1")
        for section in sections:
            if not positions_are_dense(lecture.position for lecture in section.lectures):
                problems.append(f"lecture positions of '{section.title}' are not 0..n-1")
        if course.lecture_count != lecture_total:
            problems.append("stored lecture count is out of date")

        print()
        for problem in problems:
            print(f"❌ {problem}")
        if not problems:
            print("✅ Outline is consistent")
    finally:
        db.close()


if __name__ == "__main__":
    main()
