from app.courses.schemas.outline import LectureInput, OutlineUpdateRequest, SectionInput
from app.courses.services.positions import (
    normalize_positions,
    positions_are_dense,
    sort_by_position,
)


def test_normalize_positions_uses_list_order():
    sections = [
        SectionInput(title="A", position=7),
        SectionInput(title="B", position=7),
        SectionInput(title="C", position=-2),
    ]

    normalize_positions(sections)

    assert [s.position for s in sections] == [0, 1, 2]
    assert [s.title for s in sections] == ["A", "B", "C"]


def test_positions_are_dense():
    assert positions_are_dense([])
    assert positions_are_dense([2, 0, 1])
    assert not positions_are_dense([0, 2])
    assert not positions_are_dense([0, 0, 1])
    assert not positions_are_dense([1, 2, 3])


def test_sort_by_position():
    sections = [SectionInput(title="B", position=1), SectionInput(title="A", position=0)]

    assert [s.title for s in sort_by_position(sections)] == ["A", "B"]


def test_update_request_overrides_client_positions():
    request = OutlineUpdateRequest(
        sections=[
            SectionInput(
                title="First",
                position=10,
                lectures=[LectureInput(title="x", position=5), LectureInput(title="y", position=5)],
            ),
            SectionInput(title="Second", position=3),
        ]
    )

    assert [s.position for s in request.sections] == [0, 1]
    assert [lec.position for lec in request.sections[0].lectures] == [0, 1]
