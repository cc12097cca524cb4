from typing import Any


def assert_error_response(data: dict[str, Any], code: str) -> None:
    """Assert the body has the shape produced by the AppError handler."""
    assert data["success"] is False
    assert data["error"]["code"] == code
    assert data["error"]["message"]


def outline_payload(sections: list[dict[str, Any]]) -> dict[str, Any]:
    return {"sections": sections}
