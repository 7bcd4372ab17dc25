"""
Unit Tests for the error hierarchy and its JSON rendering
"""
from app.core.exceptions import (
    NoticeBoardError,
    AuthorizationError,
    NoticeNotFoundError,
    DuplicateResourceError,
    InvalidFileTypeError,
    FileTooLargeError,
    error_response,
)


class TestStatusCodes:

    def test_codes_by_family(self):
        assert AuthorizationError().status_code == 403
        assert NoticeNotFoundError("n1").status_code == 404
        assert DuplicateResourceError("Club", "name").status_code == 400
        assert InvalidFileTypeError("exe", ["pdf"]).status_code == 400
        assert FileTooLargeError(10, 5).status_code == 413
        assert NoticeBoardError("boom").status_code == 500


class TestMessages:

    def test_not_found_message(self):
        err = NoticeNotFoundError("n1")

        assert err.message == "Notice not found"
        assert err.details["resource_id"] == "n1"

    def test_duplicate_message(self):
        err = DuplicateResourceError("Department", "code")

        assert err.message == "Department with this code already exists"
        assert err.code == "DUPLICATE_RESOURCE"


class TestErrorResponse:

    def test_envelope(self):
        body = error_response(DuplicateResourceError("Club", "name"))

        assert body["success"] is False
        assert body["detail"] == "Club with this name already exists"
        assert body["error"]["code"] == "DUPLICATE_RESOURCE"
        assert body["error"]["details"] == {"field": "name"}
