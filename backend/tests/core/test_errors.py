"""Error Hierarchy — status codes, codes and the REST error envelope."""

import pytest

from social_graph.core.errors import (
    AlreadyFriendsError,
    DatabaseError,
    DuplicateRequestError,
    ErrorCategory,
    ExcludedError,
    InvalidRequestError,
    RequestConflictError,
    ResourceNotFoundError,
    SelfReferenceError,
    SocialGraphError,
    UnauthenticatedError,
    UserExistsError,
)


@pytest.mark.parametrize(
    "error, status, code",
    [
        (UnauthenticatedError(), 401, "UNAUTHENTICATED"),
        (ResourceNotFoundError("User", "u9"), 404, "RESOURCE_NOT_FOUND"),
        (SelfReferenceError("friend"), 400, "SELF_REFERENCE"),
        (InvalidRequestError(), 400, "INVALID_REQUEST"),
        (AlreadyFriendsError("u2"), 409, "ALREADY_FRIENDS"),
        (DuplicateRequestError("u2"), 409, "DUPLICATE_REQUEST"),
        (ExcludedError("u2"), 403, "EXCLUDED"),
        (RequestConflictError("u1", "u2"), 409, "REQUEST_CONFLICT"),
        (UserExistsError("a@example.com"), 409, "USER_EXISTS"),
        (DatabaseError("commit"), 500, "INTERNAL_ERROR"),
    ],
)
def test_error_status_and_code(error, status, code):
    assert isinstance(error, SocialGraphError)
    assert error.http_status == status
    assert error.code == code


def test_to_response_envelope():
    body = ExcludedError("u2").to_response()
    err = body["error"]
    assert err["code"] == "EXCLUDED"
    assert err["message"] == "Blocked"
    assert err["category"] == ErrorCategory.FORBIDDEN.value
    assert err["context"] == {"target_id": "u2"}
    assert "timestamp" in err


def test_duplicate_request_message():
    assert DuplicateRequestError("u2").message == "Request already exists"


def test_database_error_message_is_generic():
    error = DatabaseError("commit")
    assert error.message == "Database commit failed"
    assert error.operation == "commit"
