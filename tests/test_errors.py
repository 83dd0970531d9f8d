import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from restaurant_menu.core.errors import (
    AppError,
    DatabaseError,
    DuplicateEntryError,
    ErrorCode,
    ForeignKeyViolationError,
    NotFoundError,
    ValidationFailedError,
    classify_database_error,
    to_error_response,
)
from restaurant_menu.models import Admin, MenuItem


def integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO x", {}, Exception(message))


@pytest.mark.parametrize(
    "message, expected",
    [
        ("UNIQUE constraint failed: admins.email", DuplicateEntryError),
        ('duplicate key value violates unique constraint "admins_email_key"', DuplicateEntryError),
        ("FOREIGN KEY constraint failed", ForeignKeyViolationError),
        ("NOT NULL constraint failed: categories.name", ValidationFailedError),
        ("CHECK constraint failed", DatabaseError),
    ],
)
def test_integrity_errors_are_classified(message, expected):
    error = classify_database_error(integrity_error(message), "insert")

    assert type(error) is expected
    assert error.context == {"operation": "insert"}


def test_other_database_errors_map_to_database_error():
    exc = OperationalError("SELECT 1", {}, Exception("database is locked"))

    error = classify_database_error(exc, "select")

    assert isinstance(error, DatabaseError)
    assert error.status_code == 500


def test_unknown_exception_maps_to_internal_error():
    error = classify_database_error(RuntimeError("boom"), "anything")

    assert type(error) is AppError
    assert error.code == ErrorCode.INTERNAL_ERROR


def test_app_errors_pass_through():
    original = NotFoundError("Category", 7)

    assert classify_database_error(original, "lookup") is original


def test_not_found_message():
    assert NotFoundError("Category", 7).message == "Category with id 7 not found"
    assert NotFoundError("Settings").message == "Settings not found"


def test_error_response_for_app_error():
    status, payload = to_error_response(DuplicateEntryError())

    assert status == 409
    assert payload == {
        "success": False,
        "error": "DUPLICATE_ENTRY",
        "detail": "A record with this information already exists",
    }


def test_error_response_hides_unknown_details_unless_debug():
    status, payload = to_error_response(ValueError("secret internals"))
    assert status == 500
    assert payload["error"] == "INTERNAL_ERROR"
    assert "secret internals" not in payload["detail"]

    _, debug_payload = to_error_response(ValueError("secret internals"), debug=True)
    assert debug_payload["detail"] == "secret internals"


@pytest.mark.anyio
async def test_real_duplicate_email_is_classified(session):
    session.add(Admin(email="a@example.com", password_hash="x"))
    await session.commit()

    session.add(Admin(email="a@example.com", password_hash="y"))
    with pytest.raises(IntegrityError) as exc_info:
        await session.commit()
    await session.rollback()

    assert isinstance(classify_database_error(exc_info.value, "create admin"), DuplicateEntryError)


@pytest.mark.anyio
async def test_real_missing_category_is_classified(session):
    session.add(MenuItem(name="Tea", price="5", category_id=999))
    with pytest.raises(IntegrityError) as exc_info:
        await session.commit()
    await session.rollback()

    assert isinstance(classify_database_error(exc_info.value, "create item"), ForeignKeyViolationError)
