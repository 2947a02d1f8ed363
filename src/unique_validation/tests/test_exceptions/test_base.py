from unique_validation.exceptions.base import (
    BeautificationError,
    DuplicateError,
    RepositoryError,
    UniqueFieldError,
    UniqueValidationError,
)


def field_error(path: str, value, message: str) -> UniqueFieldError:
    return UniqueFieldError(path=path, value=value, message=message)


def test_repository_error_str_and_payload():
    err = RepositoryError("Something broke", fields=["a"], constraint="a_1", error_code="internal")

    assert str(err) == "Something broke (fields: a; constraint: a_1; code: internal)"
    assert err.to_payload() == {"detail": "Something broke", "code": "internal", "fields": ["a"]}
    assert err.http_status() == 500


def test_unknown_or_missing_code_maps_to_400():
    assert RepositoryError("x").http_status() == 400
    assert RepositoryError("x", error_code="weird").http_status() == 400
    assert RepositoryError("x", error_code="invalid_input").http_status() == 400


def test_duplicate_error_is_409():
    assert DuplicateError("dup", fields=["email"]).http_status() == 409


class TestUniqueValidationError:

    def test_message_and_payload(self):
        err = UniqueValidationError(
            {
                "name": field_error("name", "John", "Path `name` (John) is not unique."),
                "age": field_error("age", 42, "Path `age` (42) is not unique."),
            },
            constraint="name_1_age_1",
        )

        assert err.kind == "validation"
        assert err.fields == ["name", "age"]
        assert err.message == (
            "Validation failed: name: Path `name` (John) is not unique., age: Path `age` (42) is not unique."
        )
        assert err.to_payload() == {
            "detail": err.message,
            "code": "duplicate",
            "fields": ["name", "age"],
            "errors": {
                "name": {"kind": "unique", "path": "name", "message": "Path `name` (John) is not unique."},
                "age": {"kind": "unique", "path": "age", "message": "Path `age` (42) is not unique."},
            },
        }

    def test_empty_error_set(self):
        err = UniqueValidationError()

        assert err.errors == {}
        assert err.fields is None
        assert err.to_payload() == {"detail": "Validation failed", "code": "duplicate", "errors": {}}

    def test_is_a_duplicate_error(self):
        assert isinstance(UniqueValidationError(), DuplicateError)


def test_unique_field_error_to_dict():
    err = field_error("email", "a@b.c", "taken")

    assert err.to_dict() == {"kind": "unique", "path": "email", "value": "a@b.c", "message": "taken"}
    assert str(err) == "taken"


def test_beautification_error_keeps_original():
    original = ValueError("driver")
    err = BeautificationError("failed", original=original)

    assert err.original is original
    assert err.http_status() == 500
