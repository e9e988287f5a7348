from sqlalchemy.exc import IntegrityError

from db.errors import is_foreign_key_violation, is_unique_violation


class _DriverError(Exception):
    def __init__(self, message: str, sqlstate: str | None = None) -> None:
        super().__init__(message)
        self.sqlstate = sqlstate


def _integrity_error(message: str, sqlstate: str | None = None) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, _DriverError(message, sqlstate))


def test_unique_violation_by_sqlstate() -> None:
    error = _integrity_error("conflict", sqlstate="23505")
    assert is_unique_violation(error)
    assert not is_foreign_key_violation(error)


def test_unique_violation_by_sqlite_message() -> None:
    error = _integrity_error("UNIQUE constraint failed: group_memberships.group_id")
    assert is_unique_violation(error)


def test_foreign_key_violation_by_sqlstate() -> None:
    error = _integrity_error("insert or update violates", sqlstate="23503")
    assert is_foreign_key_violation(error)
    assert not is_unique_violation(error)


def test_foreign_key_violation_by_sqlite_message() -> None:
    error = _integrity_error("FOREIGN KEY constraint failed")
    assert is_foreign_key_violation(error)


def test_other_integrity_errors_match_neither() -> None:
    error = _integrity_error("CHECK constraint failed: ck_page_notf_prefs_one_scope")
    assert not is_unique_violation(error)
    assert not is_foreign_key_violation(error)
