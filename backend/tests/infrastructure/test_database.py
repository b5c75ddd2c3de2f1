"""Store error translation — driver failures to API errors."""

from sqlalchemy.exc import IntegrityError, OperationalError

from devconnector.core.errors import ConflictError, DatabaseError, Envelope
from devconnector.infrastructure.database import translate_db_error


def _integrity(detail: str) -> IntegrityError:
    return IntegrityError("INSERT INTO users ...", {}, Exception(detail))


class TestTranslateDbError:
    def test_sqlite_email_unique_is_conflict(self):
        err = translate_db_error(
            _integrity("UNIQUE constraint failed: users.email"),
        )
        assert isinstance(err, ConflictError)
        assert err.envelope is Envelope.ERRORS
        assert err.to_response() == {"errors": [{"msg": "User already exists"}]}

    def test_postgres_email_index_is_conflict(self):
        err = translate_db_error(_integrity(
            'duplicate key value violates unique constraint "ix_users_email"',
        ))
        assert isinstance(err, ConflictError)
        assert err.http_status == 400

    def test_other_integrity_failure_stays_internal(self):
        err = translate_db_error(_integrity("FOREIGN KEY constraint failed"))
        assert isinstance(err, DatabaseError)
        assert err.http_status == 500
        assert err.to_response() == {"msg": "Server Error"}

    def test_operational_error(self):
        err = translate_db_error(
            OperationalError("SELECT 1", {}, Exception("connection refused")),
        )
        assert isinstance(err, DatabaseError)
        assert err.operation == "execute"
