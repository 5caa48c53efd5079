"""Unit tests for error mapping."""
import psycopg
import pytest

from customer_app.utils.errors import (
    CountQueryError,
    NotFoundError,
    RenderError,
    SelectQueryError,
    StoreError,
    ValidationError,
    handle_error,
)


class TestErrorHandling:
    def test_validation_error(self):
        assert handle_error(ValidationError("Name is required.")) == (400, "Name is required.")

    def test_not_found(self):
        assert handle_error(NotFoundError()) == (404, "Customer not found.")

    @pytest.mark.parametrize("cls", [StoreError, CountQueryError, SelectQueryError])
    def test_store_errors_are_generic(self, cls):
        status, message = handle_error(cls("relation customers does not exist"))
        assert status == 500
        assert message == "Database error."
        assert "relation" not in message

    def test_connection_cause_gets_unavailable_message(self):
        try:
            try:
                raise psycopg.OperationalError("connection refused")
            except psycopg.OperationalError as cause:
                raise StoreError("Read failed") from cause
        except StoreError as e:
            status, message = handle_error(e)
        assert status == 500
        assert "unavailable" in message.lower()

    def test_render_error(self):
        assert handle_error(RenderError("bad template")) == (500, "Render error.")

    def test_generic_error(self):
        status, message = handle_error(ValueError("secret detail"))
        assert status == 500
        assert "secret detail" not in message
