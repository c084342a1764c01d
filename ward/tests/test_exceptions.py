from django.db import OperationalError
from rest_framework.exceptions import NotAuthenticated, ValidationError

from ward.exceptions import GENERIC_MESSAGE, MISSING_TABLE_MESSAGE, api_exception_handler
from ward.models import Card

CONTEXT = {"view": None}


def test_value_error_is_a_bad_request():
    resp = api_exception_handler(ValueError("Số thẻ là bắt buộc"), CONTEXT)
    assert resp.status_code == 400
    assert resp.data == {"ok": False, "error": {"code": "invalid", "message": "Số thẻ là bắt buộc"}}


def test_missing_row_is_not_found():
    resp = api_exception_handler(Card.DoesNotExist("x"), CONTEXT)
    assert resp.status_code == 404
    assert resp.data["error"]["code"] == "not_found"


def test_missing_table_points_at_migrate():
    resp = api_exception_handler(OperationalError("no such table: dm_the_cham"), CONTEXT)
    assert resp.status_code == 503
    assert resp.data["error"]["message"] == MISSING_TABLE_MESSAGE


def test_unexpected_error_is_generic():
    resp = api_exception_handler(RuntimeError("boom"), CONTEXT)
    assert resp.status_code == 500
    assert resp.data["error"]["message"] == GENERIC_MESSAGE
    assert "boom" not in str(resp.data)


def test_drf_errors_are_wrapped():
    resp = api_exception_handler(NotAuthenticated(), CONTEXT)
    assert resp.status_code == 401
    assert resp.data["ok"] is False
    assert resp.data["error"]["code"] == "not_authenticated"

    resp = api_exception_handler(ValidationError({"so_the": ["required"]}), CONTEXT)
    assert resp.status_code == 400
    assert "so_the" in resp.data["error"]["message"]
