"""Pure helpers: validation, auth, coercion, id generation, error translation."""

import pytest

from catalog_api.core import (
    TimestampIdGenerator, check_api_key, coerce_int_param, compute_stats,
    decode_json_body, parse_product_id, validate_product
)
from catalog_api.database import get_catalog
from catalog_api.error_handlers import build_error_response
from catalog_api.errors import (
    AuthError, BodyParseError, NotFoundError, ValidationError
)


def test_catalog_is_the_same_six_products_every_call():
    first, second = get_catalog(), get_catalog()
    assert first == second
    assert [p.id for p in first] == [1, 2, 3, 4, 5, 6]
    with pytest.raises(Exception):
        first[0].name = "changed"


@pytest.mark.parametrize("raw,expected", [
    (None, 5), ("3", 3), (" 7", 7), ("4xyz", 4), ("abc", 5), ("0", 5), ("-0", 5), ("-2", -2), ("", 5), ("\u0663", 5),
])
def test_coerce_int_param(raw, expected):
    assert coerce_int_param(raw, 5) == expected


@pytest.mark.parametrize("raw,expected", [
    ("3", 3), (" 3 ", 3), ("3.0", 3), ("3.5", 3.5), ("1e2", 100), ("0x10", 16), ("-4", -4),
    ("abc", None), ("1_0", None), ("0_1", None), ("\u0663", None), ("3abc", None), ("1e999", None),
    ("Infinity", None), ("NaN", None),
])
def test_parse_product_id_reads_ascii_numeric_literals(raw, expected):
    assert parse_product_id(raw) == expected


def test_check_api_key():
    assert check_api_key("secret", "secret") is None
    for provided in (None, "", "Secret", "secret "):
        err = check_api_key(provided, "secret")
        assert isinstance(err, AuthError)
        assert err.message == "Invalid API key"


def test_validate_product_accepts_complete_payload():
    payload = {"name": "a", "description": "b", "price": 0.5, "category": "c", "inStock": None}
    assert validate_product(payload) is None


def test_validate_product_checks_presence_before_price():
    err = validate_product({"name": "a", "price": -1})
    assert isinstance(err, ValidationError)
    assert err.message.startswith("All fields are required")


def test_validate_product_rejects_non_finite_price():
    payload = {"name": "a", "description": "b", "price": float("inf"), "category": "c", "inStock": True}
    assert validate_product(payload).message == "Price must be a positive number"


def test_decode_json_body():
    assert decode_json_body(b'{"a": 1}', "application/json; charset=utf-8") == {"a": 1}
    assert decode_json_body(b"[1]", "application/vnd.api+json") == [1]
    assert decode_json_body(b"", "application/json") == {}
    assert decode_json_body(b"{broken", "text/plain") == {}
    with pytest.raises(BodyParseError):
        decode_json_body(b"{broken", "application/json")
    with pytest.raises(BodyParseError):
        decode_json_body(b"null", "application/json")
    for raw in (b'{"price": NaN}', b'[Infinity]', b'{"a": -Infinity}'):
        with pytest.raises(BodyParseError):
            decode_json_body(raw, "application/json")


def test_compute_stats_keeps_first_seen_category_order():
    products = [
        {"category": "B", "inStock": True},
        {"category": "A", "inStock": False},
        {"category": "B", "inStock": False},
    ]
    stats = compute_stats(products)
    assert list(stats["categoryStats"].items()) == [("B", 2), ("A", 1)]
    assert stats["stockStats"] == {"inStock": 1, "outOfStock": 2}


def test_id_generator_is_strictly_increasing_on_a_stuck_clock():
    gen = TimestampIdGenerator(clock=lambda: 1700000000.0)
    ids = [gen.next_id() for _ in range(3)]
    assert ids == [1700000000000, 1700000000001, 1700000000002]


def test_id_generator_follows_the_clock():
    ticks = iter([1.0, 5.0])
    gen = TimestampIdGenerator(clock=lambda: next(ticks))
    assert gen.next_id() == 1000
    assert gen.next_id() == 5000


@pytest.mark.parametrize("exc,status,body", [
    (AuthError("Invalid API key"), 401, {"error": "AuthError", "message": "Invalid API key"}),
    (ValidationError("bad"), 400, {"error": "ValidationError", "message": "bad"}),
    (NotFoundError("gone"), 404, {"error": "NotFoundError", "message": "gone"}),
    (BodyParseError("Expecting value"), 400, {"error": "ValidationError", "message": "Invalid JSON format"}),
    (KeyError("x"), 500, {"error": "ServerError", "message": "Something went wrong on the server"}),
])
def test_build_error_response(exc, status, body):
    assert build_error_response(exc) == (status, body)


def test_setup_logging_installs_one_handler_however_often_called():
    import logging
    from catalog_api.observability import HANDLER_NAME, setup_logging

    root_level = logging.root.level
    try:
        setup_logging("INFO")
        setup_logging("DEBUG", "json")
        ours = [h for h in logging.root.handlers if h.get_name() == HANDLER_NAME]
        assert len(ours) == 1
        assert logging.root.level == logging.DEBUG
    finally:
        for h in [h for h in logging.root.handlers if h.get_name() == HANDLER_NAME]:
            logging.root.removeHandler(h)
        logging.root.setLevel(root_level)
