import pytest
from wsgiref.util import setup_testing_defaults

from examplekit.shop import Database, Dollars, make_app


def _call(app, path, query=""):
    environ = {"PATH_INFO": path, "QUERY_STRING": query, "REQUEST_METHOD": "GET"}
    setup_testing_defaults(environ)
    captured = {}

    def start_response(status, headers):
        captured["status"] = status
        captured["headers"] = headers

    body = b"".join(app(environ, start_response)).decode("utf-8")
    return captured["status"], body


@pytest.fixture
def db():
    return Database({"shoes": 50, "socks": 5})


def test_dollars_format():
    assert str(Dollars(50)) == "$50.00"
    assert str(Dollars(5)) == "$5.00"


def test_price_lookup(db):
    assert db.price("shoes") == 50
    assert db.price("socks") == 5


def test_price_missing_raises(db):
    with pytest.raises(KeyError):
        db.price("hat")


def test_values_become_dollars(db):
    db["hat"] = 12
    assert str(db.price("hat")) == str(Dollars(12))


def test_list_items(db):
    assert db.list_items() == [f"shoes: {Dollars(50)}", f"socks: {Dollars(5)}"]


def test_app_list(db):
    status, body = _call(make_app(db), "/list")
    assert status.startswith("200")
    assert body == "".join(f"{line}\n" for line in db.list_items())


def test_app_price(db):
    status, body = _call(make_app(db), "/price", "item=socks")
    assert status.startswith("200")
    assert body == f"{Dollars(5)}\n"


def test_app_price_missing_item(db):
    status, body = _call(make_app(db), "/price", "item=hat")
    assert status.startswith("404")
    assert body == 'no such item: "hat"\n'


def test_app_unknown_page(db):
    status, body = _call(make_app(db), "/help")
    assert status.startswith("404")
    assert "/help" in body
    assert body.startswith("no such page:")