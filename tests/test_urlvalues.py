from examplekit.urlvalues import Values


def test_values():
    m = Values({"lang": ["en"]})
    m.add("item", "1")
    m.add("item", "2")
    assert m.first("lang") == "en"
    assert m.first("q") == ""
    assert m.first("item") == "1"
    assert m["item"] == ["1", "2"]


def test_first_does_not_create_key():
    m = Values()
    assert m.first("item") == ""
    assert "item" not in m


def test_empty_list_gives_empty_string():
    m = Values({"item": []})
    assert m.first("item") == ""
    m.add("item", "3")
    assert m.first("item") == "3"