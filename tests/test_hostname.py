from __future__ import annotations

import dataclasses

import pytest

from hostname_tools import Hostname, MalformedHostnameError, NoParentError

NAME_253 = ".".join(["x" * 63, "x" * 63, "x" * 63, "x" * 61])


def test_end_to_end_example() -> None:
    h = Hostname.parse("WWW.Example.COM.")
    assert h.labels == ("www", "example", "com")
    assert h.level_count() == 3
    assert h.size() == 15
    assert h.to_text() == "www.example.com"
    assert h.to_text(fqn=True) == "www.example.com."
    assert str(h) == "www.example.com"
    assert repr(h) == "Hostname('www.example.com')"
    assert not h.is_top_level_domain()
    assert h.has_tld("com")


def test_indexing() -> None:
    h = Hostname.parse("www.example.com")
    assert h[0] == "www"
    assert h[-1] == "com"
    with pytest.raises(IndexError):
        h[3]


@pytest.mark.parametrize("text", ["", ".", "a..b", "-a.com", "a-.com", "x" * 64])
def test_parse_rejects_malformed(text: str) -> None:
    with pytest.raises(MalformedHostnameError):
        Hostname.parse(text)
    assert Hostname.parse_or_none(text) is None


def test_malformed_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        Hostname.parse("a..b")


def test_round_trip_and_case_folding() -> None:
    for text in ["com", "example.com", "a-b_c.d1.example.org", NAME_253]:
        h = Hostname.parse(text)
        assert Hostname.parse(h.to_text()) == h
        assert Hostname.parse(text.upper()) == h
        assert Hostname.parse(text + ".") == h


def test_from_labels_matches_parse() -> None:
    h = Hostname.from_labels(["WWW", "Example", "com"])
    assert h == Hostname.parse("www.example.com")
    assert hash(h) == hash(Hostname.parse("www.example.com"))
    assert h.labels == ("www", "example", "com")


def test_from_labels_rejects_invalid() -> None:
    with pytest.raises(MalformedHostnameError):
        Hostname.from_labels([])
    with pytest.raises(MalformedHostnameError):
        Hostname.from_labels(["bad.label"])
    assert Hostname.from_labels_or_none(["", "com"]) is None
    assert Hostname.from_labels_or_none(["example", "com"]) == Hostname.parse("example.com")


def test_constructor_validates() -> None:
    assert Hostname(("Example", "COM")).labels == ("example", "com")
    with pytest.raises(MalformedHostnameError):
        Hostname(("-bad", "com"))


def test_is_immutable() -> None:
    h = Hostname.parse("example.com")
    with pytest.raises(dataclasses.FrozenInstanceError):
        h.labels = ("other",)  # type: ignore[misc]


def test_top_level_domain() -> None:
    tld = Hostname.parse("com")
    assert tld.is_top_level_domain()
    assert tld.level_count() == 1
    assert not Hostname.parse("example.com").is_top_level_domain()


def test_has_tld_variants() -> None:
    h = Hostname.parse("www.example.com")
    assert h.has_tld("COM")
    assert not h.has_tld("org")
    assert h.has_tld({"org", "com"})
    assert h.has_tld(["net", "Com"])
    assert not h.has_tld(set())


def test_is_subdomain_of() -> None:
    example = Hostname.parse("example.com")
    www = Hostname.parse("www.example.com")
    assert www.is_subdomain_of(example)
    assert www.is_subdomain_of(Hostname.parse("com"))
    assert Hostname.parse("a.b.example.com").is_subdomain_of(example)
    assert not example.is_subdomain_of(www)
    assert not example.is_subdomain_of(example)
    assert not www.is_subdomain_of(Hostname.parse("example.org"))
    assert not Hostname.parse("www.notexample.com").is_subdomain_of(example)


def test_subdomain_property_through_child() -> None:
    base = Hostname.parse("example.com")
    h = base
    for label in ["a", "b", "c"]:
        h = h.child(label)
        assert h.is_subdomain_of(base)
        assert not base.is_subdomain_of(h)


def test_compare_orders_by_hierarchy() -> None:
    com = Hostname.parse("com")
    example = Hostname.parse("example.com")
    www = Hostname.parse("www.example.com")
    assert com.compare(example) == -1
    assert example.compare(www) == -1
    assert www.compare(com) == 1
    assert Hostname.parse("a.com").compare(Hostname.parse("b.com")) == -1
    assert Hostname.parse("b.com").compare(Hostname.parse("a.com")) == 1
    assert example.compare(Hostname.parse("EXAMPLE.com.")) == 0


def test_compare_checks_tld_first() -> None:
    assert Hostname.parse("z.a").compare(Hostname.parse("a.b")) == -1


def test_sorting_and_operators() -> None:
    names = ["www.example.com", "b.com", "com", "example.com", "a.com", "example.org"]
    ordered = sorted(Hostname.parse(n) for n in names)
    assert [h.to_text() for h in ordered] == [
        "com",
        "a.com",
        "b.com",
        "example.com",
        "www.example.com",
        "example.org",
    ]
    a = Hostname.parse("a.com")
    b = Hostname.parse("b.com")
    assert a < b
    assert a <= b
    assert b > a
    assert b >= a
    assert a <= Hostname.parse("A.com")
    assert a != b


def test_usable_as_dict_key() -> None:
    seen = {Hostname.parse("Example.com"): 1}
    assert seen[Hostname.from_labels(["example", "COM"])] == 1


def test_parent() -> None:
    h = Hostname.parse("a.b.example.com")
    assert h.parent() == Hostname.parse("b.example.com")
    assert h.parent(2) == Hostname.parse("example.com")
    assert h.parent(3) == Hostname.parse("com")


def test_parent_of_tld_fails() -> None:
    with pytest.raises(NoParentError):
        Hostname.parse("com").parent()
    assert Hostname.parse("com").parent_or_none() is None


def test_parent_depth_past_root() -> None:
    h = Hostname.parse("example.com")
    with pytest.raises(MalformedHostnameError):
        h.parent(2)
    assert h.parent_or_none(2) is None
    with pytest.raises(ValueError):
        h.parent(0)


def test_child() -> None:
    h = Hostname.parse("example.com")
    child = h.child("WWW")
    assert child == Hostname.parse("www.example.com")
    assert child.parent() == h
    assert h.labels == ("example", "com")


@pytest.mark.parametrize("label", ["", "-www", "www-", "a.b", "x" * 64, "w w"])
def test_child_rejects_invalid_label(label: str) -> None:
    h = Hostname.parse("example.com")
    with pytest.raises(MalformedHostnameError):
        h.child(label)
    assert h.child_or_none(label) is None


def test_child_enforces_total_length() -> None:
    h = Hostname.parse(NAME_253)
    assert h.size() == 253
    with pytest.raises(MalformedHostnameError) as excinfo:
        h.child("www")
    assert excinfo.value.reason == "total_length"


def test_child_enforces_label_count() -> None:
    h = Hostname.parse(".".join(["a"] * 127))
    with pytest.raises(MalformedHostnameError) as excinfo:
        h.child("a")
    assert excinfo.value.reason == "too_many_labels"


class _TaggedHostname(Hostname):
    pass


def test_derived_names_keep_subclass() -> None:
    h = _TaggedHostname.parse("www.example.com")
    assert type(h) is _TaggedHostname
    assert type(h.parent()) is _TaggedHostname
    assert type(h.child("api")) is _TaggedHostname
    assert repr(h.parent()) == "_TaggedHostname('example.com')"


def test_parse_skips_second_label_validation(monkeypatch: pytest.MonkeyPatch) -> None:
    from hostname_tools import hostname as hostname_module

    def fail(_labels: object) -> tuple[str, ...]:
        raise AssertionError("labels validated twice")

    monkeypatch.setattr(hostname_module, "validate_labels", fail)
    h = Hostname.parse("WWW.Example.com.")
    assert h.labels == ("www", "example", "com")


def test_non_failing_factories_never_raise_on_wrong_types() -> None:
    assert Hostname.parse_or_none(123) is None  # type: ignore[arg-type]
    assert Hostname.parse_or_none(b"example.com") is None  # type: ignore[arg-type]
    assert Hostname.from_labels_or_none("example") is None
    with pytest.raises(TypeError):
        Hostname.parse(123)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        Hostname.from_labels("example")
