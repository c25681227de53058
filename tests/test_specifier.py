import pytest

from ttsum.core.errors import InvalidEffect, MalformedSpecifier, SpecifierError
from ttsum.core.models import Taint, Toleration
from ttsum.parsing.effects import validate_effect
from ttsum.parsing.specifier import parse_taint, parse_toleration


@pytest.mark.parametrize("effect", ["NoSchedule", "PreferNoSchedule", "NoExecute"])
def test_known_effects_are_accepted(effect):
    assert validate_effect(effect) is None


@pytest.mark.parametrize("effect", ["noschedule", "NOEXECUTE", "Evict", " NoSchedule"])
def test_unknown_effects_are_rejected(effect):
    with pytest.raises(InvalidEffect) as exc:
        validate_effect(effect)
    assert exc.value.effect == effect
    assert "unsupported taint effect" in str(exc.value)


@pytest.mark.parametrize("text, expected", [
    ("key=value:NoSchedule", Taint("key", "value", "NoSchedule")),
    ("key=value", Taint("key", "value", "")),
    ("key", Taint("key", "", "")),
    ("key:NoExecute", Taint("key", "", "NoExecute")),
    ("=value:PreferNoSchedule", Taint("", "value", "PreferNoSchedule")),
])
def test_parse_taint(text, expected):
    assert parse_taint(text) == expected


def test_parse_taint_bad_effect():
    with pytest.raises(InvalidEffect) as exc:
        parse_taint("key:BadEffect")
    assert exc.value.effect == "BadEffect"
    assert exc.value.text == "key:BadEffect"


@pytest.mark.parametrize("text", ["a=b=c", "a=b=c:NoSchedule", "a:NoSchedule:NoExecute", "a:b:c"])
def test_parse_taint_malformed(text):
    with pytest.raises(MalformedSpecifier) as exc:
        parse_taint(text)
    assert str(exc.value) == f"invalid taint: {text}"
    assert exc.value.text == text


def test_specifier_errors_are_value_errors():
    with pytest.raises(ValueError):
        parse_taint("a=b=c")


def test_parse_toleration_exists():
    assert parse_toleration("Exists(key4:NoSchedule)") == Toleration(
        key="key4", value="", effect="NoSchedule", operator="Exists"
    )


@pytest.mark.parametrize("text", ["exists(key4:NoSchedule)", "EXISTS(key4:NoSchedule)", "Exists (key4:NoSchedule)"])
def test_parse_toleration_exists_keyword_is_case_insensitive(text):
    assert parse_toleration(text).operator == "Exists"


def test_parse_toleration_defaults_to_equal():
    assert parse_toleration("key=value") == Toleration(
        key="key", value="value", effect="", operator="Equal"
    )
    assert parse_toleration("key=value:NoSchedule").operator == "Equal"


def test_parse_toleration_explicit_equal():
    assert parse_toleration("Equal(key=value:NoExecute)") == Toleration(
        key="key", value="value", effect="NoExecute", operator="Equal"
    )


def test_parse_toleration_unknown_operator_is_permissive():
    tol = parse_toleration("Sometimes(key=value)")
    assert tol.operator == "Equal"
    assert (tol.key, tol.value) == ("key", "value")


@pytest.mark.parametrize("text", ["Exists(key", "Existskey)"])
def test_parse_toleration_unbalanced_parens_use_whole_text(text):
    tol = parse_toleration(text)
    assert tol.operator == "Equal"
    assert tol.key == text


def test_parse_toleration_reversed_parens_use_whole_text():
    tol = parse_toleration(")key(")
    assert tol.key == ")key("
    assert tol.operator == "Equal"


def test_parse_toleration_errors_mention_toleration():
    with pytest.raises(MalformedSpecifier) as exc:
        parse_toleration("Exists(a=b=c)")
    assert str(exc.value) == "invalid toleration: Exists(a=b=c)"

    with pytest.raises(InvalidEffect):
        parse_toleration("Exists(key:Sometimes)")


def test_parse_error_hierarchy():
    with pytest.raises(SpecifierError):
        parse_toleration("a:b:c")
