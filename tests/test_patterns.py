import pytest

from pw_patterns import (
    COMMON_PASSWORDS,
    DEFAULT_CATALOG,
    KEYBOARD_PATTERNS,
    SEQUENTIAL_PATTERNS,
    PatternCatalog,
    keyboard_windows,
    load_wordlist,
)


def test_static_sets_are_disjoint():
    assert not SEQUENTIAL_PATTERNS & KEYBOARD_PATTERNS
    assert not SEQUENTIAL_PATTERNS & COMMON_PASSWORDS
    assert not KEYBOARD_PATTERNS & COMMON_PASSWORDS


def test_entries_are_lowercase():
    for entries in (SEQUENTIAL_PATTERNS, KEYBOARD_PATTERNS, COMMON_PASSWORDS):
        assert all(e == e.lower() for e in entries)


@pytest.mark.parametrize("run", ["qwe", "ewq", "asdfgh", "hgfdsa", "zxcvbn", "890", "098", "147", "963", "!@#", "#@!", "&*()", ")(*&"])
def test_keyboard_windows_contain(run):
    assert run in keyboard_windows()


@pytest.mark.parametrize("run", ["qw", "qwertyu", "1234567", "qaz"])
def test_keyboard_windows_exclude(run):
    assert run not in keyboard_windows()


def test_keyboard_match_is_containment():
    assert DEFAULT_CATALOG.has_keyboard_pattern("xx1qazyy")
    assert DEFAULT_CATALOG.has_keyboard_pattern("Hello-ASDF")
    assert not DEFAULT_CATALOG.has_keyboard_pattern("MyS3cur3P@ssw0rd!")


def test_sequential_match_is_case_insensitive():
    assert DEFAULT_CATALOG.has_sequential("x-ABCDEFGHIJKLMNOPQRSTUVWXYZ")
    assert DEFAULT_CATALOG.has_sequential("pw0987654321")
    assert not DEFAULT_CATALOG.has_sequential("abc")


def test_common_match_is_exact():
    assert DEFAULT_CATALOG.is_common("PassWord")
    assert not DEFAULT_CATALOG.is_common("password1x")
    assert not DEFAULT_CATALOG.is_common("mypassword")


def test_injected_catalog_is_normalized():
    catalog = PatternCatalog(common_passwords=["Foo", ""])
    assert catalog.common_passwords == frozenset({"foo"})
    assert catalog.is_common("FOO")


def test_extended_returns_new_catalog():
    extended = DEFAULT_CATALOG.extended(["Hunter2"])
    assert extended.is_common("hunter2")
    assert not DEFAULT_CATALOG.is_common("hunter2")
    assert extended.keyboard_runs == DEFAULT_CATALOG.keyboard_runs


def test_load_wordlist(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("Alpha\n\n  beta  \ngamma\n", encoding="latin-1")
    assert load_wordlist(str(path)) == {"alpha", "beta", "gamma"}
    assert load_wordlist(str(path), max_lines=1) == {"alpha"}


def test_load_wordlist_missing_or_compressed(tmp_path):
    gz = tmp_path / "words.txt.gz"
    gz.write_bytes(b"\x1f\x8b")
    assert load_wordlist(str(tmp_path / "nope.txt")) == set()
    assert load_wordlist(str(gz)) == set()
    assert load_wordlist("") == set()
