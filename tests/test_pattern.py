"""Tests for glob compilation."""

from __future__ import annotations

import time

import pytest

from globpath.pattern import InvalidPatternError, compile_glob, has_meta


@pytest.mark.parametrize(
    ("path", "expected"),
    [
        ("/var/log/app.log", False),
        ("/var/log/*.log", True),
        ("/var/log/app?.log", True),
        ("/var/log/[ab].log", True),
        ("/var/log/{a,b}.log", False),
        ("", False),
    ],
)
def test_has_meta(path: str, expected: bool):
    assert has_meta(path) is expected


def test_star_stays_within_segment():
    glob = compile_glob("/var/log/*.log", "/")
    assert glob.match("/var/log/a.log")
    assert glob.match("/var/log/.log")
    assert not glob.match("/var/log/sub/a.log")
    assert not glob.match("/var/log")
    assert not glob.match("/var/log/a.log.1")


def test_double_star_crosses_segments():
    glob = compile_glob("/home/**", "/")
    assert glob.match("/home/user")
    assert glob.match("/home/user/docs/notes.txt")
    assert not glob.match("/home")
    assert not glob.match("/homer/user")


def test_double_star_with_suffix():
    glob = compile_glob("/lib/share/*/*/**.txt", "/")
    assert glob.match("/lib/share/a/b/c.txt")
    assert glob.match("/lib/share/a/b/c/d/e.txt")
    assert not glob.match("/lib/share/a/b.txt")
    assert not glob.match("/lib/share/a/b/c.log")


def test_question_mark_matches_one_non_separator():
    glob = compile_glob("/data/file?.csv", "/")
    assert glob.match("/data/file1.csv")
    assert not glob.match("/data/file12.csv")
    assert not glob.match("/data/file/.csv")


def test_character_classes():
    glob = compile_glob("/data/[ab]-[0-9].csv", "/")
    assert glob.match("/data/a-1.csv")
    assert glob.match("/data/b-9.csv")
    assert not glob.match("/data/c-1.csv")
    assert not glob.match("/data/a-x.csv")


@pytest.mark.parametrize("negation", ["!", "^"])
def test_negated_character_class(negation: str):
    glob = compile_glob(f"/data/[{negation}ab].csv", "/")
    assert glob.match("/data/c.csv")
    assert not glob.match("/data/a.csv")


def test_alternation():
    glob = compile_glob("/etc/{nginx,apache{2,}}/*.conf", "/")
    assert glob.match("/etc/nginx/site.conf")
    assert glob.match("/etc/apache/site.conf")
    assert glob.match("/etc/apache2/site.conf")
    assert not glob.match("/etc/lighttpd/site.conf")


def test_unbalanced_close_brace_is_literal():
    glob = compile_glob("/srv/a}*", "/")
    assert glob.match("/srv/a}b")


def test_escaped_metacharacters_are_literal():
    glob = compile_glob(r"/srv/report\*\[1\].txt", "/")
    assert glob.match("/srv/report*[1].txt")
    assert not glob.match("/srv/reportX1.txt")


def test_regex_characters_are_literal():
    glob = compile_glob("/srv/a+b(1).$x/*", "/")
    assert glob.match("/srv/a+b(1).$x/file")
    assert not glob.match("/srv/aab(1).$x/file")


def test_injected_backslash_separator():
    glob = compile_glob(r"C:\logs\*.log", "\\")
    assert glob.match(r"C:\logs\app.log")
    assert not glob.match(r"C:\logs\old\app.log")
    # With a backslash separator a forward slash is an ordinary character.
    assert glob.match(r"C:\logs\a/b.log")


def test_injected_separator_changes_star_scope():
    glob = compile_glob("a:*:c", ":")
    assert glob.match("a:b/b:c")
    assert not glob.match("a:b:b:c")


def test_glob_keeps_pattern_and_separator():
    glob = compile_glob("/var/*", "/")
    assert glob.pattern == "/var/*"
    assert glob.separator == "/"


@pytest.mark.parametrize(
    ("pattern", "message", "position"),
    [
        ("/var/log/[unterminated", "unterminated character class", 9),
        ("/var/[]/x", "empty character class", 5),
        ("/var/[z-a]", "invalid range z-a", 5),
        ("/var/{a,b/*", "unterminated alternation", 5),
        ("/var/*\\", "dangling escape", 6),
    ],
)
def test_invalid_patterns(pattern: str, message: str, position: int):
    with pytest.raises(InvalidPatternError) as excinfo:
        compile_glob(pattern, "/")
    assert message in str(excinfo.value)
    assert excinfo.value.pattern == pattern
    assert excinfo.value.position == position


def test_invalid_pattern_is_value_error():
    with pytest.raises(ValueError):
        compile_glob("[", "/")


def test_separator_must_be_single_character():
    with pytest.raises(ValueError, match="single character"):
        compile_glob("*", "//")


@pytest.mark.parametrize("star", ["*", "**"])
def test_many_stars_match_in_bounded_time(star: str):
    glob = compile_glob("/" + f"{star}a" * 12 + "b", "/")
    start = time.perf_counter()
    assert not glob.match("/" + "a" * 40)
    assert glob.match("/" + "a" * 40 + "b")
    assert time.perf_counter() - start < 1.0


def test_alternations_with_stars_match_in_bounded_time():
    glob = compile_glob("/" + "{*a,*b,*c}" * 8 + "x", "/")
    start = time.perf_counter()
    assert not glob.match("/" + "abc" * 30)
    assert time.perf_counter() - start < 1.0


def test_empty_pattern_matches_only_empty_string():
    glob = compile_glob("", "/")
    assert glob.match("")
    assert not glob.match("a")
