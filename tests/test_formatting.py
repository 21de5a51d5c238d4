import pytest

from waitfor.formatting import (
    Example,
    example_commands,
    split_into_lines,
    wrap,
    wrap_single_line,
)

TEXT = (
    "wait-for allows you to wait for a resource to respond to requests.\n\n"
    "It does this by performing a connection to the specified host and port. "
    "If there's no resource behind it and the connection cannot be established, "
    "the request is retried until either the timeout is reached or the resource "
    "becomes available."
)


def test_split_into_lines_handles_both_endings():
    assert split_into_lines("a\r\nb\nc") == ["a", "b", "c"]


def test_split_into_lines_keeps_empty_lines():
    assert split_into_lines("a\n\nb") == ["a", "", "b"]


def test_wrap_single_line_empty():
    assert wrap_single_line("   ", 10) == ""


def test_wrap_single_line_respects_width():
    result = wrap_single_line(TEXT.split("\n")[2], 40)
    assert all(len(line) <= 40 for line in result.split("\n"))
    assert result.split() == TEXT.split("\n")[2].split()


def test_wrap_single_line_keeps_long_words_whole():
    word = "x" * 30
    result = wrap_single_line(f"a {word} b", 10)
    assert result.split("\n") == ["a", word, "b"]


def test_wrap_single_line_collapses_spaces_when_it_fits():
    assert wrap_single_line("  one   two  ", 80) == "one two"


def test_wrap_preserves_empty_lines():
    assert wrap("a\n\nb", 80) == "a\n\nb"


def test_wrap_blank_line_becomes_empty():
    assert wrap("a\n   \nb", 80) == "a\n\nb"


@pytest.mark.parametrize("width", [0, -5])
def test_wrap_non_positive_width_means_80(width):
    assert wrap(TEXT, width) == wrap(TEXT, 80)


def test_wrap_keeps_all_words_and_limits():
    result = wrap(TEXT, 30)
    assert result.split() == TEXT.split()
    assert all(len(line) <= 30 for line in result.split("\n"))
    assert "" in result.split("\n")


def test_example_commands_pinned():
    assert example_commands("wait-for", [Example("-s a", "x")]) == "  wait-for -s a     x"


def test_example_commands_aligns_helpers():
    examples = [
        Example("-s localhost:80", "wait for a web server to accept connections"),
        Example("--config targets.yaml", "load hosts and settings from a YAML file"),
        Example("-s udp://localhost:53", "wait for a DNS server to accept connections"),
    ]
    lines = example_commands("wait-for", examples).split("\n")
    assert len(lines) == len(examples)
    assert all(line.startswith("  wait-for ") for line in lines)
    columns = {line.index(ex.helper) for line, ex in zip(lines, examples)}
    assert len(columns) == 1
    assert all(line.endswith(ex.helper) for line, ex in zip(lines, examples))


def test_example_commands_empty():
    assert example_commands("wait-for", []) == ""