"""Text helpers for the command's help output."""

from __future__ import annotations

from dataclasses import dataclass


def split_into_lines(text):
    """Split text into lines, accepting both \\n and \\r\\n endings."""
    return text.replace("\r\n", "\n").split("\n")


def wrap_single_line(line, width):
    """Wrap one line to ``width`` columns without splitting words."""
    words = line.split()
    if not words:
        return ""
    lines = []
    current = words[0]
    for word in words[1:]:
        if len(current) + 1 + len(word) > width:
            lines.append(current)
            current = word
        else:
            current += " " + word
    lines.append(current)
    return "\n".join(lines)


def wrap(text, width):
    """Wrap text to ``width`` columns, keeping existing line breaks.

    A width of zero or less means 80.
    """
    if width <= 0:
        width = 80
    return "\n".join(
        wrap_single_line(line, width) if line.strip() else ""
        for line in split_into_lines(text)
    )


@dataclass(frozen=True)
class Example:
    """One usage example: the arguments and what they do."""

    command: str
    helper: str


def example_commands(cmdname, examples):
    """Render examples with their descriptions aligned in one column."""
    padding = max((len(example.command) for example in examples), default=0)
    return "\n".join(
        f"  {cmdname} {example.command} "
        f"{' ' * (padding - len(example.command) + 3)} {example.helper}"
        for example in examples
    )