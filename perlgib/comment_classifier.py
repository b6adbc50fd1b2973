"""Classification of documentation comment blocks.

A block is the run of marker comments attached to one declaration. Each line
loses its marker and at most one following space. The first line may carry a
pseudo-directive such as ``#[ignore(item)]``; one fenced region (three
backticks, optional language tag on the opening fence) holds the test body.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass

from perlgib.item_result import Fail

IGNORE_DIRECTIVE = "#[ignore(item)]"
FENCE = "```"

DIRECTIVE_RE = re.compile(r"^#\[\s*[A-Za-z_]\w*\s*\(.*\)\s*\]$")
OPENING_FENCE_RE = re.compile(r"^```[\w+#.-]*$")


@dataclass(frozen=True)
class CommentBlock:
    """Description and optional test body decoded from a comment block."""

    description: str = ""
    test: str | None = None
    ignored: bool = False


def strip_marker(line: str, marker: str) -> str:
    """Remove the marker prefix and at most one leading space."""
    text = line.rstrip("\r\n")
    if text.startswith(marker):
        text = text[len(marker) :]
    if text.startswith(" "):
        text = text[1:]
    return text


def _trim_blank_edges(lines: list[str]) -> list[str]:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]


def classify_comment_block(
    comments: Sequence[str], marker: str
) -> CommentBlock | Fail:
    """Split raw comment lines into description and fenced test body."""
    lines = [strip_marker(c, marker) for c in comments]
    if not lines:
        return CommentBlock()

    first = lines[0].strip()
    if first == IGNORE_DIRECTIVE:
        return CommentBlock(ignored=True)
    if DIRECTIVE_RE.match(first):
        return Fail(f"Unknown comment directive {first!r}")

    description: list[str] = []
    body: list[str] = []
    in_fence = False
    seen_fence = False
    for line in lines:
        if in_fence:
            if line.rstrip() == FENCE:
                in_fence = False
            else:
                body.append(line)
            continue
        # Only the first fenced region is the test body.
        if not seen_fence and OPENING_FENCE_RE.match(line.rstrip()):
            in_fence = True
            seen_fence = True
            continue
        description.append(line)

    if in_fence:
        return Fail("Unterminated test fence in comment block")

    return CommentBlock(
        description="\n".join(_trim_blank_edges(description)),
        test="\n".join(body) if seen_fence else None,
    )
