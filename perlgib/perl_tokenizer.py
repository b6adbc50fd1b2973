"""Logic for splitting Perl source into top-level syntax elements.

This is a lightweight scanner, not a Perl parser. It recognizes statement
boundaries (``;`` at nesting depth zero or the closing brace of a block
statement) while skipping strings, quote-like operators, simple regexes,
heredocs and POD, which is enough to find package, sub, use and Moose
declarations together with the comments between them. Whitespace is dropped,
so blank lines never separate a comment from its declaration.
"""

import re

from perlgib.element import (
    ATTRIBUTE,
    COMMENT,
    INCLUDE,
    MODIFIER,
    OTHER,
    PACKAGE,
    ROUTINE,
    Element,
)

WORD_RE = re.compile(r"[A-Za-z_]\w*(?:::\w+)*")
PACKAGE_RE = re.compile(r"package\s+([A-Za-z_][\w:]*)(?:\s+v?[\d._]+)?\s*([;{])")
SUB_RE = re.compile(r"sub\s+([A-Za-z_][\w:]*)")
INCLUDE_RE = re.compile(r"(?:use|no|require)\b\s*([A-Za-z_][\w:]*)?")
DECLARATION_NAME_RE = re.compile(
    r"""\s*\(?\s*(?:\[\s*)?(?:qw\s*[^\w\s]\s*)?['"]?(\+?\w+)"""
)
HEREDOC_RE = re.compile(r"""<<(~?)(?:"([^"\n]*)"|'([^'\n]*)'|([A-Za-z_]\w*))""")
POD_START_RE = re.compile(r"=[A-Za-z]")
POD_END_RE = re.compile(r"^=cut\b.*$", re.MULTILINE)
DATA_RE = re.compile(r"__(?:END|DATA)__\b")
REGEX_CONTEXT_RE = re.compile(
    r"(?:=~|!~|[(,!{;]|&&|\|\||\b(?:split|grep|map|and|or|not|if|unless|return))"
    r"\s*$"
)
ELSE_RE = re.compile(r"\s*(?:else|elsif|continue)\b")
LABEL_RE = re.compile(r"[A-Za-z_]\w*\s*:(?!:)\s*(?:([A-Za-z_]\w*)|(?=\{))")

BLOCK_KEYWORDS = frozenset(
    {
        "sub",
        "BEGIN",
        "END",
        "INIT",
        "CHECK",
        "UNITCHECK",
        "if",
        "unless",
        "while",
        "until",
        "for",
        "foreach",
    }
)
MODIFIER_KEYWORDS = frozenset({"before", "after", "around", "override", "augment"})
QUOTE_OPERATORS = {"q": 1, "qq": 1, "qw": 1, "qr": 1, "m": 1, "s": 2, "tr": 2, "y": 2}
BRACKETS = {"(": ")", "[": "]", "{": "}", "<": ">"}
SPECIAL_VARIABLE_CHARS = "'\"`#;&!@/\\,.0123456789$<>[]|^:?"


class PerlTokenizer:
    """Splits Perl source into the ordered list of top-level elements."""

    def tokenize(self, source: str) -> list[Element]:
        """Scan the whole source and return its top-level elements."""
        elements: list[Element] = []
        n = len(source)
        i = 0
        line = 1
        counted = 0
        while i < n:
            ch = source[i]
            if ch.isspace():
                i += 1
                continue

            line += source.count("\n", counted, i)
            counted = i
            at_line_start = i == 0 or source[i - 1] == "\n"

            if ch == "#":
                end = _line_end(source, i)
                text = source[i:end].rstrip("\r")
                elements.append(Element(COMMENT, text, line=line))
                i = end
                continue
            if at_line_start and POD_START_RE.match(source, i):
                end = _pod_end(source, i)
                elements.append(Element(OTHER, source[i:end].rstrip(), line=line))
                i = end
                continue
            if at_line_start and DATA_RE.match(source, i):
                break

            package = PACKAGE_RE.match(source, i)
            if package:
                # Block packages keep their body at the top level.
                elements.append(
                    Element(
                        PACKAGE,
                        f"package {package.group(1)}",
                        name=package.group(1),
                        line=line,
                    )
                )
                i = package.end()
                continue

            end, body = self._statement_end(source, i)
            elements.append(self._classify(source, i, end, body, line))
            i = end
        return elements

    def _classify(
        self, source: str, start: int, end: int, body: int | None, line: int
    ) -> Element:
        text = source[start:end].strip()
        word = WORD_RE.match(source, start)
        keyword = word.group(0) if word else ""

        if keyword == "sub":
            sub = SUB_RE.match(source, start)
            if sub:
                signature = source[start:body] if body is not None else text
                return Element(
                    ROUTINE,
                    _collapse(signature.rstrip().rstrip(";")),
                    name=sub.group(1),
                    line=line,
                )
        if keyword in {"use", "no", "require"}:
            include = INCLUDE_RE.match(source, start)
            name = include.group(1) if include else None
            return Element(INCLUDE, text, name=name, line=line)
        if word and (keyword == "has" or keyword in MODIFIER_KEYWORDS):
            declared = DECLARATION_NAME_RE.match(source, word.end())
            if declared:
                kind = ATTRIBUTE if keyword == "has" else MODIFIER
                return Element(
                    kind,
                    _call_signature(text),
                    name=declared.group(1).lstrip("+"),
                    line=line,
                )
        return Element(OTHER, text, line=line)

    def _statement_end(self, source: str, start: int) -> tuple[int, int | None]:
        """Find the end of the statement starting at ``start``.

        Returns the end offset and the offset of the first top-level ``{``
        (the body of a block statement), if any.
        """
        n = len(source)
        word = WORD_RE.match(source, start)
        keyword = word.group(0) if word else ""
        label = LABEL_RE.match(source, start)
        if label and (label.group(1) is None or label.group(1) in BLOCK_KEYWORDS):
            # OUTER: for ... { } or BLOCK: { }
            keyword = label.group(1) or ""
        else:
            label = None
        block_statement = (
            keyword in BLOCK_KEYWORDS
            or label is not None
            or source.startswith("{", start)
        )

        depth = 0
        body: int | None = None
        heredocs: list[tuple[str, bool]] = []
        j = start
        while j < n:
            c = source[j]
            if c == "\n":
                j += 1
                if heredocs:
                    j = _skip_heredocs(source, j, heredocs)
                    heredocs = []
                if POD_START_RE.match(source, j):
                    j = _pod_end(source, j)
                continue
            if c == "#":
                j = _line_end(source, j)
                continue
            if c == "$" and j + 1 < n and source[j + 1] in SPECIAL_VARIABLE_CHARS:
                j += 2
                continue
            if c in "'\"`":
                j = _find_close(source, j + 1, c, c)
                continue
            if c == "<" and source.startswith("<<", j):
                heredoc = HEREDOC_RE.match(source, j)
                if heredoc:
                    tag = heredoc.group(2) or heredoc.group(3) or heredoc.group(4)
                    heredocs.append((tag, bool(heredoc.group(1))))
                    j = heredoc.end()
                    continue
            if c == "/" and REGEX_CONTEXT_RE.search(source, max(start, j - 32), j):
                j = _skip_delimited(source, j, 1)
                continue
            if c.isalpha() or c == "_":
                w = WORD_RE.match(source, j)
                end = w.end() if w else j + 1
                quoted = self._quote_like(source, j, end)
                j = quoted if quoted is not None else end
                continue
            if c in "([{":
                depth += 1
                if c == "{" and depth == 1 and body is None:
                    body = j
            elif c in ")]}":
                depth -= 1
                if depth < 0:
                    # Stray closer, e.g. the end of a block package.
                    return (j + 1 if j == start else j), None
                if c == "}" and depth == 0 and block_statement:
                    if keyword == "sub" or not ELSE_RE.match(source, j + 1):
                        return j + 1, body
            elif c == ";" and depth == 0:
                end = j + 1
                if heredocs:
                    end = _skip_heredocs(source, _line_end(source, end) + 1, heredocs)
                    end = min(end, n)
                return end, body
            j += 1
        return n, body

    def _quote_like(self, source: str, start: int, end: int) -> int | None:
        """Skip a quote-like operator (``q``, ``qw``, ``s``...) if present."""
        parts = QUOTE_OPERATORS.get(source[start:end])
        if parts is None:
            return None
        if start > 0 and source[start - 1] in "$@%&*>:":
            return None
        if source[max(0, start - 8) : start].rstrip().endswith(("sub", "->")):
            return None
        k = end
        while k < len(source) and source[k] in " \t":
            k += 1
        if k >= len(source):
            return None
        delimiter = source[k]
        if delimiter.isalnum() or delimiter.isspace() or delimiter in "=,;)]}>_":
            return None
        if delimiter == "#" and k != end:
            return None
        return _skip_delimited(source, k, parts)


def _collapse(text: str) -> str:
    return " ".join(text.split())


def _call_signature(text: str) -> str:
    """Head of a declaration call, e.g. ``has 'name'`` or ``around 'run'``."""
    head = re.split(r"=>|,|;", text, maxsplit=1)[0]
    return _collapse(head).rstrip("( ")


def _line_end(source: str, start: int) -> int:
    end = source.find("\n", start)
    return len(source) if end == -1 else end


def _pod_end(source: str, start: int) -> int:
    cut = POD_END_RE.search(source, start)
    return len(source) if cut is None else cut.end()


def _find_close(source: str, start: int, opener: str, closer: str) -> int:
    """Return the offset just past the matching closer."""
    depth = 1
    k = start
    while k < len(source):
        c = source[k]
        if c == "\\":
            k += 2
            continue
        if c == closer:
            depth -= 1
            if depth == 0:
                return k + 1
        elif c == opener and opener != closer:
            depth += 1
        k += 1
    return len(source)


def _skip_delimited(source: str, start: int, parts: int) -> int:
    """Skip ``parts`` delimited sections starting at ``start`` plus modifiers."""
    k = start
    for part in range(parts):
        if k >= len(source):
            return k
        opener = source[k]
        closer = BRACKETS.get(opener, opener)
        k = _find_close(source, k + 1, opener, closer)
        if part + 1 < parts:
            if opener in BRACKETS:
                while k < len(source) and source[k].isspace():
                    k += 1
            else:
                k -= 1
    while k < len(source) and source[k].isalpha():
        k += 1
    return k


def _skip_heredocs(source: str, start: int, heredocs: list[tuple[str, bool]]) -> int:
    """Skip heredoc bodies starting at the line after their introducer."""
    k = start
    for tag, indented in heredocs:
        while k < len(source):
            end = _line_end(source, k)
            body_line = source[k:end]
            k = min(end + 1, len(source))
            if (body_line.strip() if indented else body_line.rstrip("\r")) == tag:
                break
    return k
