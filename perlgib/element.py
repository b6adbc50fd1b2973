"""Data model for the top-level syntax elements of a Perl source file."""

from dataclasses import dataclass

PACKAGE = "package"
ROUTINE = "routine"
INCLUDE = "include"
ATTRIBUTE = "attribute"
MODIFIER = "modifier"
COMMENT = "comment"
OTHER = "other"

PACKAGE_DOC_MARKER = "##!"
ITEM_DOC_MARKER = "###"


@dataclass(frozen=True)
class Element:
    """One top-level statement, comment or other token of a source file."""

    kind: str
    text: str
    name: str | None = None
    line: int = 0

    @property
    def marker(self) -> str | None:
        """Documentation marker of a comment element, if any."""
        if self.kind != COMMENT:
            return None
        return marker_kind(self.text)


def marker_kind(comment: str) -> str | None:
    """Classify a raw comment line by its documentation marker."""
    if comment.startswith(PACKAGE_DOC_MARKER):
        return PACKAGE_DOC_MARKER
    if comment.startswith(ITEM_DOC_MARKER):
        return ITEM_DOC_MARKER
    return None
