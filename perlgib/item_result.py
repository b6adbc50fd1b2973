"""Result markers separating deliberate omissions from failures."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Skip:
    """Item deliberately left out (private name or ignore directive)."""

    reason: str


@dataclass(frozen=True)
class Fail:
    """Item could not be built; fatal to the owning module."""

    reason: str
