"""Shared functionality for ballot file I/O. Internal."""

from __future__ import annotations

import dataclasses
from typing import Callable, Iterable, List, TextIO, Tuple


class ParseError(Exception):
    """An input that is invalid according to the given format was detected."""
    pass


@dataclasses.dataclass
class ElectionData:
    """Candidate names and ballot rankings of a single election."""
    candidates: List[str]
    ballots: List[Tuple[int, ...]] = dataclasses.field(default_factory=list)

    @property
    def n_candidates(self) -> int:
        return len(self.candidates)

    @property
    def n_voters(self) -> int:
        return len(self.ballots)


def loaders(line_loader: Callable[..., ElectionData]
            ) -> Tuple[Callable[..., ElectionData],
                       Callable[..., ElectionData]]:
    """Create load() and loads() functions from a line parsing function."""

    def load(file: TextIO, **kwargs) -> ElectionData:
        return line_loader(file, **kwargs)

    def loads(text: str, **kwargs) -> ElectionData:
        return line_loader(iter(text.split('\n')), **kwargs)

    return load, loads


def dumpers(line_dumper: Callable[..., Iterable[str]]
            ) -> Tuple[Callable[..., None], Callable[..., str]]:
    """Create dump() and dumps() functions from a line generator function."""

    def dump(file: TextIO, *args, **kwargs) -> None:
        for line in line_dumper(*args, **kwargs):
            file.write(line + '\n')

    def dumps(*args, **kwargs) -> str:
        return ''.join(
            line + '\n' for line in line_dumper(*args, **kwargs)
        )

    return dump, dumps
