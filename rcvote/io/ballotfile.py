"""Plain text ballot files.

The format is line-based:

-   The first line contains the number of candidates n.
-   The next n lines contain candidate names, one per line.
-   Every remaining line is a single ballot of n whitespace-separated
    integers; the i-th of them is the rank the voter gave to the i-th
    candidate (1 for the first preference).

Empty lines among the ballots are ignored. The rankings are not checked for
validity when parsing; the :class:`rcvote.election.Election` does that when
the ballots are added to it.
"""

import logging
from typing import Iterable, List, Optional, Tuple, Union

import rcvote.io.core
from rcvote.ballot import InvalidBallotError
from rcvote.component.elimination import EliminationPolicy
from rcvote.election import Election
from rcvote.io.core import ElectionData

logger = logging.getLogger(__name__)


class BallotFileParseError(rcvote.io.core.ParseError):
    pass


def load_lines(lines: Iterable[str]) -> ElectionData:
    lines = iter(lines)
    try:
        n_cands = _parse_header(next(lines))
    except StopIteration as e:
        raise BallotFileParseError('empty ballot file') from e
    candidates = _parse_names(lines, n_cands)
    ballots = [
        _parse_ballot(line, line_no)
        for line_no, line in enumerate(lines, start=n_cands + 2)
        if line.strip()
    ]
    return ElectionData(candidates, ballots)


load, loads = rcvote.io.core.loaders(load_lines)


def _parse_header(line: str) -> int:
    try:
        n_cands = int(line.strip())
    except ValueError as e:
        raise BallotFileParseError(
            f'need candidate count in ballot file header, got {line!r}'
        ) from e
    if n_cands < 1:
        raise BallotFileParseError(
            f'candidate count must be positive, got {n_cands}'
        )
    return n_cands


def _parse_names(lines: Iterable[str], n_cands: int) -> List[str]:
    names = []
    for line in lines:
        name = line.strip()
        if not name:
            raise BallotFileParseError(
                f'empty candidate name on line {len(names) + 2}'
            )
        names.append(name)
        if len(names) == n_cands:
            return names
    raise BallotFileParseError(
        f'not enough candidate names: {len(names)} given,'
        f' {n_cands} set in header'
    )


def _parse_ballot(line: str, line_no: int) -> Tuple[int, ...]:
    try:
        return tuple(int(token) for token in line.split())
    except ValueError as e:
        raise BallotFileParseError(
            f'invalid ballot on line {line_no}: {line.strip()!r}'
        ) from e


def dump_lines(data: ElectionData) -> Iterable[str]:
    yield str(data.n_candidates)
    for name in data.candidates:
        yield name
    for ranks in data.ballots:
        yield ' '.join(str(rank) for rank in ranks)


dump, dumps = rcvote.io.core.dumpers(dump_lines)


def to_election(data: ElectionData,
                elimination: Union[str, EliminationPolicy] = 'single',
                strict: bool = True,
                random_state: Optional[int] = None,
                ) -> Election:
    """Set up an election from loaded ballot file data.

    :param data: Candidates and ballots, e.g. from :func:`load`.
    :param elimination: Elimination policy for the election.
    :param strict: If True, raise on the first invalid ballot. If False,
        invalid ballots are rejected one by one with a warning and the rest
        are counted.
    :param random_state: Seed for random eliminations.
    :raises InvalidBallotError: In strict mode, if any ballot is invalid.
    """
    election = Election(
        data.n_candidates,
        elimination=elimination,
        random_state=random_state,
    )
    for name in data.candidates:
        election.add_candidate(name)
    n_rejected = 0
    for ranks in data.ballots:
        try:
            election.add_ballot(ranks)
        except InvalidBallotError as e:
            if strict:
                raise
            logger.warning('rejecting ballot: %s', e)
            n_rejected += 1
    if n_rejected:
        logger.warning('%d invalid ballots rejected', n_rejected)
    return election
