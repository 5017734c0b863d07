'''Ballot model and ballot validation.

A ballot is a complete ranking of all candidates of an election, given as
a sequence of numeric ranks: the value at position ``i`` is the rank of the
candidate with index ``i`` (1 being the best). A valid ballot is therefore
a permutation of the numbers 1 to n, where n is the number of candidates.

Ballots are immutable in their rankings, but keep track of which candidates
were eliminated from consideration, so that they can always report their top
remaining candidate. Once all ranked candidates are eliminated, the ballot is
exhausted and cannot be counted for anybody.

If a ranking is invalid, :func:`validate_ranks` raises
:class:`InvalidBallotError` (a subclass of :class:`BallotError`).
'''

import abc
from numbers import Integral
from typing import Any, Optional, Sequence, Tuple, FrozenSet


RanksType = Sequence[int]


class BallotError(Exception, metaclass=abc.ABCMeta):
    '''A ballot is invalid or was used in an invalid way.'''
    pass


class InvalidBallotError(BallotError):
    '''A ballot ranking is not a permutation of 1 to n.

    :param ranks: The ranking found to be invalid.
    :param n_candidates: Number of candidates the ranking should cover.
    :param reason: What exactly is wrong with the ranking.
    '''
    def __init__(self,
                 ranks: Any,
                 n_candidates: int,
                 reason: Optional[str] = None,
                 ):
        self.ranks = ranks
        self.n_candidates = n_candidates
        self.reason = reason
        message = f'invalid ballot: {ranks!r}'
        if reason:
            message += f', {reason}'
        super().__init__(message)


def validate_ranks(ranks: RanksType, n_candidates: int) -> None:
    '''Check that the ranking is a permutation of 1 to n_candidates.

    :param ranks: Numeric ranks of candidates, by candidate index.
    :param n_candidates: Number of candidates in the election.
    :raises InvalidBallotError: If the ranking has a wrong length, contains
        a non-integer, out-of-range or duplicate rank.
    '''
    try:
        n_ranks = len(ranks)
    except TypeError as e:
        raise InvalidBallotError(ranks, n_candidates, 'not a sequence') from e
    if n_ranks != n_candidates:
        raise InvalidBallotError(
            ranks, n_candidates,
            f'has {n_ranks} ranks, must have {n_candidates}'
        )
    seen = set()
    for rank in ranks:
        if isinstance(rank, bool) or not isinstance(rank, Integral):
            raise InvalidBallotError(
                ranks, n_candidates, f'non-integer rank {rank!r}'
            )
        if not 1 <= rank <= n_candidates:
            raise InvalidBallotError(
                ranks, n_candidates,
                f'rank {rank} out of range 1 to {n_candidates}'
            )
        if rank in seen:
            raise InvalidBallotError(
                ranks, n_candidates, f'duplicate rank {rank}'
            )
        seen.add(rank)


def is_valid(ranks: RanksType, n_candidates: int) -> bool:
    '''Return True if the ranking is a permutation of 1 to n_candidates.'''
    try:
        validate_ranks(ranks, n_candidates)
    except InvalidBallotError:
        return False
    else:
        return True


class Ballot:
    '''A single voter's complete ranking of the candidates.

    The ranking is not validated here; use :func:`validate_ranks` first
    (the election does that when ingesting ballots).

    :param ranks: Numeric ranks of candidates, by candidate index; the
        candidate with rank 1 is the first preference.
    '''
    def __init__(self, ranks: RanksType):
        self.ranks: Tuple[int, ...] = tuple(int(rank) for rank in ranks)
        self.preferences: Tuple[int, ...] = tuple(sorted(
            range(len(self.ranks)),
            key=self.ranks.__getitem__
        ))
        self._eliminated = set()
        self._cursor = 0

    @property
    def top_candidate(self) -> Optional[int]:
        '''Index of the best ranked candidate not yet eliminated.

        None if the ballot is exhausted.
        '''
        if self._cursor < len(self.preferences):
            return self.preferences[self._cursor]
        else:
            return None

    @property
    def is_exhausted(self) -> bool:
        '''Whether all the ranked candidates were eliminated.'''
        return self._cursor >= len(self.preferences)

    @property
    def eliminated(self) -> FrozenSet[int]:
        '''Indices of candidates eliminated from this ballot.'''
        return frozenset(self._eliminated)

    def eliminate_candidate(self, index: int) -> None:
        '''Remove the candidate from consideration on this ballot.

        If the candidate is the current top candidate, the ballot advances to
        its next remaining preference (or becomes exhausted).

        :param index: Index of the candidate to eliminate.
        :raises IndexError: If there is no such candidate on the ballot.
        '''
        if not 0 <= index < len(self.ranks):
            raise IndexError(f'candidate index {index} not on ballot')
        self._eliminated.add(index)
        while (
            self._cursor < len(self.preferences)
            and self.preferences[self._cursor] in self._eliminated
        ):
            self._cursor += 1

    def __repr__(self) -> str:
        return f'<Ballot {list(self.ranks)}, top: {self.top_candidate}>'
