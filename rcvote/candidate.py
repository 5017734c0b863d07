'''Election candidates.

A candidate holds the ballots currently counted for them; their number of
votes is always derived from those ballots. Candidates are never removed
from an election: an eliminated candidate keeps its index and name for the
record of the counts, but holds no ballots afterwards.
'''

from __future__ import annotations

from typing import Any, List, Optional

from rcvote.ballot import Ballot


class CandidateError(Exception):
    '''A candidate is invalid or was used in an invalid way.

    :param candidate: Candidate (or its name) that caused the error.
    :param reason: What is wrong with the candidate.
    '''
    def __init__(self, candidate: Any, reason: Optional[str] = None):
        self.candidate = candidate
        message = f'invalid candidate: {candidate}'
        if reason:
            message += f', {reason}'
        super().__init__(message)


class CapacityExceededError(CandidateError):
    '''More candidates were added than the election can hold.

    :param candidate: Name of the candidate that did not fit.
    :param capacity: Number of candidates declared for the election.
    '''
    def __init__(self, candidate: Any, capacity: int):
        self.capacity = capacity
        super().__init__(
            candidate,
            f'all {capacity} candidate slots already filled'
        )


class Candidate:
    '''A named contestant in the election.

    :param name: Name of the candidate as it should appear in the results.
    '''
    def __init__(self, name: str):
        self.name = name
        self.eliminated = False
        self.ballots: List[Ballot] = []

    @property
    def votes(self) -> int:
        '''Number of ballots currently counted for the candidate.'''
        return len(self.ballots)

    def add_ballot(self, ballot: Ballot) -> None:
        if self.eliminated:
            raise CandidateError(self.name, 'already eliminated')
        self.ballots.append(ballot)

    def eliminate(self) -> List[Ballot]:
        '''Eliminate the candidate and release their ballots.

        :returns: All ballots the candidate held; the candidate holds none
            afterwards.
        :raises CandidateError: If the candidate is already eliminated.
        '''
        if self.eliminated:
            raise CandidateError(self.name, 'already eliminated')
        self.eliminated = True
        drained, self.ballots = self.ballots, []
        return drained

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        state = 'eliminated' if self.eliminated else f'{self.votes} votes'
        return f'<Candidate {self.name!r}: {state}>'
