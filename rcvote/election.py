'''Ranked-choice (instant-runoff) election tally.

An :class:`Election` is set up with a fixed number of candidates, which are
then named one by one. Ballots (complete rankings, see :mod:`rcvote.ballot`)
are added afterwards; each is immediately given to the candidate it ranks
first. :meth:`Election.select_winner` then performs the count:

1.  Candidates with no first-preference votes at all are eliminated
    right away.
2.  If a single candidate has more than half of the votes of the voters
    whose ballots are still in play, they win.
3.  If all the remaining candidates have the same number of votes, they are
    all returned as tied.
4.  Otherwise, the candidate(s) with the fewest votes are eliminated and each
    of their ballots goes to its next preference still in the race. Ballots
    with no such preference are exhausted and no longer counted, not even in
    the majority threshold. Steps 2 to 4 then repeat.

Which of several candidates tied for the fewest votes are eliminated is
determined by an elimination policy from
:mod:`rcvote.component.elimination`.

The count consumes the election; it cannot be run twice.
'''

import dataclasses
import enum
import logging
import random
from typing import Dict, List, Optional, Union

import rcvote.ballot
import rcvote.component.elimination
from rcvote.ballot import Ballot, RanksType
from rcvote.candidate import Candidate, CandidateError, CapacityExceededError
from rcvote.component.elimination import EliminationPolicy

logger = logging.getLogger(__name__)


class ElectionStateError(Exception):
    '''The election was used out of the order of its lifecycle.

    E.g. ballots added before all candidates are known, or the count
    run twice.
    '''
    pass


class TallyState(enum.Enum):
    SETUP = 'setup'
    RUNNING = 'running'
    WINNER_FOUND = 'winner found'
    TIE_FOUND = 'tie found'
    FAILED = 'failed'


@dataclasses.dataclass
class Count:
    '''A record of a single round of the count.'''
    number: int
    totals: Dict[str, int]
    eliminated: List[str] = dataclasses.field(default_factory=list)
    n_exhausted: int = 0


class Election:
    '''A ranked-choice election with a fixed slate of candidates.

    :param n_candidates: Number of candidates standing in the election.
    :param elimination: Elimination policy for candidates tied for the fewest
        votes, either a name from
        :data:`rcvote.component.elimination.POLICIES` or a custom callable.
        The default eliminates one candidate per round.
    :param random_state: Seed for the random generator handed to the
        elimination policy, so that random eliminations are reproducible.
    '''
    def __init__(self,
                 n_candidates: int,
                 elimination: Union[str, EliminationPolicy] = 'single',
                 random_state: Optional[int] = None,
                 ):
        if isinstance(n_candidates, bool) or not isinstance(n_candidates, int):
            raise TypeError(
                f'number of candidates must be int, got {n_candidates!r}'
            )
        if n_candidates < 1:
            raise ValueError(
                f'election needs at least one candidate, got {n_candidates}'
            )
        self.n_candidates = n_candidates
        self.elimination = rcvote.component.elimination.construct(elimination)
        self._random = random.Random(random_state)
        self.candidates: List[Candidate] = []
        self.n_voters = 0
        self.exhausted: List[Ballot] = []
        self.counts: List[Count] = []
        self.state = TallyState.SETUP
        self.winners: Optional[List[str]] = None

    @property
    def is_sealed(self) -> bool:
        '''Whether all candidate slots are filled.'''
        return len(self.candidates) == self.n_candidates

    @property
    def n_active_voters(self) -> int:
        '''Number of ballots still counted for some candidate.'''
        return self.n_voters - len(self.exhausted)

    @property
    def majority_threshold(self) -> int:
        '''Number of votes a candidate must exceed to win outright.'''
        return self.n_active_voters // 2

    @property
    def results(self) -> Dict[str, int]:
        '''Current vote counts of the candidates still in the race.'''
        return {
            cand.name: cand.votes for cand in self.candidates
            if not cand.eliminated
        }

    def add_candidate(self, name: str) -> int:
        '''Add the next candidate to the election.

        :param name: Name of the candidate.
        :returns: Index of the new candidate, which ballots refer to.
        :raises CapacityExceededError: If all candidate slots are filled.
        :raises CandidateError: If a candidate of the same name exists.
        '''
        if self.is_sealed:
            raise CapacityExceededError(name, self.n_candidates)
        if any(cand.name == name for cand in self.candidates):
            raise CandidateError(name, 'duplicate name')
        self.candidates.append(Candidate(name))
        return len(self.candidates) - 1

    def add_ballot(self, ranks: RanksType) -> Ballot:
        '''Validate a ballot and count it for its first preference.

        The election state is not changed if the ballot is invalid.

        :param ranks: Numeric ranks of the candidates, by candidate index;
            must be a permutation of 1 to the number of candidates.
        :returns: The ballot created.
        :raises InvalidBallotError: If the ranks are not a valid ranking.
        :raises ElectionStateError: If not all candidates were added yet or
            the election was already counted.
        '''
        if self.state is not TallyState.SETUP:
            raise ElectionStateError('cannot add ballots after the count')
        if not self.is_sealed:
            raise ElectionStateError(
                f'only {len(self.candidates)} of {self.n_candidates}'
                ' candidates added, cannot accept ballots yet'
            )
        rcvote.ballot.validate_ranks(ranks, self.n_candidates)
        ballot = Ballot(ranks)
        self.n_voters += 1
        self._assign(ballot)
        return ballot

    def _assign(self, ballot: Ballot) -> None:
        # skip over preferences that dropped out before the ballot got here
        top = ballot.top_candidate
        while top is not None and self.candidates[top].eliminated:
            ballot.eliminate_candidate(top)
            top = ballot.top_candidate
        if top is None:
            logger.debug('ballot %s exhausted', ballot)
            self.exhausted.append(ballot)
        else:
            self.candidates[top].add_ballot(ballot)

    def active_candidates(self) -> List[int]:
        '''Indices of candidates not eliminated yet.'''
        return [
            i for i, cand in enumerate(self.candidates) if not cand.eliminated
        ]

    def top_candidates(self) -> List[int]:
        '''Indices of active candidates tied for the most votes.'''
        return self._tied_at(max)

    def bottom_candidates(self) -> List[int]:
        '''Indices of active candidates tied for the fewest votes.'''
        return self._tied_at(min)

    def _tied_at(self, extreme) -> List[int]:
        active = self.active_candidates()
        if not active:
            return []
        target = extreme(self.candidates[i].votes for i in active)
        return [i for i in active if self.candidates[i].votes == target]

    def eliminate(self, index: int) -> List[Ballot]:
        '''Eliminate a candidate, returning their ballots for transfer.'''
        return self.candidates[index].eliminate()

    def transfer(self, index: int, ballots: List[Ballot]) -> None:
        '''Pass ballots of an eliminated candidate to their next preferences.

        :param index: Index of the eliminated candidate the ballots came from.
        :param ballots: The ballots released by the candidate.
        '''
        for ballot in ballots:
            ballot.eliminate_candidate(index)
            self._assign(ballot)

    def select_winner(self) -> List[str]:
        '''Count the votes and determine the winner.

        :returns: A list with the name of the winner, or names of all
            candidates tied at the end of the count (in the order they were
            added).
        :raises ElectionStateError: If not all candidates were added or the
            count has already been run.
        :raises ValueError: If the elimination policy chooses candidates
            that are not tied for the fewest votes; the election is then
            left in the failed state.
        '''
        if self.state is TallyState.FAILED:
            raise ElectionStateError('election count has failed')
        if self.state is not TallyState.SETUP:
            raise ElectionStateError('election has already been counted')
        if not self.is_sealed:
            raise ElectionStateError(
                f'only {len(self.candidates)} of {self.n_candidates}'
                ' candidates added, cannot count'
            )
        self.state = TallyState.RUNNING
        logger.info(
            'counting %d ballots for %d candidates',
            self.n_voters, self.n_candidates
        )
        self._eliminate_unsupported()
        while self.state is TallyState.RUNNING:
            self._next_count()
        logger.info('result (%s): %s', self.state.value, self.winners)
        return list(self.winners)

    def _eliminate_unsupported(self) -> None:
        if self.n_voters == 0:
            logger.warning('no ballots cast, all candidates tie')
            return
        for i, cand in enumerate(self.candidates):
            if cand.votes == 0:
                logger.info('%s has no votes, eliminated', cand.name)
                self.eliminate(i)

    def _next_count(self) -> None:
        count = Count(number=len(self.counts) + 1, totals=self.results)
        logger.info('count %d totals: %s', count.number, count.totals)
        top = self.top_candidates()
        n_active = len(self.active_candidates())
        threshold = self.majority_threshold
        if len(top) == 1 and self.candidates[top[0]].votes > threshold:
            self.counts.append(count)
            logger.info(
                '%s has a majority (%d > %d)',
                self.candidates[top[0]].name,
                self.candidates[top[0]].votes,
                threshold
            )
            self._finish(TallyState.WINNER_FOUND, top)
        elif len(top) == n_active:
            self.counts.append(count)
            self._finish(TallyState.TIE_FOUND, top)
        else:
            to_eliminate = self._choose_eliminated(self.bottom_candidates())
            self.counts.append(count)
            released = {i: self.eliminate(i) for i in to_eliminate}
            count.eliminated = [self.candidates[i].name for i in released]
            logger.info('eliminating %s', count.eliminated)
            for i, ballots in released.items():
                logger.debug(
                    'transferring %d ballots of %s',
                    len(ballots), self.candidates[i].name
                )
                self.transfer(i, ballots)
            count.n_exhausted = len(self.exhausted)

    def _choose_eliminated(self, bottom: List[int]) -> List[int]:
        to_eliminate = self.elimination(bottom, self._random)
        if not to_eliminate or not set(to_eliminate) <= set(bottom):
            self.state = TallyState.FAILED
            raise ValueError(
                f'elimination policy chose {to_eliminate!r}'
                f' from lowest candidates {bottom!r}'
            )
        return list(to_eliminate)

    def _finish(self, state: TallyState, indices: List[int]) -> None:
        self.state = state
        self.winners = [self.candidates[i].name for i in indices]

    def __repr__(self) -> str:
        return (
            f'<Election {len(self.candidates)}/{self.n_candidates} candidates,'
            f' {self.n_voters} voters, {self.state.value}>'
        )
