"""Generate random ballots for testing and simulations.

Every voter ranks all the candidates in a uniformly random order, so the
output is always a valid input for :class:`rcvote.election.Election`.
The result is an :class:`rcvote.io.core.ElectionData` object that can be
written out using :mod:`rcvote.io.ballotfile`.
"""

import random
import string
from typing import List, Optional, Tuple

from rcvote.io.core import ElectionData


def candidate_names(n_candidates: int) -> List[str]:
    '''Return letter names for candidates: a, b, ..., z, aa, ab...'''
    names = []
    for i in range(n_candidates):
        name = ''
        i += 1
        while i:
            i, rem = divmod(i - 1, len(string.ascii_lowercase))
            name = string.ascii_lowercase[rem] + name
        names.append(name)
    return names


class BallotGenerator:
    """Generate complete rankings in a uniformly random order.

    :param n_candidates: Number of candidates to rank.
    :param random_state: Seed for the random generator, for reproducible
        outputs.
    """
    def __init__(self,
                 n_candidates: int,
                 random_state: Optional[int] = None,
                 ):
        if n_candidates < 1:
            raise ValueError(
                f'need at least one candidate, got {n_candidates}'
            )
        self.n_candidates = n_candidates
        self._random = random.Random(random_state)

    def generate_ranks(self) -> Tuple[int, ...]:
        ranks = list(range(1, self.n_candidates + 1))
        self._random.shuffle(ranks)
        return tuple(ranks)

    def generate(self, n_voters: int) -> ElectionData:
        """Generate ballots of the given number of voters."""
        if n_voters < 0:
            raise ValueError(f'negative number of voters: {n_voters}')
        return ElectionData(
            candidates=candidate_names(self.n_candidates),
            ballots=[self.generate_ranks() for _ in range(n_voters)],
        )
