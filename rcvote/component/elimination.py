'''Elimination policies deciding which of the weakest candidates drop out.

When several candidates are tied for the fewest votes, instant-runoff rules
differ on what to do. An elimination policy takes the indices of all
candidates tied for the lowest vote count (in index order) and a random
generator, and returns the indices of those to eliminate in the current
round. Policies that eliminate a single candidate and those that eliminate
the whole tied group are not equivalent and can produce different winners.

The random generator is owned by the election and seeded by its
``random_state``, so a count using a random policy can be reproduced.

All policies are assembled in the `POLICIES` dictionary keyed by their name.
`get()` retrieves from this dictionary by string key; `construct()` also
accepts callables and passes them through.
'''

import random
from typing import Callable, List

import rcvote.component.core


POLICIES = {}

EliminationPolicy = Callable[[List[int], random.Random], List[int]]


policy_mark, get, construct = rcvote.component.core.register_functions(
    POLICIES, 'elimination policy'
)


@policy_mark
def single(bottom: List[int], rng: random.Random) -> List[int]:
    '''Eliminate one of the tied candidates, the one listed first.'''
    return bottom[:1]


@policy_mark
def all_tied(bottom: List[int], rng: random.Random) -> List[int]:
    '''Eliminate all the tied candidates at once.'''
    return list(bottom)


@policy_mark
def random_single(bottom: List[int], rng: random.Random) -> List[int]:
    '''Eliminate one of the tied candidates chosen at random.'''
    return [rng.choice(bottom)] if bottom else []
