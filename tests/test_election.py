
import sys
import os
import logging

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import rcvote.election
import rcvote.generate
from rcvote.ballot import InvalidBallotError
from rcvote.candidate import CandidateError, CapacityExceededError
from rcvote.election import Election, ElectionStateError, TallyState


def make_election(names, ballots, elimination='single', random_state=None):
    election = Election(
        len(names), elimination=elimination, random_state=random_state
    )
    for name in names:
        election.add_candidate(name)
    for ranks, n_times in ballots:
        for i in range(n_times):
            election.add_ballot(ranks)
    return election


# ranks by candidate index: a, b, c
SCENARIO_A = [
    ([1, 2, 3], 3),
    ([2, 1, 3], 2),
]
SCENARIO_B = [
    ([1, 2], 2),
    ([2, 1], 2),
]
SCENARIO_C = [
    ([1, 2, 3], 4),    # a > b > c
    ([3, 1, 2], 3),    # b > c > a
    ([3, 2, 1], 2),    # c > b > a
]
# a: 5, b: 4, c: 2, d: 2; single elimination elects d, simultaneous b
TIED_LOWEST = [
    ([1, 2, 3, 4], 5),    # a > b > c > d
    ([3, 1, 4, 2], 4),    # b > d > a > c
    ([4, 3, 1, 2], 2),    # c > d > b > a
    ([3, 2, 4, 1], 2),    # d > b > a > c
]


def test_scenario_a():
    election = make_election('abc', SCENARIO_A)
    assert election.results == {'a': 3, 'b': 2, 'c': 0}
    assert election.select_winner() == ['a']
    assert election.state is TallyState.WINNER_FOUND
    assert election.candidates[2].eliminated
    assert election.counts[0].totals == {'a': 3, 'b': 2}
    assert len(election.counts) == 1


def test_scenario_b_full_tie():
    election = make_election('ab', SCENARIO_B)
    assert election.select_winner() == ['a', 'b']
    assert election.state is TallyState.TIE_FOUND


def test_scenario_c_transfer_changes_leader():
    election = make_election('abc', SCENARIO_C)
    assert election.select_winner() == ['b']
    first, second = election.counts
    assert first.totals == {'a': 4, 'b': 3, 'c': 2}
    assert first.eliminated == ['c']
    # both ballots of c go to b as their next preference
    assert second.totals == {'a': 4, 'b': 3 + 2}
    assert second.eliminated == []


def test_majority_needs_more_than_half():
    election = make_election('abc', [
        ([1, 2, 3], 2),
        ([2, 1, 3], 1),
        ([3, 2, 1], 1),
    ])
    # 2 of 4 votes is not a majority
    assert election.majority_threshold == 2
    assert election.select_winner() == ['a']
    assert election.counts[0].totals == {'a': 2, 'b': 1, 'c': 1}
    assert election.counts[0].eliminated == ['b']
    assert election.counts[1].totals == {'a': 3, 'c': 1}


def test_odd_majority():
    election = make_election('ab', [([1, 2], 3), ([2, 1], 2)])
    assert election.majority_threshold == 2
    assert election.select_winner() == ['a']


def test_full_tie_three():
    election = make_election('abc', [
        ([1, 2, 3], 1),
        ([2, 1, 3], 1),
        ([2, 3, 1], 1),
    ])
    assert election.select_winner() == ['a', 'b', 'c']
    assert election.state is TallyState.TIE_FOUND


def test_tie_after_eliminations():
    election = make_election('abcd', [
        ([1, 2, 3, 4], 2),    # a > b > c > d
        ([2, 1, 3, 4], 2),    # b > a > c > d
        ([2, 3, 1, 4], 1),    # c > a > b > d
        ([3, 2, 4, 1], 1),    # d > b > a > c
    ])
    assert election.select_winner() == ['a', 'b']
    assert [count.eliminated for count in election.counts] == [
        ['c'], ['d'], []
    ]


def test_single_elimination_policy():
    election = make_election('abcd', TIED_LOWEST, elimination='single')
    assert election.select_winner() == ['d']
    assert [count.eliminated for count in election.counts] == [
        ['c'], ['b'], []
    ]
    assert election.counts[1].totals == {'a': 5, 'b': 4, 'd': 4}
    assert election.counts[2].totals == {'a': 5, 'd': 8}


def test_all_tied_elimination_policy():
    election = make_election('abcd', TIED_LOWEST, elimination='all_tied')
    assert election.select_winner() == ['b']
    assert [count.eliminated for count in election.counts] == [
        ['c', 'd'], []
    ]
    # ballots of c skip the simultaneously eliminated d
    assert election.counts[1].totals == {'a': 5, 'b': 8}


def test_custom_elimination_policy():
    def last_listed(bottom, rng):
        return bottom[-1:]
    election = make_election('abcd', TIED_LOWEST, elimination=last_listed)
    election.select_winner()
    assert election.counts[0].eliminated == ['d']


@pytest.mark.parametrize('random_state', [0, 7, 1711])
def test_random_elimination_reproducible(random_state):
    eliminated = []
    winners = []
    for i in range(2):
        election = make_election(
            'abcd', TIED_LOWEST,
            elimination='random_single', random_state=random_state
        )
        winners.append(election.select_winner())
        eliminated.append([count.eliminated for count in election.counts])
    assert eliminated[0] == eliminated[1]
    assert winners[0] == winners[1]
    assert eliminated[0][0] in (['c'], ['d'])


# a: 2, b: 1, c: 1; no majority, b and c lowest
NO_MAJORITY = [
    ([1, 2, 3], 2),
    ([2, 1, 3], 1),
    ([3, 2, 1], 1),
]


@pytest.mark.parametrize('policy', [
    lambda bottom, rng: [],
    lambda bottom, rng: [0],
])
def test_bad_elimination_policy(policy):
    election = make_election('abc', NO_MAJORITY, elimination=policy)
    with pytest.raises(ValueError):
        election.select_winner()
    assert election.state is TallyState.FAILED
    assert election.counts == []
    assert not any(cand.eliminated for cand in election.candidates)
    with pytest.raises(ElectionStateError):
        election.select_winner()


def test_zero_vote_pre_elimination_skipped_on_transfer():
    election = make_election('abcd', [
        ([1, 3, 2, 4], 2),    # a > c > b > d
        ([2, 1, 3, 4], 3),    # b > a > c > d
        ([2, 3, 4, 1], 3),    # d > a > b > c
    ])
    assert election.select_winner() == ['b']
    assert election.candidates[2].eliminated
    assert election.candidates[2].votes == 0
    # c was gone before the first count
    assert election.counts[0].totals == {'a': 2, 'b': 3, 'd': 3}
    assert election.counts[1].totals == {'b': 5, 'd': 3}
    assert not election.exhausted


def test_no_ballots_ties_all():
    election = make_election('abc', [])
    assert election.select_winner() == ['a', 'b', 'c']
    assert election.state is TallyState.TIE_FOUND
    assert not any(cand.eliminated for cand in election.candidates)


def test_single_candidate():
    election = make_election(['Alice'], [([1], 3)])
    assert election.select_winner() == ['Alice']


def test_names_returned_exactly():
    names = ['Alice Smith', 'bob', 'Číča']
    election = make_election(names, [([3, 2, 1], 2), ([1, 2, 3], 1)])
    assert election.select_winner() == ['Číča']


def test_top_bottom_ignore_eliminated():
    election = make_election('abc', SCENARIO_A)
    assert election.top_candidates() == [0]
    assert election.bottom_candidates() == [2]
    election.eliminate(2)
    assert election.active_candidates() == [0, 1]
    assert election.top_candidates() == [0]
    assert election.bottom_candidates() == [1]


def test_top_bottom_ties():
    election = make_election('abc', [
        ([1, 2, 3], 2),
        ([2, 1, 3], 2),
        ([2, 3, 1], 1),
    ])
    assert election.top_candidates() == [0, 1]
    assert election.bottom_candidates() == [2]


@pytest.mark.parametrize('ranks', [
    [1, 2],
    [1, 2, 3, 4],
    [1, 1, 2],
    [1, 2, 4],
    [0, 1, 2],
    ['a', 'b', 'c'],
])
def test_invalid_ballot_leaves_state(ranks):
    election = make_election('abc', SCENARIO_A)
    with pytest.raises(InvalidBallotError):
        election.add_ballot(ranks)
    assert election.n_voters == 5
    assert election.results == {'a': 3, 'b': 2, 'c': 0}


def test_conservation():
    data = rcvote.generate.BallotGenerator(5, random_state=42).generate(200)
    election = Election(5)
    for name in data.candidates:
        election.add_candidate(name)
    for i, ranks in enumerate(data.ballots):
        election.add_ballot(ranks)
        assert sum(election.results.values()) == i + 1
    assert election.n_voters == 200
    winners = election.select_winner()
    assert winners
    assert set(winners) <= set(data.candidates)


def test_capacity_exceeded():
    election = Election(2)
    assert election.add_candidate('a') == 0
    assert election.add_candidate('b') == 1
    with pytest.raises(CapacityExceededError):
        election.add_candidate('c')
    assert [cand.name for cand in election.candidates] == ['a', 'b']


def test_duplicate_candidate_name():
    election = Election(3)
    election.add_candidate('Smith')
    with pytest.raises(CandidateError) as excinfo:
        election.add_candidate('Smith')
    assert excinfo.value.candidate == 'Smith'
    assert 'duplicate' in str(excinfo.value)
    assert [cand.name for cand in election.candidates] == ['Smith']
    assert not election.is_sealed


def test_ballot_before_candidates():
    election = Election(2)
    election.add_candidate('a')
    with pytest.raises(ElectionStateError):
        election.add_ballot([1, 2])
    with pytest.raises(ElectionStateError):
        election.select_winner()
    assert election.n_voters == 0


def test_count_only_once():
    election = make_election('abc', SCENARIO_A)
    election.select_winner()
    with pytest.raises(ElectionStateError):
        election.select_winner()
    with pytest.raises(ElectionStateError):
        election.add_ballot([1, 2, 3])


@pytest.mark.parametrize(('n_candidates', 'error'), [
    (0, ValueError),
    (-2, ValueError),
    ('3', TypeError),
    (2.0, TypeError),
])
def test_bad_candidate_count(n_candidates, error):
    with pytest.raises(error):
        Election(n_candidates)


def test_exhausted_leave_majority_base():
    election = make_election('ab', [([1, 2], 1), ([2, 1], 2)])
    election.eliminate(0)
    released = election.eliminate(1)
    election.transfer(1, released)
    assert len(election.exhausted) == 2
    assert all(ballot.is_exhausted for ballot in election.exhausted)
    assert election.n_voters == 3
    assert election.n_active_voters == 1
    assert election.majority_threshold == 0


def test_count_logged(caplog):
    election = make_election('abc', SCENARIO_C)
    with caplog.at_level(logging.INFO, logger='rcvote.election'):
        election.select_winner()
    assert "eliminating ['c']" in caplog.text
