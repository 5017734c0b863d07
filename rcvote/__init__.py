"""rcvote - ranked-choice (instant-runoff) election counting.

An election is counted in the following steps:

-   The candidates are set up in an :class:`rcvote.election.Election` with
    a fixed number of candidate slots.
-   Ballots, complete rankings of all the candidates, are validated and added
    to the election. The ballot model and its validation live in the
    ``ballot`` module, candidates in the ``candidate`` module.
-   The election is counted by :meth:`rcvote.election.Election.select_winner`,
    eliminating the weakest candidates and transferring their ballots until
    somebody has a majority or all remaining candidates tie. How candidates
    tied for the fewest votes are eliminated is set by a policy from the
    :mod:`rcvote.component.elimination` module.

Ballot files can be read and written using the :mod:`rcvote.io` subpackage
and random ballots generated by the ``generate`` module.
"""
