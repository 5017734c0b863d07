"""A commandline tool to count ranked-choice (instant-runoff) elections.

Reads a ballot file (candidate count, candidate names, one ranking per line),
counts it and shows the result. Can also generate random ballot files.
"""

import argparse
import io
import logging
import sys
import warnings
from typing import Optional, List

import rcvote.component.elimination
import rcvote.generate
import rcvote.io.ballotfile
from rcvote.election import Election, TallyState
from rcvote.io.core import ElectionData

argparser = argparse.ArgumentParser(
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='file to load ballots from',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load ballots from standard input',
)
argparser.add_argument(
    '-e', '--elimination',
    default='single',
    choices=sorted(rcvote.component.elimination.POLICIES.keys()),
    help='how to eliminate candidates tied for the fewest votes',
)
argparser.add_argument(
    '-s', '--strict',
    action='store_true',
    help='fail on the first invalid ballot instead of skipping it',
)
argparser.add_argument(
    '-g', '--generate',
    nargs=2,
    type=int,
    metavar=('N_CANDIDATES', 'N_VOTERS'),
    help='generate a random ballot file instead of counting',
)
argparser.add_argument(
    '-o', '--output-file',
    default='election_data.txt',
    help='file to write generated ballots to',
)
argparser.add_argument(
    '-r', '--random-state',
    type=int,
    help='seed for generating ballots or for random eliminations',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all log messages of the count',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any log messages',
)


def main(input_file: Optional[io.TextIOBase] = None,
         use_stdin: bool = False,
         elimination: str = 'single',
         strict: bool = False,
         generate: Optional[List[int]] = None,
         output_file: str = 'election_data.txt',
         random_state: Optional[int] = None,
         verbose: bool = False,
         quiet: bool = False,
         ) -> Optional[List[str]]:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if generate:
        write_generated(*generate, output_file, random_state=random_state)
        return None
    if use_stdin:
        input_file = sys.stdin
    data = rcvote.io.ballotfile.load(input_file)
    if not data.ballots:
        warnings.warn('no ballots in input: all candidates will tie')
    show_setup(data)
    election = rcvote.io.ballotfile.to_election(
        data, elimination=elimination, strict=strict,
        random_state=random_state,
    )
    print()
    print('Counting...')
    winners = election.select_winner()
    print()
    show_counts(election)
    print()
    show_result(election, winners)
    return winners


def write_generated(n_candidates: int,
                    n_voters: int,
                    output_file: str,
                    random_state: Optional[int] = None,
                    ) -> None:
    """Write a file with random ballots."""
    generator = rcvote.generate.BallotGenerator(
        n_candidates, random_state=random_state
    )
    with open(output_file, 'w', encoding='utf8') as outfile:
        rcvote.io.ballotfile.dump(outfile, generator.generate(n_voters))
    print(f'Written {n_voters} ballots for {n_candidates} candidates'
          f' to {output_file}')


def show_setup(data: ElectionData) -> None:
    print(f'Received {data.n_voters} ballots')
    print(f'{data.n_candidates} candidates:')
    for name in data.candidates:
        print(' ' * 10 + name)


def show_counts(election: Election) -> None:
    """Show the vote totals of all counts of the election."""
    names = [cand.name for cand in election.candidates]
    n_just_chars = max(len(name) for name in names)
    for count in election.counts:
        print(f'Count {count.number}:')
        for name in names:
            if name in count.totals:
                print(' ', name.ljust(n_just_chars), ' ', count.totals[name])
        if count.eliminated:
            print('  eliminated:', ', '.join(count.eliminated))
        if count.n_exhausted:
            print('  exhausted ballots:', count.n_exhausted)


def show_result(election: Election, winners: List[str]) -> None:
    if election.state is TallyState.WINNER_FOUND:
        print('Elected', ' ', winners[0])
    else:
        print('Tied', ' ', ', '.join(winners))


if __name__ == '__main__':
    args = argparser.parse_args()
    if not args.input_file and not args.use_stdin and not args.generate:
        argparser.print_usage()
    else:
        main(**vars(args))
