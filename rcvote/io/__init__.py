"""Input/output of election data files.

This subpackage is structured into modules by file format. The only format
supported so far is the plain ballot file of :mod:`rcvote.io.ballotfile`.
"""
