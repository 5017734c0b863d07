'''Interchangeable parts of the tallying process.

Components are plain functions kept in named registers, so that they can be
selected by a string name (e.g. from the command line) or passed directly
as a custom callable.
'''
