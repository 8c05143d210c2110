''' Program text grammar '''

import pyparsing as pp


ALLOWED = set(b'0123456789-,\n')

cell = pp.Regex('-?[0-9]+').set_parse_action(lambda r: int(r[0]))
separator = pp.Suppress(',')

# Trailing comma is tolerated, newlines are removed before parsing
program = (
    cell
    + pp.ZeroOrMore(separator + cell)
    + pp.Opt(separator)
    + pp.StringEnd()
).leave_whitespace()
