"""Uses the pure lambda calculus implementation to evaluate λ-terms from a file, a single argument, or in command-line
mode. Also uses error handling context manager. Installed as the lceval executable script.
"""

import argparse
import sys

from lceval.lang.error import ErrorHandler
from lceval.lang.session import Session
from lceval.lang.shell import Shell

RECURSION_LIMIT = 10000  # parsing and reduction recurse once or more per level of nesting


def steps(value):
    """argparse type for --max-steps."""
    if not value.isdigit():
        raise argparse.ArgumentTypeError(f"expected a natural number, got '{value}'")
    return int(value)


def main(argv=None):
    """Runs lceval interpreter. Called from lceval executable script."""
    assert sys.version_info >= (3, 7), "lceval cannot be run with python < 3.7"

    sys.setrecursionlimit(max(sys.getrecursionlimit(), RECURSION_LIMIT))

    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="lceval", description="Untyped lambda calculus evaluator.")
        source = parser.add_mutually_exclusive_group()
        source.add_argument("file", help="file of λ-terms to evaluate, one per line (if empty, goes to command-line "
                                         "mode)", nargs="?")
        source.add_argument("-e", "--expr", help="evaluate a single λ-term and exit")
        parser.add_argument("--max-steps", type=steps, default=None,
                            help="give up after this many beta reductions (default: never)")
        parser.add_argument("-v", "--verbose", action="store_true", help="print every reduction step")
        args = parser.parse_args(argv)

        error_handler.verbose = args.verbose

        if args.expr is not None:
            Session(error_handler, Session.EXPR_FILE, args.max_steps).run(args.expr)

        elif args.file is not None:
            Session(error_handler, args.file, args.max_steps).load()

        else:
            error_handler.fatal = False
            Shell(Session(error_handler, Session.SH_FILE, args.max_steps)).cmdloop()


if __name__ == "__main__":
    main()
