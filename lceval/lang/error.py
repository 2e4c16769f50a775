"""Error handling for the lceval interpreter. Only GenericExceptions should be encountered during running: if another
type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a lceval error/warning. exprs[0] is the
    offending input, start and end delimit the part of it that caused the error.
    """

    def __init__(self, msg, exprs=None, start=0, end=-1, diagnosis=True, internal=False):
        """Parses args for GenericException or warning."""
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]  # exprs[0] should be the offending expr that caused the error
        self.end = end if end != -1 else len(self.expr)  # needed for error display

        self.start = start
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and print custom lceval errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"
    STEP = "cyan"

    def __init__(self, fatal=True, verbose=False):
        self.fatal = fatal
        self.verbose = verbose
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called before a line is parsed and evaluated."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after a line was handled successfully."""
        self.traceback[path] = (None, None)

    def register_step(self, rule, term):
        """Prints a single reduction step when in verbose mode. term is only rendered if it is printed."""
        if self.verbose:
            print(colored(f"  {rule} ", ErrorHandler.STEP, attrs=["bold"]) + str(term))

    @staticmethod
    def diagnose(error, warning=False):
        """Returns offending part of error.expr highlighted and bolded."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        diagnosis = "  " + error.expr[:error.start]

        end = max(error.end, error.start + 1)
        diagnosis += colored(error.expr[error.start:end], color, attrs=["bold"])
        diagnosis += error.expr[end:] + "\n"

        diagnosis += "  " + " " * error.start
        diagnosis += colored("^" + "~" * (end - error.start - 1), color, attrs=["bold"])

        return diagnosis

    def _location(self):
        """Returns 'file:line: ' for the innermost registered line, or an empty string."""
        for file, (line, line_num) in reversed(list(self.traceback.items())):
            if line is not None:
                return f"{file}:{line_num}: "
        return ""

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args, or prints an existing GenericException as a
        warning.
        """
        if len(args) == 1 and isinstance(args[0], GenericException):
            error = args[0]
        else:
            error = GenericException(*args, **kwargs)

        error_msg = colored(self._location(), attrs=["bold"])
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg

        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException, and self.traceback must be a
        dict of file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # dicts are insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line}\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and error.expr and error.diagnosis:
            print(ErrorHandler.diagnose(error))

        if self.fatal:
            sys.exit(1)
        self.traceback = {}  # if error occurred, reset traceback (no need if error is fatal)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded, term is nested too deeply"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            msg = f"unknown error: '{exc_type.__name__}: {exc_val}'".replace("{", "{{").replace("}", "}}")
            self.throw(GenericException(msg, internal=True))
            do_exit = True

        return not do_exit


class ParseError(GenericException):
    """Raised when a string is not valid λ-term grammar. expr is the whole input, pos the index of the offending
    character (len(expr) if the input ended too early).
    """
    MSG = "invalid λ-term"

    def __init__(self, expr="", pos=0, char=None):
        self.pos = pos
        self.char = char
        exprs = [expr] if char is None else [expr, char]
        super().__init__(type(self).MSG, exprs, start=pos, end=pos + 1)


class UnexpectedCharacter(ParseError):
    MSG = "unexpected character '{1}'"

    def __init__(self, expr="", pos=0, char=None):
        if char is None and pos < len(expr):
            char = expr[pos]
        super().__init__(expr, pos, char if char is not None else "")


class UnmatchedParenthesis(ParseError):
    MSG = "unmatched parenthesis"


class InvalidLambda(ParseError):
    MSG = "invalid lambda expression"


class InvalidApplication(ParseError):
    MSG = "invalid application expression"


class InvalidVariable(ParseError):
    MSG = "invalid variable expression"
