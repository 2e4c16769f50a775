"""Session control for the lceval interpreter. Reads λ-terms one line at a time, either from the command-line or from a
file, then parses, evaluates and prints them. Nothing is shared between two lines: every line gets its own tree.
"""

from lceval.lang.error import GenericException
from lceval.pure.lexical import parse
from lceval.pure.reduce import ReductionLimitExceeded, evaluate


class Session:
    """Governs a lceval session: where lines come from, and how far evaluation may go."""
    SH_FILE = "<in>"      # command-line interpreter filename
    EXPR_FILE = "<expr>"  # filename for a single expression given as an argument
    COMMENT = ";;"

    def __init__(self, error_handler, path=SH_FILE, max_steps=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path            # used for error messages
        self.max_steps = max_steps  # None evaluates without bound
        self.line_num = 0

        self.results = []  # list of (original, evaluated) LambdaTerms

    @staticmethod
    def preprocess_line(line, add_to_prev=""):
        """Preprocesses a line from a file or command-line. add_to_prev is a previous unfinished line that line
        continues. Returns updated value of line and whether or not it is still unfinished (unbalanced parentheses).
        """
        if Session.COMMENT in line:
            line = line[:line.index(Session.COMMENT)]  # get rid of comments

        line = f"{add_to_prev} {line.strip()}".strip() if add_to_prev else line.strip()
        return line, line.count("(") > line.count(")")

    def run(self, line, line_num=None):
        """Parses and evaluates a single line, printing the original and evaluated terms. Empty lines are ignored.
        Returns the evaluated LambdaTerm, or None if line was empty.
        """
        line, __ = Session.preprocess_line(line)
        if not line:
            return None

        self.line_num = line_num if line_num is not None else self.line_num + 1
        self.error_handler.register_line(self.path, line, self.line_num)  # in case error is raised

        term = parse(line)
        print(f"Original term: {term}")

        try:
            on_step = self._step if self.error_handler.verbose else None
            result = evaluate(term, self.max_steps, on_step)
        except ReductionLimitExceeded as exc:
            self.error_handler.warn(exc)
            result = exc.term
            print(f"Partially evaluated term: {result}")
        else:
            print(f"Evaluated term: {result}")

        self.results.append((term, result))
        self.error_handler.remove_line(self.path)  # error was not raised
        return result

    def load(self):
        """Runs every line of the file at self.path. Lines with unbalanced parentheses continue on the next line."""
        try:
            with open(self.path, "r", encoding="utf-8") as file:
                lines = file.readlines()
        except OSError:
            raise GenericException("'{}' could not be opened", self.path, diagnosis=False)

        tmp_line = ""
        for line_num, line in enumerate(lines, 1):
            line, add_to_prev = Session.preprocess_line(line, tmp_line)
            if add_to_prev:
                tmp_line = line
            else:
                tmp_line = ""
                self.run(line, line_num)

        if tmp_line:
            self.run(tmp_line, len(lines))  # reports the missing parenthesis

        return self.results

    def _step(self, term):
        self.error_handler.register_step("β", term)
