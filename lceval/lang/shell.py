"""Handles interactive/command-line mode for lceval interpreter. Uses cmd as backend."""

import cmd

from lceval.lang.error import GenericException
from lceval.pure.lexical import parse


class Shell(cmd.Cmd):
    """Lambda calculus interpreter shell."""
    intro = "Lambda calculus interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continutations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Evaluates an arbitrary λ-term."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                self.sess.run(line, self.line_num)
                if self.sess.results:
                    self.sess.results.pop()  # nothing is kept between two lines

    def do_steps(self, arg):
        """steps [N|off]: stop evaluating after N beta reductions, or never stop (off). No argument shows the
        current limit.
        """
        with self.sess.error_handler:
            arg = arg.strip()
            if not arg:
                print(f"max steps: {self.sess.max_steps if self.sess.max_steps is not None else 'off'}")
            elif arg == "off":
                self.sess.max_steps = None
            elif arg.isdigit():
                self.sess.max_steps = int(arg)
            else:
                raise GenericException("steps expects a natural number or 'off', got '{}'", arg)

    def do_trace(self, arg):
        """trace [on|off]: print every reduction step."""
        with self.sess.error_handler:
            arg = arg.strip()
            if arg not in ("on", "off"):
                raise GenericException("trace expects 'on' or 'off', got '{}'", arg)
            self.sess.error_handler.verbose = arg == "on"

    def do_tree(self, arg):
        """tree TERM: display the syntax tree of TERM without evaluating it."""
        with self.sess.error_handler:
            print(parse(arg).display())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        if arg:
            return super().do_help(arg)
        print("Welcome to the lceval interpreter!\n\n"
              "Type a λ-term to see it reduced to its beta normal form. Every application must\n"
              "be parenthesized: try '((λx. x) (λy. y))', which evaluates to 'λy. y'.\n\n"
              "Other commands: steps [N|off], trace [on|off], tree TERM, exit. A variable that shares its name with\n"
              "a command is evaluated when it is parenthesized: '(exit)' evaluates to 'exit'.\n"
              "Press Ctrl-C to interrupt an evaluation that does not terminate.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
