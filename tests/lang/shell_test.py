import io
import os
import unittest
from contextlib import redirect_stdout
from unittest import mock

from lceval.lang.error import ErrorHandler
from lceval.lang.session import Session
from lceval.lang.shell import Shell
from lceval.pure.lexical import parse


class ShellTestCase(unittest.TestCase):

    def setUp(self):
        patcher = mock.patch.dict(os.environ, {"NO_COLOR": "1"})
        patcher.start()
        self.addCleanup(patcher.stop)

        self.sess = Session(ErrorHandler(fatal=False), Session.SH_FILE)
        self.shell = Shell(self.sess, stdout=io.StringIO())

    def onecmd(self, line):
        with redirect_stdout(io.StringIO()) as out:
            stop = self.shell.onecmd(line)
        return stop, out.getvalue()

    def test_default(self):
        stop, output = self.onecmd("((λx. x) (λy. y))")
        self.assertFalse(stop)
        self.assertEqual("Original term: ((λx. x) (λy. y))\nEvaluated term: λy. y\n", output)

    def test_variable_line(self):
        __, output = self.onecmd("x")
        self.assertEqual("Original term: x\nEvaluated term: x\n", output)

    def test_errors_do_not_stop_the_shell(self):
        stop, output = self.onecmd("(λx. x) (λy. y)")
        self.assertFalse(stop)
        self.assertIn("invalid application expression", output)

        __, output = self.onecmd("((λx. x) y)")
        self.assertIn("Evaluated term: y", output)

    def test_line_continuation(self):
        __, output = self.onecmd("((λx. x)")
        self.assertEqual("", output)
        self.assertEqual(Shell.secondary_prompt, self.shell.prompt)

        __, output = self.onecmd("y)")
        self.assertIn("Evaluated term: y", output)
        self.assertEqual(Shell._tmp_prompt, self.shell.prompt)
        self.assertEqual([], self.sess.results)

    def test_results_are_not_kept(self):
        for __ in range(50):
            stop, output = self.onecmd("((λx. x) y)")
            self.assertFalse(stop)
            self.assertIn("Evaluated term: y", output)
        self.assertEqual([], self.sess.results)

    def test_steps(self):
        self.onecmd("steps 5")
        self.assertEqual(5, self.sess.max_steps)

        __, output = self.onecmd("steps")
        self.assertEqual("max steps: 5\n", output)

        __, output = self.onecmd("((λx. (x x)) (λx. (x x)))")
        self.assertIn("does not have a beta normal form", output)

        self.onecmd("steps off")
        self.assertIsNone(self.sess.max_steps)

        __, output = self.onecmd("steps many")
        self.assertIn("steps expects a natural number or 'off'", output)
        self.assertIsNone(self.sess.max_steps)

    def test_trace(self):
        self.onecmd("trace on")
        self.assertTrue(self.sess.error_handler.verbose)

        __, output = self.onecmd("((λx. x) y)")
        self.assertIn("β y", output)

        self.onecmd("trace off")
        self.assertFalse(self.sess.error_handler.verbose)

        __, output = self.onecmd("trace maybe")
        self.assertIn("trace expects 'on' or 'off'", output)

    def test_tree(self):
        __, output = self.onecmd("tree (a b)")
        self.assertTrue(output.startswith("Application(expr='(a b)', nodes=["), output)
        self.assertEqual([], self.sess.results)

        __, output = self.onecmd("tree (a b")
        self.assertIn("unmatched parenthesis", output)

    def test_help(self):
        __, output = self.onecmd("help")
        self.assertIn("((λx. x) (λy. y))", output)

    def test_emptyline(self):
        self.onecmd("x")
        stop, output = self.onecmd("")
        self.assertFalse(stop)
        self.assertEqual("", output)

    def test_exit(self):
        self.assertTrue(self.onecmd("exit")[0])
        self.assertTrue(self.onecmd("EOF")[0])

    def test_command_names_as_terms(self):
        cases = ["exit", "EOF", "help", "steps", "trace", "tree"]
        for case in cases:
            stop, output = self.onecmd(f"({case})")
            self.assertFalse(stop, case)
            self.assertEqual(f"Original term: {case}\nEvaluated term: {case}\n", output)

        __, output = self.onecmd("help")
        self.assertIn("(exit)", output)


if __name__ == '__main__':
    unittest.main()
