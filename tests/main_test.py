import io
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from unittest import mock

from lceval.main import main


class MainTestCase(unittest.TestCase):

    def setUp(self):
        patcher = mock.patch.dict(os.environ, {"NO_COLOR": "1"})
        patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(sys.setrecursionlimit, sys.getrecursionlimit())

    def run_main(self, *argv):
        with redirect_stdout(io.StringIO()) as out, redirect_stderr(io.StringIO()):
            main(list(argv))
        return out.getvalue()

    def test_expr(self):
        output = self.run_main("-e", "((λx. x) (λy. y))")
        self.assertEqual("Original term: ((λx. x) (λy. y))\nEvaluated term: λy. y\n", output)

    def test_expr_parse_error(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_main("-e", "(λx. x) (λy. y)")
        self.assertEqual(1, ctx.exception.code)

    def test_verbose(self):
        output = self.run_main("-v", "-e", "((λx. x) ((λy. y) z))")
        self.assertEqual(2, len([line for line in output.splitlines() if "β" in line]))

    def test_max_steps(self):
        output = self.run_main("--max-steps", "3", "-e", "((λx. (x x x)) (λx. (x x x)))")
        self.assertIn("no beta normal form within 3 steps", output)

        with self.assertRaises(SystemExit) as ctx:
            self.run_main("--max-steps", "100", "-e", "((λx. (x x)) (λx. (x x)))")
        self.assertEqual(1, ctx.exception.code)

    def test_invalid_max_steps(self):
        should_raise = ["-1", "ten", "1.5"]
        for case in should_raise:
            with self.assertRaises(SystemExit, msg=case) as ctx:
                self.run_main("--max-steps", case, "-e", "x")
            self.assertEqual(2, ctx.exception.code, case)

    def test_deep_nesting(self):
        output = self.run_main("-e", "(" * 400 + "x" + ")" * 400)
        self.assertEqual("Original term: x\nEvaluated term: x\n", output)

        chain = "(a " * 500 + "b" + ")" * 500
        output = self.run_main("-e", f"((λx. x) {chain})")
        self.assertIn(f"Evaluated term: {chain}\n", output)

    def test_expr_and_file(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_main("-e", "x", "terms.lc")
        self.assertEqual(2, ctx.exception.code)

    def test_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "terms.lc")
            with open(path, "w", encoding="utf-8") as file:
                file.write("(((λx. λy. x) a) b)\n(((λx. λy. y) a) b)\n")

            output = self.run_main(path)

        self.assertEqual(["Evaluated term: a", "Evaluated term: b"],
                         [line for line in output.splitlines() if line.startswith("Evaluated")])

    def test_missing_file(self):
        with self.assertRaises(SystemExit) as ctx:
            self.run_main(os.path.join(tempfile.gettempdir(), "does", "not", "exist.lc"))
        self.assertEqual(1, ctx.exception.code)


if __name__ == '__main__':
    unittest.main()
