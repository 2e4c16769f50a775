"""Pure lambda calculus parser: turns a string into a syntax tree of LambdaTerms.

The accepted grammar is deliberately stricter than the usual lambda calculus notation:

```
<term>        ::= "(" <inner> ")" | <atom>
<inner>       ::= <abstraction> | <application>
<abstraction> ::= "λ" <identifier> "." <term>   ; the body is exactly one term: λx. (x y), not λx. x y
<application> ::= <term>+                       ; associating by left: (a b c d) = (((a b) c) d)
                                                ; a single term is just grouped: (a) = a
<atom>        ::= <identifier> | <abstraction>
<identifier>  ::= (<alphanumeric> | "_")+
```

Every application must be parenthesized: `(λx. x) (λy. y)` is rejected, `((λx. x) (λy. y))` is accepted. This
removes the need for any precedence rules, and the parser only ever needs to look at one character to decide what to
do next. Whitespace separates tokens and is otherwise ignored.

Parsing either consumes the whole input or raises one of the ParseError subclasses, which carry the input and the
position of the offending character.
"""

from functools import reduce

from lceval.lang.error import (InvalidApplication, InvalidLambda, InvalidVariable, ParseError, UnexpectedCharacter,
                               UnmatchedParenthesis)
from lceval.pure.term import LAMBDA, Abstraction, Application, Variable, is_identifier_char

__all__ = ["Parser", "parse", "ParseError", "UnexpectedCharacter", "UnmatchedParenthesis", "InvalidLambda",
           "InvalidApplication", "InvalidVariable"]

TOKENS = {
    "<open_paren>": "(",
    "<close_paren>": ")",
    "<period>": ".",
    "<lambda>": LAMBDA,
}


class Parser:
    """Recursive descent parser over a single string, with one character of lookahead."""

    def __init__(self, expr):
        self.expr = expr
        self.pos = 0

    def peek(self):
        """Returns the current character without consuming it, or None at end of input."""
        return self.expr[self.pos] if self.pos < len(self.expr) else None

    def next(self):
        """Consumes and returns the current character, or None at end of input."""
        char = self.peek()
        if char is not None:
            self.pos += 1
        return char

    def skip_whitespace(self):
        while self.peek() is not None and self.peek().isspace():
            self.pos += 1

    def at_term(self):
        """Whether or not the next token can begin a term."""
        self.skip_whitespace()
        char = self.peek()
        return char is not None and (char in (TOKENS["<open_paren>"], LAMBDA) or is_identifier_char(char))

    def term(self):
        """Parses a parenthesized group, an abstraction or a variable."""
        self.skip_whitespace()
        if self.peek() == TOKENS["<open_paren>"]:
            return self.group()
        return self.non_application_term()

    def group(self):
        """Parses "(" <inner> ")". A λ right after the opening parenthesis commits to an abstraction."""
        self.next()
        self.skip_whitespace()

        char = self.peek()
        if char is None:
            raise UnmatchedParenthesis(self.expr, self.pos)
        elif char == LAMBDA:
            term = self.abstraction()
        else:
            term = self.application()

        self.skip_whitespace()
        if self.peek() != TOKENS["<close_paren>"]:
            raise UnmatchedParenthesis(self.expr, self.pos)
        self.next()

        return term

    def application(self):
        """Parses one or more terms and associates them to the left."""
        terms = [self.term()]
        while self.at_term():
            terms.append(self.term())
        return reduce(Application, terms)

    def non_application_term(self):
        """Parses an abstraction or a variable. Applications are only reachable through group."""
        char = self.peek()
        if char == LAMBDA:
            return self.abstraction()
        elif char is not None and is_identifier_char(char):
            return Variable(self.identifier())
        elif char is None or char == TOKENS["<close_paren>"]:
            raise InvalidApplication(self.expr, self.pos)  # nothing to apply
        raise UnexpectedCharacter(self.expr, self.pos)

    def abstraction(self):
        """Parses "λ" <identifier> "." <term>."""
        if self.peek() != LAMBDA:
            raise UnexpectedCharacter(self.expr, self.pos, LAMBDA)
        self.next()

        self.skip_whitespace()
        try:
            param = self.identifier()
        except InvalidVariable as err:
            raise InvalidLambda(self.expr, err.pos) from err

        self.skip_whitespace()
        if self.peek() != TOKENS["<period>"]:
            raise InvalidLambda(self.expr, self.pos)
        self.next()

        return Abstraction(param, self.term())

    def identifier(self):
        """Consumes the longest run of identifier characters."""
        start = self.pos
        while self.peek() is not None and is_identifier_char(self.peek()):
            self.pos += 1

        if self.pos == start:
            raise InvalidVariable(self.expr, self.pos)
        return self.expr[start:self.pos]


def parse(expr):
    """Converts expr to a LambdaTerm. The whole of expr must be a single term, otherwise a ParseError is raised."""
    parser = Parser(expr)
    term = parser.term()

    parser.skip_whitespace()
    if parser.peek() is not None:
        raise InvalidApplication(expr, parser.pos)  # trailing input, e.g. an unparenthesized application

    return term
