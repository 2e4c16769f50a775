"""Pure lambda calculus syntax tree.

Formally, pure lambda calculus can be defined as

```
<λ-term> ::= <identifier>               ; "variable"
                                        ; - alphanumeric character(s) or underscores, case-sensitive
           | "λ" <identifier> "." <λ-term>  ; "abstraction"
           | "(" <λ-term> <λ-term> ")"  ; "application"
                                        ; - always parenthesized when rendered: ((a b) c)
```

Terms are immutable values: reduction never updates a node, it builds a new tree. Two terms compare equal if they have
the same shape and the same identifier spellings; use alpha_equals to ignore the choice of bound names.

Sources: https://plato.stanford.edu/entries/lambda-calculus/#Com,
         http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from dataclasses import dataclass

from lceval.lang.error import GenericException, InvalidVariable

LAMBDA = "λ"
SUBS = ["₀", "₁", "₂", "₃", "₄", "₅", "₆", "₇", "₈", "₉"]


def is_identifier_char(char):
    """Whether or not char may appear in an identifier. Subscript digits count as alphanumeric, λ does not."""
    return (char.isalnum() or char == "_") and char != LAMBDA


def is_identifier(name):
    return isinstance(name, str) and bool(name) and all(is_identifier_char(char) for char in name)


def check_identifier(name):
    """Raises InvalidVariable if name is not a valid identifier."""
    if not is_identifier(name):
        name = str(name)
        pos = next((idx for idx, char in enumerate(name) if not is_identifier_char(char)), len(name))
        raise InvalidVariable(name, pos)


class LambdaTerm:
    """Superclass of the three λ-term variants. Defines rendering and debugging helpers shared by all of them."""

    @property
    def nodes(self):
        """Direct sub-terms, left to right."""
        return ()

    def display(self, indents=0):
        """Recursively displays the syntax tree with readable format.

        Format:
        <LambdaTerm>(expr='<expr>', nodes=[
            <LambdaTerm>(expr='<expr>', nodes=[
                ...
                <LambdaTerm>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{type(self).__name__}(expr='{render(self)}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __str__(self):
        return render(self)


@dataclass(frozen=True)
class Variable(LambdaTerm):
    """Variable in lambda calculus: a bound or free reference to name."""
    name: str

    def __post_init__(self):
        check_identifier(self.name)


@dataclass(frozen=True)
class Abstraction(LambdaTerm):
    """Abstraction: binds param in body."""
    param: str
    body: LambdaTerm

    def __post_init__(self):
        check_identifier(self.param)

    @property
    def nodes(self):
        return (self.body,)


@dataclass(frozen=True)
class Application(LambdaTerm):
    """Application of func to arg."""
    func: LambdaTerm
    arg: LambdaTerm

    @property
    def nodes(self):
        return self.func, self.arg


def render(term):
    """Returns term in canonical notation. Applications are always parenthesized, abstractions only when they are an
    operand of an application, so that parsing the result gives back the same tree.
    """
    if isinstance(term, Variable):
        return term.name
    elif isinstance(term, Abstraction):
        return f"{LAMBDA}{term.param}. {render(term.body)}"
    elif isinstance(term, Application):
        return f"({_render_operand(term.func)} {_render_operand(term.arg)})"
    raise GenericException(f"unknown error: '{type(term).__name__}' is not a λ-term", internal=True)


def _render_operand(term):
    if isinstance(term, Abstraction):
        return f"({render(term)})"
    return render(term)


def free_vars(term):
    """Returns a frozenset of names that occur free in term."""
    if isinstance(term, Variable):
        return frozenset([term.name])
    elif isinstance(term, Abstraction):
        return free_vars(term.body) - {term.param}
    return free_vars(term.func) | free_vars(term.arg)


def alpha_equals(term, other, mapping=None, other_mapping=None):
    """Whether or not two terms are alpha-equivalent. mapping represents map between term's binders and other's binders
    (innermost last), other_mapping is similar to mapping but from perspective of other. Free variables must match by
    name.
    """
    if mapping is None:
        mapping = {}
    if other_mapping is None:
        other_mapping = {}

    if isinstance(term, Variable) and isinstance(other, Variable):
        bound, other_bound = mapping.get(term.name), other_mapping.get(other.name)
        if not bound and not other_bound:
            return term.name == other.name
        return bool(bound) and bool(other_bound) and bound[-1] == other.name and other_bound[-1] == term.name

    elif isinstance(term, Abstraction) and isinstance(other, Abstraction):
        mapping.setdefault(term.param, []).append(other.param)
        other_mapping.setdefault(other.param, []).append(term.param)
        try:
            return alpha_equals(term.body, other.body, mapping, other_mapping)
        finally:
            mapping[term.param].pop()
            other_mapping[other.param].pop()

    elif isinstance(term, Application) and isinstance(other, Application):
        return (alpha_equals(term.func, other.func, mapping, other_mapping)
                and alpha_equals(term.arg, other.arg, mapping, other_mapping))

    return False


def subscript(name, num):
    """Returns name with subscript of num."""
    return name + "".join(SUBS[int(digit)] for digit in str(num))


def split(name):
    """Splits name into base and subscript (-1 if there is none)."""
    digits = []
    while len(name) > 1 and name[-1] in SUBS:
        digits.insert(0, SUBS.index(name[-1]))
        name = name[:-1]
    return name, int("".join(str(digit) for digit in digits)) if digits else -1
