"""Normal-order beta reduction of pure lambda calculus syntax trees.

The leftmost outermost redex is always reduced first. By the standardization theorem this finds the beta normal form
of a term whenever it has one; when it doesn't, evaluate simply never returns. Callers that can't afford that pass
max_steps, which turns evaluate into a bounded search that gives up with ReductionLimitExceeded (or NoNormalForm, if a
term repeats itself and reduction is provably stuck in a loop).

Substitution is capture-avoiding: binders that would capture a free variable of the substituted term are renamed to a
fresh name first, by appending a subscript (x, x₁, x₂, ...).

Source: http://pages.cs.wisc.edu/~horwitz/CS704-NOTES/1.LAMBDA-CALCULUS.html#NOR
"""

from lceval.lang.error import GenericException
from lceval.pure.term import Abstraction, Application, Variable, free_vars, split, subscript


class ReductionLimitExceeded(GenericException):
    """Raised when a bounded evaluation didn't reach a normal form. term is the partially reduced term."""

    def __init__(self, original, term, steps):
        self.original = original
        self.term = term
        self.steps = steps
        super().__init__(f"'{{}}' has no beta normal form within {steps} steps", str(original), diagnosis=False)


class NoNormalForm(GenericException):
    """Raised when a bounded evaluation reduces to a term it has already seen."""

    def __init__(self, original, steps):
        self.original = original
        self.steps = steps
        super().__init__("'{}' does not have a beta normal form", str(original), diagnosis=False)


def fresh_name(name, used):
    """Returns the next name that is like name but isn't in used. Only depends on its arguments."""
    base, __ = split(name)
    max_subscript = 0

    for other in used:
        other_base, other_subscript = split(other)
        if other_base == base and other_subscript > max_subscript:
            max_subscript = other_subscript

    return subscript(base, max_subscript + 1)


def substitute(term, name, replacement):
    """Returns term with all free occurrences of name replaced by replacement."""
    return _substitute(term, name, replacement, free_vars(replacement))


def _substitute(term, name, replacement, replacement_free):
    if isinstance(term, Variable):
        return replacement if term.name == name else term

    elif isinstance(term, Application):
        return Application(_substitute(term.func, name, replacement, replacement_free),
                           _substitute(term.arg, name, replacement, replacement_free))

    param, body = term.param, term.body
    if param == name or name not in free_vars(body):
        return term  # shadowed, or nothing to replace

    if param in replacement_free:
        new_param = fresh_name(param, free_vars(body) | replacement_free | {name})
        body = substitute(body, param, Variable(new_param))
        param = new_param

    return Abstraction(param, _substitute(body, name, replacement, replacement_free))


def is_redex(term):
    return isinstance(term, Application) and isinstance(term.func, Abstraction)


def reduce_step(term):
    """Performs a single normal-order beta reduction. Returns the reduced term, or None if term is in normal form."""
    if is_redex(term):
        return substitute(term.func.body, term.func.param, term.arg)

    elif isinstance(term, Application):
        func = reduce_step(term.func)
        if func is not None:
            return Application(func, term.arg)

        arg = reduce_step(term.arg)
        if arg is not None:
            return Application(term.func, arg)

    elif isinstance(term, Abstraction):
        body = reduce_step(term.body)
        if body is not None:
            return Abstraction(term.param, body)

    return None


def reductions(term):
    """Yields every term term reduces to, in order. Infinite if term has no normal form."""
    term = reduce_step(term)
    while term is not None:
        yield term
        term = reduce_step(term)


def evaluate(term, max_steps=None, on_step=None):
    """Returns the beta normal form of term.

    :param term: LambdaTerm to evaluate
    :param max_steps: give up after this many beta reductions (None: never give up)
    :param on_step: called with every intermediate term
    """
    result = term
    seen = {term} if max_steps is not None else None

    for steps, reduced in enumerate(reductions(term), 1):
        if seen is not None:
            if steps > max_steps:
                raise ReductionLimitExceeded(term, result, max_steps)
            if reduced in seen:
                raise NoNormalForm(term, steps)
            seen.add(reduced)

        result = reduced
        if on_step is not None:
            on_step(result)

    return result
