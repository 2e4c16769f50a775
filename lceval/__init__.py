"""Untyped lambda calculus evaluator: parse a λ-term, reduce it to beta normal form, print it."""

from lceval.lang.error import (GenericException, InvalidApplication, InvalidLambda, InvalidVariable, ParseError,
                               UnexpectedCharacter, UnmatchedParenthesis)
from lceval.pure.lexical import parse
from lceval.pure.reduce import NoNormalForm, ReductionLimitExceeded, evaluate, substitute
from lceval.pure.term import Abstraction, Application, LambdaTerm, Variable, alpha_equals, free_vars, render
