"""Parse expression text into Value trees."""
from __future__ import annotations

import logging
from random import Random
from typing import Collection, List, Mapping, Optional, Union

from lark import Lark, Token, Transformer, v_args
from lark.exceptions import LarkError, VisitError

from structure_engines.common.errors import (
    ExpressionError,
    ExpressionSyntaxError,
    UnknownFunctionError,
    UnresolvedVariableError,
)
from structure_engines.value.functions import get_function
from structure_engines.value.grammar import VALUE_GRAMMAR
from structure_engines.value.nodes import Constant, FunctionCall, Value, VariableRef

logger = logging.getLogger(__name__)

_PARSER = Lark(VALUE_GRAMMAR, parser="lalr", start="start", maybe_placeholders=True)

ValueSource = Union[str, int, float]


def _call(name: str, args: List[Value]) -> FunctionCall:
    function = get_function(name)
    if function is None:
        raise UnknownFunctionError(name)
    if not function.accepts(len(args)):
        raise UnknownFunctionError(
            name,
            f'Function "{name}" takes {function.arity_text()} argument(s), got {len(args)}',
        )
    return FunctionCall.create(function, args)


@v_args(inline=True)
class ValueTransformer(Transformer):
    """Builds Value nodes, checking names against the known variables."""

    def __init__(self, variables: Collection[str]):
        super().__init__()
        self.variables = variables

    def number(self, token: Token) -> Value:
        return Constant(float(token))

    def var(self, token: Token) -> Value:
        name = str(token)
        if name not in self.variables:
            raise UnresolvedVariableError(name)
        return VariableRef(name)

    def call(self, name: Token, args: Optional[List[Value]]) -> Value:
        return _call(str(name), args or [])

    def arguments(self, *items: Value) -> List[Value]:
        return list(items)

    def add(self, a: Value, b: Value) -> Value:
        return _call("add", [a, b])

    def sub(self, a: Value, b: Value) -> Value:
        return _call("sub", [a, b])

    def mul(self, a: Value, b: Value) -> Value:
        return _call("mul", [a, b])

    def div(self, a: Value, b: Value) -> Value:
        return _call("div", [a, b])

    def mod(self, a: Value, b: Value) -> Value:
        return _call("mod", [a, b])

    def pow(self, a: Value, b: Value) -> Value:
        return _call("pow", [a, b])

    def neg(self, a: Value) -> Value:
        if isinstance(a, Constant):
            return Constant(-a.value)
        return _call("neg", [a])


def parse_value(
    source: ValueSource,
    scope: Optional[Mapping[str, float]] = None,
    random: Optional[Random] = None,
) -> Value:
    """
    Parse ``source`` into a Value bound to ``scope`` and calculate it once.

    The first calculation runs here so that unknown names, bad arity and
    arithmetic errors surface while loading, before anything is drawn.
    """
    env: Mapping[str, float] = scope if scope is not None else {}
    if isinstance(source, bool):
        raise ExpressionSyntaxError(f"Expected a number or expression, got {source!r}")
    if isinstance(source, (int, float)):
        value: Value = Constant(source)
    else:
        text = str(source).strip()
        if not text:
            raise ExpressionSyntaxError("Empty expression", text)
        try:
            tree = _PARSER.parse(text)
        except LarkError as exc:
            raise ExpressionSyntaxError(f"Malformed expression {text!r}: {exc}", text) from exc
        try:
            value = ValueTransformer(env).transform(tree)
        except VisitError as exc:
            if isinstance(exc.orig_exc, ExpressionError):
                exc.orig_exc.expression = text
                raise exc.orig_exc from None
            raise
    value.bind(env)
    if random is not None:
        value.set_random_source(random)
    value.calculate()
    logger.debug("Parsed %r as %s", source, value)
    return value
