"""Value expression trees."""
from __future__ import annotations

import abc
import math
from random import Random
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from structure_engines.common.errors import ExpressionError, UnresolvedVariableError
from structure_engines.value.functions import Function


class RandomAware(abc.ABC):
    """Capability of the nodes that draw from the shared random source."""

    @abc.abstractmethod
    def use_random(self, random: Random) -> None:
        pass


class Value(abc.ABC):
    """
    A node of an expression tree yielding a float.

    ``calculate`` walks the tree and caches the result at every node it visits;
    ``get_cached_value`` only reads the cache, so shapes can read sizes many
    times during a draw without resampling.
    """

    def __init__(self, children: Sequence["Value"] = ()):
        self._children: Tuple[Value, ...] = tuple(children)
        self._cached = 0.0
        self._scope: Optional[Mapping[str, float]] = None
        random_nodes: List[RandomAware] = []
        if isinstance(self, RandomAware):
            random_nodes.append(self)
        for child in self._children:
            random_nodes.extend(child.random_nodes)
        self._random_nodes: Tuple[RandomAware, ...] = tuple(random_nodes)

    @property
    def children(self) -> Tuple["Value", ...]:
        return self._children

    @property
    def random_nodes(self) -> Tuple[RandomAware, ...]:
        return self._random_nodes

    @property
    def is_random(self) -> bool:
        return bool(self._random_nodes)

    def bind(self, scope: Optional[Mapping[str, float]]) -> "Value":
        """Set the environment ``calculate`` uses when none is passed."""
        self._scope = scope
        return self

    @abc.abstractmethod
    def _compute(self, env: Mapping[str, float]) -> float:
        pass

    def evaluate(self, env: Mapping[str, float]) -> float:
        result = float(self._compute(env))
        if not math.isfinite(result):
            raise ExpressionError(f"{self.to_expression()} is not a finite number: {result}", self.to_expression())
        self._cached = result
        return result

    def calculate(self, env: Optional[Mapping[str, float]] = None) -> float:
        if env is None:
            env = self._scope if self._scope is not None else {}
        return self.evaluate(env)

    def get_cached_value(self) -> float:
        return self._cached

    def set_random_source(self, random: Random) -> None:
        for node in self._random_nodes:
            node.use_random(random)

    def walk(self) -> Iterator["Value"]:
        yield self
        for child in self._children:
            yield from child.walk()

    @abc.abstractmethod
    def to_expression(self) -> str:
        pass

    def __str__(self) -> str:
        return self.to_expression()


class Constant(Value):
    def __init__(self, value: float):
        super().__init__()
        self.value = float(value)
        self._cached = self.value

    def _compute(self, env: Mapping[str, float]) -> float:
        return self.value

    def to_expression(self) -> str:
        if self.value.is_integer():
            return str(int(self.value))
        return repr(self.value)

    def __repr__(self) -> str:
        return f"Constant({self.value!r})"


class VariableRef(Value):
    def __init__(self, name: str):
        super().__init__()
        self.name = name

    def _compute(self, env: Mapping[str, float]) -> float:
        if self.name not in env:
            raise UnresolvedVariableError(self.name)
        return env[self.name]

    def to_expression(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"VariableRef({self.name!r})"


class FunctionCall(Value):
    def __init__(self, function: Function, args: Sequence[Value]):
        self.function = function
        super().__init__(args)

    @staticmethod
    def create(function: Function, args: Sequence[Value]) -> "FunctionCall":
        if function.random:
            return RandomFunctionCall(function, args)
        return FunctionCall(function, args)

    def _apply(self, values: List[float]) -> float:
        return self.function.impl(*values)

    def _compute(self, env: Mapping[str, float]) -> float:
        values = [child.evaluate(env) for child in self._children]
        try:
            return self._apply(values)
        except (ArithmeticError, TypeError, ValueError) as exc:
            raise ExpressionError(f"{self.function.name}: {exc}", self.to_expression()) from exc

    def to_expression(self) -> str:
        args = ", ".join(child.to_expression() for child in self._children)
        return f"{self.function.name}({args})"

    def __repr__(self) -> str:
        return f"FunctionCall({self.function.name!r}, {list(self._children)!r})"


class RandomFunctionCall(FunctionCall, RandomAware):
    def __init__(self, function: Function, args: Sequence[Value]):
        self._random = Random()
        super().__init__(function, args)

    def use_random(self, random: Random) -> None:
        self._random = random

    def _apply(self, values: List[float]) -> float:
        return self.function.impl(self._random, *values)


class VariableScope(Mapping[str, float]):
    """
    Ordered table of named Values, readable as a mapping of their cached results.

    A variable may only reference variables declared before it, so calculating
    in declaration order always sees fresh inputs.
    """

    def __init__(self) -> None:
        self._values: Dict[str, Value] = {}

    def declare(self, name: str, value: Value) -> None:
        if name in self._values:
            raise ExpressionError(f'Variable "{name}" is declared twice')
        self._values[name] = value

    def get_value(self, name: str) -> Optional[Value]:
        return self._values.get(name)

    def items_values(self) -> Iterator[Tuple[str, Value]]:
        return iter(self._values.items())

    def calculate(self) -> None:
        for value in self._values.values():
            value.calculate(self)

    def set_random_source(self, random: Random) -> None:
        for value in self._values.values():
            value.set_random_source(random)

    def __getitem__(self, name: str) -> float:
        return self._values[name].get_cached_value()

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)
