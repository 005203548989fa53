"""Function table for Value expressions.

Operators are ordinary functions (``a + b`` is ``add(a, b)``), so the
evaluator only knows one kind of composite node. Random functions receive the
shared random source as their first argument.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from random import Random
from typing import Callable, Dict, List, Optional


@dataclass(frozen=True)
class Function:
    name: str
    impl: Callable[..., float]
    min_args: int
    max_args: int
    random: bool = False

    def accepts(self, count: int) -> bool:
        return self.min_args <= count <= self.max_args

    def arity_text(self) -> str:
        if self.min_args == self.max_args:
            return str(self.min_args)
        return f"{self.min_args}..{self.max_args}"


_FUNCTIONS: Dict[str, Function] = {}


def register_function(
    name: str,
    impl: Callable[..., float],
    min_args: int,
    max_args: Optional[int] = None,
    random: bool = False,
) -> Function:
    function = Function(
        name=name,
        impl=impl,
        min_args=min_args,
        max_args=min_args if max_args is None else max_args,
        random=random,
    )
    _FUNCTIONS[name] = function
    return function


def get_function(name: str) -> Optional[Function]:
    return _FUNCTIONS.get(name)


def list_functions() -> List[str]:
    return sorted(_FUNCTIONS)


# --- Arithmetic ---

def _div(a: float, b: float) -> float:
    if b == 0:
        raise ZeroDivisionError("division by zero")
    return a / b


def _mod(a: float, b: float) -> float:
    if b == 0:
        raise ZeroDivisionError("modulo by zero")
    return math.fmod(a, b)


def _pow(a: float, b: float) -> float:
    return math.pow(a, b)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


# --- Random ---

def _rand(rng: Random, *bounds: float) -> float:
    if not bounds:
        return rng.random()
    if len(bounds) == 1:
        return rng.random() * bounds[0]
    low, high = bounds
    return low + (high - low) * rng.random()


def _randint(rng: Random, low: float, high: float) -> float:
    lo, hi = int(low), int(high)
    if lo > hi:
        lo, hi = hi, lo
    return float(rng.randint(lo, hi))


def _chance(rng: Random, percent: float) -> float:
    return 1.0 if rng.randrange(100) < percent else 0.0


def _gauss(rng: Random, mean: float, deviation: float) -> float:
    return rng.gauss(mean, deviation)


register_function("add", lambda a, b: a + b, 2)
register_function("sub", lambda a, b: a - b, 2)
register_function("mul", lambda a, b: a * b, 2)
register_function("div", _div, 2)
register_function("mod", _mod, 2)
register_function("pow", _pow, 2)
register_function("neg", lambda a: -a, 1)

register_function("min", lambda *values: min(values), 1, 16)
register_function("max", lambda *values: max(values), 1, 16)
register_function("abs", abs, 1)
register_function("floor", lambda a: float(math.floor(a)), 1)
register_function("ceil", lambda a: float(math.ceil(a)), 1)
register_function("round", lambda a: float(round(a)), 1)
register_function("sqrt", math.sqrt, 1)
register_function("sin", math.sin, 1)
register_function("cos", math.cos, 1)
register_function("clamp", _clamp, 3)

register_function("rand", _rand, 0, 2, random=True)
register_function("randint", _randint, 2, random=True)
register_function("chance", _chance, 1, random=True)
register_function("gauss", _gauss, 2, random=True)
