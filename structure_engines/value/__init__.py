"""Value expressions: constants, variables and (random) function calls."""

from structure_engines.value.functions import Function, get_function, list_functions, register_function  # noqa: F401
from structure_engines.value.nodes import (  # noqa: F401
    Constant,
    FunctionCall,
    RandomAware,
    RandomFunctionCall,
    Value,
    VariableRef,
    VariableScope,
)
from structure_engines.value.parser import parse_value  # noqa: F401
