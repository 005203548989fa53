from structure_engines.structures.instruction import Instruction, InstructionState  # noqa: F401
from structure_engines.structures.iwgo import IWGO  # noqa: F401
from structure_engines.structures.manager import IWGOManager  # noqa: F401
