"""Material registry, pickers and setters."""

from structure_engines.materials.registry import AIR, Material, MaterialRegistry, get_material_registry  # noqa: F401
from structure_engines.materials.pickers import (  # noqa: F401
    InnerOuterPicker,
    MaterialPicker,
    RandomInnerOuterPicker,
    RandomSimplePicker,
    SimplePicker,
    new_picker,
    register_picker,
)
from structure_engines.materials.setter import EmptyPolicy, MaterialSetter, load_material_setter  # noqa: F401
