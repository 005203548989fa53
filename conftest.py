import sys
from pathlib import Path
import os
from structure_engines.materials.registry import MaterialRegistry, set_material_registry
from structure_engines.structures import routes as iwgo_routes

# Ensure repo root on sys.path for imports from anywhere in tests tree.
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

os.environ.setdefault("IWGO_FOLDER", "/tmp/iwgos-test")
os.environ.pop("IWGO_DEFAULT_SEED", None)
set_material_registry(MaterialRegistry())
iwgo_routes.set_manager(None)
