"""Discovers and loads IWGO blueprint files from a folder."""
from __future__ import annotations

import logging
import os
from typing import Dict, List, Optional

import yaml

from structure_engines.common.errors import IWGOLoadingError, LoadingError
from structure_engines.materials.registry import MaterialRegistry
from structure_engines.structures.iwgo import IWGO

logger = logging.getLogger(__name__)

BLUEPRINT_EXTENSIONS = (".yml", ".yaml")


class IWGOManager:
    """
    Keeps the IWGOs loaded from one folder, keyed by name.

    A file that fails to load is skipped with a warning; the others still load.
    When two files declare the same name, the one loaded later wins.
    """

    def __init__(self, folder: str, auto_create: bool = False, registry: Optional[MaterialRegistry] = None):
        self.folder = folder
        self.auto_create = auto_create
        self.registry = registry
        self._iwgos: Dict[str, IWGO] = {}

    def load_iwgos(self) -> int:
        """Scan the folder and load every blueprint file. Returns how many loaded."""
        if not os.path.isdir(self.folder):
            if self.auto_create:
                os.makedirs(self.folder, exist_ok=True)
                logger.info("Created IWGO folder %s", self.folder)
            else:
                logger.warning("IWGO folder %s does not exist", self.folder)
            return 0

        loaded = 0
        for filename in sorted(os.listdir(self.folder)):
            if filename.startswith(".") or not filename.lower().endswith(BLUEPRINT_EXTENSIONS):
                continue
            path = os.path.join(self.folder, filename)
            if not os.path.isfile(path):
                continue
            try:
                iwgo = self.load_iwgo_file(path)
            except (LoadingError, yaml.YAMLError, OSError) as e:
                logger.warning("Skipping IWGO file %s: %s", path, e, exc_info=True)
                continue
            if iwgo.name in self._iwgos:
                logger.warning("IWGO %s from %s replaces an earlier definition", iwgo.name, path)
            self._iwgos[iwgo.name] = iwgo
            loaded += 1
        logger.info("Loaded %d IWGO(s) from %s", loaded, self.folder)
        return loaded

    def load_iwgo_file(self, path: str) -> IWGO:
        """Parse and load one blueprint file. The name defaults to the file name."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        stem = os.path.splitext(os.path.basename(path))[0]
        if not isinstance(data, dict):
            raise IWGOLoadingError(f'IWGO file "{path}" does not contain a mapping')
        return IWGO(stem, self.registry).load(data)

    def unload_iwgos(self) -> None:
        self._iwgos.clear()

    def reload_iwgos(self) -> int:
        self.unload_iwgos()
        return self.load_iwgos()

    def get_iwgo(self, name: str) -> Optional[IWGO]:
        return self._iwgos.get(name)

    def get_iwgo_map(self) -> Dict[str, IWGO]:
        return dict(self._iwgos)

    def list_names(self) -> List[str]:
        return sorted(self._iwgos)
