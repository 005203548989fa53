from __future__ import annotations

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from structure_engines.common.error_envelope import loading_error, not_found_error
from structure_engines.common.errors import LoadingError
from structure_engines.config.runtime_config import get_default_seed, get_iwgo_auto_create, get_iwgo_folder
from structure_engines.structures.manager import IWGOManager
from structure_engines.world.grid import InMemoryVoxelGrid, VoxelWrite

router = APIRouter(prefix="/iwgo", tags=["iwgo"])

# Process-wide manager, created on first use from runtime config.
_MANAGER: Optional[IWGOManager] = None


def get_manager() -> IWGOManager:
    global _MANAGER
    if _MANAGER is None:
        _MANAGER = IWGOManager(get_iwgo_folder(), auto_create=get_iwgo_auto_create())
        _MANAGER.load_iwgos()
    return _MANAGER


def set_manager(manager: Optional[IWGOManager]) -> None:
    global _MANAGER
    _MANAGER = manager


class IWGOSummary(BaseModel):
    name: str
    instructions: int


class PlaceRequest(BaseModel):
    x: int = 0
    y: int = 0
    z: int = 0
    rotation: int = 0
    seed: Optional[int] = None


class PlaceResponse(BaseModel):
    name: str
    seed: Optional[int] = None
    count: int
    writes: List[VoxelWrite]


class ReloadResponse(BaseModel):
    loaded: List[str]


@router.get("", response_model=List[IWGOSummary])
def list_iwgos(manager: IWGOManager = Depends(get_manager)):
    return [
        IWGOSummary(name=name, instructions=len(iwgo.instructions))
        for name, iwgo in sorted(manager.get_iwgo_map().items())
    ]


@router.post("/reload", response_model=ReloadResponse)
def reload_iwgos(manager: IWGOManager = Depends(get_manager)):
    manager.reload_iwgos()
    return ReloadResponse(loaded=manager.list_names())


@router.get("/{name}", response_model=Dict[str, Any])
def get_iwgo(name: str, manager: IWGOManager = Depends(get_manager)):
    iwgo = manager.get_iwgo(name)
    if iwgo is None:
        not_found_error("iwgo", name)
    return iwgo.describe()


@router.post("/{name}/place", response_model=PlaceResponse)
def place_iwgo(name: str, payload: PlaceRequest, manager: IWGOManager = Depends(get_manager)):
    iwgo = manager.get_iwgo(name)
    if iwgo is None:
        not_found_error("iwgo", name)
    seed = payload.seed if payload.seed is not None else get_default_seed()
    grid = InMemoryVoxelGrid()
    try:
        count = iwgo.place(grid, payload.x, payload.y, payload.z, rotation=payload.rotation, seed=seed)
    except LoadingError as e:
        loading_error("iwgo", e)
    return PlaceResponse(name=iwgo.name, seed=seed, count=count, writes=grid.to_writes())
