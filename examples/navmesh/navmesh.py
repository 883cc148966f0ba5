"""
unitydump NavMesh example

Demonstrates:
1. Declaring record shapes for the fields a tool cares about
2. Decoding a text dump into dataclasses
3. Decoding the same dump generically into dicts

Run: pip install -e . && python examples/navmesh/navmesh.py
"""

from dataclasses import dataclass
from pathlib import Path

from unitydump import (
    F32,
    HASH128,
    I32,
    U8,
    Hash128,
    Record,
    Seq,
    decode_file,
)

HERE = Path(__file__).resolve().parent


@dataclass
class NavMeshTileData:
    m_MeshData: bytes
    m_Hash: Hash128


@dataclass
class NavMeshBuildSettings:
    agentTypeID: int
    agentRadius: float
    agentHeight: float
    agentSlope: float
    agentClimb: float
    ledgeDropHeight: float
    maxJumpAcrossDistance: float
    minRegionArea: float
    manualCellSize: int
    tileSize: int
    accuratePlacement: int


@dataclass
class NavMeshData:
    m_NavMeshTiles: list
    m_NavMeshBuildSettings: NavMeshBuildSettings


TILE = Record("NavMeshTileData", {
    "m_MeshData": Seq(U8, factory=bytes),
    "m_Hash": HASH128,
}, factory=NavMeshTileData)

BUILD_SETTINGS = Record("NavMeshBuildSettings", {
    "agentTypeID": I32,
    "agentRadius": F32,
    "agentHeight": F32,
    "agentSlope": F32,
    "agentClimb": F32,
    "ledgeDropHeight": F32,
    "maxJumpAcrossDistance": F32,
    "minRegionArea": F32,
    "manualCellSize": I32,
    "tileSize": I32,
    "accuratePlacement": I32,
}, factory=NavMeshBuildSettings)

NAVMESH = Record("NavMeshData", {
    "m_NavMeshTiles": Seq(TILE),
    "m_NavMeshBuildSettings": BUILD_SETTINGS,
}, factory=NavMeshData)


if __name__ == "__main__":
    dump = HERE / "NavMesh.asset.txt"

    print("=== unitydump NavMesh Demo ===\n")

    data = decode_file(dump, NAVMESH)
    print("1. Typed decode")
    for i, tile in enumerate(data.m_NavMeshTiles):
        print(f"   tile {i}: {len(tile.m_MeshData)} mesh bytes, hash {tile.m_Hash.hex()}")
    settings = data.m_NavMeshBuildSettings
    print(f"   agentRadius={settings.agentRadius} tileSize={settings.tileSize}\n")

    raw = decode_file(dump)
    print("2. Generic decode")
    print(f"   root fields: {', '.join(raw)}")
    print(f"   source bounds: {raw['m_SourceBounds']}")
