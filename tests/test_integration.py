import importlib.util
from pathlib import Path

import pytest
from unitydump import Hash128, Vector3f, decode, decode_file

EXAMPLES_DIR = Path(__file__).resolve().parent.parent / "examples"
DUMP = EXAMPLES_DIR / "navmesh" / "NavMesh.asset.txt"


@pytest.fixture
def navmesh():
    script = EXAMPLES_DIR / "navmesh" / "navmesh.py"
    module_spec = importlib.util.spec_from_file_location("navmesh_example", script)
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)
    return module


def test_typed_navmesh(navmesh):
    data = decode_file(DUMP, navmesh.NAVMESH)
    assert isinstance(data, navmesh.NavMeshData)

    first, second = data.m_NavMeshTiles
    assert first.m_MeshData == bytes((i * 7 + 3) % 256 for i in range(30))
    assert first.m_Hash == Hash128(bytes(i * 17 for i in range(16)))
    assert second.m_MeshData == b""
    assert second.m_Hash.hex() == "00" * 16

    settings = data.m_NavMeshBuildSettings
    assert settings.agentRadius == 0.5
    assert settings.agentClimb == 0.75
    assert settings.agentSlope == 45.0
    assert settings.tileSize == 256
    assert settings.accuratePlacement == 0


def test_generic_navmesh():
    raw = decode(DUMP.read_text(encoding="utf-8"))
    assert list(raw) == [
        "m_ObjectHideFlags",
        "m_CorrespondingSourceObject",
        "m_Name",
        "m_NavMeshTiles",
        "m_NavMeshBuildSettings",
        "m_Heightmaps",
        "m_OffMeshLinks",
        "m_SourceBounds",
        "m_Position",
        "m_AgentTypeID",
    ]
    assert raw["m_CorrespondingSourceObject"] == {"m_FileID": 0, "m_PathID": 0}
    assert raw["m_Name"] == "NavMesh"
    assert len(raw["m_NavMeshTiles"][0]["m_MeshData"]) == 30
    assert raw["m_Heightmaps"] == []

    link = raw["m_OffMeshLinks"][0]
    assert link["m_Start"] == Vector3f(-1.5, 0.0, 2.25)
    assert link["m_LinkType"] == 0
    assert link["m_LinkDirection"] == 1

    extent = raw["m_SourceBounds"]["m_Extent"]
    assert extent.x == pytest.approx(-1.2)
    assert extent.y == pytest.approx(3.4)
    assert raw["m_Position"] == Vector3f()


def test_same_result_twice():
    text = DUMP.read_text(encoding="utf-8")
    assert decode(text) == decode(text)
