"""Keep the simulation core importable without a display.

- metamorphosis/* never imports pygame or the host modules that wrap it
- rendering/* paints ``FrameState`` and must not reach into scene systems

Imports are read with ``ast`` so nothing under test is executed.
"""

import ast
from pathlib import Path
from typing import Iterable, List, Set, Tuple

import pytest

REPO_ROOT = Path(__file__).resolve().parent.parent

HOST_MODULES = ["pygame", "rendering", "garden", "camera", "main"]

SCENE_INTERNALS = [
    "metamorphosis.scene",
    "metamorphosis.cocoons",
    "metamorphosis.flocking",
    "metamorphosis.attractors",
    "metamorphosis.environment",
    "metamorphosis.light_sensor",
]


def imported_names(path: Path) -> Set[str]:
    """Module names a file imports, plus ``module.name`` for from-imports."""
    tree = ast.parse(path.read_text(encoding="utf-8"), filename=str(path))
    names: Set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            names.update(alias.name for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module:
            names.add(node.module)
            names.update(f"{node.module}.{alias.name}" for alias in node.names)
    return names


def matches(name: str, prefix: str) -> bool:
    return name == prefix or name.startswith(prefix + ".")


def violations_in(package: str, forbidden: Iterable[str]) -> List[Tuple[str, str]]:
    package_dir = REPO_ROOT / package
    if not package_dir.is_dir():
        pytest.skip(f"{package}/ not found")
    found = []
    for path in sorted(package_dir.rglob("*.py")):
        for name in sorted(imported_names(path)):
            if any(matches(name, prefix) for prefix in forbidden):
                found.append((str(path.relative_to(REPO_ROOT)), name))
    return found


def test_core_has_no_host_imports():
    found = violations_in("metamorphosis", HOST_MODULES)
    assert not found, "metamorphosis imports host modules: " + ", ".join(f"{p} -> {n}" for p, n in found)


def test_rendering_only_reads_frame_state():
    found = violations_in("rendering", SCENE_INTERNALS)
    assert not found, "rendering reaches into scene systems: " + ", ".join(f"{p} -> {n}" for p, n in found)


def test_imported_names_include_from_imports(tmp_path):
    sample = tmp_path / "sample.py"
    sample.write_text("import os\nfrom pygame import camera\n", encoding="utf-8")
    assert {"os", "pygame", "pygame.camera"} <= imported_names(sample)
    assert matches("pygame.camera", "pygame")
    assert not matches("pygamex", "pygame")
