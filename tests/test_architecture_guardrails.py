from __future__ import annotations

import ast
from pathlib import Path


ROOT = Path(__file__).resolve().parents[1]

# modules that must stay computation-only
PURE_ROOTS = (ROOT / "core" / "domain", ROOT / "core" / "services")
FORBIDDEN_IN_PURE = ("core.reporting", "infra", "matplotlib", "openpyxl", "reportlab")


def _python_files(root: Path):
    for path in root.rglob("*.py"):
        if "dist" in path.parts:
            continue
        yield path


def _imported_modules(path: Path):
    tree = ast.parse(path.read_text(encoding="utf-8", errors="ignore"))
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            for alias in node.names:
                yield alias.name
        elif isinstance(node, ast.ImportFrom):
            if node.level == 0 and node.module:
                yield node.module


def _matches(name: str, prefix: str) -> bool:
    return name == prefix or name.startswith(prefix + ".")


def test_evm_core_does_not_import_reporting_or_io_layers():
    violations: list[tuple[str, str]] = []
    for root in PURE_ROOTS:
        for path in _python_files(root):
            for name in _imported_modules(path):
                if any(_matches(name, prefix) for prefix in FORBIDDEN_IN_PURE):
                    violations.append((str(path.relative_to(ROOT)), name))

    assert not violations, f"EVM core imports reporting/IO modules: {violations}"


def test_core_layer_does_not_import_infra_layer():
    violations: list[tuple[str, str]] = []
    for path in _python_files(ROOT / "core"):
        for name in _imported_modules(path):
            if _matches(name, "infra"):
                violations.append((str(path.relative_to(ROOT)), name))

    assert not violations, f"Core layer imports infra layer: {violations}"


def test_evm_models_are_immutable():
    from dataclasses import fields, is_dataclass

    import core.services.evm.models as models

    for name in models.__all__:
        cls = getattr(models, name)
        assert is_dataclass(cls), name
        assert cls.__dataclass_params__.frozen, name
        assert fields(cls), name
