#!/usr/bin/env python
"""Module layout policies for the gateway source tree.

- ``__all__`` is one literal assignment and the last top-level statement.
- At most one top-level non-dataclass class per file.
- No lazy singletons and no registries built at import time: provider and
  connection registries are constructed in the app lifespan and injected.
"""

from __future__ import annotations

import ast
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT / "src"

SINGLETON_FN_NAMES = {"get_instance", "reset_instance"}
REGISTRY_SUFFIX = "Registry"


def _is_name(node: ast.AST, name: str) -> bool:
    return isinstance(node, ast.Name) and node.id == name


def _assigns_all(node: ast.stmt) -> bool:
    if isinstance(node, ast.Assign):
        return any(_is_name(t, "__all__") for t in node.targets)
    if isinstance(node, (ast.AnnAssign, ast.AugAssign)):
        return _is_name(node.target, "__all__")
    if isinstance(node, ast.Expr) and isinstance(node.value, ast.Call):
        func = node.value.func
        return isinstance(func, ast.Attribute) and _is_name(func.value, "__all__")
    return False


def _check_all_at_bottom(tree: ast.Module, rel: Path) -> list[str]:
    positions = [idx for idx, node in enumerate(tree.body) if _assigns_all(node)]
    if not positions:
        return []
    if len(positions) > 1:
        return [f"  {rel}:{tree.body[idx].lineno} `__all__` assigned more than once" for idx in positions]
    idx = positions[0]
    node = tree.body[idx]
    if isinstance(node, ast.AugAssign) or isinstance(node, ast.Expr):
        return [f"  {rel}:{node.lineno} `__all__` must be a single assignment, not a mutation"]
    return [f"  {rel}:{late.lineno} statement after `__all__`" for late in tree.body[idx + 1 :]]


def _is_dataclass(node: ast.ClassDef) -> bool:
    for decorator in node.decorator_list:
        target = decorator.func if isinstance(decorator, ast.Call) else decorator
        if _is_name(target, "dataclass") or (isinstance(target, ast.Attribute) and target.attr == "dataclass"):
            return True
    return False


def _check_one_class(tree: ast.Module, rel: Path) -> list[str]:
    classes = [node.name for node in tree.body if isinstance(node, ast.ClassDef) and not _is_dataclass(node)]
    if len(classes) <= 1:
        return []
    return [f"  {rel}: {len(classes)} classes ({', '.join(classes)})"]


def _called_name(value: ast.expr | None) -> str | None:
    if not isinstance(value, ast.Call):
        return None
    func = value.func
    if isinstance(func, ast.Name):
        return func.id
    if isinstance(func, ast.Attribute):
        return func.attr
    return None


def _check_singletons(tree: ast.Module, rel: Path) -> list[str]:
    violations: list[str] = []
    for node in tree.body:
        if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef)) and node.name in SINGLETON_FN_NAMES:
            violations.append(f"  {rel}:{node.lineno} function `{node.name}` suggests singleton lifecycle")
            continue
        if not isinstance(node, (ast.Assign, ast.AnnAssign)):
            continue
        targets = node.targets if isinstance(node, ast.Assign) else [node.target]
        names = [t.id for t in targets if isinstance(t, ast.Name)]
        if isinstance(node.value, ast.Constant) and node.value.value is None:
            if any(name.lower().endswith("_instance") for name in names):
                violations.append(f"  {rel}:{node.lineno} lazy singleton state: {', '.join(names)}")
            continue
        called = _called_name(node.value)
        if called is not None and called.endswith(REGISTRY_SUFFIX):
            violations.append(f"  {rel}:{node.lineno} `{called}` built at import time: {', '.join(names)}")
    return violations


def collect_violations(filepath: Path, root: Path = ROOT) -> list[str]:
    try:
        tree = ast.parse(filepath.read_text(encoding="utf-8"), filename=str(filepath))
    except (OSError, UnicodeDecodeError, SyntaxError):
        return []
    rel = filepath.relative_to(root)
    return [
        *_check_all_at_bottom(tree, rel),
        *_check_one_class(tree, rel),
        *_check_singletons(tree, rel),
    ]


def scan(src_dir: Path = SRC_DIR, root: Path = ROOT) -> list[str]:
    violations: list[str] = []
    for py_file in sorted(src_dir.rglob("*.py")):
        if "__pycache__" in py_file.parts:
            continue
        violations.extend(collect_violations(py_file, root))
    return violations


def main() -> int:
    if not SRC_DIR.is_dir():
        print(f"[module-policy] Missing source directory: {SRC_DIR}", file=sys.stderr)
        return 1
    violations = scan()
    if not violations:
        return 0
    print("Module policy violations:", file=sys.stderr)
    for violation in violations:
        print(violation, file=sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
