"""
GeneratedFile: buffered Go source with automatic import management.
"""

from typing import Dict, List, Optional

from .model import GoIdent
from .naming import GO_PREDECLARED, go_package_name


class GeneratedFile:
    """
    One generated Go file.

    Lines are appended with ``P()``.  Any ``GoIdent`` passed to ``P()`` is
    rendered as ``pkg.Name`` and its import path is recorded, so ``content()``
    can emit the matching import block.  Identifiers from the file's own
    import path render unqualified.
    """

    def __init__(self, filename: str, package_name: str, import_path: str = "",
                 package_names: Optional[Dict[str, str]] = None):
        self.filename = filename
        self.package_name = package_name
        self.import_path = import_path
        self._lines: List[str] = []
        self._known_names = dict(package_names or {})
        self._imports: Dict[str, str] = {}   # import path -> local name
        self._used_names = {package_name} | GO_PREDECLARED

    def P(self, *parts):
        """Append one line built from ``parts``."""
        self._lines.append("".join(self._render(p) for p in parts))

    def qualified(self, ident: GoIdent) -> str:
        """Return the in-file spelling of ``ident``, importing its package."""
        if not ident.import_path or ident.import_path == self.import_path:
            return ident.name
        return f"{self._import(ident.import_path, ident.package_name)}.{ident.name}"

    def content(self) -> str:
        """Final file text, with the import block after the package clause."""
        lines = list(self._lines)
        if self._imports:
            block = ["import ("]
            for path in sorted(self._imports):
                name = self._imports[path]
                if name == go_package_name(path):
                    block.append(f'\t"{path}"')
                else:
                    block.append(f'\t{name} "{path}"')
            block.append(")")

            pos = self._package_clause_index(lines)
            head, rest = lines[:pos+1], lines[pos+1:]
            while rest and not rest[0]:
                rest.pop(0)
            lines = head + [""] + block + [""] + rest
        while lines and not lines[-1]:
            lines.pop()
        return "\n".join(lines) + "\n"

    # ── Helpers ──────────────────────────────────────────────────────

    def _render(self, part) -> str:
        if isinstance(part, GoIdent):
            return self.qualified(part)
        return str(part)

    def _import(self, import_path: str, package_name: str = "") -> str:
        if import_path in self._imports:
            return self._imports[import_path]
        base = (self._known_names.get(import_path) or package_name
                or go_package_name(import_path))
        name = base
        i = 1
        while name in self._used_names:
            name = f"{base}{i}"
            i += 1
        self._used_names.add(name)
        self._imports[import_path] = name
        return name

    @staticmethod
    def _package_clause_index(lines: List[str]) -> int:
        for i, line in enumerate(lines):
            if line.startswith("package "):
                return i
        raise ValueError("generated file has no package clause")
