"""
Input aggregation: merge definition files into one consistent GenerationUnit.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from .model import DefinitionFile, Service
from .naming import lower_captain


class GenerationError(Exception):
    """Base class for errors that abort a generation run."""
    pass


class ConflictError(GenerationError):
    """Raised when input files disagree on Go import path or proto package."""
    pass


class DuplicateServiceError(GenerationError):
    """Raised when two services would produce the same Go identifiers."""
    pass


@dataclass(frozen=True)
class GenerationUnit:
    """Validated, path-ordered view of every file that declares a service."""
    files: Tuple[DefinitionFile, ...]
    root: DefinitionFile
    sources: str  # provenance: descriptor paths joined with ", "

    def services(self) -> Iterator[Tuple[DefinitionFile, Service]]:
        """Yield (file, service) pairs in emission order."""
        for f in self.files:
            for svc in f.services:
                yield f, svc


def build_unit(files: Iterable[DefinitionFile]) -> Optional[GenerationUnit]:
    """
    Filter, validate and order the input files.

    Files without services are dropped.  The first remaining file (in input
    order) is the root; every other file must share its Go import path and
    proto package.  Files are then sorted by descriptor path.

    Returns None when no file declares a service.

    Raises:
        ConflictError: if a file's import path or package differs from the root.
        DuplicateServiceError: if two services collide on a Go identifier.
    """
    root: Optional[DefinitionFile] = None
    selected: List[DefinitionFile] = []

    for f in files:
        if not f.services:
            continue
        if root is None:
            root = f
        elif f.go_import_path != root.go_import_path:
            raise ConflictError(
                f"package path conflict between {root.go_import_path} "
                f"({root.path}) and {f.go_import_path} ({f.path})")
        elif f.package != root.package:
            raise ConflictError(
                f"package path conflict between {root.package} "
                f"({root.path}) and {f.package} ({f.path})")
        selected.append(f)

    if root is None:
        return None

    ordered = tuple(sorted(selected, key=lambda f: f.path))
    _check_duplicates(ordered)

    return GenerationUnit(
        files=ordered,
        root=root,
        sources=", ".join(f.path for f in selected),
    )


def _check_duplicates(files: Tuple[DefinitionFile, ...]):
    # Accessor names come from go_name, struct fields from lower_captain(go_name).
    accessors: Dict[str, str] = {}
    fields: Dict[str, Tuple[str, str]] = {}
    for f in files:
        for svc in f.services:
            if svc.go_name in accessors:
                raise DuplicateServiceError(
                    f"service {svc.go_name} declared in both "
                    f"{accessors[svc.go_name]} and {f.path}")
            accessors[svc.go_name] = f.path

            field = lower_captain(svc.go_name)
            if field in fields:
                other, other_path = fields[field]
                raise DuplicateServiceError(
                    f"services {other} ({other_path}) and {svc.go_name} "
                    f"({f.path}) both map to field {field!r}")
            fields[field] = (svc.go_name, f.path)
