"""
Data model: parsed service definitions as handed over by the host compiler.

Everything here is immutable.  The generator never builds these from IDL text
itself; they come from the plugin request (``plugin.py``) or a YAML manifest
(``schema.py``).
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class GoIdent:
    """A Go identifier qualified by the import path of its package."""
    import_path: str
    name: str
    # declared Go package name, when it differs from the path's last element
    package_name: str = field(default="", compare=False)


@dataclass(frozen=True)
class Method:
    name: str        # as declared in the .proto (e.g. "get_user")
    go_name: str     # exported Go name (e.g. "GetUser")
    input: GoIdent
    output: GoIdent


@dataclass(frozen=True)
class Service:
    name: str
    go_name: str
    methods: Tuple[Method, ...] = ()


@dataclass(frozen=True)
class DefinitionFile:
    path: str             # descriptor path, e.g. "user/user.proto"
    package: str          # proto package, e.g. "erda.user"
    go_import_path: str   # e.g. "github.com/erda-project/erda-proto-go/user/pb"
    go_package_name: str  # e.g. "pb"
    services: Tuple[Service, ...] = ()
