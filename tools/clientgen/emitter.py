"""
Go client emitter.

Generates ``client.go`` (package ``client``) for a GenerationUnit:

  - ``Client`` interface with one accessor per service
  - ``New(cc)`` factory wiring one transport client per service
  - ``serviceClients`` holding those clients
  - ``<service>Wrapper`` types whose methods merge call options carried by
    the context with the wrapper's own options before dispatching
"""

from typing import Iterable, Optional

from .aggregate import GenerationUnit, build_unit
from .gofile import GeneratedFile
from .model import DefinitionFile, GoIdent, Service
from .naming import lower_captain

GEN_NAME = "protoc-gen-go-client"

CLIENT_FILENAME = "client.go"
CLIENT_PACKAGE = "client"

CONTEXT_PACKAGE = "context"
GRPC_PACKAGE = "google.golang.org/grpc"
TRANSGRPC_PACKAGE = "github.com/erda-project/erda-infra/pkg/transport/grpc"


def generate(files: Iterable[DefinitionFile]) -> Optional[GeneratedFile]:
    """
    Build and emit the client file for ``files``.

    Returns None when no file declares a service.  Validation errors from
    ``build_unit`` propagate before anything is emitted.
    """
    unit = build_unit(files)
    if unit is None:
        return None
    return emit_client(unit)


def emit_client(unit: GenerationUnit) -> GeneratedFile:
    g = GeneratedFile(
        CLIENT_FILENAME, CLIENT_PACKAGE,
        package_names={unit.root.go_import_path: unit.root.go_package_name},
    )
    g.P("// Code generated by ", GEN_NAME, ". DO NOT EDIT.")
    g.P("// Sources: ", unit.sources)
    g.P()
    g.P("package ", CLIENT_PACKAGE)
    g.P()
    emit_interface_and_factory(g, unit)
    emit_wrappers(g, unit)
    return g


def _client_type(f: DefinitionFile, svc: Service) -> GoIdent:
    return GoIdent(f.go_import_path, svc.go_name + "Client")


def _padded(names, name: str) -> str:
    """``name`` padded to align with the longest of ``names`` (gofmt style)."""
    width = max(len(n) for n in names)
    return name.ljust(width)


# ── Interface & factory ──────────────────────────────────────────────

def emit_interface_and_factory(g: GeneratedFile, unit: GenerationUnit):
    """Emit the Client interface, New(), serviceClients and its accessors."""
    pairs = list(unit.services())
    fields = [lower_captain(svc.go_name) for _, svc in pairs]

    g.P("// Client provide all service clients.")
    g.P("type Client interface {")
    for f, svc in pairs:
        g.P("\t// ", svc.go_name, " ", f.path)
        g.P("\t", svc.go_name, "() ", _client_type(f, svc))
    g.P("}")
    g.P()

    g.P("// New create client")
    g.P("func New(cc ", GoIdent(TRANSGRPC_PACKAGE, "ClientConnInterface"), ") Client {")
    g.P("\treturn &serviceClients{")
    for (f, svc), field in zip(pairs, fields):
        g.P("\t\t", _padded([n + ":" for n in fields], field + ":"), " ",
            GoIdent(f.go_import_path, "New" + svc.go_name + "Client"), "(cc),")
    g.P("\t}")
    g.P("}")
    g.P()

    g.P("type serviceClients struct {")
    for (f, svc), field in zip(pairs, fields):
        g.P("\t", _padded(fields, field), " ", _client_type(f, svc))
    g.P("}")
    g.P()

    for (f, svc), field in zip(pairs, fields):
        g.P("func (c *serviceClients) ", svc.go_name, "() ", _client_type(f, svc), " {")
        g.P("\treturn c.", field)
        g.P("}")
        g.P()


# ── Per-method wrappers ──────────────────────────────────────────────

def emit_wrappers(g: GeneratedFile, unit: GenerationUnit):
    """
    Emit one wrapper type per service and one dispatch method per RPC.

    Each method appends the wrapper's default options after those extracted
    from ``ctx`` and returns the transport call's result and error unchanged.
    """
    for f, svc in unit.services():
        type_name = lower_captain(svc.go_name) + "Wrapper"
        g.P("type ", type_name, " struct {")
        g.P("\tclient ", _client_type(f, svc))
        g.P("\topts   []", GoIdent(GRPC_PACKAGE, "CallOption"))
        g.P("}")
        g.P()
        for m in svc.methods:
            g.P("func (s *", type_name, ") ", m.go_name,
                "(ctx ", GoIdent(CONTEXT_PACKAGE, "Context"),
                ", req *", m.input, ") (*", m.output, ", error) {")
            g.P("\treturn s.client.", m.go_name, "(ctx, req, append(",
                GoIdent(TRANSGRPC_PACKAGE, "CallOptionFromContext"),
                "(ctx), s.opts...)...)")
            g.P("}")
            g.P()
