"""
protoc plugin protocol: CodeGeneratorRequest in, CodeGeneratorResponse out.

Converts the request's file descriptors into ``DefinitionFile``s, runs the
generator and packs the result (or the error) into a response.
"""

import sys
from dataclasses import dataclass, field
from typing import BinaryIO, Dict, List, Tuple

from google.protobuf import descriptor_pb2
from google.protobuf.compiler import plugin_pb2

from .aggregate import GenerationError
from .emitter import generate
from .model import DefinitionFile, GoIdent, Method, Service
from .naming import go_camel_case, go_package_name


class PluginError(GenerationError):
    """Raised for bad plugin parameters or unresolvable descriptors."""
    pass


@dataclass
class PluginOptions:
    import_map: Dict[str, str] = field(default_factory=dict)  # M<file>=<path>


def parse_parameter(parameter: str) -> PluginOptions:
    """
    Parse the comma-separated plugin parameter string.

    Accepts ``M<file>=<import path>`` overrides.  ``paths=import|source_relative``
    is validated for protoc-gen-go compatibility but has no effect: the output
    is always the single ``client.go``.
    """
    opts = PluginOptions()
    for param in parameter.split(","):
        if not param:
            continue
        key, _, value = param.partition("=")
        if key.startswith("M"):
            opts.import_map[key[1:]] = value
        elif key == "paths":
            if value not in ("import", "source_relative"):
                raise PluginError(f'invalid value for "paths": "{value}"')
        else:
            raise PluginError(f'unknown parameter "{key}"')
    return opts


class _Registry:
    """Index of every message in the request, keyed by full name."""

    def __init__(self, protos: List[descriptor_pb2.FileDescriptorProto],
                 opts: PluginOptions):
        self._opts = opts
        self._files = {p.name: p for p in protos}
        self._messages: Dict[str, Tuple[str, str]] = {}  # ".pkg.Msg" -> (file, go name)
        for proto in protos:
            for msg in proto.message_type:
                self._add_message(proto, msg, "")

    def _add_message(self, proto, msg, parent: str):
        local = f"{parent}.{msg.name}" if parent else msg.name
        full = f".{proto.package}.{local}" if proto.package else f".{local}"
        self._messages[full] = (proto.name, go_camel_case(local))
        for nested in msg.nested_type:
            self._add_message(proto, nested, local)

    def go_package(self, filename: str) -> Tuple[str, str]:
        """(import path, package name) for a .proto file."""
        proto = self._files[filename]
        import_path = self._opts.import_map.get(filename, "")
        name = ""
        if proto.options.go_package:
            path, sep, explicit = proto.options.go_package.partition(";")
            if not import_path:
                import_path = path
            if sep:
                name = explicit
        if not import_path:
            raise PluginError(
                f'unable to determine Go import path for "{filename}"')
        return import_path, name or go_package_name(import_path)

    def message(self, full_name: str) -> GoIdent:
        if full_name not in self._messages:
            raise PluginError(f"unknown message type {full_name}")
        filename, go_name = self._messages[full_name]
        import_path, package_name = self.go_package(filename)
        return GoIdent(import_path, go_name, package_name)


def load_definition_files(request: plugin_pb2.CodeGeneratorRequest) -> List[DefinitionFile]:
    """Build DefinitionFiles for ``file_to_generate``, in request order."""
    opts = parse_parameter(request.parameter)
    registry = _Registry(list(request.proto_file), opts)
    protos = {p.name: p for p in request.proto_file}

    files = []
    for filename in request.file_to_generate:
        if filename not in protos:
            raise PluginError(f'no descriptor for file to generate "{filename}"')
        proto = protos[filename]
        import_path, package_name = registry.go_package(filename)

        services = []
        for svc in proto.service:
            methods = []
            for m in svc.method:
                if m.client_streaming or m.server_streaming:
                    print(f"{filename}: skipping streaming method "
                          f"{svc.name}.{m.name}", file=sys.stderr)
                    continue
                methods.append(Method(
                    name=m.name,
                    go_name=go_camel_case(m.name),
                    input=registry.message(m.input_type),
                    output=registry.message(m.output_type),
                ))
            services.append(Service(name=svc.name,
                                    go_name=go_camel_case(svc.name),
                                    methods=tuple(methods)))

        files.append(DefinitionFile(
            path=filename,
            package=proto.package,
            go_import_path=import_path,
            go_package_name=package_name,
            services=tuple(services),
        ))
    return files


def run(request: plugin_pb2.CodeGeneratorRequest) -> plugin_pb2.CodeGeneratorResponse:
    """Generate for one request.  Errors go into ``response.error``."""
    response = plugin_pb2.CodeGeneratorResponse()
    response.supported_features = plugin_pb2.CodeGeneratorResponse.FEATURE_PROTO3_OPTIONAL

    try:
        g = generate(load_definition_files(request))
    except GenerationError as e:
        response.error = str(e)
        return response

    if g is not None:
        out = response.file.add()
        out.name = g.filename
        out.content = g.content()
    return response


def run_plugin(stdin: BinaryIO, stdout: BinaryIO):
    """Read a serialized request from ``stdin``, write the response to ``stdout``."""
    request = plugin_pb2.CodeGeneratorRequest.FromString(stdin.read())
    response = run(request)
    stdout.write(response.SerializeToString())
    stdout.flush()
