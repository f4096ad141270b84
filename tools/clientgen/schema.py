"""
YAML service manifest parser and validator.

Describes the same definition files protoc would hand to the plugin, so the
client can be generated without running protoc.  Format:

    files:
      - path: user/user.proto
        package: erda.user
        go_package: github.com/erda-project/erda-proto-go/user/pb
        services:
          - name: UserService
            methods:
              - name: GetUser
                input: GetUserRequest
                output: GetUserResponse

Unqualified message names belong to the file's own Go package; qualified
ones are written ``<import path>.<Name>``, e.g.
``google.golang.org/protobuf/types/known/emptypb.Empty``.  A package name that
differs from the last path element goes after a semicolon, as in
``go_package``: ``github.com/x/api/common/v1;commonpb.Thing``.
"""

from typing import List

import yaml

from .model import DefinitionFile, GoIdent, Method, Service
from .naming import go_camel_case, split_go_package


class ValidationError(Exception):
    """Raised when a service manifest fails validation."""
    pass


def _require(data: dict, key: str, context: str = "root") -> object:
    """Require a key in a dict, raising ValidationError if missing."""
    if not isinstance(data, dict):
        raise ValidationError(f"{context} must be a mapping")
    if key not in data or data[key] is None:
        raise ValidationError(
            f"Missing required field '{key}' in {context} section"
        )
    return data[key]


def _list(data: dict, key: str, context: str) -> list:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"'{key}' in {context} must be a list")
    return value


def _message_ref(ref: str, import_path: str, package_name: str,
                 context: str) -> GoIdent:
    ref = str(ref).strip()
    if "/" in ref:
        path, _, name = ref.rpartition(".")
        if not path or not name:
            raise ValidationError(f"Bad message reference '{ref}' in {context}")
        path, package_name = split_go_package(path)
        return GoIdent(path, name, package_name)
    return GoIdent(import_path, ref, package_name)


def parse_manifest_yaml(yaml_str: str) -> List[DefinitionFile]:
    """Parse a YAML service manifest into DefinitionFiles.

    Args:
        yaml_str: YAML string containing the manifest.

    Returns:
        DefinitionFiles in manifest order.

    Raises:
        ValidationError: If required fields are missing or invalid.
    """
    if not yaml_str or not yaml_str.strip():
        raise ValidationError("Empty YAML input")

    try:
        data = yaml.safe_load(yaml_str)
    except yaml.YAMLError as e:
        raise ValidationError(f"Invalid YAML: {e}")

    if not isinstance(data, dict):
        raise ValidationError("YAML root must be a mapping")

    files_section = _require(data, "files")
    if not isinstance(files_section, list):
        raise ValidationError("'files' must be a list")

    files = []
    for fi, file_data in enumerate(files_section):
        ctx = f"files[{fi}]"
        path = str(_require(file_data, "path", ctx))
        package = str(_require(file_data, "package", ctx))
        import_path, package_name = split_go_package(
            str(_require(file_data, "go_package", ctx)))

        services = []
        for si, svc_data in enumerate(_list(file_data, "services", ctx)):
            svc_ctx = f"{ctx}.services[{si}]"
            svc_name = str(_require(svc_data, "name", svc_ctx))

            methods = []
            for mi, m_data in enumerate(_list(svc_data, "methods", svc_ctx)):
                m_ctx = f"{svc_ctx}.methods[{mi}]"
                m_name = str(_require(m_data, "name", m_ctx))
                methods.append(Method(
                    name=m_name,
                    go_name=go_camel_case(m_name),
                    input=_message_ref(_require(m_data, "input", m_ctx),
                                       import_path, package_name, m_ctx),
                    output=_message_ref(_require(m_data, "output", m_ctx),
                                        import_path, package_name, m_ctx),
                ))

            services.append(Service(name=svc_name,
                                    go_name=go_camel_case(svc_name),
                                    methods=tuple(methods)))

        files.append(DefinitionFile(
            path=path,
            package=package,
            go_import_path=import_path,
            go_package_name=package_name,
            services=tuple(services),
        ))

    return files
