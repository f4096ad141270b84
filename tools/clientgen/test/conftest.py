"""Shared fixtures for clientgen tests."""

import pytest
import sys
import os

# Add the project root to sys.path so 'tools.clientgen' is importable
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "..", ".."))

from tools.clientgen.model import DefinitionFile, GoIdent, Method, Service


CORE_PB = "github.com/erda-project/erda-proto-go/core/pb"
EMPTYPB = "google.golang.org/protobuf/types/known/emptypb"


def make_file(path, services, package="erda.core", import_path=CORE_PB,
              package_name="pb"):
    return DefinitionFile(
        path=path,
        package=package,
        go_import_path=import_path,
        go_package_name=package_name,
        services=tuple(services),
    )


def make_method(name, input_name, output_name, import_path=CORE_PB):
    return Method(
        name=name,
        go_name=name,
        input=GoIdent(import_path, input_name),
        output=GoIdent(import_path, output_name),
    )


USER_SERVICE = Service(
    name="UserService",
    go_name="UserService",
    methods=(make_method("GetUser", "GetUserRequest", "GetUserResponse"),),
)

ORG_SERVICE = Service(
    name="OrgService",
    go_name="OrgService",
    methods=(
        make_method("ListOrgs", "ListOrgsRequest", "ListOrgsResponse"),
        make_method("GetOrg", "GetOrgRequest", "GetOrgResponse"),
    ),
)

HTTP_SERVICE = Service(
    name="HTTPServer",
    go_name="HTTPServer",
    methods=(
        Method(name="Ping", go_name="Ping",
               input=GoIdent(EMPTYPB, "Empty"),
               output=GoIdent(EMPTYPB, "Empty")),
    ),
)


MANIFEST_YAML = """\
files:
  - path: core/user.proto
    package: erda.core
    go_package: github.com/erda-project/erda-proto-go/core/pb
    services:
      - name: UserService
        methods:
          - name: GetUser
            input: GetUserRequest
            output: GetUserResponse
          - name: delete_user
            input: DeleteUserRequest
            output: google.golang.org/protobuf/types/known/emptypb.Empty

  - path: core/types.proto
    package: erda.core
    go_package: github.com/erda-project/erda-proto-go/core/pb
"""


@pytest.fixture
def user_file():
    """core/user.proto declaring UserService."""
    return make_file("core/user.proto", [USER_SERVICE])


@pytest.fixture
def org_file():
    """core/org.proto declaring OrgService."""
    return make_file("core/org.proto", [ORG_SERVICE])


@pytest.fixture
def types_file():
    """core/types.proto with messages only."""
    return make_file("core/types.proto", [])


@pytest.fixture
def http_file():
    """core/http.proto declaring HTTPServer with an emptypb method."""
    return make_file("core/http.proto", [HTTP_SERVICE])


@pytest.fixture
def manifest_yaml():
    return MANIFEST_YAML
