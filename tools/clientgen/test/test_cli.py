"""Tests for the clientgen command line."""

import io
import sys

import pytest
from google.protobuf.compiler import plugin_pb2

from tools.clientgen.__main__ import main


class TestManifestMode:
    def test_writes_client_go(self, tmp_path, manifest_yaml, capsys):
        manifest = tmp_path / "services.yaml"
        manifest.write_text(manifest_yaml)
        outdir = tmp_path / "gen"

        main([str(manifest), "--outdir", str(outdir)])

        code = (outdir / "client.go").read_text()
        assert code.startswith("// Code generated by protoc-gen-go-client. DO NOT EDIT.")
        assert "func (s *userServiceWrapper) DeleteUser(" in code
        assert "wrote" in capsys.readouterr().out

    def test_no_services_writes_nothing(self, tmp_path):
        manifest = tmp_path / "services.yaml"
        manifest.write_text("files:\n  - path: a.proto\n    package: a\n    go_package: example.com/a\n")
        outdir = tmp_path / "gen"

        main([str(manifest), "--outdir", str(outdir)])

        assert not outdir.exists()

    def test_conflict_exits_nonzero(self, tmp_path, capsys):
        manifest = tmp_path / "services.yaml"
        manifest.write_text("""\
files:
  - path: a.proto
    package: a
    go_package: a/b
    services: [{name: A}]
  - path: c.proto
    package: a
    go_package: a/c
    services: [{name: C}]
""")
        outdir = tmp_path / "gen"

        with pytest.raises(SystemExit) as exc:
            main([str(manifest), "--outdir", str(outdir)])

        assert exc.value.code == 1
        assert "package path conflict" in capsys.readouterr().err
        assert not outdir.exists()

    def test_outdir_required(self, tmp_path):
        with pytest.raises(SystemExit):
            main([str(tmp_path / "services.yaml")])


class TestPluginMode:
    def test_reads_stdin(self, monkeypatch):
        stdin = io.TextIOWrapper(io.BytesIO(plugin_pb2.CodeGeneratorRequest().SerializeToString()))
        stdout = io.TextIOWrapper(io.BytesIO())
        monkeypatch.setattr(sys, "stdin", stdin)
        monkeypatch.setattr(sys, "stdout", stdout)

        main([])

        response = plugin_pb2.CodeGeneratorResponse.FromString(stdout.buffer.getvalue())
        assert not response.error
        assert len(response.file) == 0
