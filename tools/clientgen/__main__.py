"""
CLI entry point for clientgen (protoc-gen-go-client).

Usage:
    protoc --go-client_out=gen/ -I api api/user/*.proto    # as a protoc plugin
    python3 -m tools.clientgen services.yaml --outdir gen/  # from a manifest
"""

import argparse
import os
import sys

from .aggregate import GenerationError
from .emitter import GEN_NAME, generate
from .plugin import run_plugin
from .schema import parse_manifest_yaml


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog=GEN_NAME,
        description="Go client facade generator for gRPC services",
    )
    parser.add_argument("manifest", nargs="?",
                        help="Input service manifest .yaml "
                             "(omit to run as a protoc plugin)")
    parser.add_argument("--outdir", help="Output directory (manifest mode)")
    args = parser.parse_args(argv)

    if args.manifest is None:
        run_plugin(sys.stdin.buffer, sys.stdout.buffer)
        return

    if not args.outdir:
        parser.error("--outdir is required when a manifest is given")

    with open(args.manifest) as f:
        text = f.read()

    files = parse_manifest_yaml(text)
    try:
        g = generate(files)
    except GenerationError as e:
        print(f"{GEN_NAME}: {e}", file=sys.stderr)
        sys.exit(1)

    if g is None:
        print(f"No services in {args.manifest}, nothing generated")
        return

    os.makedirs(args.outdir, exist_ok=True)
    path = os.path.join(args.outdir, g.filename)
    with open(path, "w") as f:
        f.write(g.content())

    print(f"  wrote {path}")
    print(f"\nGenerated {g.filename} for package '{g.package_name}'")


if __name__ == "__main__":
    main()
