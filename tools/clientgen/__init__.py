"""
clientgen: protoc plugin generating a Go client facade for gRPC services.

Merges every service of the requested .proto files into one ``client.go``
exposing a ``Client`` interface, a ``New`` factory and per-method wrappers
that apply call options carried by the context.
"""
