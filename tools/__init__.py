"""Code generators for Go client facades."""
