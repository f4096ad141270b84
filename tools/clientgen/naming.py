"""
Identifier transforms: exported/unexported Go names and package names.
"""

# Go reserved words; a sanitized identifier may not be one of these.
GO_KEYWORDS = {
    "break", "case", "chan", "const", "continue", "default", "defer",
    "else", "fallthrough", "for", "func", "go", "goto", "if", "import",
    "interface", "map", "package", "range", "return", "select", "struct",
    "switch", "type", "var",
}

# Predeclared identifiers; an import may not shadow these.
GO_PREDECLARED = {
    "any", "append", "bool", "byte", "cap", "clear", "close", "comparable",
    "complex", "complex64", "complex128", "copy", "delete", "error", "false",
    "float32", "float64", "imag", "int", "int8", "int16", "int32", "int64",
    "iota", "len", "make", "max", "min", "new", "nil", "panic", "print",
    "println", "real", "recover", "rune", "string", "true", "uint", "uint8",
    "uint16", "uint32", "uint64", "uintptr",
}


def lower_captain(name: str) -> str:
    """
    Unexported spelling of an exported identifier.

    Lowercases the leading run of uppercase characters.  When the run is an
    acronym followed by a lowercase letter, its last capital starts the next
    word and is kept: ``FooBar -> fooBar``, ``HTTPServer -> httpServer``,
    ``ABC -> abc``.  Names that do not start uppercase are returned as-is.
    """
    if not name or not name[0].isupper():
        return name
    run = 0
    while run < len(name) and name[run].isupper():
        run += 1
    if 1 < run < len(name) and name[run].islower():
        run -= 1
    return name[:run].lower() + name[run:]


def _is_ascii_lower(c: str) -> bool:
    return "a" <= c <= "z"


def _is_ascii_digit(c: str) -> bool:
    return "0" <= c <= "9"


def go_camel_case(s: str) -> str:
    """
    Convert a proto name to an exported Go name, the way protoc-gen-go does.

    ``get_user -> GetUser``, ``Outer.Inner -> Outer_Inner``,
    ``_private -> XPrivate``.
    """
    out = []
    i = 0
    n = len(s)
    while i < n:
        c = s[i]
        if c == "." and i + 1 < n and _is_ascii_lower(s[i+1]):
            pass  # ".{{lowercase}}" drops the dot
        elif c == ".":
            out.append("_")
        elif c == "_" and (i == 0 or s[i-1] == "."):
            out.append("X")
        elif c == "_" and i + 1 < n and _is_ascii_lower(s[i+1]):
            pass  # "_{{lowercase}}" drops the underscore
        elif _is_ascii_digit(c):
            out.append(c)
        else:
            out.append(c.upper() if _is_ascii_lower(c) else c)
            while i + 1 < n and _is_ascii_lower(s[i+1]):
                i += 1
                out.append(s[i])
        i += 1
    return "".join(out)


def go_sanitized(s: str) -> str:
    """Make ``s`` a valid Go identifier."""
    s = "".join(c if c.isalpha() or c.isdigit() else "_" for c in s)
    if not s or not s[0].isalpha() or s in GO_KEYWORDS:
        return "_" + s
    return s


def go_package_name(import_path: str) -> str:
    """Default package name for an import path: its sanitized last element."""
    base = import_path.rstrip("/").rsplit("/", 1)[-1] or "."
    return go_sanitized(base)


def split_go_package(go_package: str):
    """
    Split a ``go_package`` option value into (import path, package name).

    ``"github.com/x/pb;userpb"`` carries an explicit name; otherwise the name
    is derived from the import path.
    """
    import_path, sep, name = go_package.partition(";")
    if not sep or not name:
        name = go_package_name(import_path)
    return import_path, name
