"""SQL string-literal quoting for search terms.

The escape set is the one MySQL and PostgreSQL string literal parsers
understand by default: NUL, LF, CR, backslash, both quote characters and
Ctrl-Z are backslash-escaped (control characters in C-style form).
"""

_ESCAPES = str.maketrans(
    {
        "\0": "\\000",
        "\n": "\\n",
        "\r": "\\r",
        "\\": "\\\\",
        "'": "\\'",
        '"': '\\"',
        "\x1a": "\\032",
    }
)


def quote_value(value: object) -> str:
    """Escape *value* and wrap it in single quotes.

    ::

        quote_value("O'Brien")   # "'O\\'Brien'"
    """
    return f"'{str(value).translate(_ESCAPES)}'"


def escape_like(value: object) -> str:
    """Backslash-escape the LIKE wildcards ``%`` and ``_`` in *value*.

    The result still has to go through ``quote_value``, which doubles the
    backslashes so they survive the database's string literal parser.
    """
    return str(value).replace("%", "\\%").replace("_", "\\_")
