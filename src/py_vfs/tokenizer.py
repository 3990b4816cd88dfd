"""Command-line tokenizer.

Splits a raw command line into words the way a very small shell would:

- Spaces separate words, except inside quotes.
- ``"`` and ``'`` toggle a single quoting state; the quote characters
  themselves are dropped.  ``"it's"`` therefore does *not* nest; the
  apostrophe closes the quote.
- ``\\`` makes the next character literal (``a\\ b`` is one word).
- Unterminated quotes or a trailing backslash are not errors; whatever
  was collected so far becomes the last word.
- Empty words are never produced, so ``""`` on its own yields nothing.
"""

_QUOTES = frozenset("\"'")
_ESCAPE = "\\"
_SPACE = " "


def tokenize(line: str) -> list[str]:
    """Split *line* into words, honouring quotes and backslash escapes.

    Examples::

        'write_file a.txt hello world' → ['write_file', 'a.txt', 'hello', 'world']
        'write_file "my file" x'       → ['write_file', 'my file', 'x']
        'mkdir a\\ b'                  → ['mkdir', 'a b']

    """
    words: list[str] = []
    current: list[str] = []
    in_quotes = False
    escaping = False

    for char in line:
        if escaping:
            current.append(char)
            escaping = False
        elif char == _ESCAPE:
            escaping = True
        elif char in _QUOTES:
            in_quotes = not in_quotes
        elif char == _SPACE and not in_quotes:
            if current:
                words.append("".join(current))
                current = []
        else:
            current.append(char)

    if current:
        words.append("".join(current))
    return words
