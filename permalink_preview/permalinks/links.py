"""Detect matches that already sit inside a markdown hyperlink."""


def is_inside_link(msg: str, index: int) -> bool:
    """Report whether ``index`` falls inside ``[text](url)``.

    Walks backward from ``index``. An unmatched ``[`` means the offset is in
    link text; an unmatched ``(`` directly preceded by ``]`` means it is in
    the URL part. Spaces may sit between ``(`` and the URL, but any other
    character before a space ends the URL-part search since markdown link
    targets cannot contain whitespace.
    """
    brackets = 0
    parens = 0
    in_target = True
    after_space = False
    for i in range(index - 1, -1, -1):
        char = msg[i]
        if char.isspace():
            after_space = True
            continue
        if char == "(":
            if parens > 0:
                parens -= 1
            elif in_target and i > 0 and msg[i - 1] == "]":
                return True
        elif char == "]":
            brackets += 1
        elif char == "[":
            if brackets == 0:
                return _closes_as_link(msg, i)
            brackets -= 1
        elif char == ")":
            parens += 1
        if after_space:
            in_target = False
    return False


def _closes_as_link(msg: str, start: int) -> bool:
    """An open ``[`` at ``start`` only counts as link text if its own ``]`` is followed by ``(``."""
    depth = 0
    for i in range(start + 1, len(msg)):
        char = msg[i]
        if char == "\n":
            return False
        if char == "[":
            depth += 1
        elif char == "]":
            if depth == 0:
                return msg.startswith("](", i)
            depth -= 1
    return False
