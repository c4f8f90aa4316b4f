from typing import Tuple


def split_first_word(line: str) -> Tuple[str, str]:
    """
    Splits an input line into its command word and the argument text.

    The line is trimmed first; the argument keeps its inner whitespace but
    loses any leading whitespace. Empty input gives ("", "").
    """
    parts = line.strip().split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]
