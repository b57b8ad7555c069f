"""Fixed-width reflow of long responses."""


def wrap_lines(text: str, max_width: int) -> list[str]:
    """Reflow text into lines no wider than ``max_width``.

    Tokens are split on any whitespace and packed greedily, one space
    between tokens. A token longer than ``max_width`` is placed alone on
    its own line and is never truncated or split.

    Args:
        text: Text to reflow
        max_width: Maximum line width in characters

    Returns:
        List of lines (empty for empty or whitespace-only text)

    Raises:
        ValueError: If max_width is less than 1
    """
    if max_width < 1:
        raise ValueError(f"max_width must be positive, got {max_width}")

    lines: list[str] = []
    current = ""

    for token in text.split():
        if not current:
            current = token
        elif len(current) + 1 + len(token) <= max_width:
            current += " " + token
        else:
            lines.append(current)
            current = token

    if current:
        lines.append(current)

    return lines
