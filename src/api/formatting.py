"""Text rendering of identifier lists for display."""


def format_list(items) -> str:
    """Render items as {a,b,c}; an empty or missing list renders as {}."""
    if not items:
        return "{}"
    return "{" + ",".join(str(item) for item in items) + "}"
