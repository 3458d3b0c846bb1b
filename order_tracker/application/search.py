LIKE_ESCAPE = "\\"

def contains_pattern(term: str) -> str:
    """``%term%`` with LIKE wildcards in ``term`` matched literally (use with ``escape=LIKE_ESCAPE``)."""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )
    return f"%{escaped}%"
