"""Link markup helpers for review_queue.

Links are kept bare internally and wrapped in wiki-link brackets
only when rendered into a queue table.
"""

__all__ = [
    "FIELD_DELIMITER",
    "add_brackets",
    "link_target",
    "remove_brackets",
]

FIELD_DELIMITER = "|"


def remove_brackets(link: str) -> str:
    """Strip surrounding ``[[ ]]`` markup and whitespace from a link."""
    link = link.strip()
    if link.startswith("[[") and link.endswith("]]"):
        link = link[2:-2].strip()
    return link


def add_brackets(link: str) -> str:
    """Wrap a bare link in ``[[ ]]`` markup."""
    return f"[[{remove_brackets(link)}]]"


def link_target(link: str) -> str:
    """Return the note part of a link, without heading or block anchors.

    Example:
        link_target("Reading/Paper#^abc123") -> "Reading/Paper"
    """
    return remove_brackets(link).split("#", 1)[0].strip()
