"""Directory autocompletion for the add-directory prompt."""

import os


def split_partial(partial: str) -> tuple[str, str]:
    """Split typed text into (directory to list, name prefix).

    Text ending in a separator names the directory itself; otherwise the
    last segment is a prefix filter on the parent's entries. A bare name
    has no directory part and is matched against the working directory.
    """
    if not partial:
        return os.sep, ""

    expanded = os.path.expanduser(partial)
    if expanded.endswith(os.sep):
        return expanded, ""

    directory, prefix = os.path.split(expanded)
    return directory, prefix


def suggest(partial: str, show_hidden: bool = False) -> list[str]:
    """List subdirectories matching a partially typed path.

    Args:
        partial: Text typed so far
        show_hidden: Include dot-directories

    Returns:
        Matching directories, each with a trailing separator, in the order
        the filesystem enumerates them
    """
    directory, prefix = split_partial(partial)
    prefix = prefix.lower()

    try:
        with os.scandir(directory or os.curdir) as it:
            entries = list(it)
    except OSError:
        return []

    suggestions = []
    for entry in entries:
        try:
            if not entry.is_dir():
                continue
        except OSError:
            continue

        name = entry.name
        if not show_hidden and name.startswith("."):
            continue
        if prefix and not name.lower().startswith(prefix):
            continue

        suggestions.append(os.path.join(directory, name) + os.sep)

    return suggestions
