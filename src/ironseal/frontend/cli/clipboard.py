"""Clipboard utilities for the CLI frontend.

Uses pyperclip for cross-platform clipboard access.
"""

from __future__ import annotations

import pyperclip


def copy_token(token: str) -> bool:
    """Copy a sealed token to the system clipboard.

    Returns:
        False if no clipboard mechanism is available, True otherwise.
    """
    try:
        pyperclip.copy(token)
    except pyperclip.PyperclipException:
        return False
    return True
