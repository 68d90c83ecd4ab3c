"""CLI helpers exposed for other modules."""

from .ui import confirm_with_arrows, edit_line, select_with_arrows

__all__ = ["confirm_with_arrows", "edit_line", "select_with_arrows"]
