"""Bounded undo/redo history over store actions."""

from dataclasses import dataclass, field

from loguru import logger

from polydraw.common.errors import raise_with_remedy
from polydraw.core.actions import Action, StoreLike

DEFAULT_HISTORY_LIMIT = 100


@dataclass
class HistoryManager:
    """Double-stack history with a bounded undo depth.

    Pushing clears the redo stack. When the undo stack grows past ``limit``
    the oldest entry is evicted; a push is never refused.
    """

    limit: int = DEFAULT_HISTORY_LIMIT
    """Maximum undo history depth."""

    undo_stack: list[Action] = field(default_factory=list)
    redo_stack: list[Action] = field(default_factory=list)

    def __post_init__(self):
        if self.limit < 1:
            raise_with_remedy(
                f"Invalid history limit: {self.limit}",
                "Use a history limit of at least 1.",
            )

    def push(self, action: Action) -> None:
        """Record a committed action and invalidate the redo history."""
        self.undo_stack.append(action)
        self.redo_stack.clear()
        if len(self.undo_stack) > self.limit:
            evicted = self.undo_stack.pop(0)
            logger.debug(f"History full, evicted oldest {evicted.type.value} action")

    def undo(self, store: StoreLike) -> bool:
        """Revert the newest action.

        Returns:
            True if an action was undone, False when the stack is empty.
        """
        if not self.undo_stack:
            logger.warning("Undo stack is empty")
            return False
        action = self.undo_stack.pop()
        action.revert(store)
        self.redo_stack.append(action)
        return True

    def redo(self, store: StoreLike) -> bool:
        """Re-apply the most recently undone action.

        Returns:
            True if an action was redone, False when the stack is empty.
        """
        if not self.redo_stack:
            logger.warning("Redo stack is empty")
            return False
        action = self.redo_stack.pop()
        action.apply(store)
        self.undo_stack.append(action)
        return True

    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def clear(self) -> None:
        """Drop both stacks, e.g. after a bulk feature replacement."""
        self.undo_stack.clear()
        self.redo_stack.clear()
