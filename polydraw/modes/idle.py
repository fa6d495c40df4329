"""Mode in which the editor ignores all input."""

from polydraw.modes.base import Mode


class IdleMode(Mode):
    """No interaction; the host keeps its native map behavior."""

    def activate(self) -> None:
        self.is_active = True

    def deactivate(self) -> None:
        self.is_active = False
