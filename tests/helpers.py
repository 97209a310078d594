"""Shared test helpers for Tomatodo."""

from tomatodo.timer.engine import SessionController


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


def run_ticks(controller: SessionController, count: int) -> None:
    """Fire ``tick()`` *count* times, as the 1 Hz timer would."""
    for _ in range(count):
        controller.tick()


def finish_phase(controller: SessionController) -> None:
    """Start if needed and tick until the current phase ends."""
    controller.start()
    run_ticks(controller, controller.time_left)
