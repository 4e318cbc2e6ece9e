from dataclasses import dataclass

@dataclass(slots=True)
class Countdown:
    """Ticks left before the next timed row injection.

    ``running`` is False outside timed play; a stopped countdown never fires.
    """
    duration: int
    remaining: int
    running: bool = False
