from dataclasses import dataclass

@dataclass(slots=True)
class Progress:
    """Score and level progress; score only ever grows."""
    score: int = 0
    level: int = 1
    progress: int = 0
    target: int = 100

    @property
    def fraction(self) -> float:
        if self.target <= 0:
            return 1.0
        return min(self.progress / self.target, 1.0)
