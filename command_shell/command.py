from dataclasses import dataclass, field
from typing import Optional


@dataclass
class Command:
    name: str
    args: list[str] = field(default_factory=list)
    raw: str = ""

    @classmethod
    def parse(cls, line: str) -> Optional["Command"]:
        """Split a line into an upper-cased verb and its arguments"""
        tokens = line.split()
        if not tokens:
            return None

        return cls(name=tokens[0].upper(), args=tokens[1:], raw=line.strip())

    def get(self, index: int, default: Optional[str] = None) -> Optional[str]:
        if index < 0:
            raise ValueError("Index cannot be negative")

        if index < len(self.args):
            return self.args[index]

        return default
