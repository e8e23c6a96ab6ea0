from dataclasses import dataclass, field


@dataclass
class Reply:
    lines: list[str] = field(default_factory=list)
    exit: bool = False

    def text(self) -> str:
        return "\n".join(self.lines)

    def then_exit(self) -> 'Reply':
        return Reply(lines=self.lines, exit=True)

def reply(*lines: str) -> Reply:
    return Reply(lines=list(lines))
