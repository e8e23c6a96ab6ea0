from .command import Command
from .reply import Reply, reply
from .shell import CommandShell

__all__ = ["Command", "Reply", "reply", "CommandShell"]
