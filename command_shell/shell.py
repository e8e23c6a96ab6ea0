import asyncio
import time
from typing import Awaitable, Callable, Dict, List, NamedTuple, Optional, TextIO
from .command import Command
from .reply import Reply
import logging

logger = logging.getLogger()

Handler = Callable[[Command], Awaitable[object]]


class Registration(NamedTuple):
    handler: Handler
    arity: int
    usage: str
    summary: str


class CommandShell:
    PROMPT = 'Enter command > '

    def __init__(self, prompt: str = PROMPT):
        self.prompt = prompt
        self.commands: Dict[str, Registration] = {}

    def command(self, name: str, arity: int = 0, usage: Optional[str] = None, summary: str = ''):
        """Decorator for registering command handlers"""
        if arity < 0:
            raise ValueError(f"arity must be >= 0, got {arity}")

        def decorator(handler: Handler):
            verb = name.upper()
            self.commands[verb] = Registration(
                handler=handler,
                arity=arity,
                usage=usage or verb,
                summary=summary,
            )
            return handler
        return decorator

    def help_lines(self) -> List[str]:
        """Command summary in registration order"""
        if not self.commands:
            return []

        width = max(len(r.usage) for r in self.commands.values())
        lines = ['Available Commands:']
        for registration in self.commands.values():
            lines.append(f"{registration.usage:<{width}} - {registration.summary}")
        return lines

    async def handle_line(self, line: str) -> Optional[Reply]:
        """Route a line to the matching handler. Blank lines give None"""
        command = Command.parse(line)
        if command is None:
            return None

        registration = self.commands.get(command.name)
        if registration is None:
            logger.warning(f"Unknown command: {command.raw}")
            return Reply(lines=[
                f"UNKNOWN COMMAND: {command.name}",
                'Type a valid command from the list above.',
            ])

        if len(command.args) < registration.arity:
            return Reply(lines=[f"USAGE: {registration.usage}"])

        try:
            result = await registration.handler(command)

            if isinstance(result, Reply):
                return result
            elif isinstance(result, str):
                return Reply(lines=[result])
            elif isinstance(result, list):
                return Reply(lines=[str(item) for item in result])
            elif result is None:
                return Reply()

            raise TypeError("Handler result cannot be converted to a reply")
        except Exception as e:
            logger.error(f"Handler error in {command.name} ({command.raw}): {e}")
            return Reply(lines=[f"ERROR: {e}"])

    async def run(self, stdin: TextIO, stdout: TextIO):
        """Prompt loop. Ends on a reply marked exit or at end of input"""
        loop = asyncio.get_running_loop()

        while True:
            stdout.write(f"\n{self.prompt}")
            stdout.flush()

            line = await loop.run_in_executor(None, stdin.readline)
            if not line:
                logger.info("End of input, leaving the shell")
                stdout.write('\n')
                stdout.flush()
                break

            start_time = time.perf_counter()
            logger.debug(f"--> {line.strip()}")

            result = await self.handle_line(line)
            if result is None:
                continue

            if result.lines:
                stdout.write(result.text() + '\n')
                stdout.flush()

            elapsed_ms = (time.perf_counter() - start_time) * 1000
            logger.debug(f"<-- {len(result.lines)} lines - {elapsed_ms:.2f}ms")

            if result.exit:
                break
