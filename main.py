import asyncio
import logging
import os
import sys

from command_shell.command import Command
from command_shell.reply import Reply, reply
from command_shell.shell import CommandShell
from persondb import PersonDatabase
from persondb.models.exceptions import DatabaseFileError
from persondb.models.person import PersonRecord
from persondb.models.record_line import encode_line

logging.basicConfig(
    level=os.environ.get("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger()

DEFAULT_DATABASE_FILE = os.environ.get("PERSONDB_FILE", "data/database.txt")


def format_records(records: list[PersonRecord]) -> list[str]:
    return [encode_line(record) for record in records]


async def main(argv: list[str]) -> int:
    if len(argv) == 1:
        database_file = argv[0]
        print(f"Using specified database file: {database_file}")
    elif not argv:
        database_file = DEFAULT_DATABASE_FILE
        print(f"No file specified. Using default: {database_file}")
    else:
        print("Usage: main.py <database_file>")
        print("Example: main.py data/database.txt")
        print("If no file specified, default path will be used.")
        return 1

    print("PERSON DATABASE MANAGEMENT SYSTEM")
    print(f"Database File: {database_file}")
    print("==========================================")

    try:
        database = await PersonDatabase.create(database_file)
    except DatabaseFileError as e:
        print(f"ERROR: {e}")
        print("FATAL ERROR: Cannot load database. Exiting.")
        return 1

    print(f"SUCCESS: Loaded {database.size()} person records")

    async with database:
        shell = CommandShell()
        await register_commands(shell, database)
        logger.debug(f"Registered commands: {list(shell.commands)}")

        print()
        print("\n".join(shell.help_lines()))
        print("==========================================")

        await shell.run(sys.stdin, sys.stdout)

    return 0


async def register_commands(shell: CommandShell, database: PersonDatabase):

    @shell.command('FIND', arity=2, usage='FIND [first] [last]', summary='Find specific person')
    async def find(command: Command) -> Reply:
        first, last = command.get(0), command.get(1)
        record = await database.find(first, last)
        if record is None:
            return reply(f"PERSON NOT FOUND: {first} {last}")
        return reply(f"FOUND: {encode_line(record)}")

    @shell.command('FAMILY', arity=1, usage='FAMILY [last]', summary='Find all with last name')
    async def family(command: Command) -> Reply:
        last = command.get(0)
        records = await database.find_by_last_name(last)
        return reply(f"Searching for last name: {last}", *format_records(records))

    @shell.command('FIRST', arity=1, usage='FIRST [first]', summary='Find all with first name')
    async def first_name(command: Command) -> Reply:
        first = command.get(0)
        records = await database.find_by_first_name(first)
        return reply(f"Searching for first name: {first}", *format_records(records))

    @shell.command('PRINT', summary='Display all records')
    async def print_all(command: Command) -> Reply:
        records = await database.all_records()
        if not records:
            return reply("DATABASE IS EMPTY")
        return reply("ALL RECORDS:", "------------", *format_records(records))

    @shell.command('OLDEST', summary='Find oldest person')
    async def oldest(command: Command) -> Reply:
        record = await database.oldest()
        if record is None:
            return reply("DATABASE IS EMPTY")
        return reply(
            f"OLDEST PERSON: {record.first_name} {record.last_name} from {record.state} "
            f"(Zip: {record.zip_code}) Born: {record.birth_year}-{record.birth_month}-{record.birth_day}"
        )

    @shell.command('SAVE', summary='Save database to file')
    async def save(command: Command) -> Reply:
        try:
            await database.save()
        except DatabaseFileError as e:
            return reply(f"ERROR: Cannot create output file {e.path}")
        return reply(f"SUCCESS: Database saved to {database.file_path}")

    @shell.command('RELOCATE', arity=3, usage='RELOCATE [first] [last] [zip]', summary='Update zip code')
    async def relocate(command: Command) -> Reply:
        first, last, zip_code = command.get(0), command.get(1), command.get(2)
        if not await database.relocate(first, last, zip_code):
            return reply(f"PERSON NOT FOUND: {first} {last}")
        return reply(f"UPDATED: {first} {last} now lives in zip code {zip_code}")

    @shell.command('DELETE', arity=2, usage='DELETE [first] [last]', summary='Remove person')
    async def delete(command: Command) -> Reply:
        first, last = command.get(0), command.get(1)
        if not await database.delete(first, last):
            return reply(f"PERSON NOT FOUND: {first} {last}")
        return reply(f"DELETED: {first} {last}")

    @shell.command('VERIFY', summary='Check tree balance')
    async def verify(command: Command) -> Reply:
        report = await database.verify()
        if report.balanced:
            return reply(f"TREE STATUS: Balanced with height {report.height}")
        return reply(f"TREE STATUS: Not balanced (height {report.height})")

    @shell.command('HELP', summary='Show this command list')
    async def show_help(command: Command) -> Reply:
        return reply(*shell.help_lines())

    @shell.command('EXIT', summary='Save and exit program')
    async def exit_shell(command: Command) -> Reply:
        lines = ["Saving database and exiting. Goodbye!"]
        try:
            await database.save()
            lines.append(f"SUCCESS: Database saved to {database.file_path}")
        except DatabaseFileError as e:
            lines.append(f"ERROR: Cannot create output file {e.path}")
        return reply(*lines).then_exit()


def run() -> None:
    try:
        sys.exit(asyncio.run(main(sys.argv[1:])))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    run()
