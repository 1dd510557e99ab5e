"""Interactive console front end for the password manager API."""

from __future__ import annotations

import argparse
from functools import partial
from typing import Callable, List, Optional, TextIO

from backend.app.manager import (
    DEFAULT_API_URL,
    ManagerSession,
    PasswordsApiClient,
    RowView,
)

HELP_TEXT = """Commands:
  list                 show the table
  new                  fill the form for a new entry and save it
  edit <id>            load an entry into the form and save it
  delete <id>          delete an entry (asks for confirmation)
  toggle <id>          reveal or mask a row's password
  copy <id> <field>    copy site, username or password to the clipboard
  formpw               show or hide the password while filling the form
  reload               refetch the list from the server
  help                 show this text
  quit                 leave the shell"""

FORM_FIELDS = ("site", "username", "password")
COPYABLE_FIELDS = {"site", "username", "password"}


def render_table(rows: List[RowView]) -> str:
    if not rows:
        return "No passwords saved yet."
    header = ("ID", "Site", "Username", "Password")
    lines = [
        (row.entry.id, row.entry.site, row.entry.username, row.display_password)
        for row in rows
    ]
    widths = [
        max(len(header[col]), *(len(line[col]) for line in lines))
        for col in range(len(header))
    ]
    rendered = [
        "  ".join(cell.ljust(width) for cell, width in zip(header, widths)),
        "  ".join("-" * width for width in widths),
    ]
    rendered.extend(
        "  ".join(cell.ljust(width) for cell, width in zip(line, widths))
        for line in lines
    )
    return "\n".join(rendered)


class ManagerShell:
    """Line-oriented loop over a :class:`ManagerSession`."""

    def __init__(
        self,
        session: ManagerSession,
        *,
        read: Callable[[str], str] = input,
        out: Optional[TextIO] = None,
    ) -> None:
        self.session = session
        self._read = read
        self._out = out

    def say(self, text: str) -> None:
        print(text, file=self._out)

    def flush_notifications(self) -> None:
        for note in self.session.drain_notifications():
            marker = "!" if note.level == "error" else "*"
            self.say(f"[{marker}] {note.message}")

    def save_form(self) -> None:
        self.fill_form()
        if self.session.save() is None:
            for field_name, message in self.session.form_errors.items():
                self.say(f"    {field_name}: {message}")

    def fill_form(self) -> None:
        for field_name in FORM_FIELDS:
            current = getattr(self.session.form, field_name)
            shown = current
            if field_name == "password" and not self.session.show_password_in_form:
                shown = "*" * len(current)
            value = self._read(f"{field_name.capitalize()} [{shown}]: ")
            if value:
                self.session.set_field(field_name, value)

    def handle(self, line: str) -> bool:
        """Run one command; returns False when the shell should exit."""

        parts = line.split()
        if not parts:
            return True
        command, args = parts[0].lower(), parts[1:]

        if command in {"quit", "exit"}:
            return False
        if command == "help":
            self.say(HELP_TEXT)
        elif command == "list":
            self.say(render_table(self.session.rows()))
        elif command == "formpw":
            shown = self.session.toggle_form_password_visibility()
            self.say("Form password visible" if shown else "Form password hidden")
        elif command == "reload":
            if self.session.load():
                self.say(render_table(self.session.rows()))
        elif command == "new":
            self.session.reset_form()
            self.save_form()
        elif command == "edit" and len(args) == 1:
            if self.session.edit_entry(args[0]):
                self.save_form()
            else:
                self.say(f"No entry with id {args[0]}")
        elif command == "delete" and len(args) == 1:
            self.session.delete_entry(args[0])
        elif command == "toggle" and len(args) == 1:
            self.session.toggle_visibility(args[0])
            self.say(render_table(self.session.rows()))
        elif command == "copy" and len(args) == 2 and args[1] in COPYABLE_FIELDS:
            entry = self.session.entries.get(args[0])
            if entry is None:
                self.say(f"No entry with id {args[0]}")
            else:
                self.session.copy_text(getattr(entry, args[1]))
        else:
            self.say("Unknown command; type 'help'")
        self.flush_notifications()
        return True

    def run(self) -> None:
        self.session.load()
        self.flush_notifications()
        self.say(render_table(self.session.rows()))
        while True:
            try:
                line = self._read("manager> ")
            except EOFError:
                break
            if not self.handle(line):
                break


def ask_yes_no(read: Callable[[str], str], message: str) -> bool:
    return read(f"{message} [y/N] ").strip().lower() in {"y", "yes"}


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--api-url",
        default=DEFAULT_API_URL,
        help="Base URL of the passwords API (defaults to $MANAGER_API_URL).",
    )
    args = parser.parse_args()

    read = input
    with PasswordsApiClient(args.api_url) as api:
        session = ManagerSession(api, confirm=partial(ask_yes_no, read))
        ManagerShell(session, read=read).run()


if __name__ == "__main__":
    main()
