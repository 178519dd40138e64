#!/usr/bin/env python3
"""
todostore - CLI Interface
=========================
Command-line tool for a persistent todo list.

Usage:
    todostore add "Buy milk" --due tomorrow
    todostore list
    todostore list milk status:all
    todostore show 3f9c2a1b7d4e
    todostore edit 3f9c2a1b7d4e --title "Buy oat milk"
    todostore done 3f9c2a1b7d4e
"""

import argparse
import json
import logging
import os
import sys

from .errors import TodoStoreError
from .manager import DEFAULT_FILE_NAME, TodoManager
from .query import guess_date

DEFAULT_DATA_DIR = "~/.todostore"
DATA_DIR_ENV = "TODOSTORE_DIR"

logger = logging.getLogger("todostore")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="todostore",
        description="todostore - Persistent todo list with search",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  todostore add "Pay bills" --due 2026/11/01   Create a todo
  todostore list                              Incomplete todos
  todostore list status:all                   Every todo
  todostore list status:done due:>today       Completed, due after now
  todostore list milk due:<tomorrow           Title contains "milk", due before tomorrow
  todostore show <id>                         Show one todo
  todostore edit <id> --no-due                Clear the due date
  todostore done <id>                         Toggle completion
        """
    )
    parser.add_argument(
        "--dir",
        default=os.environ.get(DATA_DIR_ENV, DEFAULT_DATA_DIR),
        help=f"Data directory (default: ${DATA_DIR_ENV} or {DEFAULT_DATA_DIR})"
    )
    parser.add_argument("--file", default=DEFAULT_FILE_NAME, help="Store file name")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # ADD command
    add_parser = subparsers.add_parser("add", help="Create a todo")
    add_parser.add_argument("title", help="Todo title")
    add_parser.add_argument("-d", "--description", default="", help="Description (markdown)")
    add_parser.add_argument("--due", help="Due date (YYYY-MM-DD, YYYY/MM/DD, today, tomorrow)")

    # LIST command
    list_parser = subparsers.add_parser("list", help="Search todos")
    list_parser.add_argument("query", nargs="*", help="Search query tokens")
    list_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # SHOW command
    show_parser = subparsers.add_parser("show", help="Show one todo")
    show_parser.add_argument("todo_id", help="Todo ID")
    show_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # EDIT command
    edit_parser = subparsers.add_parser("edit", help="Edit a todo")
    edit_parser.add_argument("todo_id", help="Todo ID")
    edit_parser.add_argument("--title", help="New title")
    edit_parser.add_argument("-d", "--description", help="New description")
    due_group = edit_parser.add_mutually_exclusive_group()
    due_group.add_argument("--due", help="New due date")
    due_group.add_argument("--no-due", action="store_true", help="Remove the due date")

    # DONE command
    done_parser = subparsers.add_parser("done", help="Toggle completion")
    done_parser.add_argument("todo_id", help="Todo ID")

    return parser


def _to_json(todos) -> str:
    return json.dumps(
        [todo.model_dump(mode="json", by_alias=True) for todo in todos],
        indent=2,
        ensure_ascii=False
    )


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if not args.command:
        parser.print_help()
        return 1

    try:
        return run(args)
    except TodoStoreError as e:
        print(f"❌ {e}")
        return 1


def run(args) -> int:
    manager = TodoManager(data_dir=args.dir, file_name=args.file)

    if args.command == "add":
        due_date = None
        if args.due is not None:
            due_date = guess_date(args.due)
            if due_date is None:
                print(f"❌ Unrecognized date: {args.due}")
                return 1

        todo = manager.create_todo(args.title, description=args.description, due_date=due_date)
        print(f"✅ Created: {todo.id}")
        print(f"   Title: {todo.title}")

    elif args.command == "list":
        todos = manager.search(" ".join(args.query))
        if args.json:
            print(_to_json(todos))
        else:
            print(manager.get_list_report(todos))

    elif args.command == "show":
        todo = manager.get_todo(args.todo_id)
        if not todo:
            print(f"❌ Todo not found: {args.todo_id}")
            return 1

        if args.json:
            print(json.dumps(todo.model_dump(mode="json", by_alias=True), indent=2, ensure_ascii=False))
        else:
            print(manager.get_detail_report(todo))

    elif args.command == "edit":
        changes = {}
        if args.title is not None:
            changes["title"] = args.title
        if args.description is not None:
            changes["description"] = args.description
        if args.no_due:
            changes["due_date"] = None
        elif args.due is not None:
            due_date = guess_date(args.due)
            if due_date is None:
                print(f"❌ Unrecognized date: {args.due}")
                return 1
            changes["due_date"] = due_date

        todo = manager.edit_todo(args.todo_id, **changes)
        if not todo:
            print(f"❌ Todo not found: {args.todo_id}")
            return 1
        print(f"💾 Saved: {manager.format_todo(todo)}")

    elif args.command == "done":
        todo = manager.toggle_completed(args.todo_id)
        if not todo:
            print(f"❌ Todo not found: {args.todo_id}")
            return 1
        state = "complete" if todo.is_completed else "incomplete"
        print(f"✅ Marked as {state}: {todo.title}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
