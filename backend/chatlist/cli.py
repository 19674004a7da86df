"""
Command line access to the conversation list.

Usage:
    chatlist chats
    chatlist chats --latest 10
    chatlist search alice
    chatlist create "Weekend plans"
"""

import argparse
import asyncio
import sys

from chatlist.config import get_settings
from chatlist.dependencies import create_chats_state, get_chat_client
from chatlist.errors import ChatListError
from chatlist.logging_config import setup_logging
from chatlist.models.domain import Chat
from chatlist.store import ChatsState, SearchHeading, SearchListItem


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive count, got {value}")
    return number


def format_chat(chat: Chat) -> str:
    """One display line for a chat."""
    preview = ""
    if chat.last_message is not None and chat.last_message.text:
        preview = f" - {chat.last_message.sender_username}: {chat.last_message.text}"
    stamp = chat.effective_time.strftime("%Y-%m-%d %H:%M")
    return f"[{chat.id}] {stamp} {chat.title} ({chat.chat_type.value.lower()}){preview}"


def format_item(item: Chat | SearchListItem) -> str:
    if isinstance(item, SearchHeading):
        return f"== {item.title} =="
    if isinstance(item, Chat):
        return format_chat(item)
    return format_chat(item.chat)


async def _run(args: argparse.Namespace) -> int:
    async with get_chat_client() as client:
        state: ChatsState = create_chats_state(client)

        if args.command == "chats":
            if args.latest is not None:
                await state.get_latest_chats(args.latest)
            else:
                await state.get_chats()
        elif args.command == "search":
            await state.search_chats(args.query)
            if state.no_search_result:
                print(f"No chats match {args.query!r}")
                return 0
        elif args.command == "create":
            state.on_input(args.title)
            chat = await state.create_new_chat()
            if chat is None:
                print("A title is required", file=sys.stderr)
                return 1
            print(f"Created {format_chat(chat)}")
            return 0

        for item in state.chats:
            print(format_item(item))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the chat list command line."""
    parser = argparse.ArgumentParser(description="Conversation list client")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: from settings)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    chats_parser = subparsers.add_parser("chats", help="List chats, most recent first")
    chats_parser.add_argument(
        "--latest",
        type=positive_int,
        default=None,
        help="Only load the N most recently active chats",
    )

    search_parser = subparsers.add_parser("search", help="Search chats")
    search_parser.add_argument("query", help="Text to search for")

    create_parser = subparsers.add_parser("create", help="Create a chat")
    create_parser.add_argument("title", help="Title of the new chat")

    args = parser.parse_args(argv)
    settings = get_settings()
    setup_logging(args.log_level or settings.log_level)

    try:
        return asyncio.run(_run(args))
    except ChatListError as e:
        print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
