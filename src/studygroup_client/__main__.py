"""Entrypoint: python -m studygroup_client"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from studygroup_client.application.session import SessionContext
from studygroup_client.application.state import Error, Success
from studygroup_client.config import settings
from studygroup_client.domain.entities.message import Message
from studygroup_client.infrastructure.http.client import ApiClient
from studygroup_client.infrastructure.http.repositories.auth import HttpAuthRepository
from studygroup_client.infrastructure.http.repositories.chat import HttpChatRepository
from studygroup_client.infrastructure.preferences.store import SqlAlchemyPreferenceStore
from studygroup_client.logging_config import configure_logging
from studygroup_client.sync.controller import ChatSyncController
from studygroup_client.viewmodels.auth import AuthViewModel

logger = logging.getLogger(__name__)


def _format(message: Message) -> str:
    return f"[{message.created_at:%Y-%m-%d %H:%M}] {message.sender_display_name}: {message.body}"


async def _login(api: ApiClient, session: SessionContext, args: argparse.Namespace) -> int:
    result = await AuthViewModel(HttpAuthRepository(api), session).login(args.email, args.password)
    if isinstance(result, Success):
        print(f"Logged in as {session.nickname} (user {session.user_id})")
        return 0
    if isinstance(result, Error):
        print(result.reason, file=sys.stderr)
    return 1


async def _send(api: ApiClient, session: SessionContext, args: argparse.Namespace) -> int:
    controller = ChatSyncController(HttpChatRepository(api), session)
    result = await controller.send(args.group_id, args.text)
    if isinstance(result, Success):
        print(_format(result.value))
        return 0
    if isinstance(result, Error):
        print(result.reason, file=sys.stderr)
    return 1


async def _chat(api: ApiClient, session: SessionContext, args: argparse.Namespace) -> int:
    controller = ChatSyncController(HttpChatRepository(api), session)
    printed: set[int] = set()

    def _on_state(state: object) -> None:
        if isinstance(state, Success):
            for message in state.value:
                if message.id not in printed:
                    printed.add(message.id)
                    print(_format(message), flush=True)
        elif isinstance(state, Error):
            print(state.reason, file=sys.stderr)

    controller.messages_state.subscribe(_on_state)
    async with controller.open(args.group_id):
        if isinstance(controller.messages_state.value, Error):
            return 1
        if controller.is_empty:
            print("No messages yet.")
        await asyncio.Event().wait()
    return 0


async def _run(args: argparse.Namespace) -> int:
    store = SqlAlchemyPreferenceStore.from_url()
    session = await SessionContext.restore(store)
    try:
        if args.command == "logout":
            await session.logout()
            return 0
        if args.command == "whoami":
            if not session.is_logged_in:
                print("Not logged in")
                return 1
            print(f"{session.nickname} (user {session.user_id})")
            return 0
        if args.command != "login" and not session.is_logged_in:
            print("Login required", file=sys.stderr)
            return 1
        async with ApiClient() as api:
            handler = {"login": _login, "send": _send, "chat": _chat}[args.command]
            return await handler(api, session, args)
    finally:
        await store.dispose()


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="studygroup")
    sub = parser.add_subparsers(dest="command", required=True)

    login = sub.add_parser("login", help="log in and remember the user")
    login.add_argument("email")
    login.add_argument("password")

    sub.add_parser("logout", help="forget the stored user")
    sub.add_parser("whoami", help="show the stored user")

    send = sub.add_parser("send", help="send one chat message")
    send.add_argument("group_id", type=int)
    send.add_argument("text")

    chat = sub.add_parser("chat", help="print a group chat and follow new messages")
    chat.add_argument("group_id", type=int)
    return parser


def main(argv: list[str] | None = None) -> int:
    args = _parser().parse_args(argv)
    configure_logging(settings.LOG_LEVEL)
    try:
        return asyncio.run(_run(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
