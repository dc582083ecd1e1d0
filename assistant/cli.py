"""CLI tool for running and trying out the assistant.

Usage:
    python -m assistant.cli serve [--host HOST] [--port PORT]
    python -m assistant.cli chat <user_id> [--remote URL]
    python -m assistant.cli summary <user_id> <session_id>
"""

import asyncio
import sys

from sqlmodel import Session

from assistant.database import engine, create_db_and_tables
from assistant.services.chat import ChatService
from assistant.services.completion_client import CompletionClient
from assistant.services.orchestrator import TurnOrchestrator
from assistant.services.store import TradeStore
from assistant.services.summary import SummaryGenerator
from assistant.utils.logging import setup_logging


def _option(args: list[str], name: str, default: str | None = None) -> str | None:
    if name in args:
        idx = args.index(name)
        if idx + 1 < len(args):
            return args[idx + 1]
    return default


def serve(args: list[str]):
    import uvicorn

    uvicorn.run(
        "assistant.main:app",
        host=_option(args, "--host", "127.0.0.1"),
        port=int(_option(args, "--port", "8000")),
    )


async def _chat_loop(orchestrator: TurnOrchestrator):
    print("Type a message, /clear to reset the conversation, /quit to exit.")
    seen = 0
    while True:
        try:
            text = input("> ").strip()
        except EOFError:
            break
        if text == "/quit":
            break
        if text == "/clear":
            orchestrator.clear()
            seen = 0
            print("(conversation cleared)")
            continue

        await orchestrator.submit(text)
        for message in orchestrator.messages[seen:]:
            if message.role == "assistant":
                print(f"{orchestrator.assistant_name}: {message.content}\n")
        seen = len(orchestrator.messages)


def chat(args: list[str]):
    if not args:
        print("Usage: python -m assistant.cli chat <user_id> [--remote URL]")
        sys.exit(1)
    user_id = args[0]
    remote = _option(args, "--remote")
    create_db_and_tables()

    with Session(engine) as db_session:
        store = TradeStore(db_session)
        sessions = store.list_sessions(user_id)

        if remote:
            from assistant.client import AssistantClient
            responder = AssistantClient(remote)
        else:
            responder = ChatService(store, CompletionClient.from_settings())

        orchestrator = TurnOrchestrator(
            user_id=user_id,
            responder=responder,
            notify=lambda text: print(f"[!] {text}"),
        )

        def switch_session(name: str):
            match = next((s for s in sessions if s.name.lower() == name.lower()), None)
            if match is None:
                print(f"[!] No session named '{name}'")
                return
            orchestrator.set_session(match.id)
            print(f"(now viewing session '{match.name}')")

        orchestrator.on_session_switch = switch_session
        orchestrator.open()
        asyncio.run(_chat_loop(orchestrator))


def summary(args: list[str]):
    if len(args) < 2:
        print("Usage: python -m assistant.cli summary <user_id> <session_id>")
        sys.exit(1)
    user_id, session_id = args[0], args[1]
    create_db_and_tables()

    with Session(engine) as db_session:
        generator = SummaryGenerator(TradeStore(db_session), CompletionClient.from_settings())
        result = asyncio.run(generator.summarize(session_id, user_id))

    if not result.success:
        print(f"Summary failed: {result.error}")
        sys.exit(1)
    print(result.text)


COMMANDS = {
    "serve": serve,
    "chat": chat,
    "summary": summary,
}


def main():
    if len(sys.argv) < 2:
        print("Usage: python -m assistant.cli <command>")
        print(f"Commands: {', '.join(COMMANDS)}")
        sys.exit(1)

    setup_logging()
    command = COMMANDS.get(sys.argv[1])
    if command is None:
        print(f"Unknown command: {sys.argv[1]}")
        sys.exit(1)
    command(sys.argv[2:])


if __name__ == "__main__":
    main()
