import asyncio
import logging
import sys

from gptchat.config.settings import Settings, settings
from gptchat.container import configure_container, container
from gptchat.core.errors import ChatError
from gptchat.core.protocols.transport import TransportProtocol
from gptchat.core.services.chat_session import ChatSession

logger = logging.getLogger(__name__)

DEMO_PROMPTS = ["Tell me a joke.", "Tell me another joke."]

EXIT_COMMAND = "/exit"
HISTORY_COMMAND = "/history"


def print_history(session: ChatSession) -> None:
    for message in session.history():
        print(f"[{message.role.value}] {message.content}")


async def run_demo(session: ChatSession) -> None:
    """Two-turn demo conversation, then the full history."""
    for prompt in DEMO_PROMPTS:
        print(f"> {prompt}")
        print(await session.send(prompt))
    print()
    print_history(session)


async def run_chat(session: ChatSession) -> None:
    """Interactive loop until EOF or /exit."""
    print(f"Chatting with {session.model}. Type {EXIT_COMMAND} to quit.")
    while True:
        try:
            line = await asyncio.to_thread(input, "> ")
        except EOFError:
            break

        text = line.strip()
        if text == EXIT_COMMAND:
            break
        if text == HISTORY_COMMAND:
            print_history(session)
            continue

        try:
            print(await session.send(line))
        except ChatError as e:
            # Transcript keeps the unanswered message; the loop carries on.
            print(f"Error: {e.message}", file=sys.stderr)


async def _run(command: str, app_settings: Settings) -> int:
    configure_container(app_settings)
    transport = container.resolve(TransportProtocol)
    session = container.resolve(ChatSession)
    try:
        if command == "demo":
            await run_demo(session)
        else:
            await run_chat(session)
    except ChatError as e:
        logger.error(f"Chat failed: {e.message}")
        return 1
    finally:
        await transport.aclose()
        container.reset()
    return 0


def main():
    """CLI entry point."""
    logging.basicConfig(level=settings.log_level.upper(), format="%(message)s")

    if len(sys.argv) < 2:
        print("Usage: python -m gptchat.presentation.cli <command>")
        print("Commands: chat, demo")
        sys.exit(1)

    command = sys.argv[1]
    if command not in ("chat", "demo"):
        print(f"Unknown command: {command}")
        sys.exit(1)

    if not settings.openai_api_token:
        print("OPENAI_API_TOKEN is not set")
        sys.exit(1)

    sys.exit(asyncio.run(_run(command, settings)))


if __name__ == "__main__":
    main()
