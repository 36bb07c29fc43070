import asyncio
import sys
import threading
import time

from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from config.config import Config
from context.preference_questions import question_for
from context.preferences_context import format_preferences_context
from context.quick_options import parse_quick_options
from context.stream_reader import collect_stream_text, iter_stream_lines
from models.conversation import ConversationMessage
from models.errors import GuideError
from models.preferences import InferredPreference, PreferenceRecord, PreferenceSignals
from orchestrator.core import LifeGuideOrchestrator
from server.utils import MAX_CONVERSATION_HISTORY, validate_request


def show_loading_animation(stop_event: threading.Event) -> None:
    """
    Show a loading animation in the console.

    Args:
        stop_event: A threading.Event that will be set to stop the animation
    """
    while not stop_event.is_set():
        for char in '|/-\\':
            if stop_event.is_set():
                break
            sys.stdout.write(f'\r\033[93mThinking {char}\033[0m')
            sys.stdout.flush()
            time.sleep(0.1)

    # Clear the loading line
    sys.stdout.write('\r' + ' ' * 20 + '\r')
    sys.stdout.flush()


async def ask(
    orchestrator: LifeGuideOrchestrator,
    message: str,
    history: list[ConversationMessage],
    preferences: dict[str, InferredPreference],
) -> tuple[str, PreferenceSignals]:
    """Run one request in-process and read the whole streamed answer."""
    records = [
        PreferenceRecord(preference_key=p.key, preference_value=p.value, confidence_level="inferred")
        for p in preferences.values()
    ]
    request = validate_request(
        {
            "message": message,
            "conversationHistory": [turn.to_dict() for turn in history],
            "preferencesContext": format_preferences_context(records) or None,
        }
    )
    reply = await orchestrator.answer(request)
    lines = [line async for line in iter_stream_lines(reply.stream)]
    return collect_stream_text(lines), reply.signals


def print_reply(text: str, signals: PreferenceSignals) -> None:
    display, options = parse_quick_options(text)
    print(f"\nGuide: {display}")

    if options:
        print("\nQuick options:")
        for idx, option in enumerate(options, 1):
            suffix = f" - {option.description}" if option.description else ""
            print(f"  {idx}. {option.label}{suffix}")

    question = question_for(signals.missing_preference)
    if question:
        print(f"\n[{question.question}] " + " / ".join(o.label for o in question.options))

    for pref in signals.inferred_preferences:
        print(f"[Noted: {pref.label}]")
    print()


def main():
    config = Config()
    for problem in config.validate():
        print(f"Warning: {problem}")

    try:
        orchestrator = LifeGuideOrchestrator.from_config(config)
    except Exception as e:
        print(f"Error initializing guide: {str(e)}")
        return

    # One loop for the session; the SDK clients keep connections bound to it
    loop = asyncio.new_event_loop()
    history: list[ConversationMessage] = []
    preferences: dict[str, InferredPreference] = {}

    print("\n=== SG Life Guide ===")
    print("Type 'exit' to quit, 'prefs' to see what was noted, or 'help' for commands\n")

    while True:
        try:
            user_input = input("You: ").strip()

            # Handle commands
            if not user_input:
                continue

            if user_input.lower() in ('exit', 'quit'):
                print("\nGoodbye!")
                break

            if user_input.lower() == 'prefs':
                print("\n=== Noted Preferences ===")
                if not preferences:
                    print("(none yet)")
                for pref in preferences.values():
                    print(f"{pref.key}: {pref.label}")
                print()
                continue

            if user_input.lower() == 'clear':
                history.clear()
                preferences.clear()
                print("\nConversation cleared.\n")
                continue

            if user_input.lower() == 'help':
                print("\n=== Available Commands ===")
                print("help      - Show this help message")
                print("prefs     - Show preferences noted from the conversation")
                print("clear     - Forget history and preferences")
                print("exit/quit - Exit the program\n")
                continue

            # Show loading animation in a separate thread
            stop_animation = threading.Event()
            loading_thread = threading.Thread(target=show_loading_animation, args=(stop_animation,))
            loading_thread.daemon = True
            loading_thread.start()

            try:
                text, signals = loop.run_until_complete(
                    ask(orchestrator, user_input, history, preferences)
                )
            finally:
                stop_animation.set()
                loading_thread.join()

            print_reply(text, signals)

            for pref in signals.inferred_preferences:
                preferences[pref.key] = pref
            history.append(ConversationMessage(role="user", content=user_input))
            history.append(ConversationMessage(role="assistant", content=text))
            del history[:-MAX_CONVERSATION_HISTORY]

        except KeyboardInterrupt:
            print("\nExiting...")
            break
        except GuideError as e:
            print(f"\nError: {e.message}\n")
            continue
        except Exception as e:
            print(f"\nError: {str(e)}")
            continue

    loop.close()


if __name__ == "__main__":
    main()
