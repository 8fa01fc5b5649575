"""
Interactive terminal chat surface for sdbot.

Architectural role:
- Stands in for a chat channel: each input line is one inbound message.
- Delegates all command handling to `sdbot.core.engine.process_message`.

Request lifecycle (per line):
1. Read stdin.
2. Handle local control commands (`exit`/`quit`).
3. Forward the line to the engine with the process-wide `RuntimeConfig`.
4. Print every reply line as it is produced.

Input validation behavior:
- Empty input is ignored.
- Lines without the trigger word get a short hint.

Error handling strategy:
- The engine never raises for command failures.
- EOF and keyboard interrupts terminate the loop without traceback output.

Side effects:
- Generated images are written to `SD_OUTPUT_DIR` (cwd by default).
"""

import os
import sys

from sdbot.config import settings
from sdbot.config.runtime import load_runtime_config
from sdbot.core.engine import process_message


# =========================================================
# UTF-8 SAFE OUTPUT
# =========================================================

if hasattr(sys.stdout, "reconfigure"):
    try:
        sys.stdout.reconfigure(encoding="utf-8", errors="ignore")
    except (AttributeError, ValueError):
        pass


def print_reply(line: str) -> None:
    print(line, flush=True)


# =========================================================
# MAIN
# =========================================================

def main():
    """Run the interactive command loop until `exit`, EOF or Ctrl-C."""
    settings.configure_logging()

    config = load_runtime_config()
    trigger = settings.trigger_word()
    sender = os.getenv("USER", "")

    print("sdbot started. (Type 'exit' to quit)")
    print(f"Generation host: {config.host}")
    print(f"Commands: {trigger} <prompt> | {trigger} vars | {trigger} set <field> <value>")
    print("-" * 60)

    while True:

        try:
            message = input("> ").strip()

        except EOFError:
            print()
            break

        except KeyboardInterrupt:
            print("\nInterrupted.")
            break

        if not message:
            continue

        if message.lower() in ("exit", "quit"):
            print("Shutting down.")
            break

        if not process_message(message, config, print_reply, sender=sender, trigger=trigger):
            print(f"Not a command. Start with '{trigger} '.")


if __name__ == "__main__":
    main()
