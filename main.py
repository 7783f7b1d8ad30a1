import asyncio
import logging
import sys
from pathlib import Path

from core.config import load_config
from core.orchestrator import Orchestrator
from explorer.files import read_text, scan_directory
from explorer.tree import build_tree, display_root, render_tree
from llm.client import LLMClient
from memory import create_log
from memory.types import Category

TASK_COMMANDS: dict[str, Category] = {
    "/test": Category.TEST_GENERATION,
    "/debug": Category.DEBUGGING,
    "/review": Category.REVIEW,
    "/logs": Category.LOG_ANALYSIS,
    "/refactor": Category.REFACTOR,
}

HELP = """Commands:
  <text>                     chat with Helix
  /test FILE [FRAMEWORK]     generate unit tests
  /debug FILE [ERRORLOG]     debug code against an error log file
  /review FILE | /logs FILE | /refactor FILE
  /stats  /history  /clear  /clear-chat
  /export FILE  /import FILE
  /tree DIR  /cat PATH
  /health
  /quit"""


async def text_repl() -> None:
    """Text REPL over the orchestrator, the interaction log and the explorer."""
    config = load_config()
    log = create_log(config.storage)
    llm_client = LLMClient(config.llm)
    orchestrator = Orchestrator(config=config, llm_client=llm_client, log=log)
    tree = None

    print(f"Helix starting in {config.llm.backend} mode")
    print(f"History: {len(log.all())} records, {len(orchestrator.transcript)} chat messages")
    print(HELP)
    print("-" * 40)

    while True:
        line = input("\nYou: ").strip()
        if not line:
            continue
        cmd, _, rest = line.partition(" ")
        args = rest.split()

        if cmd in ("/quit", "/exit", "/q"):
            break

        # a mistyped path must not end the session
        try:
            if cmd in TASK_COMMANDS:
                if not args:
                    print("Usage: " + cmd + " FILE [EXTRA]")
                    continue
                primary = Path(args[0]).read_text(encoding="utf-8")
                secondary = None
                if len(args) > 1:
                    extra = Path(args[1])
                    secondary = extra.read_text(encoding="utf-8") if extra.is_file() else args[1]
                response = await orchestrator.run_task(TASK_COMMANDS[cmd], primary, secondary)
                print(f"\nHelix:\n{response.text}")
            elif cmd == "/stats":
                stats = orchestrator.stats()
                for category, count in stats.by_category().items():
                    print(f"  {category:<16} {count}")
                print(f"  {'total':<16} {stats.total}")
            elif cmd == "/history":
                for record in log.all():
                    print(f"  [{record.created_at}] {record.category:<16} {record.input[:60]!r}")
            elif cmd == "/clear":
                log.clear()
                orchestrator.transcript.clear()
                print("History cleared.")
            elif cmd == "/clear-chat":
                orchestrator.clear_chat()
                print("Chat history cleared.")
            elif cmd == "/health":
                print(f"LLM: {await llm_client.health()}")
            elif cmd == "/export" and args:
                Path(args[0]).write_text(log.export_json(), encoding="utf-8")
                print(f"Exported {len(log.all())} records to {args[0]}")
            elif cmd == "/import" and args:
                ok = log.import_json(Path(args[0]).read_text(encoding="utf-8"))
                print("Import complete." if ok else "Import failed.")
            elif cmd == "/tree" and args:
                tree = display_root(build_tree(scan_directory(args[0], config.explorer.ignored_dirs)))
                print(render_tree(tree))
            elif cmd == "/cat" and args:
                node = tree.find(args[0]) if tree else None
                if node is None or node.is_dir:
                    print(f"No file {args[0]!r} in the current tree.")
                    continue
                print(await read_text(node.payload, config.explorer.read_error_placeholder))
            elif cmd.startswith("/"):
                print(HELP)
            else:
                response = await orchestrator.chat(line)
                if response:
                    print(f"\nHelix: {response.text}")
        except (OSError, UnicodeDecodeError) as e:
            print(f"Error: {e}")


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.WARNING if "--quiet" in sys.argv else logging.INFO,
        format="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
    )
    asyncio.run(text_repl())
