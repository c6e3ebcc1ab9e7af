"""
Interactive command-line chat for the Pakistan History RAG Chatbot.

Usage:
    python chat_cli.py
"""
import sys
import logging
import argparse
from pathlib import Path
from typing import Callable, TextIO

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

from services.rag_orchestrator import RAGOrchestrator

logger = logging.getLogger(__name__)

EXIT_COMMANDS = {"exit", "quit"}


def run_chat(
    orchestrator: RAGOrchestrator,
    read_line: Callable[[str], str] = input,
    out: TextIO = sys.stdout
) -> int:
    """
    Ask questions until EOF or an exit command.

    A failed question is logged and the loop continues with the next one.

    Returns:
        Number of questions answered successfully
    """
    answered = 0
    while True:
        try:
            question = read_line("Ask me anything--> ").strip()
        except EOFError:
            break

        if not question:
            continue
        if question.lower() in EXIT_COMMANDS:
            break

        try:
            answer = orchestrator.answer(question)
        except Exception as e:
            logger.error(f"Could not answer question: {e}")
            print(f"Sorry, something went wrong ({getattr(e, 'stage', 'unknown')}). Please try again.", file=out)
            continue

        answered += 1
        print(f"\n{answer}\n", file=out)

    return answered


def main():
    parser = argparse.ArgumentParser(
        description="Interactive chat with the Pakistan History RAG Chatbot"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show pipeline debug logging"
    )
    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    from main import create_orchestrator

    try:
        run_chat(create_orchestrator())
    except KeyboardInterrupt:
        print()


if __name__ == "__main__":
    main()
