#!/usr/bin/env python3
"""
Terminal front end for SuhbatAI mock interviews.

Usage:
    suhbat-chat --profession frontend
    suhbat-chat --api-url http://localhost:3000
"""

import argparse
import os
import sys
from typing import Callable, Dict, List, Optional

from suhbat.client.api_client import DEFAULT_API_URL, InterviewApiClient, InterviewApiError
from suhbat.client.chat_driver import ChatDriver, ChatMessage, ChatState, Speaker
from suhbat.client.results_renderer import render_results
from suhbat.client.results_store import ResultsStore
from suhbat.utils.logging_config import setup_logging


def print_message(message: ChatMessage) -> None:
    prefix = "Interviewer" if message.speaker == Speaker.AI else "You"
    print(f"\n{prefix}: {message.text}")


def choose_profession(
    professions: List[Dict],
    read: Callable[[str], str] = input
) -> Optional[str]:
    """Prompt for a profession by number or id; None on EOF."""
    print("\nChoose a profession:")
    for index, profession in enumerate(professions, start=1):
        print(f"  {index}. {profession['name']}  ({', '.join(profession['skills'][:3])}, ...)")

    ids = [profession["id"] for profession in professions]
    while True:
        try:
            choice = read("\nProfession number or id: ").strip()
        except EOFError:
            return None
        if choice.isdigit() and 1 <= int(choice) <= len(ids):
            return ids[int(choice) - 1]
        if choice in ids:
            return choice
        print("Please pick one of the listed professions.")


def run_interview(
    api: InterviewApiClient,
    profession: str,
    store: ResultsStore,
    read: Callable[[str], str] = input
) -> bool:
    """Run one interview; True when results were stored."""
    driver = ChatDriver(api, profession, store, on_message=print_message)
    driver.begin()

    while driver.state == ChatState.STARTING:
        try:
            choice = read("\nPress Enter to retry, q to quit: ").strip().lower()
        except EOFError:
            return False
        if choice.startswith("q"):
            return False
        driver.begin()

    while driver.state == ChatState.AWAITING_ANSWER:
        try:
            answer = read("\n> ")
        except EOFError:
            return False
        driver.submit(answer)

    return driver.state == ChatState.COMPLETE


def show_results(store: ResultsStore, names: Dict[str, str]) -> None:
    record = store.load()
    if record is None:
        print("\nNo interview results found! Please complete an interview first.")
        return
    profession = record.get("profession")
    print()
    for line in render_results(record, names.get(profession), color=sys.stdout.isatty()):
        print(line)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="SuhbatAI mock interview in the terminal")
    parser.add_argument(
        "--api-url",
        default=os.getenv("SUHBAT_API_URL", DEFAULT_API_URL),
        help=f"Backend URL (default: $SUHBAT_API_URL or {DEFAULT_API_URL})"
    )
    parser.add_argument("--profession", help="Profession id, e.g. frontend")
    parser.add_argument("--log-level", default="WARNING", help="Client log level (default: WARNING)")
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level)

    api = InterviewApiClient(args.api_url)
    store = ResultsStore()

    try:
        professions = api.professions()
    except InterviewApiError as e:
        print(f"ERROR: {e}")
        return 1

    names = {profession["id"]: profession["name"] for profession in professions}
    profession = args.profession
    if profession and profession not in names:
        print(f"Unknown profession '{profession}'.")
        profession = None

    try:
        while True:
            if profession is None:
                profession = choose_profession(professions)
                if profession is None:
                    return 0

            print(f"\n=== {names[profession]} Interview ===")
            if run_interview(api, profession, store):
                print("\nInterview complete!")
                show_results(store, names)

            try:
                action = input("\n[t]ry again, [h]ome, [q]uit: ").strip().lower()
            except EOFError:
                action = "q"

            store.clear()
            if action.startswith("t"):
                continue
            if action.startswith("h"):
                profession = None
                continue
            return 0
    finally:
        store.clear()
        api.close()


if __name__ == "__main__":
    sys.exit(main())
