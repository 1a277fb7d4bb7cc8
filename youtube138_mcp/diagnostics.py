#!/usr/bin/env python3
"""
YouTube138 API diagnostics.

Calls each of the three tools once through the dispatcher and prints a
report. Exit code 0 if every call succeeded, 1 otherwise.
"""

import asyncio
import sys
from typing import List, Optional, Tuple

from config.settings import RAPIDAPI_KEY_ENV, Settings, get_settings
from .dispatcher import ToolDispatcher, ToolResult, create_tool_dispatcher

SEPARATOR = "=" * 80
PREVIEW_LIMIT = 1000
PAUSE_SECONDS = 1.0

GREEN = "\x1b[32m"
RED = "\x1b[31m"
YELLOW = "\x1b[33m"
BLUE = "\x1b[36m"
RESET = "\x1b[0m"

# (label, tool name, arguments)
DIAGNOSTIC_CALLS: List[Tuple[str, str, dict]] = [
    ("Search - keyword: despacito", "search", {"q": "despacito", "hl": "en", "gl": "US"}),
    ("Auto Complete - prefix: desp", "auto_complete", {"q": "desp", "hl": "en", "gl": "US"}),
    ("Home - recommendations", "home", {"hl": "en", "gl": "US"}),
]


def _print_credential_help() -> None:
    print(f"{RED}Error: {RAPIDAPI_KEY_ENV} environment variable is not set{RESET}")
    print("\nPlease set your API key first:")
    print(f"  Windows (PowerShell): $env:{RAPIDAPI_KEY_ENV}='your-api-key'")
    print(f"  Windows (CMD): set {RAPIDAPI_KEY_ENV}=your-api-key")
    print(f"  Linux/Mac: export {RAPIDAPI_KEY_ENV}='your-api-key'")


def mask_key(key: str) -> str:
    """Show only the first 10 characters of a key."""
    return f"{key[:10]}..."


def print_result(label: str, result: ToolResult) -> None:
    """Print one diagnostic result, truncating long payloads."""
    print(f"\n{SEPARATOR}")
    print(f"{BLUE}Test: {label}{RESET}")
    print(SEPARATOR)

    if not result.is_error:
        print(f"{GREEN}✓ Passed{RESET}")
        print("\nResponse data:")
        text = result.text
        print(text[:PREVIEW_LIMIT])
        if len(text) > PREVIEW_LIMIT:
            print(f"\n... (output truncated to the first {PREVIEW_LIMIT} characters)")
    else:
        error = result.payload
        print(f"{RED}✗ Failed{RESET}")
        print(f"Error: {error.message}")
        if error.status_code:
            print(f"HTTP status: {error.status_code}")
        if error.details:
            print(f"Details: {error.details}")


async def run_diagnostics(dispatcher: ToolDispatcher, pause: float = PAUSE_SECONDS) -> List[Tuple[str, bool]]:
    """
    Invoke every diagnostic call in order.

    Args:
        dispatcher: Dispatcher to run the calls through
        pause: Seconds to wait between calls

    Returns:
        List of (label, passed) pairs
    """
    outcomes = []
    for index, (label, name, arguments) in enumerate(DIAGNOSTIC_CALLS):
        if index and pause:
            await asyncio.sleep(pause)
        result = await dispatcher.invoke(name, arguments)
        print_result(label, result)
        outcomes.append((label, not result.is_error))
    return outcomes


def print_summary(outcomes: List[Tuple[str, bool]]) -> None:
    passed = sum(1 for _, ok in outcomes if ok)
    total = len(outcomes)

    print(f"\n{SEPARATOR}")
    print(f"{YELLOW}Summary{RESET}")
    print(SEPARATOR)
    print(f"\nTotal: {total}")
    print(f"{GREEN}Passed: {passed}{RESET}")
    print(f"{RED}Failed: {total - passed}{RESET}")

    print("\nResults:")
    for i, (label, ok) in enumerate(outcomes, 1):
        status = f"{GREEN}✓ passed" if ok else f"{RED}✗ failed"
        print(f"  {i}. {label}: {status}{RESET}")
    print(f"\n{SEPARATOR}\n")


def run(
    settings: Optional[Settings] = None,
    dispatcher: Optional[ToolDispatcher] = None,
    pause: float = PAUSE_SECONDS
) -> int:
    """
    Run the diagnostics and return the process exit code.

    Args:
        settings: Settings to use (loaded from the environment by default)
        dispatcher: Dispatcher override, built from settings by default
        pause: Seconds to wait between calls

    Returns:
        0 if all calls succeeded, 1 otherwise
    """
    print(f"{YELLOW}YouTube138 API diagnostics{RESET}")
    print(f"{SEPARATOR}\n")

    try:
        settings = settings or get_settings()
    except (ValueError, OSError) as e:
        print(f"\n{RED}Diagnostics aborted:{RESET} {type(e).__name__}: {e}")
        return 1

    if not settings.has_credentials:
        _print_credential_help()
        return 1

    print(f"API key: {mask_key(settings.rapidapi_key)}")
    print(f"API host: {settings.rapidapi_host}\n")

    dispatcher = dispatcher or create_tool_dispatcher(settings)
    try:
        print(f"{BLUE}Starting...{RESET}\n")
        outcomes = asyncio.run(run_diagnostics(dispatcher, pause=pause))
    except Exception as e:
        print(f"\n{RED}Diagnostics aborted:{RESET} {type(e).__name__}: {e}")
        return 1

    print_summary(outcomes)
    if all(ok for _, ok in outcomes):
        print(f"{GREEN}All checks passed ✓{RESET}\n")
        return 0
    print(f"{RED}Some checks failed, see the errors above{RESET}\n")
    return 1


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
