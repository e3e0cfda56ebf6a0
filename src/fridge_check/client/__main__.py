"""Command-line front end: one wizard round trip against a running gateway."""

import argparse
import asyncio
import logging
import mimetypes
import sys
from pathlib import Path

from fridge_check.client.api_client import FridgeCheckClient
from fridge_check.client.render import render
from fridge_check.client.state import Screen
from fridge_check.client.wizard import RecipeWizard
from fridge_check.core.config import get_settings
from fridge_check.models.analysis import Mode


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="fridge-check",
        description="Get recipe ideas from a fridge photo or an ingredient list.",
    )
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--photo", type=Path, help="Path to a photo of your fridge or pantry")
    source.add_argument("--text", help='Ingredient list, e.g. "chicken, rice, broccoli"')
    parser.add_argument("--api-url", default=settings.api_base_url, help="Gateway base URL")
    parser.add_argument("--timeout", type=float, default=settings.client_timeout)
    parser.add_argument("--dev-stats", action="store_true", help="Show token counts")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser.parse_args(argv)


def load_photo(path: Path) -> bytes:
    """Read an image file, refusing anything that isn't an image type."""
    media_type, _ = mimetypes.guess_type(path.name)
    if not media_type or not media_type.startswith("image/"):
        raise ValueError(f"{path} does not look like an image file")
    return path.read_bytes()


async def run(args: argparse.Namespace) -> int:
    client = FridgeCheckClient(base_url=args.api_url, timeout=args.timeout)
    wizard = RecipeWizard(client)
    if args.dev_stats:
        wizard.toggle_developer_stats()

    try:
        if args.photo is not None:
            wizard.select_mode(Mode.PHOTO)
            submitted = await wizard.submit_photo(load_photo(args.photo))
        else:
            wizard.select_mode(Mode.TEXT)
            submitted = await wizard.submit_text(args.text)
    finally:
        await client.close()

    if not submitted:
        print("Nothing to analyze: provide a photo or at least one ingredient.", file=sys.stderr)
        return 2

    print(render(wizard.state))
    return 1 if wizard.state.screen == Screen.ERROR else 0


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    try:
        return asyncio.run(run(args))
    except (OSError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
