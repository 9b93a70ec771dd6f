#!/usr/bin/env python3
"""Simple CLI for trying the swap form locally"""

import argparse
import asyncio
from typing import List, Optional

from swapform.config import settings
from swapform.core import quote
from swapform.core.models import FROM_SLOT, TO_SLOT, TokenRecord
from swapform.form import LABEL_SWAPPING, SwapForm
from swapform.logging_config import setup_logging
from swapform.providers import FilePriceSource, HttpPriceSource, SimulatedSwapExecutor


def print_tokens(tokens: List[TokenRecord]):
    """Pretty print token records"""
    if not tokens:
        print("No tokens found")
        return

    for i, token in enumerate(tokens, 1):
        price_str = quote.price_label(token) or "No price"
        print(f"{i:3d}. {token.currency:<10} {price_str:>16}   {settings.icon_url(token.icon_key)}")


def print_quote(form: SwapForm):
    if form.from_token is None or form.to_token is None:
        print("❌ No tokens selected")
        return

    print(f"\nFrom: {form.amount or '0.0'} {form.from_token.currency}  (≈ ${form.input_usd_value})")
    print(f"To:   {form.output_amount or '0.0'} {form.to_token.currency}  (≈ ${form.output_usd_value})")
    if form.rate_label:
        print(f"Price: {form.rate_label}")


def build_form(args) -> SwapForm:
    if args.prices_file:
        source = FilePriceSource(args.prices_file)
    else:
        source = HttpPriceSource(args.prices_url)
    executor = SimulatedSwapExecutor(latency_s=args.latency)
    return SwapForm(price_source=source, executor=executor)


def resolve_token(form: SwapForm, currency: str) -> Optional[TokenRecord]:
    token = form.catalog.get(currency) or form.catalog.get(currency.upper())
    if token is None:
        print(f"❌ Unknown token: {currency}")
    return token


async def load(form: SwapForm) -> bool:
    print("🔄 Loading token prices...")
    ok = await form.load_prices()
    if not ok:
        if form.feedback:
            print(f"❌ {form.feedback.message}")
        return False
    loaded_at = form.catalog.loaded_at.strftime("%H:%M:%S UTC")
    print(f"✅ Loaded {len(form.catalog)} tokens (prices as of {loaded_at})")
    return True


async def cli_tokens(form: SwapForm, search: str):
    if not await load(form):
        return
    form.open_picker(FROM_SLOT)
    print_tokens(form.picker.search(search))


async def cli_quote(form: SwapForm, from_currency: str, to_currency: str, amount: str) -> bool:
    if not await load(form):
        return False
    from_token = resolve_token(form, from_currency)
    to_token = resolve_token(form, to_currency)
    if from_token is None or to_token is None:
        return False
    form.select(FROM_SLOT, from_token)
    form.select(TO_SLOT, to_token)
    form.set_amount(amount)
    print_quote(form)
    return True


async def cli_swap(form: SwapForm, from_currency: str, to_currency: str, amount: str):
    if not await cli_quote(form, from_currency, to_currency, amount):
        return
    await submit(form)


async def submit(form: SwapForm):
    if not form.can_submit:
        print(f"⚠️  {form.button_label}: nothing to submit")
        return
    print(f"⏳ {LABEL_SWAPPING}")
    result = await form.submit()
    feedback = form.feedback
    if result.accepted and feedback:
        icon = "✅" if feedback.kind == "success" else "❌"
        print(f"{icon} {feedback.message}")


async def cli_form(form: SwapForm):
    """Interactive form mode"""
    if not await load(form):
        return

    print("💱 Swap Form")
    print("Type 'help' for commands, 'exit' to quit")
    print("-" * 40)

    while True:
        print_quote(form)
        try:
            user_input = input("\n> ").strip()
        except (KeyboardInterrupt, EOFError):
            print("\nGoodbye! 👋")
            break

        if not user_input:
            continue

        command, _, rest = user_input.partition(" ")
        command = command.lower()
        rest = rest.strip()

        if command in ("exit", "quit", "q"):
            print("Goodbye! 👋")
            break
        elif command in ("help", "h"):
            print("\nCommands:")
            print("  amount <n>      - Set the amount to swap")
            print("  max             - Fill in the maximum amount")
            print("  from <symbol>   - Pick the source token")
            print("  to <symbol>     - Pick the destination token")
            print("  flip            - Swap source and destination")
            print("  search <text>   - Search tokens")
            print("  swap            - Submit the swap")
            print("  refresh         - Reload prices")
            print("  exit            - Quit")
        elif command == "amount":
            form.set_amount(rest)
        elif command == "max":
            form.fill_max()
        elif command in (FROM_SLOT, TO_SLOT):
            form.open_picker(command)
            matches = form.picker.search(rest)
            exact = [t for t in matches if t.currency.lower() == rest.lower()]
            if exact or len(matches) == 1:
                form.picker.choose((exact or matches)[0])
            else:
                form.picker.close()
                print_tokens(matches)
        elif command == "flip":
            form.swap_tokens()
        elif command == "search":
            form.open_picker(FROM_SLOT)
            print_tokens(form.picker.search(rest))
            form.picker.close()
        elif command == "swap":
            await submit(form)
        elif command == "refresh":
            await load(form)
        else:
            print(f"❌ Unknown command: {command}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Swap form CLI")
    parser.add_argument("--prices-url", default=None, help="Price list URL (default: from settings)")
    parser.add_argument("--prices-file", default=None, help="Read prices from a local JSON file instead")
    parser.add_argument("--latency", type=float, default=None, help="Simulated swap latency in seconds")
    parser.add_argument("--log-level", default=None, help="Override log level")
    parser.add_argument("--log-format", choices=["auto", "json", "console"], default=None, help="Override log format")
    subparsers = parser.add_subparsers(dest="command")

    tokens_parser = subparsers.add_parser("tokens", help="List tokens")
    tokens_parser.add_argument("search", nargs="?", default="", help="Case-insensitive filter")

    for name, help_text in (("quote", "Quote a swap"), ("swap", "Quote and submit a simulated swap")):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("from_currency", help="Source token symbol")
        sub.add_argument("to_currency", help="Destination token symbol")
        sub.add_argument("amount", help="Amount of the source token")

    subparsers.add_parser("form", help="Interactive form mode")

    return parser


async def main(argv: Optional[List[str]] = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    setup_logging(args.log_level, args.log_format)
    form = build_form(args)

    if args.command == "tokens":
        await cli_tokens(form, args.search)
    elif args.command == "quote":
        await cli_quote(form, args.from_currency, args.to_currency, args.amount)
    elif args.command == "swap":
        await cli_swap(form, args.from_currency, args.to_currency, args.amount)
    elif args.command == "form":
        await cli_form(form)


def run():
    asyncio.run(main())


if __name__ == "__main__":
    run()
