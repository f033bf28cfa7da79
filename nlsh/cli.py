import argparse
import dataclasses
import logging
from typing import List, Optional

from . import __version__
from .client import LLMClient
from .config import Config, create_default_config
from .context import detect_system_context
from .executor import CommandExecutor
from .history import CommandHistory
from .logger import setup_logging
from .providers import PROVIDERS
from .ui import confirm_execution, console, display_command, display_error, display_history, display_result

logger = logging.getLogger(__name__)


def positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nlsh",
        description="Turn a natural language request into a shell command using an LLM.",
        epilog="The provider is chosen with LLM_PROVIDER (openai or gemini); keys come from "
               "OPENAI_API_KEY or GOOGLE_API_KEY.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("instruction", nargs="*", help="What you want to do, in plain language.")
    parser.add_argument("-c", "--context", help="Description of the shell environment (detected when omitted).")
    parser.add_argument("--provider", choices=sorted(PROVIDERS), help="Override LLM_PROVIDER.")
    parser.add_argument("--model", help="Override the model of the selected provider.")
    parser.add_argument("--timeout", type=positive_float, help="Request timeout in seconds (default 30).")
    parser.add_argument("-x", "--execute", action="store_true", help="Run the command after confirmation.")
    parser.add_argument("-y", "--yes", action="store_true", help="With --execute, do not ask for confirmation.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Show log output on stderr.")
    parser.add_argument(
        "--history",
        nargs="?",
        type=int,
        const=10,
        metavar="N",
        help="Show the last N generated commands (default 10) and exit.",
    )
    parser.add_argument("--init-config", action="store_true", help="Write a default config file and exit.")
    return parser


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Return ``config`` with the command line options laid over it."""
    overrides = {}
    if args.provider:
        overrides["provider"] = args.provider
    if args.timeout is not None:
        overrides["timeout"] = args.timeout
    if args.verbose:
        overrides["verbose"] = True
    if args.model:
        provider = overrides.get("provider", config.provider)
        overrides["gemini_model" if provider == "gemini" else "openai_model"] = args.model
    return dataclasses.replace(config, **overrides)


def run_cli(argv: Optional[List[str]] = None, config: Optional[Config] = None) -> int:
    """
    Run the nlsh command line.

    Returns:
        Process exit code: 0 on success, 1 on any failure
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    config = apply_overrides(config or Config.from_env(), args)

    if args.init_config:
        if create_default_config(config.config_file):
            console.print(f"Created default config file at: {config.config_file}")
            return 0
        display_error(f"Could not create config file at {config.config_file}")
        return 1

    setup_logging(config)
    logger.info(f"Configuration: {config}")
    history = CommandHistory(config.history_file, config.max_history)

    if args.history is not None:
        display_history(history.get_history(args.history))
        return 0

    instruction = " ".join(args.instruction).strip()
    if not instruction:
        parser.error("an instruction is required")

    system_context = args.context if args.context is not None else detect_system_context()
    result = LLMClient(config).get_command(instruction, system_context)
    if not result.ok:
        display_error(result.error.message)
        return 1

    command = result.command
    history.record(config.provider, instruction, command)

    if not args.execute:
        print(command)
        return 0

    display_command(command)
    if not args.yes and not confirm_execution():
        console.print("[yellow]Command not executed.[/yellow]")
        return 1

    success, stdout, stderr = CommandExecutor().execute_command(command)
    display_result(command, success, stdout, stderr)
    return 0 if success else 1
