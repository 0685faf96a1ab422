from __future__ import annotations
import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

try:
    from .corrector import process_text
    from .errors import ConfigurationError, normalize_error
    from .prompts import Action
    from .settings import CorrectorOptions, load_env_file
except ImportError:
    from grammar_corrector.corrector import process_text
    from grammar_corrector.errors import ConfigurationError, normalize_error
    from grammar_corrector.prompts import Action
    from grammar_corrector.settings import CorrectorOptions, load_env_file


class TerminalHost:
    """Paste goes to stdout, copy goes to a clipboard file (or stdout), notices to stderr."""

    def __init__(
        self,
        clipboard: Optional[Path] = None,
        out: Optional[TextIO] = None,
        err: Optional[TextIO] = None,
    ) -> None:
        self.clipboard = clipboard
        self.out = out or sys.stdout
        self.err = err or sys.stderr

    def show_text(self, message: str) -> None:
        print(message, file=self.err)

    def paste_text(self, text: str) -> None:
        print(text, file=self.out)

    def copy_text(self, text: str) -> None:
        if self.clipboard is None:
            print(text, file=self.out)
            return
        self.clipboard.write_text(text, encoding="utf-8")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="grammar-corrector", description="Correct text with an LLM")
    p.add_argument("text", nargs="?", default=None, help="Text to correct (default: read stdin)")
    p.add_argument("--action", dest="action", default=Action.FIX_GRAMMAR.value,
                   help="Action name: " + ", ".join(a.value for a in Action))
    p.add_argument("--copy", dest="copy", action="store_true", help="Copy the result instead of pasting it")
    p.add_argument("--provider", dest="provider", default=None, help="Default provider (OpenAI or Gemini)")
    p.add_argument("--clipboard", dest="clipboard", default=None, help="File that receives copied text")
    p.add_argument("--env-file", dest="env_file", default=None, help=".env file to load (default: ./.env)")
    p.add_argument("--log-level", dest="log_level", default="WARNING", help="Logging level")
    return p


def main(argv: List[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    load_env_file(Path(args.env_file) if args.env_file else None)
    text = args.text if args.text is not None else sys.stdin.read()
    host = TerminalHost(Path(args.clipboard) if args.clipboard else None)
    try:
        options = CorrectorOptions.from_env(default_provider=args.provider)
    except ConfigurationError as e:
        host.show_text(normalize_error(e))
        return 1
    outcome = asyncio.run(process_text(host, text, args.action, options, copy=args.copy))
    return 0 if outcome.delivered else 1


if __name__ == "__main__":
    raise SystemExit(main())
