import argparse
import asyncio
import json
import logging
import sys

from config.settings import get_settings
from services.debounce import AsyncioScheduler
from services.reporting import print_view
from services.session import SearchSession
from sources.registry import available_sources, get_source
from utils.logging_setup import init_logging
import sources  # noqa: F401


RETRY_HINT = "Type :retry to reload."


def _build_source(args):
	kwargs = {}
	if args.source == "advocates_api" and args.url:
		kwargs["url"] = args.url
	if args.source == "advocates_file" and args.input:
		kwargs["path"] = args.input
	return get_source(args.source, **kwargs)


def _json_rows(advocates):
	return [dict(a.to_payload(), key=a.row_key) for a in advocates]


def _mount_or_exit(session: SearchSession) -> None:
	session.mount()
	if session.error is not None:
		print_view(session.view())
		sys.exit(1)


def cmd_list(args):
	loop = asyncio.new_event_loop()
	try:
		session = SearchSession(_build_source(args), AsyncioScheduler(loop))
		_mount_or_exit(session)
		if args.json:
			print(json.dumps(_json_rows(session.displayed), indent=2, ensure_ascii=False))
		else:
			print_view(session.view())
		session.teardown()
	finally:
		loop.close()


def cmd_search(args):
	loop = asyncio.new_event_loop()
	try:
		session = SearchSession(_build_source(args), AsyncioScheduler(loop))
		_mount_or_exit(session)
		session.on_input(args.query)
		# One-shot: no further keystrokes will arrive, so skip the quiet window
		session.gate.flush()
		if args.json:
			print(json.dumps(_json_rows(session.displayed), indent=2, ensure_ascii=False))
		else:
			print_view(session.view())
		session.teardown()
	finally:
		loop.close()


async def _repl(args) -> int:
	loop = asyncio.get_running_loop()
	session = SearchSession(_build_source(args), AsyncioScheduler(loop))
	session.subscribe(lambda view: print_view(view, retry_hint=RETRY_HINT))
	session.mount()
	try:
		while True:
			line = await loop.run_in_executor(None, sys.stdin.readline)
			if not line:
				# EOF: show the last pending search before leaving
				session.gate.flush()
				break
			text = line.rstrip("\n")
			if text == ":quit":
				break
			if text == ":reset":
				session.reset()
			elif text == ":retry":
				# Full reload: a fresh session replaces the failed one
				session.teardown()
				session = SearchSession(_build_source(args), AsyncioScheduler(loop))
				session.subscribe(lambda view: print_view(view, retry_hint=RETRY_HINT))
				session.mount()
			else:
				session.on_input(text)
	finally:
		session.teardown()
	return 1 if session.error is not None else 0


def cmd_repl(args):
	code = asyncio.run(_repl(args))
	if code:
		sys.exit(code)


def main():
	settings = get_settings()
	init_logging(settings.log_level)
	parser = argparse.ArgumentParser(description="Advocate search CLI")
	parser.add_argument("--source", choices=sorted(available_sources().keys()), default=settings.advocate_source, help="Where to load advocates from (default from settings)")
	parser.add_argument("--url", default=None, help="Advocates API endpoint (advocates_api source)")
	parser.add_argument("--input", default=None, help="Path to JSON file with a 'data' list (advocates_file source)")
	sub = parser.add_subparsers(dest="cmd", required=True)

	p_list = sub.add_parser("list", help="Load advocates and print the full table")
	p_list.add_argument("--json", action="store_true", help="Print advocates as JSON instead of a table")
	p_list.set_defaults(func=cmd_list)

	p_search = sub.add_parser("search", help="Load advocates and print fuzzy matches for a query")
	p_search.add_argument("--query", "-q", required=True, help="Search text")
	p_search.add_argument("--json", action="store_true", help="Print matches as JSON instead of a table")
	p_search.set_defaults(func=cmd_search)

	p_repl = sub.add_parser("repl", help="Interactive search; one input per line, :reset, :retry, :quit")
	p_repl.set_defaults(func=cmd_repl)

	args = parser.parse_args()
	logging.debug(f"Running command {args.cmd}", extra={"step": "cli"})
	args.func(args)


if __name__ == "__main__":
	main()
