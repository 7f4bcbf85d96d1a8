import argparse
import asyncio
import json
import logging
import sys
from typing import NamedTuple

from tqdm import tqdm

from msgraph_snippets.api.service import result_to_response
from msgraph_snippets.exception_handler import ErrorHandler
from msgraph_snippets.graph import GraphClient, GraphSettings
from msgraph_snippets.snippet import (
    Failure,
    SnippetCategory,
    SnippetNotImplementedError,
    SnippetRegistry,
    UnknownSnippetError,
    describe,
    run_snippet,
)


logger = logging.getLogger("msgraph_snippets")


class RunTally(NamedTuple):
    succeeded: int = 0
    failed: int = 0
    skipped: int = 0

    def summary(self) -> str:
        attempted = self.succeeded + self.failed
        line = f"{self.succeeded}/{attempted} snippets succeeded"
        if self.skipped:
            line += f", {self.skipped} skipped"
        return line


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="List and run Microsoft Graph drive and user snippets"
    )
    parser.add_argument(
        "--token",
        type=str,
        help="Graph access token (default: $GRAPH_ACCESS_TOKEN)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        help="Logging level (default: $SNIPPETS_LOG_LEVEL or INFO)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    list_parser = subparsers.add_parser("list", help="List catalog entries")
    list_parser.add_argument(
        "--category",
        choices=[category.value for category in SnippetCategory],
        help="Only list this catalog",
    )

    run_parser = subparsers.add_parser("run", help="Run a single snippet")
    run_parser.add_argument("snippet_id", help="Snippet id, e.g. drives.get_me_drive")

    run_all_parser = subparsers.add_parser("run-all", help="Run every snippet in order")
    run_all_parser.add_argument(
        "--category",
        choices=[category.value for category in SnippetCategory],
        help="Only run this catalog",
    )
    return parser


def _list(registry: SnippetRegistry, category: str | None) -> None:
    for descriptor in registry.runnable(category):
        text = describe(descriptor.description_ref)
        title = text.title if text else ""
        print(f"{descriptor.id:<42} {descriptor.http_method:<7} {descriptor.path_template}  {title}")


async def _run_one(registry: SnippetRegistry, settings: GraphSettings, snippet_id: str) -> bool:
    descriptor = registry.get(snippet_id)
    async with GraphClient(settings) as client:
        result = await run_snippet(descriptor, client)
    print(json.dumps(result_to_response(snippet_id, result).model_dump(mode="json"), indent=2))
    return not isinstance(result, Failure)


async def _run_all(
    registry: SnippetRegistry,
    settings: GraphSettings,
    category: str | None,
    error_handler: ErrorHandler,
) -> RunTally:
    descriptors = registry.runnable(category)
    succeeded = failed = skipped = 0
    async with GraphClient(settings) as client:
        for descriptor in tqdm(descriptors, desc="Running snippets", unit="snippet"):
            result = await run_snippet(descriptor, client)
            if isinstance(result, Failure) and isinstance(result.error, SnippetNotImplementedError):
                skipped += 1
                tqdm.write(f"⏭️  {descriptor.id} (not implemented)")
            elif isinstance(result, Failure):
                error_handler.collect_snippet_failure(result.error, descriptor.id)
                failed += 1
            else:
                succeeded += 1
                tqdm.write(f"✅ {descriptor.id}")
    return RunTally(succeeded=succeeded, failed=failed, skipped=skipped)


def main() -> None:
    args = _build_parser().parse_args()

    settings = GraphSettings.from_env().with_token(args.token)
    error_handler = ErrorHandler(args.log_level or settings.log_level)
    registry = SnippetRegistry()

    if args.command == "list":
        _list(registry, args.category)
        return

    if not settings.access_token:
        print("Error: provide --token or set GRAPH_ACCESS_TOKEN", file=sys.stderr)
        sys.exit(1)

    try:
        if args.command == "run":
            if not asyncio.run(_run_one(registry, settings, args.snippet_id)):
                sys.exit(1)
            return

        tally = asyncio.run(_run_all(registry, settings, args.category, error_handler))
    except UnknownSnippetError:
        print(f"Error: unknown snippet: {args.snippet_id}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\n⚠️ Run interrupted", file=sys.stderr)
        sys.exit(1)
    except Exception:
        logger.exception("Fatal error while running snippets")
        print("\n❌ Fatal error occurred. See log for details.", file=sys.stderr)
        sys.exit(1)

    tqdm.write(tally.summary())
    report = error_handler.format_error_report()
    if report:
        tqdm.write(report)
        sys.exit(1)


if __name__ == "__main__":
    main()
