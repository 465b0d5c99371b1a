"""CLI entrypoint for the redibo presentation engine."""

import argparse
import json
import sys
from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from redibo.config.loader import get_credentials_path, load_config
from redibo.output.page_render import (
    render_comments_json,
    render_comments_markdown,
    render_vehicles_json,
    render_vehicles_markdown,
)
from redibo.query.query_spec import SortDirection, SortKey
from redibo.reports.outcome import OUTCOME_MESSAGES, has_active_report
from redibo.reports.report_models import REASON_LABELS, ReportDraft, ReportOutcome, ReportReason
from redibo.retrieval.api_client import RediboClient
from redibo.retrieval.credentials import CredentialStore
from redibo.retrieval.profile_models import HOST_ROLE
from redibo.utils.logging import get_logger
from redibo.views.comment_listing import CommentListing
from redibo.views.vehicle_dashboard import VehicleDashboard

logger = get_logger(__name__)


def _load_json_file(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as f:
        return json.load(f)


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}', expected YYYY-MM-DD")


def _build_client(config: Dict) -> RediboClient:
    store = CredentialStore(get_credentials_path(config))
    return RediboClient.from_config(config, store)


def _require_host(client: RediboClient) -> Optional[int]:
    profile = client.get_profile()
    if not profile.has_role(HOST_ROLE):
        print("No tienes permiso para ver esta página.", file=sys.stderr)
        return None
    return profile.id


def cmd_comments(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    listing_cfg = config["listing"]
    listing = CommentListing(
        page_size=listing_cfg["comments_page_size"],
        max_page_links=listing_cfg["max_page_links"],
    )

    if args.file:
        payload = _load_json_file(args.file)
    else:
        client = _build_client(config)
        host_id = _require_host(client)
        if host_id is None:
            return
        payload = client.fetch_raw_comments(host_id)

    listing.load(payload)
    listing.set_search(args.search)
    if args.date_from or args.date_to:
        listing.set_date_range(args.date_from, args.date_to)
    listing.set_sort_key(SortKey(args.sort))
    listing.set_sort_direction(SortDirection(args.order))
    listing.go_to_page(args.page)

    window = listing.view()
    links = listing.links()
    if args.format == "json":
        print(render_comments_json(window, links, listing.query, error=listing.last_error))
    else:
        print(render_comments_markdown(window, links, listing.query, error=listing.last_error))


def cmd_vehicles(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    dashboard = VehicleDashboard()

    if args.file:
        payload = _load_json_file(args.file)
    else:
        client = _build_client(config)
        host_id = args.host_id
        if host_id is None:
            host_id = _require_host(client)
            if host_id is None:
                return
        payload = client.fetch_raw_vehicles(host_id)

    dashboard.load(payload)
    if args.select is not None:
        dashboard.select(args.select)

    render = render_vehicles_json if args.format == "json" else render_vehicles_markdown
    print(render(dashboard.vehicles, dashboard.stats(), dashboard.selected(), error=dashboard.last_error))


def cmd_report(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    try:
        draft = ReportDraft(reported_id=args.renter_id, reason=args.reason, additional_info=args.info or "")
    except ValidationError as e:
        print(f"[redibo] Invalid report: {e.errors()[0]['msg']}", file=sys.stderr)
        sys.exit(2)

    client = _build_client(config)
    if has_active_report(client.fetch_reports(draft.reported_id)):
        print(OUTCOME_MESSAGES[ReportOutcome.ALREADY_REPORTED], file=sys.stderr)
        sys.exit(1)

    submission = client.submit_report(draft)
    stream = sys.stdout if submission.outcome is ReportOutcome.SUBMITTED else sys.stderr
    print(submission.message, file=stream)
    if submission.outcome is not ReportOutcome.SUBMITTED:
        sys.exit(1)


def cmd_login(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    store = CredentialStore(get_credentials_path(config))
    store.save_token(args.token)
    print(f"Token saved to {store.path}")


def cmd_logout(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    store = CredentialStore(get_credentials_path(config))
    store.clear()
    print("Token removed")


def main(argv: Optional[list] = None) -> None:
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog="redibo",
        description="Vehicle, review and report views for the redibo booking API",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to redibo.config.yaml")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # comments command
    comments_parser = subparsers.add_parser("comments", help="List comments on the host's vehicles")
    comments_parser.add_argument("--file", type=Path, help="Read the raw comment list from a JSON file")
    comments_parser.add_argument("--search", default="", help="Filter by vehicle brand or model")
    comments_parser.add_argument("--from", dest="date_from", type=_parse_date, help="Start date (YYYY-MM-DD)")
    comments_parser.add_argument("--to", dest="date_to", type=_parse_date, help="End date (YYYY-MM-DD)")
    comments_parser.add_argument(
        "--sort",
        choices=[key.value for key in SortKey],
        default=SortKey.TEMPORAL.value,
        help="Sort key (default: date)",
    )
    comments_parser.add_argument(
        "--order",
        choices=[direction.value for direction in SortDirection],
        default=SortDirection.DESC.value,
        help="Sort direction (default: desc)",
    )
    comments_parser.add_argument("--page", type=int, default=1, help="Page number (1-based)")
    comments_parser.add_argument("--format", choices=["md", "json"], default="md", help="Output format")
    comments_parser.set_defaults(func=cmd_comments)

    # vehicles command
    vehicles_parser = subparsers.add_parser("vehicles", help="Show the host vehicle dashboard")
    vehicles_parser.add_argument("--file", type=Path, help="Read the raw vehicle envelope from a JSON file")
    vehicles_parser.add_argument("--host-id", help="Host id (defaults to the signed-in user)")
    vehicles_parser.add_argument("--select", type=int, help="Vehicle id to show in detail")
    vehicles_parser.add_argument("--format", choices=["md", "json"], default="md", help="Output format")
    vehicles_parser.set_defaults(func=cmd_vehicles)

    # report command
    report_parser = subparsers.add_parser("report", help="Report a renter")
    report_parser.add_argument("--renter-id", required=True, help="Id of the renter to report")
    report_parser.add_argument(
        "--reason",
        required=True,
        choices=[reason.value for reason in ReportReason],
        help="Reason for the report: "
        + "; ".join(f"{reason.value} ({label})" for reason, label in REASON_LABELS.items()),
    )
    report_parser.add_argument("--info", help="Additional information (max 200 characters)")
    report_parser.set_defaults(func=cmd_report)

    # login / logout
    login_parser = subparsers.add_parser("login", help="Store an auth token")
    login_parser.add_argument("--token", required=True, help="Bearer token issued by the API")
    login_parser.set_defaults(func=cmd_login)

    logout_parser = subparsers.add_parser("logout", help="Remove the stored auth token")
    logout_parser.set_defaults(func=cmd_logout)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return

    try:
        args.func(args)
    except Exception as e:
        logger.error(f"Error running command '{args.command}': {e}", exc_info=True)
        raise


if __name__ == "__main__":
    main()
