from __future__ import annotations

import argparse
import json
import os
import sys

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, ".."))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)


def load_env_file(env_path: str) -> None:
    if not os.path.exists(env_path):
        return
    with open(env_path, "r", encoding="utf-8") as env_file:
        for line in env_file:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            key, value = line.split("=", 1)
            os.environ.setdefault(key, value)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Load the dashboard data once and print the computed dashboard for a filter."
    )
    parser.add_argument(
        "--env-file",
        default=os.path.join(PROJECT_ROOT, ".env"),
        help="Path to .env file.",
    )
    parser.add_argument("--data-source", default=None, help="Base URL or directory of the JSON data.")
    parser.add_argument(
        "--date",
        dest="dates",
        action="append",
        default=[],
        help="Selected pick-up date (YYYY-MM-DD). Pass once for a start date, twice for a range.",
    )
    parser.add_argument("--branch", dest="branches", action="append", default=[], help="Branch office.")
    parser.add_argument("--agent", dest="agents", action="append", default=[], help="Agent name.")
    parser.add_argument(
        "--section",
        default="dashboard",
        choices=["dashboard", "overview", "filters", "status"],
        help="Which part of the dashboard to print.",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    load_env_file(os.path.abspath(args.env_file))
    if args.data_source:
        os.environ["DASHBOARD_DATA_SOURCE"] = args.data_source

    from rental_dashboard.api.dependencies import get_dashboard_service
    from rental_dashboard.core.config import get_settings
    from rental_dashboard.core.errors import AppError
    from rental_dashboard.core.logging import configure_logging
    from rental_dashboard.schemas.dashboard import DashboardFilters

    configure_logging(get_settings().log_level)
    service = get_dashboard_service()
    try:
        if args.section == "overview":
            result = service.get_overview()
        elif args.section == "filters":
            result = service.get_filter_options()
        elif args.section == "status":
            result = service.get_status()
        else:
            result = service.get_dashboard(
                DashboardFilters(dates=args.dates, branches=args.branches, agents=args.agents)
            )
    except AppError as exc:
        print(json.dumps({"error": {"code": exc.code, "message": exc.message}}, indent=2))
        sys.exit(1)
    print(json.dumps(result.model_dump(by_alias=True), indent=2, default=str))


if __name__ == "__main__":
    main()
