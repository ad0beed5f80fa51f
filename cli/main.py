import argparse
import json
import logging
import sys

from pydantic import ValidationError

from core.config import Settings, settings
from core.errors import ScanInputError
from pipeline.orchestrator import Orchestrator
from pipeline.services import default_services


def _print(obj):
    print(json.dumps(obj, indent=2, default=str))


def _orchestrator(args) -> Orchestrator:
    updates = {}
    if getattr(args, "timeout", None) is not None:
        updates["probe_timeout_s"] = args.timeout
        updates["handshake_timeout_s"] = args.timeout
    if getattr(args, "no_notice", False):
        updates["mongodb_notice_enabled"] = False
    # CLI overrides go through the field validators
    cfg = Settings(**{**settings.model_dump(), **updates}) if updates else settings
    return Orchestrator(services=default_services(cfg), cfg=cfg)


def cmd_scan(args) -> int:
    try:
        orch = _orchestrator(args)
    except ValidationError as exc:
        print(f"error: {exc.errors()[0]['msg']}", file=sys.stderr)
        return 2
    try:
        report = orch.scan(args.host)
    except ScanInputError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
    _print(report.to_list())
    return 0


def cmd_services(args) -> int:
    _print(_orchestrator(args).describe())
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Check MongoDB/Redis exposure and auth on a host")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="debug logging")
    sub = parser.add_subparsers()

    p_scan = sub.add_parser("scan", help="Probe all configured services on a host")
    p_scan.add_argument("host")
    p_scan.add_argument("--timeout", type=float, default=None, help="probe/handshake timeout in seconds")
    p_scan.add_argument("--no-notice", action="store_true", default=False, help="do not write the MongoDB notice document")
    p_scan.set_defaults(func=cmd_scan)

    p_services = sub.add_parser("services", help="List configured services")
    p_services.set_defaults(func=cmd_services)

    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if hasattr(args, "func"):
        return args.func(args)
    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
