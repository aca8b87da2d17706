"""Run compliance checks from the command line.

    content-compliance samples             # bundled sample articles, in-process
    content-compliance file post.json      # one request body from disk
    content-compliance --url http://localhost:8000/api/compliance/check samples
"""

import argparse
import asyncio
import json
import sys
from typing import Any, Dict, List, Sequence

import httpx
from dotenv import load_dotenv

from app.core.compliance_engine import ComplianceEngine
from app.core.config import load_settings
from app.utils.samples import load_samples
from app.utils.validation import ValidationError, validate_request


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="content-compliance", description="Score content for publication.")
    parser.add_argument("--url", help="POST to a running server instead of checking in-process")
    parser.add_argument("--json", action="store_true", help="print raw reports")
    parser.add_argument("--timeout", type=float, default=60.0, help="HTTP timeout when --url is given")
    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("samples", help="check the bundled sample articles")
    file_cmd = commands.add_parser("file", help="check a JSON request body")
    file_cmd.add_argument("path")
    return parser


def main(argv: Sequence[str] | None = None, engine: ComplianceEngine | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)
    if args.command == "samples":
        cases = load_samples()
    else:
        with open(args.path, "r", encoding="utf-8") as handle:
            cases = {args.path: json.load(handle)}
    return asyncio.run(_run(cases, args, engine))


async def _run(cases: Dict[str, Any], args: argparse.Namespace, engine: ComplianceEngine | None) -> int:
    if not args.url and engine is None:
        engine = ComplianceEngine(load_settings())

    reports: List[Dict[str, Any]] = []
    for name, payload in cases.items():
        if args.url:
            report = await _post(args.url, payload, args.timeout)
        else:
            report = await _check_local(engine, payload)
        reports.append(report)
        if args.json:
            print(json.dumps({"case": name, **report}, indent=2))
        else:
            _print_summary(name, report)

    if any(not report.get("success") for report in reports):
        return 2
    return 0 if all(report.get("canPublish") for report in reports) else 1


async def _check_local(engine: ComplianceEngine, payload: Any) -> Dict[str, Any]:
    try:
        request = validate_request(payload)
    except ValidationError as exc:
        return {"success": False, "error": str(exc)}
    report = await engine.check(request)
    return report.to_dict()


async def _post(url: str, payload: Any, timeout: float) -> Dict[str, Any]:
    try:
        async with httpx.AsyncClient(timeout=httpx.Timeout(timeout, connect=10.0)) as client:
            response = await client.post(url, json=payload)
            return response.json()
    except (httpx.HTTPError, ValueError) as exc:
        return {"success": False, "error": "Request failed", "details": str(exc)}


def _print_summary(name: str, report: Dict[str, Any]) -> None:
    print(f"== {name}")
    if not report.get("success"):
        print(f"   error: {report.get('error')} {report.get('details') or ''}".rstrip())
        return
    print(f"   score: {report['score']}  can publish: {report['canPublish']}")
    for check_name, check in report["checks"].items():
        score = "-" if check.get("score") is None else check["score"]
        print(f"   {check_name:<8} {check['status']:<8} {score}")
    for index, item in enumerate(report["recommendations"], start=1):
        print(f"   {index}. [{item['priority']}] {item['action']}")
        for detail in item["details"]:
            print(f"      - {detail}")


if __name__ == "__main__":
    sys.exit(main())
