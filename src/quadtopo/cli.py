"""quadtopo command-line interface."""

from __future__ import annotations

import argparse
import json
import logging
from typing import Optional, Sequence

from .io import load_json, save_json
from .repair import MERGE_DIST, RepairConfig
from .validation import RULES, rule_by_name


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Planar face topology checker")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log debug output")
    sub = parser.add_subparsers(dest="command", required=True)

    check = sub.add_parser("check", help="Repair and validate a drawing")
    check.add_argument("--in", dest="input_path", required=True)
    check.add_argument("--out", dest="output_path", help="Write the repaired graph here")
    check.add_argument(
        "--rule",
        choices=sorted(RULES),
        help="Face rule (defaults to the graph's metadata, then 'quad')",
    )
    check.add_argument("--merge-dist", type=float, default=MERGE_DIST)
    check.add_argument("--no-repair", action="store_true")
    check.add_argument("--json", action="store_true", help="Print the verdict as JSON")

    repair = sub.add_parser("repair", help="Merge close vertices and drop duplicate edges")
    repair.add_argument("--in", dest="input_path", required=True)
    repair.add_argument("--out", dest="output_path", required=True)
    repair.add_argument("--merge-dist", type=float, default=MERGE_DIST)

    diagnose = sub.add_parser("diagnose", help="Report crossings, collisions and face sizes")
    diagnose.add_argument("--in", dest="input_path", required=True)
    diagnose.add_argument("--rule", choices=sorted(RULES))
    diagnose.add_argument("--json", action="store_true")

    lattice = sub.add_parser("build-lattice", help="Write a grid-point lattice graph")
    lattice.add_argument("--cols", type=int, required=True)
    lattice.add_argument("--rows", type=int, required=True)
    lattice.add_argument("--out", dest="output_path", required=True)
    lattice.add_argument("--scale", type=float, default=60.0)
    lattice.add_argument("--perimeter-only", action="store_true")
    lattice.add_argument("--rule", choices=sorted(RULES), default="quad")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if args.command == "check":
        _cmd_check(args)

    elif args.command == "repair":
        graph = _load(args.input_path)
        repaired = graph.repaired(_repair_config(args))
        save_json(repaired, args.output_path)
        print(
            f"{len(graph.vertices)} -> {len(repaired.vertices)} vertices, "
            f"{len(graph.edges)} -> {len(repaired.edges)} edges"
        )
        print(f"Saved {args.output_path}")

    elif args.command == "diagnose":
        _cmd_diagnose(args)

    elif args.command == "build-lattice":
        from .builders import build_lattice

        try:
            graph = build_lattice(
                args.cols,
                args.rows,
                scale=args.scale,
                perimeter_only=args.perimeter_only,
                metadata={"rule": args.rule},
            )
        except ValueError as exc:
            print(exc)
            raise SystemExit(1)
        save_json(graph, args.output_path)
        print(f"Saved {args.output_path}")


def _cmd_check(args) -> None:
    graph = _load(args.input_path)
    try:
        rule = rule_by_name(args.rule) if args.rule else graph.rule()
    except ValueError as exc:
        print(exc)
        raise SystemExit(1)

    if not args.no_repair:
        graph = graph.repaired(_repair_config(args))
    verdict = graph.validate_faces(rule)

    if args.output_path:
        save_json(graph, args.output_path)

    if args.json:
        print(json.dumps(verdict.to_dict(), indent=2))
    else:
        print(verdict.message)
        for polygon in verdict.invalid_faces:
            print("  " + " ".join(f"({x:g}, {y:g})" for x, y in polygon))

    if not verdict.is_valid:
        raise SystemExit(1)


def _cmd_diagnose(args) -> None:
    from .diagnostics import diagnostics_report

    graph = _load(args.input_path)
    rule = rule_by_name(args.rule) if args.rule else None
    try:
        report = diagnostics_report(graph, rule)
    except ValueError as exc:
        print(exc)
        raise SystemExit(1)

    if args.json:
        print(json.dumps(report, indent=2))
        return

    for key in ("vertex_count", "edge_count", "face_count", "component_count", "euler_characteristic"):
        print(f"{key}: {report[key]}")
    print("internal face sizes:")
    for sides, count in report["internal_face_sizes"].items():
        print(f"  {sides}: {count}")
    for error in report["reference_errors"]:
        print(f"reference error: {error}")
    for a, b in report["edge_crossings"]:
        print(f"edge crossing: {a} x {b}")
    for item in report["angle_collisions"]:
        print(f"angle collision at {item['vertex']}: {item['angle']:.4f} rad")
    print(f"verdict: {report['verdict']['message']}")


def _load(path: str):
    try:
        return load_json(path)
    except (OSError, ValueError, KeyError) as exc:
        print(exc)
        raise SystemExit(1)


def _repair_config(args) -> RepairConfig:
    if args.merge_dist < 0:
        print("--merge-dist must be >= 0")
        raise SystemExit(1)
    return RepairConfig(merge_dist=args.merge_dist)


if __name__ == "__main__":
    main()
