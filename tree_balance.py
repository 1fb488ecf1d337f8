"""Command line driver for the rebuilding binary search tree.

The script walks through the canonical demonstration: build a balanced tree
from random values, skew it by inserting several larger values, then restore
balance with ``Tree.rebalance``.  After each stage it reports the rendered
shape, the balance verdict and the four traversal orders, either as text or as
JSON for scripted consumers.

Scenario parameters come from ``balanced_bst.config``; command line flags
override values loaded with ``--config``.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
import argparse
import json
import logging
import random
import sys
from typing import Any, Callable, Dict, Iterator, List, Sequence

from balanced_bst import (
    DemoConfig,
    DemoConfigError,
    Tree,
    UnorderableValueError,
    load_demo_config,
    pretty_format,
    render_levels,
)

logger = logging.getLogger(__name__)

RENDERERS: Dict[str, Callable[[Tree[Any]], str]] = {
    "pretty": pretty_format,
    "levels": render_levels,
}


@dataclass(frozen=True)
class StageReport:
    """Snapshot of the tree after one demonstration stage."""

    stage: str
    balanced: bool
    height: int
    level_order: List[int]
    preorder: List[int]
    inorder: List[int]
    postorder: List[int]
    rendering: str

    @classmethod
    def capture(
        cls, stage: str, tree: Tree[int], renderer: Callable[[Tree[Any]], str]
    ) -> "StageReport":
        return cls(
            stage=stage,
            balanced=tree.balanced(),
            height=tree.height(),
            level_order=tree.level_order(),
            preorder=tree.preorder(),
            inorder=tree.inorder(),
            postorder=tree.postorder(),
            rendering=renderer(tree),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Expose a JSON-serialisable mapping without the rendering."""

        payload = asdict(self)
        payload.pop("rendering")
        return payload


def _iter_stages(
    config: DemoConfig, renderer: Callable[[Tree[Any]], str]
) -> Iterator[StageReport]:
    """Run the build, skew and rebalance stages yielding a report after each."""

    rng = random.Random(config.seed)
    tree = Tree(rng.randint(config.lower, config.upper) for _ in range(config.size))
    yield StageReport.capture("built", tree, renderer)

    for _ in range(config.extra_count):
        value = rng.randint(config.extra_lower, config.extra_upper)
        logger.debug("Inserting %d", value)
        tree.insert(value)
    yield StageReport.capture("skewed", tree, renderer)

    tree.rebalance()
    yield StageReport.capture("rebalanced", tree, renderer)


def _format_report(report: StageReport) -> List[str]:
    """Return formatted output lines for *report*."""

    status = "Yes" if report.balanced else "No"
    return [
        f"Stage: {report.stage}",
        report.rendering,
        f"Tree is balanced? {status} (height {report.height})",
        f"Level-order: {report.level_order}",
        f"Preorder: {report.preorder}",
        f"Post-order: {report.postorder}",
        f"Inorder: {report.inorder}",
    ]


def _non_negative_int(value: str) -> int:
    try:
        parsed = int(value, 10)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("value must be an integer") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("value must be non-negative")
    return parsed


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Build, skew and rebalance a binary search tree.",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="JSON or YAML scenario file. Flags below override its values.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed.")
    parser.add_argument(
        "--size",
        type=_non_negative_int,
        default=None,
        help="Number of random values used to build the initial tree.",
    )
    parser.add_argument(
        "--extra-count",
        type=_non_negative_int,
        default=None,
        help="Number of larger values inserted to skew the tree.",
    )
    parser.add_argument(
        "--style",
        choices=sorted(RENDERERS),
        default="pretty",
        help=(
            "Tree rendering used in text output. 'levels' keeps a slot for "
            "every missing child, so its width doubles per level; use 'pretty' "
            "for deep or skewed trees."
        ),
    )
    parser.add_argument(
        "--output-format",
        choices=["json", "text"],
        default="text",
        help="Print human-readable text or a JSON list of stage reports.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity for diagnostic output.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Execute the demonstration flow and return the process exit code."""

    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        config = load_demo_config(args.config).with_overrides(
            seed=args.seed, size=args.size, extra_count=args.extra_count
        )
        reports = list(_iter_stages(config, RENDERERS[args.style]))
    except (DemoConfigError, UnorderableValueError) as exc:
        logger.error("Failed to run demonstration: %s", exc)
        return 2

    if args.output_format == "json":
        print(json.dumps([report.to_dict() for report in reports]))
        return 0

    for report in reports:
        for line in _format_report(report):
            print(line)
        print()  # Spacer between stages
    print("Done!")
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    sys.exit(main())
