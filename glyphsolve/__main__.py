import argparse
import logging
from typing import List, Optional, Sequence, Tuple

from glyphsolve import (
    ConstraintStrength,
    GlyphInstance,
    GlyphSolveError,
    Infeasible,
    SolveReport,
    collect_guides,
    create_glyph,
    pin,
    solve_glyph,
)
from glyphsolve.logging_utils import configure_logging

logger = logging.getLogger(__name__)


def _parse_assignment(text: str) -> Tuple[str, float, Optional[str]]:
    """Parse ``NAME=VALUE`` or ``NAME=VALUE@STRENGTH``."""

    name, sep, rest = text.partition("=")
    if not sep or not name.strip():
        raise ValueError(f"expected NAME=VALUE, got '{text}'")
    value_text, _, strength = rest.partition("@")
    return name.strip(), float(value_text), strength.strip() or None


def _parse_strength(name: Optional[str]) -> ConstraintStrength:
    if name is None:
        return ConstraintStrength.STRONG
    try:
        return ConstraintStrength[name.upper()]
    except KeyError:
        raise ValueError(f"unknown strength '{name}'") from None


def _format_report(glyph: GlyphInstance, report: SolveReport) -> List[str]:
    lines = [f"glyph {glyph.id} ({glyph.class_id}) dof={report.dof}"]
    for element in glyph.walk():
        lines.append(f"[{element.id}] {element.class_id}")
        for name, value in element.attributes.items():
            rendered = f"{value:.6g}" if isinstance(value, float) else str(value)
            lines.append(f"  {name} = {rendered}")
    lines.append("guides:")
    for guide in collect_guides(glyph):
        lines.append(f"  {guide.axis} {guide.element_id}.{guide.attribute} = {guide.value:.6g}")
    lines.append("handles:")
    for handle in glyph.get_handles():
        attrs = ",".join(action.attribute for action in handle.actions)
        if handle.type == "line":
            lines.append(f"  line {handle.axis} {attrs} = {handle.value:.6g}")
        else:
            lines.append(f"  point {attrs} = ({handle.x:.6g}, {handle.y:.6g})")
    for hint in report.hints:
        lines.append(f"hint: {hint}")
    for warning in report.warnings:
        lines.append(f"warning: {warning}")
    return lines


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Solve the layout of a single glyph")
    parser.add_argument(
        "--glyph",
        default="glyph.rectangle",
        help="Glyph class id (default: glyph.rectangle)",
    )
    parser.add_argument(
        "--mark",
        action="append",
        default=[],
        help="Mark class id added after the anchor mark (repeatable)",
    )
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        metavar="NAME=VALUE",
        help="Edit a glyph attribute before solving (repeatable)",
    )
    parser.add_argument(
        "--pin",
        action="append",
        default=[],
        metavar="NAME=VALUE[@STRENGTH]",
        help="Pin a glyph attribute with a constraint (default strength: STRONG)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (default: WARNING)",
    )
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    try:
        edits = [_parse_assignment(item) for item in args.set]
        pins = [
            (name, value, _parse_strength(strength))
            for name, value, strength in (_parse_assignment(item) for item in args.pin)
        ]
    except ValueError as exc:
        parser.error(str(exc))

    try:
        glyph = create_glyph(args.glyph, marks=args.mark)
        for name, value, _ in edits:
            glyph.attributes.set(name, value)
        for name, _, _ in pins:
            glyph.attributes.describe(name)
    except GlyphSolveError as exc:
        parser.error(str(exc))
    constraints = [pin(glyph, name, value, strength) for name, value, strength in pins]

    logger.info("Solving glyph %s with %d edits and %d pins", glyph.id, len(edits), len(constraints))
    try:
        report = solve_glyph(glyph, constraints)
    except Infeasible as exc:
        logger.error("Layout is infeasible: %s", exc)
        raise SystemExit(2)

    print("\n".join(_format_report(glyph, report)))


if __name__ == "__main__":
    main()
