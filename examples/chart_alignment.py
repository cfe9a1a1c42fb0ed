"""Example: snap two glyphs to a chart's plot area with authored constraints."""

from glyphsolve import ConstraintStrength, align, create_chart, create_glyph, pin, solve_chart


def main() -> None:
    left = create_glyph(table="sales")
    right = create_glyph(table="sales")
    chart = create_chart(glyphs=[left, right])
    chart.constraints.append(align(left, "x1", chart, "x1"))
    chart.constraints.append(align(right, "x2", chart, "x2"))
    chart.constraints.append(pin(right, "height", 240.0, ConstraintStrength.MEDIUM))

    report = solve_chart(chart)
    print("Variables:", report.variables, "constraints:", report.constraints)
    for glyph in chart.glyphs:
        attrs = glyph.attributes
        print(f"{glyph.id}: x1={attrs['x1']:.3f} x2={attrs['x2']:.3f} height={attrs['height']:.3f}")
    for hint in report.hints:
        print("hint:", hint)


if __name__ == "__main__":
    main()
