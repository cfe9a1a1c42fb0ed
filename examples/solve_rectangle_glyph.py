"""Example: resize a rectangle glyph and read back its guides and handles."""

from glyphsolve import create_glyph, solve_glyph


def main() -> None:
    glyph = create_glyph(marks=["mark.rect"])
    glyph.attributes["width"] = 120.0
    report = solve_glyph(glyph)
    print("Degrees of freedom:", report.dof)
    print("Max hard residual:", report.max_hard_residual)
    for name, value in glyph.attributes.items():
        print(f"{name}: {value:.6f}")
    for guide in glyph.get_alignment_guides():
        print(f"guide {guide.axis} {guide.attribute} = {guide.value:.6f}")


if __name__ == "__main__":
    main()
