"""Classify AsciiDoc for highlighting in 3 lines with zero config."""

from pincel import classify

text = "== Hello *World*\n\nA (C) 2024 paragraph -- with `code`.\n"
for span in classify(text).spans:
    print(f"{span.start:3}-{span.end:<3} {span.category.name:<14} {span.text(text)!r}")
