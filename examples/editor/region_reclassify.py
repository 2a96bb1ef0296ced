"""Re-classify only the edited lines: O(lines touched) not O(buffer)."""

from pincel import Classifier, DictClassificationCache, GrammarConfig, Region

classifier = Classifier(GrammarConfig(special_words=("TODO", "FIXME")))
cache = DictClassificationCache()

text = "= Guide\n\n== Install\n\nRun *make* -- TODO check flags.\n"
full = classifier.classify(text, cache=cache)

# User edits "make" -> "make all"; widen the edit to whole lines first
edit = text.index("make")
text = text[:edit] + "make all" + text[edit + len("make") :]
region = Region.for_lines(text, edit, edit + len("make all"))
partial = classifier.classify(text, region, cache=cache)

print("Whole buffer spans:", len(full.spans))
print("Edited region:", region)
for span in partial.spans:
    print(f"  {span.category.name:<14} {span.text(text)!r}")

# Undo: the original region content hits the cache
undone = classifier.classify(text.replace("make all", "make"), cache=cache)
print("Cache hit after undo:", undone is full)
