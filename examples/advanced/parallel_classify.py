"""Thread safe: classify 1000 buffers in parallel with one Classifier."""

from concurrent.futures import ThreadPoolExecutor

from pincel import Category, Classifier

docs = [f"== Doc {i}\n\nContent for *document* {i}\n" for i in range(1000)]
classifier = Classifier()

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(classifier.classify, docs))

print(f"Classified {len(results)} buffers in parallel")
print("First buffer spans:", len(results[0].spans))
print("Strong spans in last buffer:", len(results[-1].spans_of(Category.STRONG)))
