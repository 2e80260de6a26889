import pyarrow as pa

import kmpstream as ks


class TimeSuitePatterns:
    """
    Benchmark suite for patterns with long self-overlapping prefixes.
    """

    def setup(self):
        self.text = (("a" * 50 + "b") * 5 + "c") * 2 ** 10
        self.text_bytes = self.text.encode()
        self.pattern = "a" * 30 + "b"
        self.pattern_bytes = self.pattern.encode()
        self.chunks = [
            self.text_bytes[i : i + 4096]
            for i in range(0, len(self.text_bytes), 4096)
        ]
        self.array = pa.array(
            [("a" * 50 + "b" if i % 2 == 0 else "c") * 5 for i in range(2 ** 14)],
            pa.string(),
        )
        # Trigger compilation outside of the timed sections
        ks.match_all(self.text_bytes[:100], self.pattern_bytes)
        ks.match_all(self.text[:100], self.pattern)
        list(ks.iter_matches(self.chunks[:1], self.pattern_bytes))
        ks.match_all_array(self.array[:10], self.pattern)

    def time_match_all_bytes(self):
        ks.match_all(self.text_bytes, self.pattern_bytes)

    def time_match_all_str(self):
        ks.match_all(self.text, self.pattern)

    def time_python_find_loop(self):
        start = self.text.find(self.pattern)
        while start != -1:
            start = self.text.find(self.pattern, start + 1)

    def time_feed_chunks(self):
        list(ks.iter_matches(self.chunks, self.pattern_bytes))

    def time_step(self):
        with ks.StreamMatcher(self.pattern_bytes) as matcher:
            for j, symbol in enumerate(self.text_bytes[:20000]):
                matcher.step(symbol, j)

    def time_match_all_array(self):
        ks.match_all_array(self.array, self.pattern)


class PeakMemSuiteStream:
    def setup(self):
        self.patterns = [("ab" * 100 + str(i)).encode() for i in range(1000)]

    def peakmem_many_matchers(self):
        matchers = [ks.StreamMatcher(p) for p in self.patterns]
        sum(m.footprint() for m in matchers)
