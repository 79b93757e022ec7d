"""Weighted SEO score for a SignalSet.

Pure and deterministic: the same SignalSet and rubric always give the same
Score. Each sub-score is the sum of its triggered rules, capped at the
sub-score's maximum.
"""

from config import DEFAULT_CONFIG, AnalyzerConfig
from models import Score, SignalSet


class Scorer:
    def __init__(self, config: AnalyzerConfig = DEFAULT_CONFIG) -> None:
        self.config = config

    def score(self, signals: SignalSet) -> Score:
        return Score(
            on_page=self.on_page_score(signals),
            technical=self.technical_score(signals),
            content=self.content_score(signals),
            links=self.links_score(signals),
        )

    def on_page_score(self, s: SignalSet) -> int:
        w = self.config.on_page
        t = self.config.thresholds
        points = 0
        if s.title:
            points += w.title
            if t.title_length_min <= s.title_length <= t.title_length_max:
                points += w.title_length
        if s.meta_description:
            points += w.meta_description
            if t.meta_description_length_min <= s.meta_description_length <= t.meta_description_length_max:
                points += w.meta_description_length
        if s.h1_count > 0:
            points += w.h1
        return _clamp(points, w.max_points)

    def technical_score(self, s: SignalSet) -> int:
        w = self.config.technical
        points = 0
        if s.is_https:
            points += w.https
        if s.viewport:
            points += w.viewport
        if s.h1_count == 1:
            points += w.single_h1
        # strictly greater than; the content bonus below uses >=
        if s.word_count > self.config.thresholds.word_count_min:
            points += w.word_count
        return _clamp(points, w.max_points)

    def content_score(self, s: SignalSet) -> int:
        w = self.config.content
        t = self.config.thresholds
        points = w.base
        if s.word_count >= t.word_count_min:
            points += w.word_count_min
        if s.word_count >= t.word_count_optimal:
            points += w.word_count_optimal
        if s.h2_count > 0:
            points += w.h2
        return _clamp(points, w.max_points)

    def links_score(self, s: SignalSet) -> int:
        w = self.config.links
        t = self.config.thresholds
        points = 0
        if s.total_links >= t.link_count_min:
            points += w.link_count
        if s.total_links >= t.link_count_optimal:
            points += w.link_count_high
        return _clamp(points, w.max_points)


def _clamp(points: int, max_points: int) -> int:
    return max(0, min(points, max_points))


def score_signals(signals: SignalSet, config: AnalyzerConfig = DEFAULT_CONFIG) -> Score:
    return Scorer(config).score(signals)
