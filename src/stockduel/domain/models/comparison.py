"""Comparison outcome models"""

from dataclasses import dataclass
from enum import Enum

from .metrics import SeriesMetrics
from .records import DividendRecord, PriceRecord
from .security import SecurityConfig


class Side(Enum):
    """Which security of the pair a point goes to"""

    A = "a"
    B = "b"


class Verdict(Enum):
    """Overall outcome of a comparison"""

    A_WINS = "a_wins"
    B_WINS = "b_wins"
    TIE = "tie"


def decide_verdict(score_a: int, score_b: int) -> Verdict:
    """Higher score wins; equal scores tie."""
    if score_a > score_b:
        return Verdict.A_WINS
    if score_b > score_a:
        return Verdict.B_WINS
    return Verdict.TIE


@dataclass(frozen=True)
class CriterionResult:
    """Outcome of a single scoring criterion"""

    name: str
    value_a: float
    value_b: float
    higher_is_better: bool
    winner: Side


@dataclass(frozen=True)
class Scorecard:
    """Per-criterion outcomes and the resulting score pair"""

    criteria: tuple[CriterionResult, ...]

    @property
    def score_a(self) -> int:
        return sum(1 for c in self.criteria if c.winner is Side.A)

    @property
    def score_b(self) -> int:
        return sum(1 for c in self.criteria if c.winner is Side.B)

    @property
    def verdict(self) -> Verdict:
        return decide_verdict(self.score_a, self.score_b)

    def winner_of(self, name: str) -> Side | None:
        """Winner of the named criterion, or None if it is not scored."""
        for criterion in self.criteria:
            if criterion.name == name:
                return criterion.winner
        return None


@dataclass(frozen=True)
class SecurityAnalysis:
    """Loaded records and computed metrics for one security"""

    security: SecurityConfig
    prices: tuple[PriceRecord, ...]
    dividends: tuple[DividendRecord, ...]
    metrics: SeriesMetrics

    @property
    def period_start(self) -> str:
        return self.prices[0].date

    @property
    def period_end(self) -> str:
        return self.prices[-1].date

    @property
    def record_count(self) -> int:
        return len(self.prices)


@dataclass(frozen=True)
class ComparisonResult:
    """Snapshot consumed by every output sink"""

    security_a: SecurityAnalysis
    security_b: SecurityAnalysis
    scorecard: Scorecard

    @property
    def winner(self) -> SecurityAnalysis | None:
        """The winning security, or None on a tie."""
        verdict = self.scorecard.verdict
        if verdict is Verdict.A_WINS:
            return self.security_a
        if verdict is Verdict.B_WINS:
            return self.security_b
        return None

    def side(self, side: Side) -> SecurityAnalysis:
        return self.security_a if side is Side.A else self.security_b
