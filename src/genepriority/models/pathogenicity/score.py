"""Predicted pathogenicity scores and their canonical ordering."""

import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class PathogenicitySource(str, Enum):
    """Computational pathogenicity predictor.

    Each source declares whether its scale is tolerance-oriented, meaning a
    low value is damaging (SIFT). Declaration order is the iteration order of
    scores and the tie-break order when two sources are equally pathogenic.
    """

    def __new__(cls, value: str, tolerance_oriented: bool = False):
        obj = str.__new__(cls, value)
        obj._value_ = value
        obj.tolerance_oriented = tolerance_oriented
        return obj

    VARIANT_EFFECT = "VARIANT_EFFECT"
    POLYPHEN = "POLYPHEN"
    MUTATION_TASTER = "MUTATION_TASTER"
    SIFT = ("SIFT", True)
    CADD = "CADD"
    REMM = "REMM"
    REVEL = "REVEL"
    MVP = "MVP"
    ALPHA_MISSENSE = "ALPHA_MISSENSE"
    SPLICE_AI = "SPLICE_AI"

    @property
    def position(self) -> int:
        return _SOURCE_POSITION[self]


_SOURCE_POSITION: dict[PathogenicitySource, int] = {
    source: idx for idx, source in enumerate(PathogenicitySource)
}


class PathogenicityScore(BaseModel):
    """A score from a single predictor, normalised to [0, 1]."""

    model_config = ConfigDict(frozen=True)

    source: PathogenicitySource
    score: float = Field(..., ge=0.0, le=1.0)

    @classmethod
    def of(cls, source: PathogenicitySource, score: float) -> "PathogenicityScore":
        return cls(source=source, score=score)

    @classmethod
    def sift(cls, score: float) -> "PathogenicityScore":
        """SIFT score, 0 is damaging and 1 is tolerated."""
        return cls(source=PathogenicitySource.SIFT, score=score)

    @classmethod
    def cadd_phred(cls, phred: float) -> "PathogenicityScore":
        """CADD score from a PHRED-scaled value: 1 - 10^(-phred/10)."""
        return cls(source=PathogenicitySource.CADD, score=1 - math.pow(10, -max(phred, 0.0) / 10))

    @property
    def pathogenicity(self) -> float:
        """Score on a common scale where higher is more pathogenic."""
        if self.source.tolerance_oriented:
            return 1 - self.score
        return self.score

    def __str__(self) -> str:
        return f"{self.source.value}: {self.score:.3f}"


def pathogenicity_sort_key(score: PathogenicityScore) -> tuple[float, int]:
    """The canonical ordering of scores from any source.

    Orders by pathogenicity on the common scale. Equal pathogenicity is
    broken in favour of the source declared first, so max() over this key
    picks exactly one score.
    """
    return score.pathogenicity, -score.source.position


def most_pathogenic(scores) -> PathogenicityScore | None:
    """Most pathogenic score under the canonical ordering, or None if there are none."""
    return max(scores, key=pathogenicity_sort_key, default=None)
