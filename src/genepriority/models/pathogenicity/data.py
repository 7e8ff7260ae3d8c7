"""Per-variant pathogenicity evidence.

ARCHITECTURE:
    ClinVarData + [PathogenicityScore] → PathogenicityData → score() in [0, 1]

Merges a clinical assertion with the predicted scores of any number of
predictors into one comparable signal.

Key Design:
- At most one score per source (last one wins), held in source declaration order
- PathogenicityData.empty() is a singleton; of() returns it for empty input
- A pathogenic/likely pathogenic clinical assertion overrides every prediction
- Tolerance-oriented sources (SIFT) are inverted via the source flag, never by type checks
"""

from collections.abc import Iterable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from genepriority.models.pathogenicity.clinvar import ClinVarData
from genepriority.models.pathogenicity.score import (
    PathogenicityScore,
    PathogenicitySource,
    most_pathogenic,
)

# Combined score when there is no evidence of pathogenicity
NON_PATHOGENIC_SCORE: float = 0.0


class PathogenicityData(BaseModel):
    """Clinical assertion plus predicted scores for one variant."""

    model_config = ConfigDict(frozen=True)

    clinvar_data: ClinVarData = Field(default_factory=ClinVarData.empty)
    predicted_scores: tuple[PathogenicityScore, ...] = ()

    @model_validator(mode="before")
    @classmethod
    def one_score_per_source(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        if data.get("clinvar_data") is None:
            data["clinvar_data"] = ClinVarData.empty()
        if "predicted_scores" not in data:
            return data

        by_source: dict[PathogenicitySource, PathogenicityScore] = {}
        for score in data["predicted_scores"] or ():
            if score is None:
                continue
            if not isinstance(score, PathogenicityScore):
                score = PathogenicityScore.model_validate(score)
            by_source[score.source] = score
        data["predicted_scores"] = tuple(sorted(by_source.values(), key=lambda s: s.source.position))
        return data

    @classmethod
    def of(
        cls,
        clinvar_data: ClinVarData | None = None,
        scores: Iterable[PathogenicityScore | None] = (),
    ) -> "PathogenicityData":
        """Build pathogenicity data, returning the empty singleton when there is nothing to hold."""
        clinvar_data = clinvar_data if clinvar_data is not None else ClinVarData.empty()
        scores = [score for score in scores if score is not None]
        if clinvar_data.is_empty() and not scores:
            return _EMPTY_DATA
        return cls(clinvar_data=clinvar_data, predicted_scores=scores)

    @classmethod
    def empty(cls) -> "PathogenicityData":
        return _EMPTY_DATA

    def is_empty(self) -> bool:
        return self is _EMPTY_DATA or self == _EMPTY_DATA

    def has_clinvar_data(self) -> bool:
        return not self.clinvar_data.is_empty()

    def has_predicted_score(self, source: PathogenicitySource | None = None) -> bool:
        """With no source: whether there is any score or clinical assertion at all."""
        if source is None:
            return bool(self.predicted_scores) or self.has_clinvar_data()
        return self.predicted_score(source) is not None

    def predicted_score(self, source: PathogenicitySource) -> PathogenicityScore | None:
        for score in self.predicted_scores:
            if score.source is source:
                return score
        return None

    def get_predicted_scores(self) -> list[PathogenicityScore]:
        return list(self.predicted_scores)

    def most_pathogenic_score(self) -> PathogenicityScore | None:
        return most_pathogenic(self.predicted_scores)

    def score(self) -> float:
        """Combined pathogenicity, from 0 (non-pathogenic) to 1 (highly pathogenic)."""
        if self.clinvar_data.is_pathogenic_or_likely_pathogenic():
            return 1.0
        return self._predicted_pathogenicity()

    def _predicted_pathogenicity(self) -> float:
        # Score-specific cutoffs are not applied:
        # PolyPhen2 HVAR D > 0.956, MutationTaster > 0.95, SIFT D < 0.05
        most_pathogenic_score = self.most_pathogenic_score()
        if most_pathogenic_score is None:
            return NON_PATHOGENIC_SCORE
        return most_pathogenic_score.pathogenicity


_EMPTY_DATA = PathogenicityData()
