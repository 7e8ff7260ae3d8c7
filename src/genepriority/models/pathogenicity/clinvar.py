"""ClinVar-style clinical assertions."""

import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from genepriority.constants import CLINICAL_SIGNIFICANCE_NORMALIZATION, REVIEW_STATUS_STARS

logger = logging.getLogger(__name__)


class ClinSig(str, Enum):
    """Clinical significance categories used by ClinVar."""

    BENIGN = "BENIGN"
    BENIGN_OR_LIKELY_BENIGN = "BENIGN_OR_LIKELY_BENIGN"
    LIKELY_BENIGN = "LIKELY_BENIGN"
    UNCERTAIN_SIGNIFICANCE = "UNCERTAIN_SIGNIFICANCE"
    LIKELY_PATHOGENIC = "LIKELY_PATHOGENIC"
    PATHOGENIC_OR_LIKELY_PATHOGENIC = "PATHOGENIC_OR_LIKELY_PATHOGENIC"
    PATHOGENIC = "PATHOGENIC"
    CONFLICTING_PATHOGENICITY_INTERPRETATIONS = "CONFLICTING_PATHOGENICITY_INTERPRETATIONS"
    AFFECTS = "AFFECTS"
    ASSOCIATION = "ASSOCIATION"
    DRUG_RESPONSE = "DRUG_RESPONSE"
    NOT_PROVIDED = "NOT_PROVIDED"
    OTHER = "OTHER"
    PROTECTIVE = "PROTECTIVE"
    RISK_FACTOR = "RISK_FACTOR"

    @classmethod
    def parse(cls, clinical_significance: str | None) -> "ClinSig":
        """Map a ClinVar clinical significance string onto a category.

        Accepts ClinVar display text ("Likely pathogenic",
        "Pathogenic/Likely pathogenic") and underscore forms
        ("likely_pathogenic"). Blank or unrecognised text is NOT_PROVIDED.
        """
        if not clinical_significance:
            return cls.NOT_PROVIDED

        text = clinical_significance.strip().lower().replace("_", " ")
        # ClinVar appends secondary terms after a comma, e.g. "Pathogenic, risk factor"
        primary = text.split(",")[0].strip()

        name = CLINICAL_SIGNIFICANCE_NORMALIZATION.get(primary)
        if name is None:
            logger.debug(f"Unrecognised clinical significance '{clinical_significance}'")
            return cls.NOT_PROVIDED
        return cls[name]


_PATHOGENIC_CLINSIGS = frozenset({
    ClinSig.PATHOGENIC,
    ClinSig.PATHOGENIC_OR_LIKELY_PATHOGENIC,
    ClinSig.LIKELY_PATHOGENIC,
})


class ClinVarData(BaseModel):
    """A curated clinical assertion about a variant.

    ClinVarData.empty() is the "no assertion" sentinel. A record that has a
    variation id but no interpretation is present-but-unknown, which is not
    the same thing.
    """

    model_config = ConfigDict(frozen=True)

    variation_id: str = ""
    primary_interpretation: ClinSig = ClinSig.NOT_PROVIDED
    secondary_interpretations: frozenset[ClinSig] = Field(default_factory=frozenset)
    review_status: str = ""
    conditions: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> "ClinVarData":
        return _EMPTY_CLINVAR_DATA

    @classmethod
    def from_significance(
        cls,
        clinical_significance: str | None,
        variation_id: str | None = None,
        review_status: str | None = None,
        conditions: list[str] | None = None,
    ) -> "ClinVarData":
        """Build from ClinVar display fields, returning the empty sentinel when all are blank."""
        data = cls(
            variation_id=variation_id or "",
            primary_interpretation=ClinSig.parse(clinical_significance),
            review_status=(review_status or "").strip(),
            conditions=tuple(conditions or ()),
        )
        return _EMPTY_CLINVAR_DATA if data == _EMPTY_CLINVAR_DATA else data

    def is_empty(self) -> bool:
        return self == _EMPTY_CLINVAR_DATA

    def is_pathogenic_or_likely_pathogenic(self) -> bool:
        return self.primary_interpretation in _PATHOGENIC_CLINSIGS

    def star_rating(self) -> int:
        """Review status as ClinVar gold stars (0-4)."""
        return REVIEW_STATUS_STARS.get(self.review_status.lower(), 0)


_EMPTY_CLINVAR_DATA = ClinVarData()
