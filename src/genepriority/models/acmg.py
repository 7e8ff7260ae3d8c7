"""ACMG/AMP evidence criteria and moderation.

ARCHITECTURE:
    Criterion code → AcmgCriterion (closed catalogue) → ModeratedAcmgCriterion (criterion + strength)

The catalogue is the fixed table of criteria from Richards et al. 2015
(Tables 3 and 4 of the ACMG/AMP Standards and Guidelines for the
Interpretation of Sequence Variants). Each entry has an impact direction and a
base evidence strength. Moderation replaces the strength for one variant but
never the direction.

Key Design:
- Enum members are the catalogue; codes are the identity keys
- lookup() is the only operation that fails (UnknownCriterionError)
- moderate() accepts any criterion/strength combination, legality is left to the caller
- Combining moderated evidence into a classification is the job of an external classifier
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class UnknownCriterionError(LookupError):
    """Exception raised when a criterion code is not in the catalogue."""

    pass


class AcmgImpact(str, Enum):
    """Direction of an ACMG criterion."""

    PATHOGENIC = "PATHOGENIC"
    BENIGN = "BENIGN"


class AcmgEvidence(str, Enum):
    """ACMG evidence strength, declared strongest first."""

    STAND_ALONE = "STAND_ALONE"
    VERY_STRONG = "VERY_STRONG"
    STRONG = "STRONG"
    MODERATE = "MODERATE"
    SUPPORTING = "SUPPORTING"

    @property
    def label(self) -> str:
        """Human-readable strength label, e.g. 'very strong'."""
        return self.value.lower().replace("_", " ").replace("stand alone", "stand-alone")

    @property
    def rank(self) -> int:
        """Position on the strength scale, 0 is strongest."""
        return _EVIDENCE_RANK[self]

    def is_stronger_than(self, other: "AcmgEvidence") -> bool:
        return self.rank < other.rank

    @classmethod
    def parse(cls, value: "str | AcmgEvidence") -> "AcmgEvidence":
        """Parse a strength from its name or label ('very strong', 'VERY_STRONG', 'stand-alone')."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Unknown ACMG evidence strength: {value!r}") from None


_EVIDENCE_RANK: dict[AcmgEvidence, int] = {evidence: idx for idx, evidence in enumerate(AcmgEvidence)}


class AcmgClassification(str, Enum):
    """Five-tier ACMG/AMP variant classification.

    Produced by a classifier that combines moderated criteria; only the
    vocabulary lives here.
    """

    PATHOGENIC = "Pathogenic"
    LIKELY_PATHOGENIC = "Likely Pathogenic"
    UNCERTAIN_SIGNIFICANCE = "Uncertain Significance"
    LIKELY_BENIGN = "Likely Benign"
    BENIGN = "Benign"


_P = AcmgImpact.PATHOGENIC
_B = AcmgImpact.BENIGN


class AcmgCriterion(Enum):
    """The ACMG/AMP criteria catalogue.

    Each member's value is its code. Impact, base strength and rationale are
    attributes of the member.
    """

    def __new__(cls, code: str, impact: AcmgImpact, evidence: AcmgEvidence, description: str):
        obj = object.__new__(cls)
        obj._value_ = code
        obj.impact = impact
        obj.evidence = evidence
        obj.description = description
        return obj

    # PATHOGENIC - Table 3
    PVS1 = ("PVS1", _P, AcmgEvidence.VERY_STRONG, "null variant (nonsense, frameshift, canonical ±1 or 2 splice sites, initiation codon, single or multiexon deletion) in a gene where LOF is a known mechanism of disease")

    PS1 = ("PS1", _P, AcmgEvidence.STRONG, "Same amino acid change as a previously established pathogenic variant regardless of nucleotide change")
    PS2 = ("PS2", _P, AcmgEvidence.STRONG, "De novo (both maternity and paternity confirmed) in a patient with the disease and no family history")
    PS3 = ("PS3", _P, AcmgEvidence.STRONG, "Well-established in vitro or in vivo functional studies supportive of a damaging effect on the gene or gene product")
    PS4 = ("PS4", _P, AcmgEvidence.STRONG, "The prevalence of the variant in affected individuals is significantly increased compared with the prevalence in controls")
    PP1_S = ("PP1_S", _P, AcmgEvidence.STRONG, "(strong) Cosegregation with disease in multiple affected family members in a gene definitively known to cause the disease")

    PM1 = ("PM1", _P, AcmgEvidence.MODERATE, "Located in a mutational hot spot and/or critical and well-established functional domain (e.g., active site of an enzyme) without benign variation")
    PM2 = ("PM2", _P, AcmgEvidence.MODERATE, "Absent from controls (or at extremely low frequency if recessive) in Exome Sequencing Project, 1000 Genomes Project, or Exome Aggregation Consortium")
    PM3 = ("PM3", _P, AcmgEvidence.MODERATE, "For recessive disorders, detected in trans with a pathogenic variant")
    PM4 = ("PM4", _P, AcmgEvidence.MODERATE, "Protein length changes as a result of in-frame deletions/insertions in a nonrepeat region or stop-loss variants")
    PM5 = ("PM5", _P, AcmgEvidence.MODERATE, "Novel missense change at an amino acid residue where a different missense change determined to be pathogenic has been seen before")
    PM6 = ("PM6", _P, AcmgEvidence.MODERATE, "Assumed de novo, but without confirmation of paternity and maternity")
    PP1_M = ("PP1_M", _P, AcmgEvidence.MODERATE, "(moderate) Cosegregation with disease in multiple affected family members in a gene definitively known to cause the disease")

    PP1 = ("PP1", _P, AcmgEvidence.SUPPORTING, "Cosegregation with disease in multiple affected family members in a gene definitively known to cause the disease")
    PP2 = ("PP2", _P, AcmgEvidence.SUPPORTING, "Missense variant in a gene that has a low rate of benign missense variation and in which missense variants are a common mechanism of disease")
    PP3 = ("PP3", _P, AcmgEvidence.SUPPORTING, "Multiple lines of computational evidence support a deleterious effect on the gene or gene product (conservation, evolutionary, splicing impact, etc.)")
    PP4 = ("PP4", _P, AcmgEvidence.SUPPORTING, "Patient's phenotype or family history is highly specific for a disease with a single genetic etiology")
    PP5 = ("PP5", _P, AcmgEvidence.SUPPORTING, "Reputable source recently reports variant as pathogenic, but the evidence is not available to the laboratory to perform an independent evaluation")

    # BENIGN - Table 4
    BP1 = ("BP1", _B, AcmgEvidence.SUPPORTING, "Missense variant in a gene for which primarily truncating variants are known to cause disease")
    BP2 = ("BP2", _B, AcmgEvidence.SUPPORTING, "Observed in trans with a pathogenic variant for a fully penetrant dominant gene/disorder or observed in cis with a pathogenic variant in any inheritance pattern")
    BP3 = ("BP3", _B, AcmgEvidence.SUPPORTING, "In-frame deletions/insertions in a repetitive region without a known function")
    BP4 = ("BP4", _B, AcmgEvidence.SUPPORTING, "Multiple lines of computational evidence suggest no impact on gene or gene product (conservation, evolutionary, splicing impact, etc.)")
    BP5 = ("BP5", _B, AcmgEvidence.SUPPORTING, "Variant found in a case with an alternate molecular basis for disease")
    BP6 = ("BP6", _B, AcmgEvidence.SUPPORTING, "Reputable source recently reports variant as benign, but the evidence is not available to the laboratory to perform an independent evaluation")
    BP7 = ("BP7", _B, AcmgEvidence.SUPPORTING, "A synonymous (silent) variant for which splicing prediction algorithms predict no impact to the splice consensus sequence nor the creation of a new splice site AND the nucleotide is not highly conserved")

    BS1 = ("BS1", _B, AcmgEvidence.STRONG, "Allele frequency is greater than expected for disorder")
    BS2 = ("BS2", _B, AcmgEvidence.STRONG, "Observed in a healthy adult individual for a recessive (homozygous), dominant (heterozygous), or X-linked (hemizygous) disorder, with full penetrance expected at an early age")
    BS3 = ("BS3", _B, AcmgEvidence.STRONG, "Well-established in vitro or in vivo functional studies show no damaging effect on protein function or splicing")
    BS4 = ("BS4", _B, AcmgEvidence.STRONG, "Lack of segregation in affected members of a family")

    BA1 = ("BA1", _B, AcmgEvidence.STAND_ALONE, "Allele frequency is >5% in Exome Sequencing Project, 1000 Genomes Project, or Exome Aggregation Consortium")

    @property
    def code(self) -> str:
        return self.value

    def category(self) -> AcmgImpact:
        return self.impact

    def is_pathogenic(self) -> bool:
        return self.impact is AcmgImpact.PATHOGENIC

    def is_benign(self) -> bool:
        return self.impact is AcmgImpact.BENIGN

    def __str__(self) -> str:
        return self.value


class ModeratedAcmgCriterion(BaseModel):
    """A catalogue criterion applied at a caller-chosen strength.

    Equality and hashing cover both the criterion and the strength. The
    impact is always the underlying criterion's impact.
    """

    model_config = ConfigDict(frozen=True)

    criterion: AcmgCriterion
    evidence: AcmgEvidence

    @classmethod
    def of(cls, criterion: AcmgCriterion, evidence: AcmgEvidence) -> "ModeratedAcmgCriterion":
        return cls(criterion=criterion, evidence=evidence)

    def category(self) -> AcmgImpact:
        return self.criterion.category()

    def is_pathogenic(self) -> bool:
        return self.category() is AcmgImpact.PATHOGENIC

    def is_benign(self) -> bool:
        return self.category() is AcmgImpact.BENIGN

    @property
    def is_moderated(self) -> bool:
        """True when the applied strength differs from the criterion's base strength."""
        return self.evidence is not self.criterion.evidence

    @property
    def description(self) -> str:
        return f"({self.evidence.label}) {self.criterion.description}"

    def __str__(self) -> str:
        return f"{self.criterion.code}({self.evidence.value})"


def lookup(code: str) -> AcmgCriterion:
    """Find a criterion by its code.

    Args:
        code: Criterion code, e.g. "PVS1" or "pp1_s"

    Returns:
        The catalogue entry

    Raises:
        UnknownCriterionError: If no criterion has this code
    """
    key = str(code).strip().upper()
    try:
        return AcmgCriterion(key)
    except ValueError:
        raise UnknownCriterionError(f"Unknown ACMG criterion: {code!r}") from None


def moderate(
    criterion: AcmgCriterion | str,
    evidence: AcmgEvidence | str,
) -> ModeratedAcmgCriterion:
    """Apply a strength to a criterion.

    No combination is rejected: the guidelines do not restrict which
    criteria may be moved to which strength.

    Raises:
        UnknownCriterionError: If criterion is a code that is not in the catalogue
        ValueError: If evidence is not a known strength
    """
    if not isinstance(criterion, AcmgCriterion):
        criterion = lookup(criterion)
    return ModeratedAcmgCriterion.of(criterion, AcmgEvidence.parse(evidence))


def criteria_by_impact(impact: AcmgImpact) -> list[AcmgCriterion]:
    """All criteria with the given direction, in catalogue order."""
    return [criterion for criterion in AcmgCriterion if criterion.impact is impact]
