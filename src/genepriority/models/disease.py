"""Disease association models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator

from genepriority.constants import INHERITANCE_CODES, UNKNOWN_INHERITANCE_CODE


class InheritanceMode(str, Enum):
    """Mode of inheritance of a disease."""

    AUTOSOMAL_DOMINANT = "AUTOSOMAL_DOMINANT"
    AUTOSOMAL_RECESSIVE = "AUTOSOMAL_RECESSIVE"
    AUTOSOMAL_DOMINANT_AND_RECESSIVE = "AUTOSOMAL_DOMINANT_AND_RECESSIVE"
    X_LINKED = "X_LINKED"
    X_DOMINANT = "X_DOMINANT"
    X_RECESSIVE = "X_RECESSIVE"
    Y_LINKED = "Y_LINKED"
    MITOCHONDRIAL = "MITOCHONDRIAL"
    POLYGENIC = "POLYGENIC"
    SOMATIC = "SOMATIC"
    UNKNOWN = "UNKNOWN"

    @classmethod
    def from_code(cls, code: str | None) -> "InheritanceMode":
        if not code:
            return cls.UNKNOWN
        return cls(INHERITANCE_CODES.get(code.strip().upper(), cls.UNKNOWN.value))


class Disease(BaseModel):
    """A disease associated with a gene, with its annotated phenotypes."""

    model_config = ConfigDict(frozen=True)

    disease_id: str = Field(..., description="Disease identifier (e.g., OMIM:101600)")
    disease_name: str = ""
    associated_gene_id: int = -1
    associated_gene_symbol: str = ""
    inheritance_mode_code: str = Field(
        UNKNOWN_INHERITANCE_CODE, description="Mode of inheritance code, U when unknown"
    )
    disease_type_code: str = Field("D", description="D, C, S or ? (disease, CNV, susceptibility, unconfirmed)")
    phenotype_ids: tuple[str, ...] = ()

    @field_validator("inheritance_mode_code", mode="before")
    @classmethod
    def format_inheritance_code(cls, v: str | None) -> str:
        """Blank or missing codes are unknown; stored codes may carry padding."""
        if v is None:
            return UNKNOWN_INHERITANCE_CODE
        v = str(v).strip()
        return v or UNKNOWN_INHERITANCE_CODE

    @property
    def inheritance_mode(self) -> InheritanceMode:
        return InheritanceMode.from_code(self.inheritance_mode_code)
