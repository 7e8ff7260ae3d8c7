"""Centralized constants and mappings for genepriority.

This module consolidates the hardcoded tables used across the codebase:
- Prioritiser names accepted from clients
- Inheritance mode and disease type codes from the disease annotations
- ClinVar clinical significance normalisation
- HPO annotation download locations

Centralizing these makes maintenance easier and ensures consistency.
"""

# =============================================================================
# PRIORITISER NAMES
# =============================================================================
# Maps client-supplied prioritiser names to PriorityType member names.
# Anything not listed here resolves to DEFAULT_PRIORITISER.

PRIORITISER_NAMES: dict[str, str] = {
    "phenix": "PHENIX_PRIORITY",
    "phive": "PHIVE_PRIORITY",
    "hiphive": "HIPHIVE_PRIORITY",
}

DEFAULT_PRIORITISER: str = "HIPHIVE_PRIORITY"

# HiPhive data sources. Only the human disease annotations are backed by
# the HPO annotation provider.
HIPHIVE_DATA_SOURCES: set[str] = {"human", "mouse", "fish", "ppi"}
HIPHIVE_AVAILABLE_SOURCES: set[str] = {"human"}


# =============================================================================
# GENES
# =============================================================================

# Placeholder symbol prefix for requested gene ids with no known symbol
UNKNOWN_GENE_PREFIX: str = "GENE:"

UNKNOWN_ENTREZ_ID: int = -1


# =============================================================================
# DISEASE ANNOTATIONS
# =============================================================================
# Single-character mode of inheritance codes

INHERITANCE_CODES: dict[str, str] = {
    "D": "AUTOSOMAL_DOMINANT",
    "R": "AUTOSOMAL_RECESSIVE",
    "B": "AUTOSOMAL_DOMINANT_AND_RECESSIVE",
    "X": "X_LINKED",
    "XD": "X_DOMINANT",
    "XR": "X_RECESSIVE",
    "Y": "Y_LINKED",
    "M": "MITOCHONDRIAL",
    "P": "POLYGENIC",
    "S": "SOMATIC",
    "U": "UNKNOWN",
}

UNKNOWN_INHERITANCE_CODE: str = "U"

# HPO inheritance terms (aspect 'I' rows of phenotype.hpoa) to inheritance codes
HPO_INHERITANCE_TERMS: dict[str, str] = {
    "HP:0000006": "D",  # Autosomal dominant inheritance
    "HP:0000007": "R",  # Autosomal recessive inheritance
    "HP:0001417": "X",  # X-linked inheritance
    "HP:0001419": "XR",  # X-linked recessive inheritance
    "HP:0001423": "XD",  # X-linked dominant inheritance
    "HP:0001450": "Y",  # Y-linked inheritance
    "HP:0001427": "M",  # Mitochondrial inheritance
    "HP:0010982": "P",  # Polygenic inheritance
    "HP:0001428": "S",  # Somatic mutation
}

# Disease type codes returned for gene lookups:
# D = disease, C = copy number variant, S = susceptibility, ? = unconfirmed
ACCEPTED_DISEASE_TYPES: set[str] = {"D", "C", "S", "?"}

# genes_to_disease.txt association_type to disease type code
ASSOCIATION_TYPE_CODES: dict[str, str] = {
    "MENDELIAN": "D",
    "POLYGENIC": "S",
    "UNKNOWN": "?",
}


# =============================================================================
# CLINICAL SIGNIFICANCE
# =============================================================================
# Lower-cased ClinVar clinical significance strings to ClinSig member names

CLINICAL_SIGNIFICANCE_NORMALIZATION: dict[str, str] = {
    "benign": "BENIGN",
    "benign/likely benign": "BENIGN_OR_LIKELY_BENIGN",
    "likely benign": "LIKELY_BENIGN",
    "uncertain significance": "UNCERTAIN_SIGNIFICANCE",
    "vus": "UNCERTAIN_SIGNIFICANCE",
    "likely pathogenic": "LIKELY_PATHOGENIC",
    "pathogenic/likely pathogenic": "PATHOGENIC_OR_LIKELY_PATHOGENIC",
    "pathogenic": "PATHOGENIC",
    "conflicting interpretations of pathogenicity": "CONFLICTING_PATHOGENICITY_INTERPRETATIONS",
    "conflicting classifications of pathogenicity": "CONFLICTING_PATHOGENICITY_INTERPRETATIONS",
    "affects": "AFFECTS",
    "association": "ASSOCIATION",
    "drug response": "DRUG_RESPONSE",
    "not provided": "NOT_PROVIDED",
    "other": "OTHER",
    "protective": "PROTECTIVE",
    "risk factor": "RISK_FACTOR",
}

# ClinVar review status to star rating
REVIEW_STATUS_STARS: dict[str, int] = {
    "practice guideline": 4,
    "reviewed by expert panel": 3,
    "criteria provided, multiple submitters, no conflicts": 2,
    "criteria provided, multiple submitters": 2,
    "criteria provided, conflicting interpretations": 1,
    "criteria provided, conflicting classifications": 1,
    "criteria provided, single submitter": 1,
}


# =============================================================================
# HPO ANNOTATION FILES
# =============================================================================

HPO_RELEASE_URL: str = "https://github.com/obophenotype/human-phenotype-ontology/releases/latest/download"
PHENOTYPE_HPOA_FILE: str = "phenotype.hpoa"
GENES_TO_DISEASE_FILE: str = "genes_to_disease.txt"
