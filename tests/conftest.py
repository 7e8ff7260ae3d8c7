"""Pytest configuration and fixtures."""

import pytest


@pytest.fixture(autouse=True)
def reset_ranking_logger():
    """Each test gets a fresh global ranking logger."""
    from genepriority.utils.logging_config import reset_logger

    reset_logger()
    yield
    reset_logger()


@pytest.fixture
def sample_diseases():
    """Small disease annotation set for testing."""
    from genepriority.models.disease import Disease

    return [
        Disease(
            disease_id="OMIM:101600",
            disease_name="Pfeiffer syndrome",
            associated_gene_id=2263,
            associated_gene_symbol="FGFR2",
            inheritance_mode_code="D",
            phenotype_ids=("HP:0001156", "HP:0001363", "HP:0011304"),
        ),
        Disease(
            disease_id="OMIM:123150",
            disease_name="Jackson-Weiss syndrome",
            associated_gene_id=2260,
            associated_gene_symbol="FGFR1",
            inheritance_mode_code="D",
            phenotype_ids=("HP:0001363", "HP:0004209"),
        ),
        # Not an accepted disease type, never returned for FGFR1
        Disease(
            disease_id="ORPHA:000001",
            disease_name="Filtered association",
            associated_gene_id=2260,
            associated_gene_symbol="FGFR1",
            disease_type_code="N",
            phenotype_ids=("HP:0001156", "HP:0001363", "HP:0011304"),
        ),
        Disease(
            disease_id="OMIM:268310",
            disease_name="Robinow syndrome",
            associated_gene_id=4920,
            associated_gene_symbol="ROR2",
            inheritance_mode_code="R",
            phenotype_ids=("HP:0002983", "HP:0000316"),
        ),
        Disease(
            disease_id="OMIM:999999",
            disease_name="Gene-less disease",
            phenotype_ids=("HP:0001156", "HP:0000316"),
        ),
    ]


@pytest.fixture
def sample_provider(sample_diseases):
    """In-memory annotation provider."""
    from genepriority.providers.disease import HpoAnnotationProvider

    return HpoAnnotationProvider(diseases=sample_diseases)


@pytest.fixture
def sample_gene_identifiers():
    """Gene universe with one gene that has no disease associations."""
    from genepriority.providers.genes import GeneIdentifiers

    return GeneIdentifiers({"2263": "FGFR2", "2260": "FGFR1", "4920": "ROR2", "1234": "NODIS"})


@pytest.fixture
def sample_engine(sample_provider, sample_gene_identifiers):
    """Ranking engine over the sample annotations."""
    from genepriority.engine import PrioritiserEngine

    return PrioritiserEngine.from_provider(sample_provider, sample_gene_identifiers, batch_size=2)


@pytest.fixture
def pfeiffer_phenotypes():
    """Phenotypes exactly matching Pfeiffer syndrome."""
    return ["HP:0001156", "HP:0001363", "HP:0011304"]


@pytest.fixture
def hpoa_file(tmp_path):
    """Minimal phenotype.hpoa file."""
    content = (
        "#description: \"HPO annotations for rare diseases\"\n"
        "#date: 2024-04-19\n"
        "database_id\tdisease_name\tqualifier\thpo_id\treference\tevidence\tonset\tfrequency\tsex\tmodifier\taspect\tbiocuration\n"
        "OMIM:101600\tPfeiffer syndrome\t\tHP:0001156\tOMIM:101600\tTAS\t\t\t\t\tP\tHPO:iea[2009-02-17]\n"
        "OMIM:101600\tPfeiffer syndrome\t\tHP:0001363\tOMIM:101600\tTAS\t\t\t\t\tP\tHPO:iea[2009-02-17]\n"
        "OMIM:101600\tPfeiffer syndrome\tNOT\tHP:0004209\tOMIM:101600\tTAS\t\t\t\t\tP\tHPO:iea[2009-02-17]\n"
        "OMIM:101600\tPfeiffer syndrome\t\tHP:0000006\tOMIM:101600\tTAS\t\t\t\t\tI\tHPO:iea[2009-02-17]\n"
        "OMIM:268310\tRobinow syndrome\t\tHP:0002983\tOMIM:268310\tTAS\t\t\t\t\tP\tHPO:iea[2009-02-17]\n"
        "OMIM:268310\tRobinow syndrome\t\tHP:0000006\tOMIM:268310\tTAS\t\t\t\t\tI\tHPO:iea[2009-02-17]\n"
        "OMIM:268310\tRobinow syndrome\t\tHP:0000007\tOMIM:268310\tTAS\t\t\t\t\tI\tHPO:iea[2009-02-17]\n"
        "OMIM:999999\tGene-less disease\t\tHP:0001156\tOMIM:999999\tTAS\t\t\t\t\tP\tHPO:iea[2009-02-17]\n"
    )
    path = tmp_path / "phenotype.hpoa"
    path.write_text(content)
    return path


@pytest.fixture
def genes_to_disease_file(tmp_path):
    """Minimal genes_to_disease.txt file."""
    content = (
        "ncbi_gene_id\tgene_symbol\tassociation_type\tdisease_id\tsource\n"
        "NCBIGene:2263\tFGFR2\tMENDELIAN\tOMIM:101600\tftp://ftp.omim.org/mim2gene\n"
        "NCBIGene:2263\tFGFR2\tMENDELIAN\tOMIM:101600\tftp://ftp.omim.org/mim2gene\n"
        "NCBIGene:4920\tROR2\tPOLYGENIC\tOMIM:268310\tftp://ftp.omim.org/mim2gene\n"
        "NCBIGene:4920\tROR2\tSOMETHING_ELSE\tOMIM:000002\tftp://ftp.omim.org/mim2gene\n"
    )
    path = tmp_path / "genes_to_disease.txt"
    path.write_text(content)
    return path
