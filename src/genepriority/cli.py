"""Command-line interface for genepriority.

ARCHITECTURE:
    CLI Commands → PrioritiserEngine/Validator → report or JSON Output

Workflows: rank (single request), benchmark (solved cases), criteria (ACMG catalogue)

Key Design:
- Typer framework for auto-help and type validation
- asyncio.run() bridges sync CLI → async engine
- Annotation files come from --hpoa/--genes-to-disease, GENEPRIORITY_DATA_DIR,
  or are downloaded into GENEPRIORITY_CACHE_DIR
"""

import asyncio
import json
import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv

from genepriority.api.hpo import HpoAnnotationClient
from genepriority.constants import GENES_TO_DISEASE_FILE, PHENOTYPE_HPOA_FILE
from genepriority.engine import PrioritiserEngine
from genepriority.models.acmg import AcmgCriterion, UnknownCriterionError, lookup, moderate
from genepriority.models.ranking import RankingRequest
from genepriority.providers.disease import HpoAnnotationProvider, ProviderUnavailableError
from genepriority.providers.genes import GeneIdentifiers
from genepriority.validation.validator import Validator

load_dotenv()

app = typer.Typer(
    name="genepriority",
    help="Phenotype-driven gene prioritisation",
    add_completion=False,
)


def _data_file(explicit: Optional[Path], file_name: str) -> Optional[Path]:
    if explicit:
        return explicit
    data_dir = os.getenv("GENEPRIORITY_DATA_DIR")
    if data_dir and (Path(data_dir) / file_name).exists():
        return Path(data_dir) / file_name
    return None


def build_engine(
    hpoa: Optional[Path] = None,
    genes_to_disease: Optional[Path] = None,
    gene_ids: Optional[Path] = None,
    log: bool = False,
) -> PrioritiserEngine:
    """Load annotations and gene identifiers into a ready engine."""
    cache_dir = os.getenv("GENEPRIORITY_CACHE_DIR")
    provider = HpoAnnotationProvider(
        hpoa_path=_data_file(hpoa, PHENOTYPE_HPOA_FILE),
        genes_to_disease_path=_data_file(genes_to_disease, GENES_TO_DISEASE_FILE),
        client=HpoAnnotationClient(cache_dir=Path(cache_dir) if cache_dir else None),
    )
    provider.load()

    identifiers = GeneIdentifiers.from_tsv(gene_ids) if gene_ids else None
    return PrioritiserEngine.from_provider(provider, identifiers, enable_logging=log)


@app.command()
def rank(
    phenotypes: list[str] = typer.Argument(..., help="HPO term ids (e.g., HP:0001156)"),
    gene: Optional[list[int]] = typer.Option(None, "--gene", "-g", help="Entrez gene id to rank (repeatable)"),
    prioritiser: str = typer.Option("hiphive", "--prioritiser", "-p", help="phenix, phive or hiphive"),
    params: str = typer.Option("", "--params", help="Prioritiser parameters (e.g., human)"),
    limit: int = typer.Option(0, "--limit", "-n", min=0, help="Maximum results, 0 for all"),
    hpoa: Optional[Path] = typer.Option(None, "--hpoa", help="Local phenotype.hpoa file"),
    genes_to_disease: Optional[Path] = typer.Option(None, "--genes-to-disease", help="Local genes_to_disease.txt file"),
    gene_ids: Optional[Path] = typer.Option(None, "--gene-ids", help="TSV of gene id and symbol"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output JSON file"),
    log: bool = typer.Option(True, "--log/--no-log", help="Enable ranking decision logging"),
) -> None:
    """Rank genes against a set of phenotypes."""

    async def run_ranking() -> None:
        try:
            engine = build_engine(hpoa, genes_to_disease, gene_ids, log)
        except (ProviderUnavailableError, FileNotFoundError) as e:
            print(f"Error: {e}")
            raise typer.Exit(1)

        request = RankingRequest(
            phenotypes=phenotypes,
            genes=gene or [],
            prioritiser=prioritiser,
            prioritiser_params=params,
            limit=limit,
        )
        result_set = await engine.rank(request)

        if output:
            with open(output, "w") as f:
                json.dump(result_set.model_dump(mode="json"), f, indent=2)
            print(f"Saved {len(result_set.results)} results to {output}")
        else:
            print(result_set.to_report())

    asyncio.run(run_ranking())


@app.command()
def criteria(
    code: Optional[str] = typer.Argument(None, help="Criterion code (e.g., PM2)"),
    strength: Optional[str] = typer.Option(None, "--strength", "-s", help="Moderated evidence strength"),
) -> None:
    """Show the ACMG criteria catalogue, or one criterion."""
    if code is None:
        for criterion in AcmgCriterion:
            print(f"{criterion.code:<6} {criterion.evidence.label:<12} {criterion.description}")
        return

    try:
        criterion = lookup(code)
        if strength:
            moderated = moderate(criterion, strength)
            print(f"{moderated}: {moderated.description}")
        else:
            print(f"{criterion.code} ({criterion.evidence.label}): {criterion.description}")
    except (UnknownCriterionError, ValueError) as e:
        print(f"Error: {e}")
        raise typer.Exit(1)


@app.command()
def benchmark(
    cases_file: Path = typer.Argument(..., help="Solved cases JSON file"),
    hpoa: Optional[Path] = typer.Option(None, "--hpoa", help="Local phenotype.hpoa file"),
    genes_to_disease: Optional[Path] = typer.Option(None, "--genes-to-disease", help="Local genes_to_disease.txt file"),
    gene_ids: Optional[Path] = typer.Option(None, "--gene-ids", help="TSV of gene id and symbol"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Output file"),
    max_concurrent: int = typer.Option(3, "--max-concurrent", "-c", help="Max concurrent"),
) -> None:
    """Benchmark prioritisers against solved cases."""

    if not cases_file.exists():
        print(f"Error: Cases file not found: {cases_file}")
        raise typer.Exit(1)

    async def run_benchmark() -> None:
        try:
            engine = build_engine(hpoa, genes_to_disease, gene_ids)
        except (ProviderUnavailableError, FileNotFoundError) as e:
            print(f"Error: {e}")
            raise typer.Exit(1)

        validator = Validator(engine)
        cases = validator.load_cases(cases_file)
        print(f"\nLoaded {len(cases)} benchmark cases")

        print("Running benchmark...")
        metrics = await validator.validate_dataset(cases, max_concurrent=max_concurrent)

        if validator.failed_cases:
            print(f"\nWarning: {len(validator.failed_cases)} cases failed during ranking")
            for idx, expected_gene, error in validator.failed_cases[:5]:
                print(f"  - Case {idx}: {expected_gene} ({error})")

        print(metrics.to_report())

        if output:
            validator.save_results(metrics, output)
            print(f"\nDetailed results saved to {output}")

    asyncio.run(run_benchmark())


@app.command()
def version() -> None:
    """Show version information."""
    from genepriority import __version__
    print(f"genepriority version {__version__}")


if __name__ == "__main__":
    app()
