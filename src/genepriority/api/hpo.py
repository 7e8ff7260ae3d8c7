"""HPO annotation file client.

ARCHITECTURE:
    HPO release → phenotype.hpoa + genes_to_disease.txt → local cache → HpoAnnotationProvider

Downloads the disease-phenotype and gene-disease annotation files published
with each Human Phenotype Ontology release.

Key Design:
- Files are downloaded once and cached locally
- Retry with exponential backoff (tenacity)
- Stale cache is used if a refresh fails
- Raises HpoAnnotationError only when no usable copy exists
"""

import logging
from datetime import datetime, timedelta
from pathlib import Path

import httpx
from tenacity import (
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from genepriority.constants import GENES_TO_DISEASE_FILE, HPO_RELEASE_URL, PHENOTYPE_HPOA_FILE

logger = logging.getLogger(__name__)


class HpoAnnotationError(Exception):
    """Exception raised when HPO annotation files cannot be obtained."""

    pass


class HpoAnnotationClient:
    """Client for the HPO release annotation files.

    phenotype.hpoa lists the phenotypes and inheritance of each disease;
    genes_to_disease.txt links NCBI gene ids to those diseases.

    Release notes: https://hpo.jax.org/data/annotations
    """

    BASE_URL = HPO_RELEASE_URL
    CACHE_DIR = Path.home() / ".cache" / "genepriority"
    CACHE_MAX_AGE = timedelta(days=7)  # Re-download after 7 days
    DEFAULT_TIMEOUT = 60.0

    def __init__(self, cache_dir: Path | None = None, timeout: float = DEFAULT_TIMEOUT):
        """Initialize the HPO annotation client.

        Args:
            cache_dir: Directory for downloaded files. Defaults to ~/.cache/genepriority
            timeout: Request timeout in seconds
        """
        self.cache_dir = Path(cache_dir) if cache_dir else self.CACHE_DIR
        self.timeout = timeout

    def cache_path(self, file_name: str) -> Path:
        return self.cache_dir / file_name

    def _cache_is_valid(self, path: Path) -> bool:
        """Check if the cached file exists and is recent enough."""
        if not path.exists():
            return False
        mtime = datetime.fromtimestamp(path.stat().st_mtime)
        return datetime.now() - mtime < self.CACHE_MAX_AGE

    @retry(
        retry=retry_if_exception_type((httpx.HTTPError, httpx.TimeoutException)),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
    )
    def _download_file(self, file_name: str, path: Path) -> None:
        """Download one release file into the cache."""
        self.cache_dir.mkdir(parents=True, exist_ok=True)

        with httpx.Client(timeout=self.timeout, follow_redirects=True) as client:
            response = client.get(f"{self.BASE_URL}/{file_name}")
            response.raise_for_status()
            path.write_text(response.text, encoding="utf-8")

        logger.info(f"Downloaded {file_name} to {path}")

    def fetch_file(self, file_name: str) -> Path:
        """Return a local copy of a release file, downloading it if needed.

        Raises:
            HpoAnnotationError: If the download fails and there is no cached copy
        """
        path = self.cache_path(file_name)
        if self._cache_is_valid(path):
            return path

        try:
            self._download_file(file_name, path)
        except Exception as e:
            if not path.exists():
                raise HpoAnnotationError(f"Failed to download {file_name}: {e}") from e
            # Use stale cache if download fails
            logger.warning(f"Refreshing {file_name} failed, using cached copy: {e}")

        return path

    def fetch_annotation_files(self) -> tuple[Path, Path]:
        """Local paths of phenotype.hpoa and genes_to_disease.txt."""
        return self.fetch_file(PHENOTYPE_HPOA_FILE), self.fetch_file(GENES_TO_DISEASE_FILE)
