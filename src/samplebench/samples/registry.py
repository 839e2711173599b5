"""
Sample discovery.

The SampleRegistry enumerates the sample programs of one benchmark run,
either by scanning a directory or from a static list of file names. The
ordering is deterministic so that repeated runs produce comparable reports.
"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from ..models.results import SampleDescriptor
from ..validation import ConfigurationError, validate_directory_exists, validate_glob_pattern

logger = logging.getLogger(__name__)


class SampleRegistry:
    """
    Enumerates the samples to benchmark.

    In scan mode every regular file in ``samples_dir`` matching ``pattern`` is
    a sample, sorted lexically by file name. Names starting with ``_`` or ``.``
    are helper modules or hidden files and are skipped. In static mode the
    given ``samples`` are used in the given order.
    """

    def __init__(
        self,
        samples_dir: Union[str, Path],
        pattern: str = "*.py",
        samples: Optional[Sequence[str]] = None,
    ):
        self.samples_dir = Path(samples_dir)
        self.pattern = validate_glob_pattern(pattern, field_name="pattern")
        self.static_samples = list(samples) if samples is not None else None

    def list_samples(self) -> List[SampleDescriptor]:
        """
        Return the ordered sample descriptors.

        Raises:
            ConfigurationError: If the samples directory does not exist, a
                statically listed sample is missing, or no sample is found
        """
        samples_dir = validate_directory_exists(self.samples_dir, field_name="samples directory")
        samples_dir = samples_dir.resolve()

        if self.static_samples is not None:
            descriptors = self._from_static_list(samples_dir)
        else:
            descriptors = self._from_directory_scan(samples_dir)

        if not descriptors:
            raise ConfigurationError(
                f"No samples matching '{self.pattern}' found in {samples_dir}",
                field_name="samples directory",
                value=str(samples_dir),
            )

        logger.info(
            f"Found {len(descriptors)} sample(s) in {samples_dir}: "
            f"{', '.join(d.sample_id for d in descriptors)}"
        )
        return descriptors

    def _from_directory_scan(self, samples_dir: Path) -> List[SampleDescriptor]:
        paths = sorted(
            (
                path
                for path in samples_dir.glob(self.pattern)
                if path.is_file() and not path.name.startswith(("_", "."))
            ),
            key=lambda path: path.name,
        )
        return [SampleDescriptor(sample_id=path.name, path=path) for path in paths]

    def _from_static_list(self, samples_dir: Path) -> List[SampleDescriptor]:
        descriptors = []
        for name in self.static_samples:
            path = samples_dir / name
            if not path.is_file():
                raise ConfigurationError(
                    f"Configured sample not found: {path}",
                    field_name="samples",
                    value=name,
                )
            descriptors.append(SampleDescriptor(sample_id=name, path=path))
        return descriptors
