"""
Build context assembly.

Stages each batch function's packaged archive into the temporary build
directory so the generated Dockerfiles can COPY it by relative name.
"""

import logging
import shutil
from pathlib import Path
from typing import Iterable

from ..config import FunctionDescriptor
from ..core.exceptions import ArtifactMissing

log = logging.getLogger(__name__)

CONTEXT_DIR_NAME = "tmp"


class BuildContextAssembler:
    """Prepare the shared build context directory.

    The directory is never cleaned up; repeated runs overwrite the staged
    archives in place.
    """

    def prepare(self, functions: Iterable[FunctionDescriptor], package_dir: Path) -> Path:
        """
        Copy eligible function archives into ``<package_dir>/tmp``.

        Args:
            functions: Function descriptors, ineligible ones are skipped
            package_dir: Directory holding the packaged archives

        Returns:
            Path of the build context directory

        Raises:
            ArtifactMissing: If an eligible function's archive is absent
        """
        package_dir = Path(package_dir)
        context_dir = package_dir / CONTEXT_DIR_NAME
        context_dir.mkdir(parents=True, exist_ok=True)

        staged = 0
        for fn in functions:
            if not fn.eligible:
                continue

            source = package_dir / fn.artifact_name
            try:
                shutil.copyfile(source, context_dir / fn.artifact_name)
            except FileNotFoundError as e:
                raise ArtifactMissing(source) from e
            log.debug(f"Staged {fn.artifact_name} for function '{fn.name}'")
            staged += 1

        log.info(f"Build context ready: {context_dir} ({staged} artifact(s))")
        return context_dir
