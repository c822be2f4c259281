"""
Batch image build orchestrator.

Main class that coordinates the build of the default and custom images.
"""

import logging
from pathlib import Path
from typing import List, Optional

from ..config import DEFAULT_TAG, BatchImageSettings, RegistryTarget
from .context_assembler import BuildContextAssembler
from .dockerfile_generator import CustomDockerfileGenerator, DefaultDockerfileGenerator
from .image_builder import BuildResult, ImageBuildConfig, ImageBuilder
from .naming import resolve_image_name

log = logging.getLogger(__name__)


class BatchImageBuilder:
    """
    Orchestrate the build of every image of a service.

    This class coordinates:
    1. Build context assembly (function archives)
    2. Dockerfile generation per image tag
    3. Docker image building, strictly one image after another

    The first failure aborts the run; images built before it stay in the
    local image store.
    """

    def __init__(
        self,
        settings: BatchImageSettings,
        target: RegistryTarget,
        assembler: Optional[BuildContextAssembler] = None,
        image_builder: Optional[ImageBuilder] = None,
    ):
        self.settings = settings
        self.target = target
        self.assembler = assembler or BuildContextAssembler()
        self.image_builder = image_builder or ImageBuilder()
        self.default_generator = DefaultDockerfileGenerator(settings)
        self.custom_generator = CustomDockerfileGenerator(settings)

    def image_tags(self) -> List[str]:
        return self.settings.image_tags

    def dockerfile_content(self, tag: str) -> str:
        if tag == DEFAULT_TAG:
            return self.default_generator.generate()
        return self.custom_generator.generate(tag)

    def build_all(self) -> List[BuildResult]:
        """
        Build every image of the service.

        Returns:
            BuildResult per image tag, in build order

        Raises:
            ArtifactMissing: If a function archive is missing
            TemplateError: If a custom template cannot be read
            ToolNotFound: If docker is not installed
            ToolExecutionError: If a docker build fails
        """
        package_dir = self.settings.package_dir
        context_dir = self.assembler.prepare(self.settings.functions, package_dir)

        results = []
        for tag in self.image_tags():
            image = resolve_image_name(self.target, tag)
            log.info(f'Building docker image: "{image}"...')

            dockerfile = Path(context_dir) / f"{tag}.Dockerfile"
            dockerfile.write_text(self.dockerfile_content(tag), encoding="utf-8")

            build_config = ImageBuildConfig(
                dockerfile=dockerfile,
                image=image,
                context_dir=context_dir,
                cwd=package_dir,
            )
            results.append(self.image_builder.build(tag, build_config))

        log.info(f"Built {len(results)} image(s)")
        return results
