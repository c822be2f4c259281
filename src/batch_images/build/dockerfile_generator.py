"""
Dockerfile generation for batch function images.

Two dialects are produced from the same configuration snapshot:

- the default image, a fixed two-stage build that unpacks every batch
  function archive in a builder stage and copies the result into the
  runtime image under ``/var/task/<service>/``;
- custom images, where a user template has a single placeholder token
  replaced by generated per-function instructions. Each function's handler
  module is patched with a shim so it can be run as a standalone command.
"""

import logging
from dataclasses import dataclass
from typing import List

from ..config import BatchImageSettings, FunctionDescriptor
from ..core.exceptions import TemplateError

log = logging.getLogger(__name__)

PLACEHOLDER = "###PLACEHOLDER-FOR-GENERATED-CONTENT###"
STAGING_DIR = "/tmp"
TASK_ROOT = "/var/task"
FUNCTION_NAME_ENV = "BATCH_LAMBDA_NAME"

# Runtime that needs its interpreter heap raised to run large batch jobs
LEGACY_HEAP_RUNTIME = "nodejs10.x"
LEGACY_HEAP_DIRECTIVE = 'ENV NODE_OPTIONS="--max-old-space-size=30000"'

# Appended to the handler module; escaped newlines are expanded by echo
HANDLER_SHIM = (
    "\\nconst event = JSON.parse(process.argv[2])"
    "\\nconst functionName = process.env.{env}"
    "\\nmodule.exports.{export}(event, {{functionName: functionName}})"
    ".then((res)=>{{process.exit(0)}})"
    ".catch((err)=>{{process.exit(1)}})"
)


@dataclass(frozen=True)
class SubstitutionResult:
    """Outcome of replacing the placeholder token in a template."""

    content: str
    replaced: bool


def substitute_placeholder(template: str, block: str) -> SubstitutionResult:
    """
    Replace the first occurrence of the placeholder token with a block.

    A template without the token is returned unchanged and flagged with
    ``replaced=False``.
    """
    if PLACEHOLDER not in template:
        return SubstitutionResult(content=template, replaced=False)
    return SubstitutionResult(content=template.replace(PLACEHOLDER, block, 1), replaced=True)


def unpack_instructions(fn: FunctionDescriptor) -> List[str]:
    """Copy a function archive into the staging dir, unzip it and drop the archive."""
    artifact = fn.artifact_name
    return [
        f"COPY {artifact} {STAGING_DIR}",
        f"RUN cd {STAGING_DIR} && unzip -q {artifact} && rm {artifact}",
    ]


def handler_shim_instruction(fn: FunctionDescriptor) -> str:
    shim = HANDLER_SHIM.format(env=FUNCTION_NAME_ENV, export=fn.handler_export)
    return f"RUN echo '{shim}' >> {STAGING_DIR}/{fn.handler_module}.js"


class DefaultDockerfileGenerator:
    """Render the built-in multi-stage Dockerfile."""

    def __init__(self, settings: BatchImageSettings):
        self.settings = settings

    def generate(self) -> str:
        settings = self.settings
        lines = [
            f"FROM {settings.builder_image}:{settings.build_tag_prefix}{settings.runtime} AS builder"
        ]
        lines.extend(f"RUN {command}" for command in settings.additional_docker_run_commands)

        for fn in settings.eligible_functions:
            lines.extend(unpack_instructions(fn))

        lines.extend(
            [
                f"FROM {settings.builder_image}:{settings.runtime}",
                f"COPY --from=builder {STAGING_DIR} {TASK_ROOT}/{settings.service_name}/",
                f"RUN rm -rf {STAGING_DIR}/*",
            ]
        )
        if settings.runtime == LEGACY_HEAP_RUNTIME:
            lines.append(LEGACY_HEAP_DIRECTIVE)

        return "\n".join(lines) + "\n"


class CustomDockerfileGenerator:
    """Render a user-supplied Dockerfile template for one custom tag."""

    def __init__(self, settings: BatchImageSettings):
        self.settings = settings

    def generated_block(self) -> str:
        """Per-function instructions followed by the copy into the task root."""
        lines: List[str] = []
        for fn in self.settings.eligible_functions:
            lines.extend(unpack_instructions(fn))
            lines.append(handler_shim_instruction(fn))
        lines.append(f"RUN cp -R {STAGING_DIR} {TASK_ROOT}/{self.settings.service_name}/")
        return "\n".join(lines) + "\n"

    def generate(self, tag: str) -> str:
        """
        Render the template configured for a custom tag.

        Args:
            tag: Custom image tag, a key of the custom dockerfiles mapping

        Returns:
            Dockerfile text

        Raises:
            TemplateError: If the template file cannot be read
        """
        template_path = self.settings.custom_dockerfiles[tag]
        try:
            template = template_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateError(template_path, str(e)) from e

        result = substitute_placeholder(template, self.generated_block())
        if not result.replaced:
            log.warning(
                f"Template {template_path} for image '{tag}' has no {PLACEHOLDER} "
                "token; no functions will be added to this image"
            )
        return result.content
