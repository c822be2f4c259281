"""Image name resolution for the repository a run pushes to."""

from typing import Optional

from ..config import DEFAULT_TAG, RegistryTarget


def resolve_image_name(target: RegistryTarget, tag: Optional[str] = None) -> str:
    """
    Get the fully qualified image name for a tag.

    Args:
        target: Repository the images belong to
        tag: Image tag; None or empty means the default image

    Returns:
        "<repository_url>:<tag>"
    """
    return f"{target.repository_url}:{tag or DEFAULT_TAG}"
