"""Project information utilities."""

from importlib import metadata
from pathlib import Path
import tomllib

from pydantic import BaseModel

DISTRIBUTION = "flowstache"
UNKNOWN_DESCRIPTION = "Project description not available"
UNKNOWN_VERSION = "Version not available"


class ProjectInfo(BaseModel):
    """Name, version and description of the project."""

    name: str = DISTRIBUTION
    description: str
    version: str


def get_project_info() -> ProjectInfo:
    """Get project information.

    Reads ``pyproject.toml`` from a source checkout; an installed wheel has
    none, so the distribution metadata is used instead.

    Returns:
        ProjectInfo: A Pydantic model containing name, description and version.

    """
    # src/flowstache/project_info.py -> project root
    pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"

    if not pyproject_path.exists():
        return _installed_info()

    try:
        with pyproject_path.open("rb") as f:
            project = tomllib.load(f).get("project", {})
    except (OSError, tomllib.TOMLDecodeError) as e:
        return ProjectInfo(
            description=f"Error reading project info: {e}",
            version=UNKNOWN_VERSION,
        )

    return ProjectInfo(
        name=project.get("name", DISTRIBUTION),
        description=project.get("description", UNKNOWN_DESCRIPTION),
        version=project.get("version", UNKNOWN_VERSION),
    )


def _installed_info() -> ProjectInfo:
    try:
        meta = metadata.metadata(DISTRIBUTION)
    except metadata.PackageNotFoundError:
        return ProjectInfo(description=UNKNOWN_DESCRIPTION, version=UNKNOWN_VERSION)
    return ProjectInfo(
        description=meta.get("Summary") or UNKNOWN_DESCRIPTION,
        version=meta.get("Version") or UNKNOWN_VERSION,
    )
