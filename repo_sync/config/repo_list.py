"""
Repository List — Load the YAML list of repositories to mirror.

    repos:
      - source: org1/repo1
        target: org2/repo1
        visibility: private              # private, public or internal
        disable-github-actions: true     # defaults to true
        archive-after-sync: false        # defaults to false

Defaults are applied here, once. Anything malformed raises RepoListError
before a single repository is processed.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any, List, Literal, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, StrictBool, ValidationError, field_validator

from ..mirror.errors import RepoListError

logger = logging.getLogger(__name__)

_FULL_NAME = re.compile(r"^[^/\s]+/[^/\s]+$")


class RepoSpec(BaseModel):
    """One entry of the repository list."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source: str
    target: str
    visibility: Literal["private", "public", "internal"] = "private"
    disable_actions: StrictBool = Field(default=True, alias="disable-github-actions")
    archive_after_sync: StrictBool = Field(default=False, alias="archive-after-sync")

    @field_validator("source", "target")
    @classmethod
    def _check_full_name(cls, value: str) -> str:
        value = value.strip()
        if not _FULL_NAME.match(value):
            raise ValueError(f"expected owner/name, got {value!r}")
        return value

    @property
    def source_owner(self) -> str:
        return self.source.split("/", 1)[0]

    @property
    def source_name(self) -> str:
        return self.source.split("/", 1)[1]

    @property
    def target_owner(self) -> str:
        return self.target.split("/", 1)[0]

    @property
    def target_name(self) -> str:
        return self.target.split("/", 1)[1]

    @property
    def display_name(self) -> str:
        return f"{self.source} → {self.target}"


def parse_repo_list(data: Any) -> List[RepoSpec]:
    """Validate an already-parsed YAML document."""
    if data is None:
        return []
    if not isinstance(data, dict):
        raise RepoListError("Repository list must be a mapping with a 'repos' key")

    entries = data.get("repos") or []
    if not isinstance(entries, list):
        raise RepoListError("'repos' must be a list")

    specs: List[RepoSpec] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise RepoListError(f"repos[{index}]: expected a mapping, got {type(entry).__name__}")
        try:
            specs.append(RepoSpec(**entry))
        except ValidationError as e:
            problems = "; ".join(_format_error(err) for err in e.errors())
            raise RepoListError(f"repos[{index}]: {problems}") from None
    return specs


def _format_error(err: dict) -> str:
    loc: Tuple = err.get("loc", ())
    field = ".".join(str(part) for part in loc) or "entry"
    return f"{field}: {err.get('msg', 'invalid value')}"


def load_repo_list(path: Path) -> List[RepoSpec]:
    """
    Load and validate the repository list file.

    Raises:
        RepoListError: If the file is missing, unreadable, not valid YAML,
            or any entry is malformed.
    """
    path = Path(path)
    if not path.is_file():
        raise RepoListError(f"Repository list file '{path}' not found")

    try:
        # Undecodable bytes surface as yaml.reader.ReaderError.
        with path.open("rb") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise RepoListError(f"Error parsing YAML file {path}: {e}") from None
    except OSError as e:
        raise RepoListError(f"Cannot read repository list {path}: {e}") from None

    specs = parse_repo_list(data)
    logger.debug(f"Loaded {len(specs)} repositories from {path}")
    return specs
