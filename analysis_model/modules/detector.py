"""Strategies that guess the module (build unit) a source file belongs to."""

from __future__ import annotations

import configparser
import json
import logging
import tomllib
from abc import ABC, abstractmethod
from pathlib import Path

from analysis_model.core.security import XmlSyntaxError, iter_xml_events

logger = logging.getLogger(__name__)


class ModuleDetector(ABC):
    @abstractmethod
    def guess_module_name(self, absolute_path: str) -> str | None:
        """Return the module of the file at *absolute_path* or None if unknown."""


def _pyproject_name(path: Path) -> str | None:
    data = tomllib.loads(path.read_text(encoding="utf-8"))
    name = (data.get("project") or {}).get("name")
    if not name:
        name = ((data.get("tool") or {}).get("poetry") or {}).get("name")
    return name


def _setup_cfg_name(path: Path) -> str | None:
    parser = configparser.ConfigParser()
    parser.read(path, encoding="utf-8")
    return parser.get("metadata", "name", fallback=None)


def _package_json_name(path: Path) -> str | None:
    data = json.loads(path.read_text(encoding="utf-8") or "{}")
    return data.get("name") if isinstance(data, dict) else None


def _pom_name(path: Path) -> str | None:
    # Only direct children of <project>, not the ones of <parent> or dependencies
    name = artifact_id = None
    depth = 0
    with path.open(encoding="utf-8") as f:
        for event in iter_xml_events(f):
            if event.kind == "start":
                depth += 1
                continue
            if depth == 2 and event.tag == "name":
                name = event.text
            elif depth == 2 and event.tag == "artifactId":
                artifact_id = event.text
            depth -= 1
    return name or artifact_id


def _directory_name(path: Path) -> str | None:
    return path.parent.name


# Checked in this order within each directory
BUILD_FILES = (
    ("pyproject.toml", _pyproject_name),
    ("setup.cfg", _setup_cfg_name),
    ("setup.py", _directory_name),
    ("package.json", _package_json_name),
    ("pom.xml", _pom_name),
    ("build.gradle", _directory_name),
    ("build.gradle.kts", _directory_name),
)


class BuildFileModuleDetector(ModuleDetector):
    """
    Walks up from the file to the nearest directory with a known build file
    and derives the module name from it.
    """

    def __init__(self, root: str | Path | None = None):
        self.root = Path(root).resolve() if root else None

    def guess_module_name(self, absolute_path: str) -> str | None:
        for directory in self._ancestors(Path(absolute_path)):
            for file_name, read_name in BUILD_FILES:
                build_file = directory / file_name
                if not build_file.is_file():
                    continue
                try:
                    name = read_name(build_file)
                except (OSError, ValueError, tomllib.TOMLDecodeError, configparser.Error, XmlSyntaxError) as e:
                    logger.debug("Skipping unreadable build file %s: %s", build_file, e)
                    continue
                if name and name.strip():
                    return name.strip()
        return None

    def _ancestors(self, path: Path) -> list[Path]:
        directories = []
        for directory in path.parents:
            if self.root and directory != self.root and self.root not in directory.parents:
                break
            directories.append(directory)
            if directory == self.root:
                break
        return directories
