"""
Configuration
=============

Central configuration for the Bible search tool.
Loads from YAML config files with sensible defaults; command-line flags
override whatever the file sets.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from .cross_reference.analyzer import DEFAULT_THRESHOLD

OUTPUT_FORMATS = ("text", "json", "verse-only")


@dataclass
class CorpusConfig:
    """Which translation file to load."""
    file: str = "bibles/bible.txt"
    translations: dict[str, str] = field(default_factory=lambda: {
        "kjv": "bibles/kjv.txt",
        "erv": "bibles/erv.txt",
        "asv": "bibles/asv.txt",
    })

    def resolve(self, translation: Optional[str] = None) -> str:
        """Path for a named translation, or the default file."""
        if translation is None:
            return self.file
        try:
            return self.translations[translation]
        except KeyError:
            raise ValueError(f"Unknown translation: {translation}") from None


@dataclass
class SynonymConfig:
    """Synonym file location."""
    file: str = "synonyms.txt"


@dataclass
class SearchConfig:
    """Defaults for text search."""
    case_sensitive: bool = False
    use_synonyms: bool = False
    limit: Optional[int] = None
    interactive_limit: int = 10


@dataclass
class CrossReferenceConfig:
    """Defaults for cross-referencing."""
    threshold: float = DEFAULT_THRESHOLD
    limit: Optional[int] = None
    use_synonyms: bool = False
    filter_stop_words: bool = False


@dataclass
class OutputConfig:
    """Result formatting."""
    format: str = "text"  # "text", "json", "verse-only"
    color: bool = True


@dataclass
class ToolConfig:
    """Master configuration for the tool."""
    corpus: CorpusConfig = field(default_factory=CorpusConfig)
    synonyms: SynonymConfig = field(default_factory=SynonymConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    cross_reference: CrossReferenceConfig = field(default_factory=CrossReferenceConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    def __post_init__(self):
        if self.output.format not in OUTPUT_FORMATS:
            raise ValueError(
                f"Unknown output format: {self.output.format} (expected one of {', '.join(OUTPUT_FORMATS)})"
            )
        if not 0.0 <= self.cross_reference.threshold <= 1.0:
            raise ValueError(
                f"cross_reference.threshold must be between 0.0 and 1.0, got {self.cross_reference.threshold}"
            )
        for name, limit in (("search.limit", self.search.limit),
                            ("cross_reference.limit", self.cross_reference.limit)):
            if limit is not None and limit <= 0:
                raise ValueError(f"{name} must be a positive integer, got {limit}")

    @classmethod
    def from_yaml(cls, path: str | Path) -> ToolConfig:
        """Load configuration from a YAML file."""
        path = Path(path)
        with open(path) as f:
            data = yaml.safe_load(f) or {}

        kwargs = {}
        if "corpus" in data:
            kwargs["corpus"] = CorpusConfig(**data["corpus"])
        if "synonyms" in data:
            kwargs["synonyms"] = SynonymConfig(**data["synonyms"])
        if "search" in data:
            kwargs["search"] = SearchConfig(**data["search"])
        if "cross_reference" in data:
            kwargs["cross_reference"] = CrossReferenceConfig(**data["cross_reference"])
        if "output" in data:
            kwargs["output"] = OutputConfig(**data["output"])

        return cls(**kwargs)

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = dataclasses.asdict(self)
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
