"""Pydantic configuration models for lineclip."""

from pathlib import Path
from typing import Literal, Optional

from pydantic import BaseModel, Field


class NetworkConfig(BaseModel):
    """Configuration for the HTTP client."""

    user_agent: Optional[str] = Field(None, description="Custom User-Agent header")
    timeout: float = Field(30.0, gt=0, description="Total request timeout in seconds")
    max_content_size: int = Field(
        50 * 1024 * 1024,
        ge=1,
        description="Maximum response size in bytes",
    )
    proxy: Optional[str] = Field(None, description="HTTP/HTTPS proxy URL")

    model_config = {"extra": "forbid"}


class ConversionConfig(BaseModel):
    """Configuration for content extraction and Markdown conversion."""

    extractor: Literal["readability", "selectors"] = Field(
        "readability",
        description="Boilerplate extractor: readability scoring or CSS selectors",
    )
    heading_style: Literal["atx", "setext"] = Field("atx", description="Markdown heading style")
    body_width: int = Field(0, ge=0, description="Max line width (0 = no wrapping)")
    ignore_images: bool = Field(False, description="Drop images instead of converting them")

    model_config = {"extra": "forbid"}


class RepositoryConfig(BaseModel):
    """Configuration for source-repository URLs."""

    source_host: str = Field("github.com", description="Host token recognized as a repository URL")
    viewer_host: str = Field(
        "uithub.com",
        description="Flattened tree viewer host that replaces source_host when fetching",
    )
    strict_urls: bool = Field(
        False,
        description="Raise MalformedInput instead of returning an empty title",
    )

    model_config = {"extra": "forbid"}


class ClipConfig(BaseModel):
    """
    Root configuration model for lineclip.

    Example:
        config = ClipConfig(
            message_endpoint="https://bot.example.com/messages",
            document_directory=Path("./vault/inbox"),
        )

    YAML format:
        message_endpoint: https://bot.example.com/messages
        document_directory: ./vault/inbox
        conversion:
          extractor: selectors
        repository:
          strict_urls: true
    """

    message_endpoint: Optional[str] = Field(None, description="URL serving the pending messages as JSON")
    document_directory: Path = Field(Path("./clips"), description="Directory receiving one file per message")

    network: NetworkConfig = Field(default_factory=NetworkConfig)
    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    repository: RepositoryConfig = Field(default_factory=RepositoryConfig)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO",
        description="Logging level",
    )
    log_file: Optional[Path] = Field(None, description="Log file path")
    dry_run: bool = Field(False, description="Resolve messages without writing files")

    model_config = {"extra": "forbid"}

    def to_yaml(self) -> str:
        """Serialize config to YAML string."""
        import yaml

        return yaml.dump(self.model_dump(mode="json", exclude_none=True), default_flow_style=False)

    @classmethod
    def from_yaml(cls, yaml_str: str) -> "ClipConfig":
        """Load config from YAML string."""
        import yaml

        data = yaml.safe_load(yaml_str) or {}
        return cls.model_validate(data)

    @classmethod
    def from_yaml_file(cls, path: Path) -> "ClipConfig":
        """Load config from YAML file."""
        return cls.from_yaml(path.read_text(encoding="utf-8"))
