"""Organizer configuration."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import BaseSettings

from .organization.strategy import OrganizationStrategy


class Settings(BaseSettings):
    """Defaults loaded from MEDIA_ORGANIZER_* environment variables."""

    dcim_folder: str = "/DCIM"
    photo_folder: str = "Photo/Raw"
    video_folder: str = "Video/Raw"
    audio_folder: str = "Audio/Raw"
    jobs: int = 1

    model_config = ConfigDict(
        env_prefix="MEDIA_ORGANIZER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore extra fields from .env
    )


class OrganizerConfig(BaseModel):
    """Options for a single organizer run."""

    input_volume: Path = Field(description="Mounted volume or source root")
    output_root: Path = Field(description="Root of the organized library")
    dcim_folder: str = Field(
        default="/DCIM",
        description="Subfolder of the volume holding the media",
    )
    dry_run: bool = Field(default=False, description="Report without touching files")
    preserve_times: bool = Field(
        default=False,
        description="Copy with timestamps, then delete the original",
    )
    jobs: int = Field(default=1, ge=1, description="Concurrent move limit")
    log_file: Optional[Path] = Field(default=None, description="Append log lines here")
    verbose: bool = False
    prune: bool = Field(
        default=False,
        description="Remove emptied directories under the input path",
    )
    keep_volume: bool = Field(default=False, description="Do not eject the volume")
    photo_folder: str = Field(default="Photo/Raw", min_length=1)
    video_folder: str = Field(default="Video/Raw", min_length=1)
    audio_folder: str = Field(default="Audio/Raw", min_length=1)

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="before")
    @classmethod
    def _dry_run_is_verbose(cls, data):
        if isinstance(data, dict) and data.get("dry_run"):
            data = {**data, "verbose": True}
        return data

    @classmethod
    def from_settings(
        cls, settings: Optional[Settings] = None, **overrides
    ) -> "OrganizerConfig":
        """
        Build a config from environment defaults plus explicit overrides.

        Overrides set to None fall back to the settings value.
        """
        settings = settings or Settings()
        values = settings.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)

    @property
    def input_path(self) -> Path:
        """Directory that is actually scanned: the volume plus the DCIM folder."""
        subfolder = self.dcim_folder.strip("/")
        if not subfolder:
            return self.input_volume
        return self.input_volume / subfolder

    def strategy(self) -> OrganizationStrategy:
        """Destination layout for this run."""
        return OrganizationStrategy(
            photo_folder=self.photo_folder,
            video_folder=self.video_folder,
            audio_folder=self.audio_folder,
        )
