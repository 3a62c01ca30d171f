"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use REGENERATE_ prefix (e.g., REGENERATE_BACKUP_SUFFIX=.bak).

Settings can also be loaded from a .env file in the project root.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use REGENERATE_ prefix.

    Examples:
        REGENERATE_ENCODING=latin-1
        REGENERATE_BACKUP_SUFFIX=.bak
        REGENERATE_CHECK_NO_CHANGES=true
    """

    model_config = SettingsConfigDict(
        env_prefix="REGENERATE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Document I/O
    encoding: str = Field(
        default="utf-8",
        description="Text encoding used to read source documents and write output",
    )

    # File-safety writer
    backup_suffix: str = Field(
        default="~",
        description="Suffix appended to the target path to name its single backup",
    )

    new_suffix: str = Field(
        default=".new",
        description="Suffix for rejected output when an unexpected change is detected",
    )

    diff_context: int = Field(
        default=40,
        ge=0,
        description="Bytes of context shown either side of the first difference",
    )

    check_no_changes: bool = Field(
        default=False,
        description="Default for verification mode when the caller does not choose",
    )

    def backupPath_make(self, target: Path) -> Path:
        """
        Path of the backup kept for a target.

        Example:
            >>> AppSettings().backupPath_make(Path("site/index.html"))
            PosixPath('site/index.html~')
        """
        return target.with_name(target.name + self.backup_suffix)

    def newPath_make(self, target: Path) -> Path:
        """
        Path where rejected output is parked after a detected change.

        Example:
            >>> AppSettings().newPath_make(Path("site/index.html"))
            PosixPath('site/index.html.new')
        """
        return target.with_name(target.name + self.new_suffix)


# Singleton instance - import this in your code
appsettings = AppSettings()
