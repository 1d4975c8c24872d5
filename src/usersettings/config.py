"""Validated options for locating and provisioning user settings."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from usersettings.constants import (
    DATA_FOLDER_ENV,
    ENCRYPTION_KEY_BYTES,
    ENCRYPTION_KEY_ENV,
    EXTENSIONS_SUBDIRECTORY,
    SETTINGS_FILE_NAME,
    SETTINGS_SUBFOLDER,
)


class StoreOptions(BaseModel):
    """Names and sizes used by the path resolver and key provisioner.

    The defaults are the stable identifiers from ``usersettings.constants``.
    Overriding them is mostly useful for embedding the store in another
    application or for tests.
    """

    model_config = ConfigDict(frozen=True)

    settings_subfolder: str = Field(
        SETTINGS_SUBFOLDER, min_length=1, description="Folder below the home directory"
    )
    settings_file_name: str = Field(
        SETTINGS_FILE_NAME, min_length=1, description="Settings file inside the data folder"
    )
    extensions_subdirectory: str = Field(
        EXTENSIONS_SUBDIRECTORY, min_length=1, description="Custom extensions folder"
    )
    encryption_key_env: str = Field(
        ENCRYPTION_KEY_ENV, min_length=1, description="Variable overriding the stored key"
    )
    data_folder_env: str = Field(
        DATA_FOLDER_ENV, min_length=1, description="Variable replacing the data folder"
    )
    key_bytes: int = Field(
        ENCRYPTION_KEY_BYTES, gt=0, description="Random bytes in a generated key"
    )

    # ---- validators ----
    @field_validator("settings_subfolder", "settings_file_name", "extensions_subdirectory")
    @classmethod
    def validate_single_segment(cls, v: str) -> str:
        if "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError(f"{v!r} must be a single path segment")
        return v
