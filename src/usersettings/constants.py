"""Stable names other components may depend on."""

# Folder created below the user's home directory
SETTINGS_SUBFOLDER = ".usersettings"
SETTINGS_FILE_NAME = "config"
# Subdirectory of the data folder scanned for custom extensions
EXTENSIONS_SUBDIRECTORY = "custom"

# Environment overrides
ENCRYPTION_KEY_ENV = "USERSETTINGS_ENCRYPTION_KEY"
DATA_FOLDER_ENV = "USERSETTINGS_DATA_FOLDER"

# Platform home directory variables
POSIX_HOME_ENV = "HOME"
WINDOWS_HOME_ENV = "USERPROFILE"

# Settings document
ENCRYPTION_KEY_FIELD = "encryptionKey"
ENCRYPTION_KEY_BYTES = 24
JSON_INDENT = "\t"
